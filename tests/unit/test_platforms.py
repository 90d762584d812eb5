"""Tests for platforms module - catalog and templates."""

import pytest
from promptforge.core.types import Platform, ApiFormat, Intent, Domain, Tone
from promptforge.core.exceptions import InvalidPlatformError, ConfigurationError
from promptforge.platforms import (
    PLATFORMS,
    PlatformCatalog,
    PlatformTemplateRenderer,
    catalog,
    get_platform_by_id,
    require_platform,
    get_all_categories,
    get_platforms_by_category,
    get_renderer,
)


class TestCatalog:
    """Tests for the built-in catalog."""

    def test_size(self):
        """Test the catalog holds eleven platforms."""
        assert len(PLATFORMS) == 11
        assert len(catalog) == 11

    def test_ids_unique(self):
        ids = catalog.ids()
        assert len(ids) == len(set(ids))

    def test_every_platform_valid(self):
        """Test each entry has a budget, a format and requirements."""
        for platform in PLATFORMS:
            assert platform.max_tokens > 0
            assert isinstance(platform.api_format, ApiFormat)
            assert platform.special_requirements
            assert platform.name and platform.icon

    @pytest.mark.parametrize("platform_id,api_format", [
        ("claude-sonnet", ApiFormat.XML),
        ("chatgpt-4", ApiFormat.JSON),
        ("chatgpt-3.5", ApiFormat.JSON),
        ("gemini-pro", ApiFormat.TEXT),
        ("midjourney", ApiFormat.TEXT),
    ])
    def test_formats(self, platform_id, api_format):
        """Test platform output formats."""
        assert get_platform_by_id(platform_id).api_format is api_format

    def test_lookup_unknown(self):
        """Test lookup of an unknown id."""
        assert get_platform_by_id("nope") is None
        assert get_platform_by_id(None) is None
        assert "nope" not in catalog
        assert "claude-sonnet" in catalog

    def test_require_unknown(self):
        """Test require raises with the available ids."""
        with pytest.raises(InvalidPlatformError) as exc_info:
            require_platform("nope")
        assert exc_info.value.platform_id == "nope"
        assert "claude-sonnet" in exc_info.value.details["available"]

    def test_categories_in_order(self):
        """Test categories are distinct and in catalog order."""
        assert get_all_categories() == [
            "AI Assistants",
            "Speed-Optimized",
            "Image Generation",
            "Code-Specific",
            "Research & Analysis",
        ]

    def test_by_category(self):
        """Test filtering by category."""
        image = get_platforms_by_category("Image Generation")
        assert [p.id for p in image] == ["midjourney", "dall-e-3"]
        assert all(p.is_image_platform for p in image)
        assert get_platforms_by_category("Nope") == []

    def test_iteration_order(self):
        assert [p.id for p in catalog] == [p.id for p in PLATFORMS]


class TestCustomCatalog:
    """Tests for catalogs built from other platform sets."""

    def test_custom_platforms(self, code_platform, tiny_platform):
        custom = PlatformCatalog([code_platform, tiny_platform])
        assert custom.ids() == ["code-helper", "tiny"]
        assert custom.require("tiny") is tiny_platform
        assert custom.categories() == ["Code-Specific", "AI Assistants"]

    def test_duplicate_id_rejected(self, code_platform):
        """Test duplicate ids are a configuration error."""
        with pytest.raises(ConfigurationError):
            PlatformCatalog([code_platform, code_platform])


class TestTemplates:
    """Tests for platform template rendering."""

    @pytest.fixture
    def renderer(self):
        return PlatformTemplateRenderer()

    def test_system_template_variables(self, renderer):
        """Test intent and domain are substituted."""
        claude = get_platform_by_id("claude-sonnet")
        text = renderer.render_system(claude, intent=Intent.CODE, domain=Domain.TECHNICAL)
        assert "code request" in text
        assert "{{" not in text

    def test_domain_variable(self, renderer):
        text = renderer.render_system(get_platform_by_id("chatgpt-4"), domain=Domain.BUSINESS)
        assert text == "You are ChatGPT, a helpful assistant for business tasks."

    def test_defaults_for_missing_variables(self, renderer):
        """Test rendering without analysis variables."""
        text = renderer.render_user(get_platform_by_id("chatgpt-4"))
        assert text == "Answer the request request using the sections above."

    def test_unknown_intent_reads_as_request(self, renderer):
        text = renderer.render_user(get_platform_by_id("chatgpt-4"), intent=Intent.UNKNOWN)
        assert "the request request" in text

    def test_tone_variable(self, renderer):
        text = renderer.render_user(get_platform_by_id("midjourney"), tone=Tone.CASUAL)
        assert text.startswith("Style: casual")

    def test_missing_template(self, renderer):
        """Test platforms without templates render None."""
        assert renderer.render_system(get_platform_by_id("groq-llama")) is None
        assert renderer.render_user(get_platform_by_id("groq-llama")) is None

    def test_ad_hoc_platform(self, renderer):
        """Test platforms outside the catalog render from their strings."""
        platform = Platform(
            id="adhoc", name="Ad Hoc", icon="x", category="AI Assistants",
            api_format=ApiFormat.TEXT, max_tokens=100,
            system_prompt_template="You help on {{ platform }}.",
        )
        assert renderer.render_system(platform) == "You help on Ad Hoc."

    def test_broken_template_is_configuration_error(self, renderer):
        """Test undefined variables raise instead of rendering blanks."""
        platform = Platform(
            id="broken", name="Broken", icon="x", category="AI Assistants",
            api_format=ApiFormat.TEXT, max_tokens=100,
            system_prompt_template="Hello {{ nobody }}",
        )
        with pytest.raises(ConfigurationError) as exc_info:
            renderer.render_system(platform)
        assert "broken" in exc_info.value.config_key

    def test_only_builtin_filters(self, renderer):
        """Test templates get jinja's stock filters and nothing extra."""
        assert "bullet_list" not in renderer.env.filters
        platform = Platform(
            id="filtered", name="Filtered", icon="x", category="AI Assistants",
            api_format=ApiFormat.TEXT, max_tokens=100,
            user_prompt_template="{{ intent | bullet_list }}",
        )
        with pytest.raises(ConfigurationError):
            renderer.render_user(platform)
        platform = Platform(
            id="upper", name="Upper", icon="x", category="AI Assistants",
            api_format=ApiFormat.TEXT, max_tokens=100,
            user_prompt_template="{{ platform | upper }}",
        )
        assert renderer.render_user(platform) == "UPPER"

    def test_shared_renderer(self):
        assert get_renderer() is get_renderer()
