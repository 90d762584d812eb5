"""Tests for enhancement module - sections, rendering, examples and budget fitting."""

import pytest
from promptforge.core.types import ApiFormat, Intent, Domain, Tone, EnhanceOptions
from promptforge.core.config import EnhancementSettings
from promptforge.core.exceptions import EnhancementError
from promptforge.analysis import detect_conflicts
from promptforge.platforms import PLATFORMS, get_platform_by_id
from promptforge.tokenization import HeuristicTokenCounter
from promptforge.enhancement import (
    PromptEnhancer,
    enhance_prompt,
    Section,
    render_section,
    render_document,
    find_sections,
    section_body,
    select_examples,
    format_examples,
    count_rendered_examples,
    clarification_for,
    TONE_DIRECTIVES,
)
from promptforge.enhancement.sections import ROLE_BY_INTENT, ROLE_BY_DOMAIN, IMAGE_ROLE, _dataset_section
from promptforge.enhancement.examples import INTENT_EXAMPLES, IMAGE_EXAMPLES


@pytest.fixture
def enhancer():
    return PromptEnhancer(settings=EnhancementSettings())


class TestRendering:
    """Tests for section rendering."""

    def test_markdown(self):
        assert render_section("task", " Do it ", ApiFormat.TEXT) == "### Task\nDo it"
        assert render_section("dataset", "rows", ApiFormat.JSON) == "### Dataset Context\nrows"

    def test_xml(self):
        assert render_section("task", "Do it", ApiFormat.XML) == "<instructions>\nDo it\n</instructions>"
        assert render_section("dataset", "rows", ApiFormat.XML) == "<context>\nrows\n</context>"

    def test_document_skips_empty_sections(self):
        doc = render_document([Section("role", "R"), Section("task", "  "), Section("platform", "P")], ApiFormat.TEXT)
        assert doc == "### Role\nR\n\n### Platform Requirements\nP"

    @pytest.mark.parametrize("api_format", list(ApiFormat))
    def test_find_and_read_sections(self, api_format):
        """Test sections can be located and read back."""
        doc = render_document([Section("role", "Persona"), Section("task", "Line one\nLine two")], api_format)
        assert find_sections(doc, api_format) == ["role", "task"]
        assert section_body(doc, "task", api_format) == "Line one\nLine two"
        assert section_body(doc, "examples", api_format) is None

    def test_with_body_drops_shrink(self):
        section = Section("examples", "a", meta={"count": 2}, shrink=lambda: None)
        smaller = section.with_body("b", count=1)
        assert smaller.body == "b"
        assert smaller.meta == {"count": 1}
        assert smaller.shrink is None


class TestExamples:
    """Tests for example selection and formatting."""

    def test_zero(self):
        assert select_examples(0, Intent.CODE, Domain.TECHNICAL) == []

    def test_intent_bank_first(self):
        examples = select_examples(2, Intent.CODE, Domain.TECHNICAL)
        assert examples == list(INTENT_EXAMPLES[Intent.CODE][:2])

    def test_fills_with_domain_then_placeholders(self):
        """Test shortfalls are filled from the domain bank, then synthesized."""
        examples = select_examples(5, Intent.CODE, Domain.TECHNICAL, task="write code")
        assert len(examples) == 5
        assert examples[3].input == "Describe what a load balancer does."
        assert examples[4].input == "Sample request 5 in the style of: write code"

    def test_image_bank(self):
        examples = select_examples(2, Intent.CREATIVE, Domain.CREATIVE, image_platform=True)
        assert examples == list(IMAGE_EXAMPLES[:2])

    @pytest.mark.parametrize("api_format", list(ApiFormat))
    def test_count_rendered(self, api_format):
        """Test the rendered count matches the number of examples."""
        examples = select_examples(3, Intent.ANALYSIS, Domain.BUSINESS)
        body = format_examples(examples, api_format)
        assert count_rendered_examples(body, api_format) == 3

    def test_json_lines(self):
        body = format_examples(select_examples(2, Intent.CODE, Domain.TECHNICAL), ApiFormat.JSON)
        assert all(line.startswith('{"input"') for line in body.splitlines())

    def test_xml_escaped(self):
        body = format_examples(select_examples(1, Intent.DATA_PROCESSING, Domain.GENERAL), ApiFormat.XML)
        assert body.startswith("<example>\n<input>")

    def test_text_numbered(self):
        body = format_examples(select_examples(2, Intent.INSTRUCTION, Domain.GENERAL), ApiFormat.TEXT)
        assert body.startswith("Example 1:\nInput: How do I make a paper airplane?")
        assert "\n\nExample 2:\n" in body


class TestClarifications:
    """Tests for clarification lines."""

    def test_intent_specific(self):
        assert clarification_for("format", Intent.INSTRUCTION) == (
            "Format: present the answer as a numbered list of steps."
        )

    def test_image_variant(self):
        line = clarification_for("format", Intent.CREATIVE, image_platform=True)
        assert "comma-separated keywords" in line

    def test_fallback(self):
        assert clarification_for("examples", Intent.CODE).startswith("Examples:")

    def test_role_has_no_clarification(self):
        assert clarification_for("role", Intent.CODE) is None


class TestDatasetSection:
    """Tests for dataset section sizing."""

    def test_fits(self):
        section = _dataset_section("name,age\nAda,36", 100, HeuristicTokenCounter())
        assert section.body.startswith("Reference data (2 lines, about")
        assert section.meta["truncated"] is False

    def test_truncated_then_halved(self):
        """Test truncation and the single halving step."""
        counter = HeuristicTokenCounter()
        content = "\n".join(f"row {i}, value {i * 7}" for i in range(200))
        section = _dataset_section(content, 100, counter)
        assert section.meta["truncated"] is True
        assert section.body.endswith("[Dataset truncated to fit the token budget]")
        assert counter.count(section.body) <= 100

        halved = section.shrink()
        assert halved.meta["budget"] == 50
        assert counter.count(halved.body) <= 50
        assert halved.shrink() is None


class TestPromptEnhancer:
    """Tests for PromptEnhancer."""

    def test_default_sections(self, enhancer, short_prompt, code_platform):
        """Test the sections built for a bare prompt."""
        result = enhancer.enhance(short_prompt, code_platform)
        assert result.sections == ["role", "task", "platform"]
        assert result.trimmed == []
        assert result.text.startswith("### Role\n" + ROLE_BY_INTENT[Intent.CODE])
        assert "Write code" in result.text
        assert TONE_DIRECTIVES[Tone.PROFESSIONAL] in result.text
        assert "- Include file paths and code context" in result.text
        assert result.text.endswith("Output format: TEXT.")
        assert result.system_source is None
        assert result.token_count == HeuristicTokenCounter().count(result.text)

    def test_role_skipped_when_present(self, enhancer, structured_prompt, code_platform):
        result = enhancer.enhance(structured_prompt, code_platform)
        assert "role" not in result.sections

    def test_domain_role_for_unknown_intent(self, enhancer, code_platform):
        result = enhancer.enhance("zebra quartz", code_platform)
        assert ROLE_BY_DOMAIN[Domain.GENERAL] in result.text

    def test_image_role(self, enhancer):
        result = enhancer.enhance("A castle on a hill at dawn", get_platform_by_id("midjourney"))
        assert IMAGE_ROLE in result.text
        assert "Style: professional" in result.text

    def test_clarifications(self, enhancer, short_prompt, code_platform):
        """Test missing components are filled when resolving ambiguity."""
        result = enhancer.enhance(short_prompt, code_platform, EnhanceOptions(resolve_ambiguity=True))
        assert result.sections == ["role", "task", "clarifications", "platform"]
        body = section_body(result.text, "clarifications", ApiFormat.TEXT)
        lines = body.splitlines()
        assert len(lines) == 3
        assert lines[0].startswith("- Context:")
        assert lines[1].startswith("- Format:")
        assert lines[2].startswith("- Constraints: the code must handle invalid input")

    def test_no_clarifications_by_default(self, enhancer, short_prompt, code_platform):
        result = enhancer.enhance(short_prompt, code_platform, EnhanceOptions(resolve_ambiguity=False))
        assert "clarifications" not in result.sections

    def test_conflict_resolved(self, enhancer, conflict_prompt, code_platform):
        """Test the enhanced text carries only one side of a conflict."""
        result = enhancer.enhance(conflict_prompt, code_platform, EnhanceOptions(resolve_ambiguity=True))
        assert result.resolved_conflicts == ["Conflicting tone directive (formal vs casual)"]
        assert "casual" not in result.text
        assert detect_conflicts(result.text) == []
        assert "- Resolved tone conflict:" in result.text

    def test_xml_platform(self, enhancer, short_prompt):
        """Test XML tags and examples for an XML platform."""
        result = enhancer.enhance(short_prompt, get_platform_by_id("claude-sonnet"), EnhanceOptions(few_shot_count=2))
        assert result.text.startswith("<role>")
        assert "<instructions>" in result.text
        assert result.text.count("<example>") == 2
        assert result.few_shot_count == 2
        assert "Output format: XML." in result.text

    def test_json_platform(self, enhancer, short_prompt):
        result = enhancer.enhance(short_prompt, get_platform_by_id("chatgpt-4"), EnhanceOptions(few_shot_count=2))
        body = section_body(result.text, "examples", ApiFormat.JSON)
        assert count_rendered_examples(body, ApiFormat.JSON) == 2
        assert "Output format: JSON." in result.text

    def test_few_shot_capped(self, short_prompt, code_platform):
        enhancer = PromptEnhancer(settings=EnhancementSettings(PF_MAX_FEW_SHOT_COUNT=2))
        result = enhancer.enhance(short_prompt, code_platform, EnhanceOptions(few_shot_count=5))
        assert result.few_shot_count == 2

    def test_custom_system_message(self, enhancer, short_prompt, code_platform):
        """Test a system message is placed first, verbatim."""
        result = enhancer.enhance(short_prompt, code_platform, EnhanceOptions(system_message="Answer in Python 3."))
        assert result.sections[0] == "system"
        assert result.system_source == "custom"
        assert result.text.startswith("### System\nAnswer in Python 3.")

    def test_platform_system_prompt(self, enhancer, short_prompt):
        result = enhancer.enhance(
            short_prompt, get_platform_by_id("claude-sonnet"), EnhanceOptions(use_platform_system_prompt=True)
        )
        assert result.system_source == "platform"
        assert "code request" in section_body(result.text, "system", ApiFormat.XML)

    def test_platform_without_system_template(self, enhancer, short_prompt):
        result = enhancer.enhance(
            short_prompt, get_platform_by_id("groq-llama"), EnhanceOptions(use_platform_system_prompt=True)
        )
        assert "system" not in result.sections

    def test_dataset(self, enhancer, short_prompt, code_platform):
        result = enhancer.enhance(short_prompt, code_platform, EnhanceOptions(dataset_content="name,age\nAda,36"))
        assert result.sections[0] == "dataset"
        assert "Reference data (2 lines" in result.text
        assert result.dataset_truncated is False

    def test_dataset_truncated(self, enhancer, short_prompt):
        """Test large datasets are cut to their share of the budget."""
        midjourney = get_platform_by_id("midjourney")
        dataset = "\n".join(f"subject {i}, palette {i}, lighting {i}" for i in range(400))
        result = enhancer.enhance(short_prompt, midjourney, EnhanceOptions(dataset_content=dataset))
        assert result.dataset_truncated is True
        assert "[Dataset truncated to fit the token budget]" in result.text
        assert result.token_count <= midjourney.max_tokens

    def test_budget_trimming(self, enhancer, long_prompt, tiny_platform):
        """Test sections are trimmed in order and the task is truncated last."""
        result = enhancer.enhance(long_prompt, tiny_platform, EnhanceOptions(few_shot_count=3))
        assert result.token_count <= tiny_platform.max_tokens
        assert result.trimmed[0] == "examples:shrunk"
        assert result.trimmed[-1] == "task:truncated"
        order = result.trimmed
        assert order.index("examples:removed") < order.index("platform:removed") < order.index("role:removed")
        assert result.sections == ["task"]
        assert TONE_DIRECTIVES[Tone.PROFESSIONAL] in result.text

    @pytest.mark.parametrize("platform", PLATFORMS, ids=lambda p: p.id)
    def test_every_platform_within_budget(self, enhancer, structured_prompt, platform):
        dataset = "\n".join(f"region {i}, revenue {i * 1000}" for i in range(300))
        result = enhancer.enhance(
            structured_prompt,
            platform,
            EnhanceOptions(few_shot_count=3, resolve_ambiguity=True, dataset_content=dataset),
        )
        assert 0 < result.token_count <= platform.max_tokens

    def test_empty_prompt(self, enhancer, empty_prompt, code_platform):
        result = enhancer.enhance(empty_prompt, code_platform)
        assert TONE_DIRECTIVES[Tone.PROFESSIONAL] in result.text
        assert "task" in result.sections

    def test_builder_failure_wrapped(self, short_prompt, code_platform):
        """Test unexpected builder errors surface as EnhancementError."""

        class OfflineRenderer:
            def render_system(self, platform, **variables):
                return None

            def render_user(self, platform, **variables):
                raise RuntimeError("template store offline")

        enhancer = PromptEnhancer(settings=EnhancementSettings(), renderer=OfflineRenderer())
        with pytest.raises(EnhancementError) as exc_info:
            enhancer.enhance(short_prompt, code_platform)
        assert exc_info.value.stage == "platform"
        assert isinstance(exc_info.value.cause, RuntimeError)

    def test_to_dict(self, enhancer, short_prompt, code_platform):
        d = enhancer.enhance(short_prompt, code_platform).to_dict()
        assert d["sections"] == ["role", "task", "platform"]
        assert d["dataset_truncated"] is False


class TestEnhancePrompt:
    """Tests for the convenience function."""

    def test_returns_text(self, short_prompt, code_platform):
        text = enhance_prompt(short_prompt, code_platform, tone="spartan")
        assert TONE_DIRECTIVES[Tone.SPARTAN] in text

    def test_options_object(self, short_prompt, code_platform):
        text = enhance_prompt(short_prompt, code_platform, options=EnhanceOptions(resolve_ambiguity=True))
        assert "### Clarifications" in text
