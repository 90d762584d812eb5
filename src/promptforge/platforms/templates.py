"""Jinja2 rendering of platform prompt templates."""

from typing import Dict, Any, Optional

from jinja2 import Environment, BaseLoader, TemplateNotFound, TemplateError, StrictUndefined

from ..core.types import Platform
from ..core.exceptions import ConfigurationError


class PlatformTemplateLoader(BaseLoader):
    """
    Loads ``<platform_id>/system`` and ``<platform_id>/user`` templates
    straight from Platform descriptors.
    """

    def __init__(self, platforms: Dict[str, Platform]):
        self.platforms = platforms

    def get_source(self, environment: Environment, template: str):
        platform_id, _, kind = template.rpartition("/")
        platform = self.platforms.get(platform_id)
        if platform is not None:
            source = {
                "system": platform.system_prompt_template,
                "user": platform.user_prompt_template,
            }.get(kind)
            if source:
                return source, template, lambda: True
        raise TemplateNotFound(template)


class PlatformTemplateRenderer:
    """
    Renders the optional system and user templates of platforms.

    Templates see ``platform`` (the display name), ``intent``, ``domain``
    and ``tone`` as plain strings. Undefined variables are errors so a
    broken catalog entry is caught instead of rendering blanks.
    """

    def __init__(self, platforms=None):
        if platforms is None:
            from .catalog import catalog
            platforms = catalog
        self._platforms = {p.id: p for p in platforms}
        self.env = Environment(
            loader=PlatformTemplateLoader(self._platforms),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
            keep_trailing_newline=False,
        )

    def _render(self, platform: Platform, kind: str, variables: Dict[str, Any]) -> Optional[str]:
        # Platforms outside the loader (ad-hoc test objects) render from the string directly
        source = platform.system_prompt_template if kind == "system" else platform.user_prompt_template
        if not source:
            return None
        try:
            if platform.id in self._platforms and self._platforms[platform.id] is platform:
                template = self.env.get_template(f"{platform.id}/{kind}")
            else:
                template = self.env.from_string(source)
            return template.render(**variables).strip() or None
        except TemplateError as e:
            raise ConfigurationError(
                f"Cannot render {kind} template of platform '{platform.id}'",
                config_key=f"platforms.{platform.id}.{kind}_prompt_template",
                cause=e
            )

    def render_system(self, platform: Platform, **variables) -> Optional[str]:
        """Rendered system template, or None when the platform has none."""
        return self._render(platform, "system", self._context(platform, variables))

    def render_user(self, platform: Platform, **variables) -> Optional[str]:
        """Rendered user template, or None when the platform has none."""
        return self._render(platform, "user", self._context(platform, variables))

    @staticmethod
    def _context(platform: Platform, variables: Dict[str, Any]) -> Dict[str, Any]:
        context = {"platform": platform.name, "intent": "request", "domain": "general", "tone": "professional"}
        for key, value in variables.items():
            context[key] = getattr(value, "value", value)
        if context["intent"] == "unknown":
            context["intent"] = "request"
        context["intent"] = str(context["intent"]).replace("_", " ")
        return context


_default_renderer: Optional[PlatformTemplateRenderer] = None


def get_renderer() -> PlatformTemplateRenderer:
    """Shared renderer over the global catalog."""
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = PlatformTemplateRenderer()
    return _default_renderer
