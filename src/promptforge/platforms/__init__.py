"""Platform catalog and platform template rendering."""

from .catalog import (
    PLATFORMS,
    PlatformCatalog,
    catalog,
    get_platform_by_id,
    require_platform,
    get_all_categories,
    get_platforms_by_category,
)
from .templates import PlatformTemplateRenderer, get_renderer

__all__ = [
    "PLATFORMS",
    "PlatformCatalog",
    "catalog",
    "get_platform_by_id",
    "require_platform",
    "get_all_categories",
    "get_platforms_by_category",
    "PlatformTemplateRenderer",
    "get_renderer",
]
