"""Core module - foundational types, errors, configuration, and logging."""

from .types import (
    Intent,
    Domain,
    Tone,
    ApiFormat,
    EnhancementType,
    Platform,
    PromptAnalysis,
    EnhanceOptions,
    PatternMetadata,
    EnhancedPrompt,
    VariationReport,
    COMPONENTS,
    CRITICAL_COMPONENTS,
    OPTIONAL_COMPONENTS,
    coerce_tone,
)
from .config import Settings, get_settings, reload_settings
from .exceptions import (
    PromptForgeError,
    InvalidInputError,
    InvalidPlatformError,
    BudgetExceededError,
    EnhancementError,
    ConfigurationError,
)
from .logging_config import configure_logging

__all__ = [
    # Types
    "Intent",
    "Domain",
    "Tone",
    "ApiFormat",
    "EnhancementType",
    "Platform",
    "PromptAnalysis",
    "EnhanceOptions",
    "PatternMetadata",
    "EnhancedPrompt",
    "VariationReport",
    "COMPONENTS",
    "CRITICAL_COMPONENTS",
    "OPTIONAL_COMPONENTS",
    "coerce_tone",
    # Configuration
    "Settings",
    "get_settings",
    "reload_settings",
    "configure_logging",
    # Exceptions
    "PromptForgeError",
    "InvalidInputError",
    "InvalidPlatformError",
    "BudgetExceededError",
    "EnhancementError",
    "ConfigurationError",
]
