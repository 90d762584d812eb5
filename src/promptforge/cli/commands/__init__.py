"""CLI commands."""

from .analyze import analyze
from .enhance import enhance, variations
from .platforms import platforms, platform
from .tokens import tokens

__all__ = [
    "analyze",
    "enhance",
    "variations",
    "platforms",
    "platform",
    "tokens",
]
