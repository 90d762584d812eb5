"""Variation generation - scheduled enhancement strategies."""

from .orchestrator import VariationOrchestrator, generate_variations
from .schedule import VariationStrategy, VARIATION_SCHEDULE, FALLBACK_STRATEGY, strategy_for

__all__ = [
    "VariationOrchestrator",
    "generate_variations",
    "VariationStrategy",
    "VARIATION_SCHEDULE",
    "FALLBACK_STRATEGY",
    "strategy_for",
]
