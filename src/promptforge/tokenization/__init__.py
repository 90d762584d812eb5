"""Token estimation and cost calculation."""

from .base import TokenCounter, HeuristicTokenCounter
from .registry import TokenizerRegistry, tokenizer_registry, get_tokenizer, count_tokens
from .cost import (
    PRICE_PER_MILLION,
    CostComparison,
    CostReport,
    calculate_cost,
    compare_costs,
    estimate_cost,
    format_cost,
    price_per_million,
)

__all__ = [
    "TokenCounter",
    "HeuristicTokenCounter",
    "TokenizerRegistry",
    "tokenizer_registry",
    "get_tokenizer",
    "count_tokens",
    "PRICE_PER_MILLION",
    "CostComparison",
    "CostReport",
    "calculate_cost",
    "compare_costs",
    "estimate_cost",
    "format_cost",
    "price_per_million",
]
