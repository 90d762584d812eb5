"""Per-platform cost estimation from token counts."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Iterable, Optional, Mapping, Any

# USD per million tokens, keyed by platform id and a few common model ids
PRICE_PER_MILLION: Mapping[str, float] = MappingProxyType({
    # Platforms
    "claude-sonnet": 3.0,
    "chatgpt-4": 10.0,
    "chatgpt-3.5": 0.5,
    "gemini-pro": 0.25,
    "groq-llama": 0.1,
    "midjourney": 0.0,
    "dall-e-3": 0.0,
    "cursor-ai": 2.0,
    "github-copilot": 1.0,
    "perplexity": 2.0,
    "notebooklm": 0.0,
    # Model ids
    "gpt-4": 30.0,
    "gpt-4-turbo": 10.0,
    "gpt-4o": 5.0,
    "gpt-4o-mini": 0.15,
    "gpt-3.5-turbo": 0.5,
    "claude-3-opus": 15.0,
    "claude-3-sonnet": 3.0,
    "claude-3-haiku": 0.25,
    "gemini-1.5-pro": 3.5,
    "llama-3-70b": 0.59,
})


def _default_rate() -> float:
    from ..core.config import get_settings
    return get_settings().tokenizer.default_price_per_million


def price_per_million(platform_or_model_id: str, default_rate: Optional[float] = None) -> float:
    """Rate for an id, or the configured default for unknown ids."""
    key = platform_or_model_id.strip().lower()
    if key in PRICE_PER_MILLION:
        return PRICE_PER_MILLION[key]
    return _default_rate() if default_rate is None else default_rate


def estimate_cost(
    token_count: int,
    platform_or_model_id: str,
    default_rate: Optional[float] = None
) -> float:
    """
    Estimate USD cost of a token count.

    Args:
        token_count: Number of tokens
        platform_or_model_id: Platform id or model id
        default_rate: Rate per million for unknown ids (default: from settings)

    Returns:
        Cost in USD; 0.0 for invalid input
    """
    if isinstance(token_count, bool) or not isinstance(token_count, int) or token_count <= 0:
        return 0.0
    if not isinstance(platform_or_model_id, str):
        return 0.0
    return token_count / 1_000_000 * price_per_million(platform_or_model_id, default_rate)


def format_cost(amount: float) -> str:
    """Format a USD amount with four decimals."""
    return f"${amount:.4f}"


def calculate_cost(
    token_count: int,
    platform_or_model_id: str,
    default_rate: Optional[float] = None
) -> str:
    """
    Cost of a token count as a display string, e.g. ``"$0.0030"``.

    Never raises: invalid input yields ``"$0.0000"``.
    """
    return format_cost(estimate_cost(token_count, platform_or_model_id, default_rate))


@dataclass
class CostComparison:
    """Estimated cost of one platform for a fixed token count."""
    platform_id: str
    platform_name: str
    estimated_cost: float
    tokens_used: int
    savings: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "platform_id": self.platform_id,
            "platform_name": self.platform_name,
            "estimated_cost": round(self.estimated_cost, 6),
            "cost": format_cost(self.estimated_cost),
            "tokens_used": self.tokens_used,
            "savings": round(self.savings, 6),
        }


@dataclass
class CostReport:
    """Platforms ordered from cheapest to most expensive."""
    comparisons: List[CostComparison] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    @property
    def cheapest(self) -> Optional[CostComparison]:
        return self.comparisons[0] if self.comparisons else None

    @property
    def total_savings(self) -> float:
        if not self.comparisons:
            return 0.0
        return self.comparisons[-1].estimated_cost - self.comparisons[0].estimated_cost

    def to_dict(self) -> Dict[str, Any]:
        return {
            "comparisons": [c.to_dict() for c in self.comparisons],
            "cheapest": self.cheapest.platform_id if self.cheapest else None,
            "total_savings": round(self.total_savings, 6),
            "recommendations": list(self.recommendations),
        }


def compare_costs(token_count: int, platforms: Iterable) -> CostReport:
    """
    Compare the cost of a token count across platforms.

    Args:
        token_count: Number of tokens to price
        platforms: Platform objects (anything with ``id`` and ``name``)

    Returns:
        CostReport sorted by ascending cost (stable for equal costs)
    """
    comparisons = [
        CostComparison(
            platform_id=p.id,
            platform_name=p.name,
            estimated_cost=estimate_cost(token_count, p.id),
            tokens_used=max(0, token_count) if isinstance(token_count, int) else 0,
        )
        for p in platforms
    ]
    comparisons.sort(key=lambda c: c.estimated_cost)
    if not comparisons:
        return CostReport()

    most_expensive = comparisons[-1]
    for comp in comparisons:
        comp.savings = most_expensive.estimated_cost - comp.estimated_cost

    cheapest = comparisons[0]
    recommendations = []
    if cheapest.estimated_cost == 0:
        recommendations.append(f"{cheapest.platform_name} is free to use")
    else:
        recommendations.append(
            f"{cheapest.platform_name} is the most cost-effective at {format_cost(cheapest.estimated_cost)}"
        )
    spread = most_expensive.estimated_cost - cheapest.estimated_cost
    if spread > 0.01:
        percent = spread / most_expensive.estimated_cost * 100
        recommendations.append(
            f"You could save {percent:.0f}% by choosing {cheapest.platform_name} "
            f"over {most_expensive.platform_name}"
        )

    return CostReport(comparisons=comparisons, recommendations=recommendations)
