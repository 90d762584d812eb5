"""
Variation schedule.

Each row says how far variation ``index`` goes: whether ambiguity is
resolved, which tone it uses and how many few-shot examples it adds.
``None`` means "use the caller's value".
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.types import EnhancementType, Tone


@dataclass(frozen=True)
class VariationStrategy:
    """Enhancement parameters for one slot of the schedule."""
    enhancement_type: EnhancementType
    resolve_ambiguity: bool
    tone: Optional[Tone] = None
    # (complexity above which the override applies, few-shot count)
    few_shot_override: Optional[Tuple[int, int]] = None

    def few_shot_count(self, baseline_complexity: int, requested: int) -> int:
        if self.few_shot_override is not None:
            threshold, count = self.few_shot_override
            if baseline_complexity > threshold:
                return count
        return requested

    def resolve_tone(self, requested: Tone) -> Tone:
        return self.tone or requested


VARIATION_SCHEDULE: Tuple[VariationStrategy, ...] = (
    VariationStrategy(EnhancementType.CONSERVATIVE, resolve_ambiguity=False),
    VariationStrategy(EnhancementType.BALANCED, resolve_ambiguity=True, few_shot_override=(7, 3)),
    VariationStrategy(
        EnhancementType.AGGRESSIVE, resolve_ambiguity=True, tone=Tone.SPARTAN, few_shot_override=(5, 2)
    ),
)

# Every index past the table
FALLBACK_STRATEGY = VariationStrategy(EnhancementType.AGGRESSIVE, resolve_ambiguity=True)


def strategy_for(index: int, schedule: Tuple[VariationStrategy, ...] = VARIATION_SCHEDULE) -> VariationStrategy:
    """Strategy for the zero-based variation ``index``."""
    if 0 <= index < len(schedule):
        return schedule[index]
    return FALLBACK_STRATEGY
