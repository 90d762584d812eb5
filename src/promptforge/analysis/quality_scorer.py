"""Quality scoring for prompts (0-100)."""

import re
from dataclasses import dataclass, field
from typing import Dict, Any, List, Sequence, Optional

from .patterns import ACTION_VERB_PATTERN, INTENT_COMPLEXITY_BANDS
from ..core.config import AnalysisSettings
from ..core.types import Intent, CRITICAL_COMPONENTS

_ACTION_VERB = re.compile(ACTION_VERB_PATTERN, re.IGNORECASE)
_FIRST_LETTER = re.compile(r"[A-Za-z]")
_TERMINAL = re.compile(r"[.!?>)\]\"'`]\s*$")
_STRUCTURE = re.compile(r"^\s*(#{1,6}\s|[-*•]\s|\d+[.)]\s|<\w+>)", re.MULTILINE)

MIN_SCORE = 0
MAX_SCORE = 100


@dataclass
class QualityBreakdown:
    """Adjustments that make up a quality score."""
    base: int = 0
    adjustments: Dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        raw = self.base + sum(self.adjustments.values())
        return max(MIN_SCORE, min(MAX_SCORE, raw))

    def to_dict(self) -> Dict[str, Any]:
        return {"base": self.base, "adjustments": dict(self.adjustments), "total": self.total}


class QualityScorer:
    """
    Scores prompt quality from the analysis features.

    Uses heuristics only; every weight comes from AnalysisSettings so
    the scale can be tuned without code changes.
    """

    def __init__(self, settings: Optional[AnalysisSettings] = None):
        if settings is None:
            from ..core.config import get_settings
            settings = get_settings().analysis
        self.settings = settings

    def breakdown(
        self,
        text: str,
        intent: Intent,
        complexity: int,
        missing: Sequence[str],
        conflicts: Sequence[str]
    ) -> QualityBreakdown:
        """Itemised score for a prompt and its analysis features."""
        s = self.settings
        result = QualityBreakdown(base=s.base_score)
        adj = result.adjustments

        critical = [m for m in missing if m in CRITICAL_COMPONENTS]
        optional = [m for m in missing if m not in CRITICAL_COMPONENTS]
        if critical:
            adj["missing_critical"] = -s.critical_penalty * len(critical)
        if optional:
            adj["missing_optional"] = -s.optional_penalty * len(optional)
        if conflicts:
            adj["conflicts"] = -s.conflict_penalty * len(conflicts)

        band = INTENT_COMPLEXITY_BANDS.get(intent)
        if band and band[0] <= complexity <= band[1]:
            adj["complexity_match"] = s.complexity_match_bonus

        text = text if isinstance(text, str) else ""
        words = len(text.split())
        if words < 5:
            adj["length"] = -s.short_prompt_penalty
        elif 10 <= words <= 400:
            adj["length"] = s.length_bonus

        if not text.strip():
            return result

        if _ACTION_VERB.search(text):
            adj["action_verb"] = s.action_verb_bonus

        stripped = text.strip()
        first = _FIRST_LETTER.search(stripped)
        if first and first.group(0).isupper() and _TERMINAL.search(stripped):
            adj["formatting"] = s.formatting_bonus

        non_empty_lines = [line for line in stripped.splitlines() if line.strip()]
        if len(non_empty_lines) >= 2 and _STRUCTURE.search(stripped):
            adj["structure"] = s.structure_bonus

        return result

    def score(
        self,
        text: str,
        intent: Intent,
        complexity: int,
        missing: Sequence[str],
        conflicts: Sequence[str]
    ) -> int:
        """
        Score a prompt's quality.

        Args:
            text: The prompt
            intent: Detected intent
            complexity: Complexity score (1-10)
            missing: Missing component names
            conflicts: Conflict descriptions

        Returns:
            Integer score clamped to [0, 100]
        """
        return self.breakdown(text, intent, complexity, missing, conflicts).total
