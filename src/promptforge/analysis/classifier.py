"""Keyword classification for intent and domain."""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Sequence, Any

from .patterns import KeywordRule, INTENT_RULES, DOMAIN_RULES
from ..core.types import Intent, Domain

logger = logging.getLogger(__name__)

# Matches beyond this count per pattern add nothing
_MAX_MATCHES_PER_PATTERN = 2


@dataclass
class DetectionResult:
    """Result of classifying one prompt against a rule table."""
    label: Any
    confidence: float
    scores: Dict[str, float] = field(default_factory=dict)
    signals: Dict[str, List[str]] = field(default_factory=dict)


class KeywordClassifier:
    """
    Ordered keyword classifier.

    Each rule scores the summed weight of its matching patterns; the
    first rule in table order whose score reaches its threshold wins.
    Confidence is the winner's share of the total score.
    """

    def __init__(self, rules: Sequence[KeywordRule], default: Any):
        self.rules = tuple(rules)
        self.default = default
        self._compile_patterns()

    def _compile_patterns(self) -> None:
        """Pre-compile regex patterns for efficiency."""
        self._compiled: List[Tuple[KeywordRule, List[Tuple[re.Pattern, float]]]] = [
            (rule, [(re.compile(p, re.IGNORECASE | re.MULTILINE), w) for p, w in rule.patterns])
            for rule in self.rules
        ]

    @staticmethod
    def _key(label: Any) -> str:
        return getattr(label, "value", str(label))

    def score(self, text: str) -> Tuple[Dict[str, float], Dict[str, List[str]]]:
        """Per-label scores and the matched keywords behind them."""
        scores: Dict[str, float] = {}
        signals: Dict[str, List[str]] = {}
        for rule, patterns in self._compiled:
            key = self._key(rule.label)
            total = 0.0
            for pattern, weight in patterns:
                hits = [m.group(0).strip() for m in pattern.finditer(text)]
                if not hits:
                    continue
                total += weight * min(len(hits), _MAX_MATCHES_PER_PATTERN)
                bucket = signals.setdefault(key, [])
                for hit in hits[:3]:
                    if hit and hit[:50] not in bucket:
                        bucket.append(hit[:50])
            scores[key] = total
        return scores, signals

    def classify(self, text: str) -> DetectionResult:
        """
        Classify text.

        Args:
            text: The text to classify

        Returns:
            DetectionResult with the winning label, or the default label
            with zero confidence when no rule reaches its threshold
        """
        if not isinstance(text, str) or not text.strip():
            return DetectionResult(label=self.default, confidence=0.0)

        scores, signals = self.score(text)
        total = sum(scores.values())
        for rule in self.rules:
            key = self._key(rule.label)
            if scores.get(key, 0.0) >= rule.threshold:
                confidence = scores[key] / total if total else 0.0
                logger.debug("Classified as %s (score=%.2f, confidence=%.2f)", key, scores[key], confidence)
                return DetectionResult(
                    label=rule.label,
                    confidence=confidence,
                    scores=scores,
                    signals=signals,
                )
        return DetectionResult(label=self.default, confidence=0.0, scores=scores, signals=signals)


def intent_classifier() -> KeywordClassifier:
    return KeywordClassifier(INTENT_RULES, Intent.UNKNOWN)


def domain_classifier() -> KeywordClassifier:
    return KeywordClassifier(DOMAIN_RULES, Domain.GENERAL)
