"""Complexity scoring (1-10)."""

import re
from dataclasses import dataclass, asdict
from typing import Dict

from .patterns import (
    CLAUSE_SPLIT_PATTERN,
    CONSTRAINT_MARKER_PATTERN,
    NESTING_PATTERN,
    COMPONENT_PATTERNS,
    DOMAIN_RULES,
)
from ..core.types import Domain

_CLAUSE_SPLIT = re.compile(CLAUSE_SPLIT_PATTERN, re.IGNORECASE)
_CONSTRAINT = re.compile(CONSTRAINT_MARKER_PATTERN, re.IGNORECASE)
_NESTING = re.compile(NESTING_PATTERN, re.IGNORECASE)
_EXAMPLES = re.compile(COMPONENT_PATTERNS["examples"], re.IGNORECASE)
_JARGON = re.compile(
    next(p for rule in DOMAIN_RULES if rule.label is Domain.TECHNICAL for p, _ in rule.patterns),
    re.IGNORECASE,
)

MIN_COMPLEXITY = 1
MAX_COMPLEXITY = 10

# (minimum word count, points), checked from the top
_WORD_BUCKETS = ((201, 4), (101, 3), (51, 2), (21, 1))


@dataclass
class ComplexityBreakdown:
    """Points contributed by each complexity feature."""
    length: int = 0
    clauses: int = 0
    questions: int = 0
    constraints: int = 0
    nesting: int = 0
    examples: int = 0
    jargon: int = 0

    @property
    def total(self) -> int:
        raw = MIN_COMPLEXITY + sum(asdict(self).values())
        return max(MIN_COMPLEXITY, min(MAX_COMPLEXITY, raw))

    def to_dict(self) -> Dict[str, int]:
        return {**asdict(self), "total": self.total}


def count_clauses(text: str) -> int:
    """Number of non-empty clauses after splitting on punctuation and conjunctions."""
    return sum(1 for part in _CLAUSE_SPLIT.split(text) if part and part.strip())


def complexity_breakdown(text: str) -> ComplexityBreakdown:
    """
    Score each feature. Every feature only grows as text is appended,
    so the total is monotone in length and clause count.
    """
    breakdown = ComplexityBreakdown()
    if not isinstance(text, str) or not text.strip():
        return breakdown

    words = len(text.split())
    for minimum, points in _WORD_BUCKETS:
        if words >= minimum:
            breakdown.length = points
            break

    clauses = count_clauses(text)
    breakdown.clauses = min(max(clauses - 1, 0) // 2, 2)
    breakdown.questions = 1 if text.count("?") >= 2 else 0
    breakdown.constraints = 1 if len(_CONSTRAINT.findall(text)) > 2 else 0
    breakdown.nesting = 1 if _NESTING.search(text) else 0
    breakdown.examples = 1 if _EXAMPLES.search(text) else 0
    jargon_terms = {m.group(0).lower() for m in _JARGON.finditer(text)}
    breakdown.jargon = 1 if len(jargon_terms) >= 3 else 0
    return breakdown


def assess_complexity(text: str) -> int:
    """Complexity of a prompt, clamped to [1, 10]."""
    return complexity_breakdown(text).total
