"""Missing-component and conflict detection, and pain point selection."""

import re
from typing import List, Optional, Sequence, Tuple, Dict

from .patterns import COMPONENT_PATTERNS, COMPONENT_LABELS, CONFLICT_RULES, ConflictRule
from ..core.types import COMPONENTS, CRITICAL_COMPONENTS, OPTIONAL_COMPONENTS

_COMPONENT_RES: Dict[str, re.Pattern] = {
    name: re.compile(pattern, re.IGNORECASE) for name, pattern in COMPONENT_PATTERNS.items()
}
_CONFLICT_RES: Tuple[Tuple[ConflictRule, re.Pattern, re.Pattern], ...] = tuple(
    (rule, re.compile(rule.side_a, re.IGNORECASE), re.compile(rule.side_b, re.IGNORECASE))
    for rule in CONFLICT_RULES
)

SHORT_PROMPT_WORDS = 5


def has_component(text: str, component: str) -> bool:
    """Whether text contains an explicit instance of a structural component."""
    return bool(_COMPONENT_RES[component].search(text))


def find_missing_components(
    text: str,
    complexity: int,
    examples_threshold: int = 6
) -> List[str]:
    """
    Structural elements absent from the prompt, in COMPONENTS order.

    ``examples`` only counts as missing when complexity is above
    ``examples_threshold``; simple tasks do not need them.
    """
    missing = []
    for component in COMPONENTS:
        if component == "examples" and complexity <= examples_threshold:
            continue
        if not has_component(text, component):
            missing.append(component)
    return missing


def conflict_sides(text: str, rule: ConflictRule) -> Tuple[Optional[int], Optional[int]]:
    """Offsets of the first match of each side, or None when absent."""
    for candidate, side_a, side_b in _CONFLICT_RES:
        if candidate is rule:
            a = side_a.search(text)
            b = side_b.search(text)
            return (a.start() if a else None, b.start() if b else None)
    raise KeyError(rule.kind)


def matches_side(text: str, rule: ConflictRule, side: str) -> bool:
    """Whether text uses the vocabulary of one side ("a" or "b") of a rule."""
    for candidate, side_a, side_b in _CONFLICT_RES:
        if candidate is rule:
            return bool((side_a if side == "a" else side_b).search(text))
    raise KeyError(rule.kind)


def detect_conflict_rules(text: str) -> List[ConflictRule]:
    """Rules whose two sides both occur in text, in table order."""
    found = []
    for rule, side_a, side_b in _CONFLICT_RES:
        if side_a.search(text) and side_b.search(text):
            found.append(rule)
    return found


def detect_conflicts(text: str) -> List[str]:
    """Descriptions of contradictory directive pairs found in text."""
    return [rule.description for rule in detect_conflict_rules(text)]


def extract_pain_point(
    text: str,
    missing: Sequence[str],
    conflicts: Sequence[str]
) -> str:
    """
    The single most important issue with a prompt.

    Priority: conflicts, missing critical components, missing optional
    components, a prompt too short to state a task, then well-formed.
    """
    if not isinstance(text, str) or not text.strip():
        return "Prompt is empty"
    if conflicts:
        return conflicts[0]
    for group in (CRITICAL_COMPONENTS, OPTIONAL_COMPONENTS):
        for component in group:
            if component in missing:
                return f"Missing {COMPONENT_LABELS[component]}"
    if len(text.split()) < SHORT_PROMPT_WORDS:
        return "Prompt is too short to convey a clear task"
    return "Prompt is well-formed"
