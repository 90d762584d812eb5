"""Human-readable explanations of what an enhancement changed."""

import logging
from typing import List, Optional, Sequence, Set, Union

from .examples import count_rendered_examples
from .rendering import find_sections, section_body
from .sections import clarification_for
from .tone import TONE_DIRECTIVES
from ..analysis.analyzer import PromptAnalyzer
from ..core.types import ApiFormat, Platform, PromptAnalysis

logger = logging.getLogger(__name__)

FILLED_COMPONENT_STATEMENTS = (
    ("context", "Added context and background framing"),
    ("format", "Added explicit output format instruction"),
    ("constraints", "Added explicit constraints"),
    ("examples", "Added examples or reference cases"),
)

TRIM_LABELS = {
    "examples": "few-shot examples",
    "dataset": "dataset context",
    "platform": "platform requirements",
    "clarifications": "clarifications",
    "role": "role directive",
    "system": "system message",
    "task": "task text",
}


def calculate_improvement(
    original: Union[PromptAnalysis, int],
    enhanced: Union[PromptAnalysis, int]
) -> int:
    """Signed quality score difference, enhanced minus original."""
    before = original.quality_score if isinstance(original, PromptAnalysis) else int(original)
    after = enhanced.quality_score if isinstance(enhanced, PromptAnalysis) else int(enhanced)
    return after - before


def _lower_first(text: str) -> str:
    return text[:1].lower() + text[1:] if text else text


def _clarification_lines(enhanced: str, fmt: ApiFormat) -> Set[str]:
    body = section_body(enhanced, "clarifications", fmt) or ""
    return {line[2:].strip() for line in body.splitlines() if line.startswith("- ")}


def _filled_statements(
    before: PromptAnalysis,
    enhanced: str,
    platform: Platform,
    present: Set[str]
) -> List[str]:
    """
    Statements for the original prompt's gaps that a built section supplies.

    Platform requirement text can mention the same keywords, so only the
    clarification lines written for a component, or an examples section,
    count as filling it.
    """
    lines = _clarification_lines(enhanced, platform.api_format)
    filled = []
    for component, statement in FILLED_COMPONENT_STATEMENTS:
        if not before.is_missing(component):
            continue
        line = clarification_for(component, before.intent, platform.is_image_platform)
        if line in lines or (component == "examples" and "examples" in present):
            filled.append(statement)
    return filled


def _trim_statements(trimmed: Sequence[str], limit: int) -> List[str]:
    actions = {}
    for note in trimmed:
        name, _, action = note.partition(":")
        # removal supersedes an earlier shrink of the same section
        if actions.get(name) != "removed":
            actions[name] = action
    statements = []
    for name, action in actions.items():
        label = TRIM_LABELS.get(name, name)
        verb = {"removed": "Removed", "shrunk": "Reduced", "truncated": "Truncated"}.get(action, "Trimmed")
        statements.append(f"{verb} {label} to fit the {limit}-token limit")
    return statements


class ImprovementExplainer:
    """
    Compares an original prompt with its enhancement.

    Statements come in a fixed order: resolved conflicts, role, filled
    components, system message, dataset, few-shot examples, tone,
    platform formatting, budget trims and the score change. Only changes
    actually visible in the enhanced text are reported.
    """

    def __init__(self, analyzer: Optional[PromptAnalyzer] = None):
        self.analyzer = analyzer or PromptAnalyzer()

    def explain(
        self,
        original: str,
        enhanced: str,
        platform: Platform,
        original_analysis: Optional[PromptAnalysis] = None,
        enhanced_analysis: Optional[PromptAnalysis] = None,
        trimmed: Optional[Sequence[str]] = None,
        dataset_truncated: bool = False
    ) -> List[str]:
        """
        Describe the improvements from ``original`` to ``enhanced``.

        Args:
            original: Original prompt
            enhanced: Enhanced prompt text
            platform: Platform the enhancement targeted
            original_analysis: Analysis of ``original`` (computed when None)
            enhanced_analysis: Analysis of ``enhanced`` (computed when None)
            trimmed: Budget trim notes from the enhancer
            dataset_truncated: Whether dataset content was cut down

        Returns:
            Ordered list of statements; empty when nothing changed
        """
        original = original if isinstance(original, str) else ""
        enhanced = enhanced if isinstance(enhanced, str) else ""
        before = original_analysis or self.analyzer.analyze(original)
        after = enhanced_analysis or self.analyzer.analyze(enhanced)
        fmt = platform.api_format
        present = set(find_sections(enhanced, fmt))
        statements: List[str] = []

        for conflict in before.conflicts:
            if conflict not in after.conflicts:
                statements.append(f"Resolved {_lower_first(conflict)}")

        if "role" in present and before.is_missing("role"):
            statements.append("Added role directive establishing an expert persona")

        statements.extend(_filled_statements(before, enhanced, platform, present))

        if "system" in present:
            statements.append("Added system message")

        if "dataset" in present:
            if dataset_truncated:
                statements.append("Included dataset context, truncated to fit the token budget")
            else:
                statements.append("Included dataset context")

        if "examples" in present:
            count = count_rendered_examples(section_body(enhanced, "examples", fmt) or "", fmt)
            if count:
                noun = "example" if count == 1 else "examples"
                statements.append(f"Added {count} few-shot {noun} formatted as {fmt.value.upper()}")

        for tone, directive in TONE_DIRECTIVES.items():
            if directive in enhanced:
                statements.append(f"Applied {tone.value} tone")
                break

        if "platform" in present:
            statements.append(f"Applied {platform.name} formatting requirements")

        if trimmed:
            statements.extend(_trim_statements(trimmed, platform.max_tokens))

        delta = calculate_improvement(before, after)
        if delta > 0:
            statements.append(f"Quality score increased by {delta} points")

        logger.debug("Explained enhancement for %s: %d statements", platform.id, len(statements))
        return statements


def explain_improvements(
    original: str,
    enhanced: str,
    platform: Platform,
    original_analysis: Optional[PromptAnalysis] = None,
    enhanced_analysis: Optional[PromptAnalysis] = None,
    trimmed: Optional[Sequence[str]] = None,
    dataset_truncated: bool = False
) -> List[str]:
    """Convenience function; creates an ImprovementExplainer per call."""
    return ImprovementExplainer().explain(
        original, enhanced, platform, original_analysis, enhanced_analysis, trimmed, dataset_truncated
    )
