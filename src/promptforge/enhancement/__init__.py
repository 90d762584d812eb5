"""Prompt enhancement - section assembly, tone rewriting and explanations."""

from .enhancer import PromptEnhancer, EnhancementResult, enhance_prompt
from .explainer import ImprovementExplainer, explain_improvements, calculate_improvement
from .examples import Example, select_examples, format_examples, count_rendered_examples
from .rendering import (
    Section,
    SECTION_ORDER,
    render_section,
    render_document,
    find_sections,
    section_body,
)
from .sections import SectionContext, SECTION_BUILDERS, clarification_for
from .tone import (
    ToneEngine,
    ToneRule,
    RulePriority,
    ConflictResolution,
    resolve_conflicts,
    drop_clauses,
    TONE_DIRECTIVES,
)

__all__ = [
    "PromptEnhancer",
    "EnhancementResult",
    "enhance_prompt",
    "ImprovementExplainer",
    "explain_improvements",
    "calculate_improvement",
    "Example",
    "select_examples",
    "format_examples",
    "count_rendered_examples",
    "Section",
    "SECTION_ORDER",
    "render_section",
    "render_document",
    "find_sections",
    "section_body",
    "SectionContext",
    "SECTION_BUILDERS",
    "clarification_for",
    "ToneEngine",
    "ToneRule",
    "RulePriority",
    "ConflictResolution",
    "resolve_conflicts",
    "drop_clauses",
    "TONE_DIRECTIVES",
]
