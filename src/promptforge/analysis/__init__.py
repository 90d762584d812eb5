"""Prompt analysis - heuristic intent, domain, complexity and quality."""

from .analyzer import PromptAnalyzer, analyze_prompt
from .classifier import KeywordClassifier, DetectionResult, intent_classifier, domain_classifier
from .complexity import assess_complexity, complexity_breakdown, ComplexityBreakdown
from .components import (
    has_component,
    find_missing_components,
    detect_conflicts,
    detect_conflict_rules,
    extract_pain_point,
)
from .patterns import (
    KeywordRule,
    ConflictRule,
    INTENT_RULES,
    DOMAIN_RULES,
    CONFLICT_RULES,
    COMPONENT_PATTERNS,
    COMPONENT_LABELS,
)
from .quality_scorer import QualityScorer, QualityBreakdown

__all__ = [
    "PromptAnalyzer",
    "analyze_prompt",
    "KeywordClassifier",
    "DetectionResult",
    "intent_classifier",
    "domain_classifier",
    "assess_complexity",
    "complexity_breakdown",
    "ComplexityBreakdown",
    "has_component",
    "find_missing_components",
    "detect_conflicts",
    "detect_conflict_rules",
    "extract_pain_point",
    "KeywordRule",
    "ConflictRule",
    "INTENT_RULES",
    "DOMAIN_RULES",
    "CONFLICT_RULES",
    "COMPONENT_PATTERNS",
    "COMPONENT_LABELS",
    "QualityScorer",
    "QualityBreakdown",
]
