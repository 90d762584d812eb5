"""Prompt analyzer: intent, domain, complexity, gaps, conflicts and score."""

import logging
from typing import Optional

from .classifier import KeywordClassifier, intent_classifier, domain_classifier
from .complexity import assess_complexity
from .components import find_missing_components, detect_conflicts, extract_pain_point
from .quality_scorer import QualityScorer
from ..core.config import AnalysisSettings
from ..core.types import PromptAnalysis
from ..tokenization import TokenCounter, get_tokenizer

logger = logging.getLogger(__name__)


class PromptAnalyzer:
    """
    Heuristic prompt analyzer.

    Holds only compiled rule tables and settings, so one instance can be
    shared freely; ``analyze`` is a pure function of its input.
    """

    def __init__(
        self,
        settings: Optional[AnalysisSettings] = None,
        token_counter: Optional[TokenCounter] = None,
        intents: Optional[KeywordClassifier] = None,
        domains: Optional[KeywordClassifier] = None,
    ):
        if settings is None:
            from ..core.config import get_settings
            settings = get_settings().analysis
        self.settings = settings
        self.token_counter = token_counter or get_tokenizer()
        self.intents = intents or intent_classifier()
        self.domains = domains or domain_classifier()
        self.scorer = QualityScorer(settings)

    def analyze(self, prompt: str) -> PromptAnalysis:
        """
        Analyze a prompt.

        Empty or whitespace-only prompts degrade to unknown / general /
        complexity 1 with a low score. Non-string input is treated as
        empty; callers that must reject it validate upstream.

        Args:
            prompt: The prompt to analyze

        Returns:
            PromptAnalysis
        """
        text = prompt if isinstance(prompt, str) else ""

        intent = self.intents.classify(text)
        domain = self.domains.classify(text)
        complexity = assess_complexity(text)
        missing = find_missing_components(
            text, complexity, self.settings.examples_complexity_threshold
        )
        conflicts = detect_conflicts(text)
        score = self.scorer.score(text, intent.label, complexity, missing, conflicts)

        logger.debug(
            "Analyzed prompt: intent=%s domain=%s complexity=%d missing=%s conflicts=%d score=%d",
            intent.label.value, domain.label.value, complexity, missing, len(conflicts), score,
        )

        return PromptAnalysis(
            intent=intent.label,
            domain=domain.label,
            complexity=complexity,
            missing_components=tuple(missing),
            conflicts=tuple(conflicts),
            pain_point=extract_pain_point(text, missing, conflicts),
            token_count=self.token_counter.count(text),
            quality_score=score,
            intent_confidence=round(intent.confidence, 3),
            signals=intent.signals,
        )


def analyze_prompt(prompt: str, settings: Optional[AnalysisSettings] = None) -> PromptAnalysis:
    """
    Analyze a prompt.

    Convenience function that creates an analyzer and runs it.

    Args:
        prompt: The prompt to analyze
        settings: Optional analysis settings

    Returns:
        PromptAnalysis
    """
    return PromptAnalyzer(settings=settings).analyze(prompt)
