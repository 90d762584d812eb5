"""Orchestration of enhanced prompt variations."""

import logging
import time
from typing import Callable, List, Optional, Union

from .schedule import VARIATION_SCHEDULE, VariationStrategy, strategy_for
from ..analysis.analyzer import PromptAnalyzer
from ..core.types import (
    EnhancedPrompt,
    EnhanceOptions,
    PatternMetadata,
    Platform,
    PromptAnalysis,
    Tone,
    VariationReport,
    coerce_tone,
)
from ..enhancement.enhancer import PromptEnhancer
from ..enhancement.explainer import ImprovementExplainer, calculate_improvement

logger = logging.getLogger(__name__)


class VariationOrchestrator:
    """
    Produces N enhanced variations of a prompt.

    The prompt is analyzed once as the baseline. Variation ``i`` takes
    its parameters from the schedule, is enhanced, re-analyzed and
    explained against the baseline. Variations are generated
    sequentially and returned in index order.
    """

    def __init__(
        self,
        analyzer: Optional[PromptAnalyzer] = None,
        enhancer: Optional[PromptEnhancer] = None,
        explainer: Optional[ImprovementExplainer] = None,
        clock: Callable[[], float] = time.time,
        schedule=VARIATION_SCHEDULE
    ):
        self.analyzer = analyzer or PromptAnalyzer()
        self.enhancer = enhancer or PromptEnhancer(analyzer=self.analyzer)
        self.explainer = explainer or ImprovementExplainer(analyzer=self.analyzer)
        self.clock = clock
        self.schedule = tuple(schedule)

    def generate(
        self,
        prompt: str,
        platform: Platform,
        variation_count: int = 2,
        tone: Union[Tone, str, None] = Tone.PROFESSIONAL,
        few_shot_count: int = 0,
        system_message: Optional[str] = None,
        dataset_content: Optional[str] = None
    ) -> List[EnhancedPrompt]:
        """Generate ``variation_count`` variations; fewer than one yields []."""
        return self.report(
            prompt, platform, variation_count, tone, few_shot_count, system_message, dataset_content
        ).enhanced_prompts

    def report(
        self,
        prompt: str,
        platform: Platform,
        variation_count: int = 2,
        tone: Union[Tone, str, None] = Tone.PROFESSIONAL,
        few_shot_count: int = 0,
        system_message: Optional[str] = None,
        dataset_content: Optional[str] = None
    ) -> VariationReport:
        """Like ``generate`` but also returns the baseline analysis."""
        text = prompt if isinstance(prompt, str) else ""
        requested_tone = coerce_tone(tone)
        requested_shots = max(0, int(few_shot_count or 0))
        baseline = self.analyzer.analyze(text)
        result = VariationReport(original_analysis=baseline)

        for index in range(max(0, int(variation_count or 0))):
            strategy = strategy_for(index, self.schedule)
            options = EnhanceOptions(
                tone=strategy.resolve_tone(requested_tone),
                few_shot_count=strategy.few_shot_count(baseline.complexity, requested_shots),
                resolve_ambiguity=strategy.resolve_ambiguity,
                system_message=system_message,
                dataset_content=dataset_content,
            )
            result.enhanced_prompts.append(
                self._variation(index, text, platform, baseline, strategy, options)
            )

        logger.info(
            "Generated %d variation(s) for platform %s",
            len(result.enhanced_prompts), platform.id,
        )
        return result

    def _variation(
        self,
        index: int,
        text: str,
        platform: Platform,
        baseline: PromptAnalysis,
        strategy: VariationStrategy,
        options: EnhanceOptions
    ) -> EnhancedPrompt:
        enhancement = self.enhancer.enhance(text, platform, options, analysis=baseline)
        analysis = self.analyzer.analyze(enhancement.text)
        improvements = self.explainer.explain(
            text,
            enhancement.text,
            platform,
            original_analysis=baseline,
            enhanced_analysis=analysis,
            trimmed=enhancement.trimmed,
            dataset_truncated=enhancement.dataset_truncated,
        )
        variation_id = f"variation-{index + 1}-{int(self.clock() * 1000)}"
        logger.debug(
            "Variation %s (%s): score %d -> %d",
            variation_id, strategy.enhancement_type.value, baseline.quality_score, analysis.quality_score,
        )
        return EnhancedPrompt(
            id=variation_id,
            original=text,
            enhanced=enhancement.text,
            platform=platform,
            quality_score=analysis.quality_score,
            improvements=tuple(improvements),
            token_count=enhancement.token_count,
            improvement=calculate_improvement(baseline, analysis),
            analysis=analysis,
            pattern_metadata=PatternMetadata(
                enhancement_type=strategy.enhancement_type,
                tone=options.tone,
                few_shot_count=options.few_shot_count,
            ),
        )


def generate_variations(
    prompt: str,
    platform: Platform,
    variation_count: int = 2,
    tone: Union[Tone, str, None] = Tone.PROFESSIONAL,
    few_shot_count: int = 0,
    system_message: Optional[str] = None,
    dataset_content: Optional[str] = None,
    clock: Callable[[], float] = time.time
) -> List[EnhancedPrompt]:
    """
    Generate enhanced variations of a prompt.

    Convenience function that creates a VariationOrchestrator per call.

    Args:
        prompt: Original prompt
        platform: Target platform
        variation_count: Number of variations (default 2)
        tone: Tone for the conservative and balanced variations
        few_shot_count: Requested few-shot examples
        system_message: Optional system message
        dataset_content: Optional reference data
        clock: Time source for variation ids (seconds)

    Returns:
        Variations in index order
    """
    return VariationOrchestrator(clock=clock).generate(
        prompt, platform, variation_count, tone, few_shot_count, system_message, dataset_content
    )
