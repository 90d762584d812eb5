"""Tests for variation scheduling and orchestration."""

import logging

import pytest
from promptforge.core.types import EnhancementType, Tone
from promptforge.core.config import EnhancementSettings
from promptforge.analysis import PromptAnalyzer
from promptforge.enhancement import PromptEnhancer
from promptforge.platforms import get_platform_by_id
from promptforge.variations import (
    VariationOrchestrator,
    VariationStrategy,
    VARIATION_SCHEDULE,
    FALLBACK_STRATEGY,
    strategy_for,
    generate_variations,
)


@pytest.fixture
def chatgpt():
    return get_platform_by_id("chatgpt-4")


@pytest.fixture
def orchestrator(fixed_clock):
    analyzer = PromptAnalyzer()
    return VariationOrchestrator(
        analyzer=analyzer,
        enhancer=PromptEnhancer(settings=EnhancementSettings(), analyzer=analyzer),
        clock=fixed_clock,
    )


class TestSchedule:
    """Tests for the variation schedule."""

    def test_table(self):
        assert [s.enhancement_type for s in VARIATION_SCHEDULE] == [
            EnhancementType.CONSERVATIVE,
            EnhancementType.BALANCED,
            EnhancementType.AGGRESSIVE,
        ]
        assert VARIATION_SCHEDULE[0].resolve_ambiguity is False
        assert VARIATION_SCHEDULE[2].tone is Tone.SPARTAN

    def test_fallback_past_table(self):
        assert strategy_for(3) is FALLBACK_STRATEGY
        assert strategy_for(10) is FALLBACK_STRATEGY
        assert FALLBACK_STRATEGY.resolve_ambiguity is True

    @pytest.mark.parametrize("complexity,expected", [(7, 1), (8, 3), (10, 3)])
    def test_balanced_few_shot(self, complexity, expected):
        """Test the balanced slot adds examples only above complexity 7."""
        assert strategy_for(1).few_shot_count(complexity, requested=1) == expected

    @pytest.mark.parametrize("complexity,expected", [(5, 0), (6, 2)])
    def test_aggressive_few_shot(self, complexity, expected):
        assert strategy_for(2).few_shot_count(complexity, requested=0) == expected

    def test_tone(self):
        assert strategy_for(0).resolve_tone(Tone.CASUAL) is Tone.CASUAL
        assert strategy_for(2).resolve_tone(Tone.CASUAL) is Tone.SPARTAN
        assert strategy_for(5).resolve_tone(Tone.ACADEMIC) is Tone.ACADEMIC

    def test_custom_strategy(self):
        strategy = VariationStrategy(EnhancementType.BALANCED, resolve_ambiguity=False, few_shot_override=(0, 4))
        assert strategy.few_shot_count(1, requested=0) == 4


class TestVariationOrchestrator:
    """Tests for VariationOrchestrator."""

    def test_ids_and_order(self, orchestrator, short_prompt, chatgpt):
        """Test ids carry the one-based index and the clock in milliseconds."""
        variations = orchestrator.generate(short_prompt, chatgpt, variation_count=4)
        assert [v.id for v in variations] == [f"variation-{i}-1700000000000" for i in range(1, 5)]

    def test_metadata_follows_schedule(self, orchestrator, short_prompt, chatgpt):
        variations = orchestrator.generate(short_prompt, chatgpt, variation_count=4, tone="casual")
        meta = [v.pattern_metadata for v in variations]
        assert [m.enhancement_type for m in meta] == [
            EnhancementType.CONSERVATIVE,
            EnhancementType.BALANCED,
            EnhancementType.AGGRESSIVE,
            EnhancementType.AGGRESSIVE,
        ]
        assert [m.tone for m in meta] == [Tone.CASUAL, Tone.CASUAL, Tone.SPARTAN, Tone.CASUAL]
        assert all(m.few_shot_count == 0 for m in meta)

    def test_conservative_skips_clarifications(self, orchestrator, short_prompt, chatgpt):
        first, second = orchestrator.generate(short_prompt, chatgpt, variation_count=2)
        assert "### Clarifications" not in first.enhanced
        assert "### Clarifications" in second.enhanced

    def test_few_shot_override_uses_baseline(self, orchestrator, long_prompt, chatgpt):
        report = orchestrator.report(long_prompt, chatgpt, variation_count=3)
        complexity = report.original_analysis.complexity
        counts = [v.pattern_metadata.few_shot_count for v in report.enhanced_prompts]
        assert counts[0] == 0
        assert counts[1] == (3 if complexity > 7 else 0)
        assert counts[2] == (2 if complexity > 5 else 0)

    def test_scores_come_from_reanalysis(self, orchestrator, short_prompt, chatgpt):
        """Test each variation is scored by analyzing its own text."""
        report = orchestrator.report(short_prompt, chatgpt, variation_count=2)
        baseline = report.original_analysis
        for variation in report.enhanced_prompts:
            reanalyzed = orchestrator.analyzer.analyze(variation.enhanced)
            assert variation.quality_score == reanalyzed.quality_score
            assert variation.analysis == reanalyzed
            assert variation.improvement == variation.quality_score - baseline.quality_score
            assert variation.improvement > 0
            assert variation.token_count <= chatgpt.max_tokens
            assert variation.original == short_prompt
            assert variation.improvements

    def test_resolved_conflict_reported(self, orchestrator, conflict_prompt, chatgpt):
        variations = orchestrator.generate(conflict_prompt, chatgpt, variation_count=2)
        assert "Resolved conflicting tone directive (formal vs casual)" in variations[1].improvements

    @pytest.mark.parametrize("count", [0, -1, None])
    def test_no_variations(self, orchestrator, short_prompt, chatgpt, count):
        assert orchestrator.generate(short_prompt, chatgpt, variation_count=count) == []

    def test_report_best(self, orchestrator, short_prompt, chatgpt):
        report = orchestrator.report(short_prompt, chatgpt, variation_count=3)
        assert report.best.quality_score == max(v.quality_score for v in report.enhanced_prompts)

    def test_logs_summary(self, orchestrator, short_prompt, chatgpt, caplog):
        with caplog.at_level(logging.INFO, logger="promptforge.variations.orchestrator"):
            orchestrator.generate(short_prompt, chatgpt, variation_count=2)
        assert "Generated 2 variation(s) for platform chatgpt-4" in caplog.text


class TestGenerateVariations:
    """Tests for the convenience function."""

    def test_generate(self, short_prompt, chatgpt, fixed_clock):
        variations = generate_variations(short_prompt, chatgpt, variation_count=1, clock=fixed_clock)
        assert len(variations) == 1
        assert variations[0].id == "variation-1-1700000000000"
        assert variations[0].platform is chatgpt
