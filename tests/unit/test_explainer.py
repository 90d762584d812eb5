"""Tests for the improvement explainer."""

import pytest
from promptforge.core.types import EnhanceOptions
from promptforge.core.config import EnhancementSettings
from promptforge.analysis import PromptAnalyzer
from promptforge.platforms import PLATFORMS, get_platform_by_id
from promptforge.enhancement import (
    PromptEnhancer,
    ImprovementExplainer,
    explain_improvements,
    calculate_improvement,
)
from promptforge.enhancement.explainer import FILLED_COMPONENT_STATEMENTS, _trim_statements
from promptforge.enhancement.rendering import find_sections, section_body
from promptforge.enhancement.sections import clarification_for
from promptforge.variations import generate_variations


@pytest.fixture
def analyzer():
    return PromptAnalyzer()


@pytest.fixture
def enhancer(analyzer):
    return PromptEnhancer(settings=EnhancementSettings(), analyzer=analyzer)


@pytest.fixture
def explainer(analyzer):
    return ImprovementExplainer(analyzer=analyzer)


@pytest.fixture
def short_note():
    return "Write a short note to my neighbour"


class TestCalculateImprovement:
    """Tests for calculate_improvement."""

    def test_ints(self):
        assert calculate_improvement(20, 55) == 35

    def test_negative(self):
        assert calculate_improvement(70, 60) == -10

    def test_analyses(self, analyzer, short_prompt, structured_prompt):
        before = analyzer.analyze(short_prompt)
        after = analyzer.analyze(structured_prompt)
        assert calculate_improvement(before, after) == after.quality_score - before.quality_score


class TestImprovementExplainer:
    """Tests for ImprovementExplainer."""

    def test_nothing_changed(self, explainer, short_prompt, code_platform):
        assert explainer.explain(short_prompt, short_prompt, code_platform) == []

    def test_full_enhancement(self, explainer, enhancer, short_prompt, code_platform):
        """Test statements for a resolved enhancement, in order."""
        result = enhancer.enhance(short_prompt, code_platform, EnhanceOptions(resolve_ambiguity=True))
        statements = explainer.explain(short_prompt, result.text, code_platform)
        assert statements[:6] == [
            "Added role directive establishing an expert persona",
            "Added context and background framing",
            "Added explicit output format instruction",
            "Added explicit constraints",
            "Applied professional tone",
            "Applied Code Helper formatting requirements",
        ]
        assert statements[-1].startswith("Quality score increased by")

    def test_resolved_conflict_first(self, explainer, enhancer, conflict_prompt, code_platform):
        result = enhancer.enhance(conflict_prompt, code_platform, EnhanceOptions(resolve_ambiguity=True))
        statements = explainer.explain(conflict_prompt, result.text, code_platform)
        assert statements[0] == "Resolved conflicting tone directive (formal vs casual)"

    def test_examples_json(self, explainer, enhancer, short_prompt):
        chatgpt = get_platform_by_id("chatgpt-4")
        result = enhancer.enhance(short_prompt, chatgpt, EnhanceOptions(few_shot_count=2))
        assert "Added 2 few-shot examples formatted as JSON" in explainer.explain(short_prompt, result.text, chatgpt)

    def test_single_example_xml(self, explainer, enhancer, short_prompt):
        claude = get_platform_by_id("claude-sonnet")
        result = enhancer.enhance(short_prompt, claude, EnhanceOptions(few_shot_count=1))
        assert "Added 1 few-shot example formatted as XML" in explainer.explain(short_prompt, result.text, claude)

    def test_system_and_dataset(self, explainer, enhancer, short_prompt, code_platform):
        options = EnhanceOptions(system_message="Answer in Python 3.", dataset_content="id,name\n1,Ada")
        result = enhancer.enhance(short_prompt, code_platform, options)
        statements = explainer.explain(short_prompt, result.text, code_platform)
        assert "Added system message" in statements
        assert "Included dataset context" in statements
        assert statements.index("Added system message") < statements.index("Included dataset context")

    def test_dataset_truncated(self, explainer, enhancer, short_prompt, code_platform):
        """Test truncation is reported when the dataset outgrew its budget."""
        rows = "\n".join(f"{i},customer-{i}" for i in range(2000))
        result = enhancer.enhance(short_prompt, code_platform, EnhanceOptions(dataset_content=f"id,name\n{rows}"))
        assert result.dataset_truncated
        statements = explainer.explain(
            short_prompt, result.text, code_platform, dataset_truncated=result.dataset_truncated
        )
        assert "Included dataset context, truncated to fit the token budget" in statements

    def test_small_dataset_not_truncated(self, explainer, enhancer, short_prompt, code_platform):
        result = enhancer.enhance(short_prompt, code_platform, EnhanceOptions(dataset_content="id,name\n1,Ada"))
        assert not result.dataset_truncated
        statements = explainer.explain(
            short_prompt, result.text, code_platform, dataset_truncated=result.dataset_truncated
        )
        assert "Included dataset context" in statements
        assert "Included dataset context, truncated to fit the token budget" not in statements

    def test_spartan_tone(self, explainer, enhancer, short_prompt, code_platform):
        result = enhancer.enhance(short_prompt, code_platform, EnhanceOptions(tone="spartan"))
        assert "Applied spartan tone" in explainer.explain(short_prompt, result.text, code_platform)

    def test_trims_reported(self, explainer, enhancer, long_prompt, tiny_platform):
        """Test budget trims appear after the formatting statements."""
        result = enhancer.enhance(long_prompt, tiny_platform, EnhanceOptions(few_shot_count=3))
        statements = explainer.explain(long_prompt, result.text, tiny_platform, trimmed=result.trimmed)
        assert "Removed few-shot examples to fit the 30-token limit" in statements
        assert "Truncated task text to fit the 30-token limit" in statements

    def test_non_string_input(self, explainer, code_platform):
        assert explainer.explain(None, None, code_platform) == []

    def test_convenience_function(self, short_prompt, code_platform):
        enhanced = PromptEnhancer().enhance(short_prompt, code_platform).text
        statements = explain_improvements(short_prompt, enhanced, code_platform)
        assert "Added role directive establishing an expert persona" in statements

    def test_convenience_function_reports_truncation(self, enhancer, short_prompt, code_platform):
        rows = "\n".join(f"{i},customer-{i}" for i in range(2000))
        result = enhancer.enhance(short_prompt, code_platform, EnhanceOptions(dataset_content=rows))
        statements = explain_improvements(
            short_prompt, result.text, code_platform, dataset_truncated=result.dataset_truncated
        )
        assert "Included dataset context, truncated to fit the token budget" in statements


class TestTrimStatements:
    """Tests for trim note summaries."""

    def test_removal_supersedes_shrink(self):
        assert _trim_statements(["examples:shrunk", "examples:removed", "task:truncated"], 30) == [
            "Removed few-shot examples to fit the 30-token limit",
            "Truncated task text to fit the 30-token limit",
        ]

    def test_shrink_only(self):
        assert _trim_statements(["dataset:shrunk"], 500) == ["Reduced dataset context to fit the 500-token limit"]


FILLED_STATEMENTS = {statement: component for component, statement in FILLED_COMPONENT_STATEMENTS}


def _supported(statement, result, before, platform):
    """Whether the enhanced text holds what a statement claims was done."""
    fmt = platform.api_format
    present = set(find_sections(result.text, fmt))
    if statement.startswith("Resolved "):
        return bool(before.conflicts)
    if statement == "Added role directive establishing an expert persona":
        return "role" in present
    if statement in FILLED_STATEMENTS:
        component = FILLED_STATEMENTS[statement]
        line = clarification_for(component, before.intent, platform.is_image_platform)
        clarifications = section_body(result.text, "clarifications", fmt) or ""
        return f"- {line}" in clarifications or (component == "examples" and "examples" in present)
    if statement == "Added system message":
        return "system" in present
    if statement.startswith("Included dataset context"):
        return "dataset" in present and ("truncated" in statement) == result.dataset_truncated
    if "few-shot" in statement and statement.startswith("Added "):
        return "examples" in present
    if statement.startswith("Applied ") and statement.endswith(" tone"):
        return "task" in present
    if statement.endswith("formatting requirements"):
        return "platform" in present
    if statement.endswith("-token limit"):
        return bool(result.trimmed)
    return statement.startswith("Quality score increased by")


class TestStatementsMatchEnhancement:
    """Every statement must be backed by a section the enhancer built."""

    @pytest.mark.parametrize("platform_id", ["claude-sonnet", "cursor-ai"])
    @pytest.mark.parametrize("prompt_fixture", ["short_note", "long_prompt"])
    def test_platform_requirements_do_not_fill_components(
        self, request, platform_id, prompt_fixture, fixed_clock
    ):
        """Test requirement text mentioning context or examples is not a filled component."""
        prompt = request.getfixturevalue(prompt_fixture)
        platform = get_platform_by_id(platform_id)
        variation = generate_variations(prompt, platform, variation_count=1, few_shot_count=0, clock=fixed_clock)[0]
        sections = find_sections(variation.enhanced, platform.api_format)
        assert "clarifications" not in sections
        assert "examples" not in sections
        assert not set(FILLED_STATEMENTS) & set(variation.improvements)

    @pytest.mark.parametrize("platform", PLATFORMS, ids=lambda p: p.id)
    @pytest.mark.parametrize("options", [
        EnhanceOptions(),
        EnhanceOptions(tone="spartan"),
        EnhanceOptions(
            resolve_ambiguity=True,
            few_shot_count=2,
            system_message="Answer in English.",
            dataset_content="id,name\n1,Ada\n2,Grace",
        ),
    ], ids=["plain", "spartan", "everything"])
    def test_every_statement_supported(self, analyzer, enhancer, explainer, platform, options, conflict_prompt):
        before = analyzer.analyze(conflict_prompt)
        result = enhancer.enhance(conflict_prompt, platform, options)
        statements = explainer.explain(
            conflict_prompt,
            result.text,
            platform,
            original_analysis=before,
            trimmed=result.trimmed,
            dataset_truncated=result.dataset_truncated,
        )
        unsupported = [s for s in statements if not _supported(s, result, before, platform)]
        assert unsupported == []

