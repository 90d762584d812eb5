"""
PromptForge - Prompt analysis and enhancement engine

Analyzes prompts heuristically (intent, domain, complexity, missing
components, conflicting directives, quality score) and rewrites them into
platform-formatted, token-budgeted enhanced prompts.

Basic Usage:
    >>> from promptforge import PromptForge
    >>> pf = PromptForge()
    >>>
    >>> # Analyze a prompt
    >>> analysis = pf.analyze("write code")
    >>> print(analysis.intent, analysis.missing_components)
    >>>
    >>> # Enhance a prompt for a platform
    >>> text = pf.enhance("write code", "claude-sonnet", resolve_ambiguity=True)
    >>>
    >>> # Generate scored variations
    >>> variations = pf.variations("write code", "chatgpt-4", variation_count=3)
    >>> print(variations[0].improvements)

For more control, use the individual modules:
    - promptforge.platforms: Platform catalog and templates
    - promptforge.tokenization: Token estimation and cost
    - promptforge.analysis: Prompt analysis
    - promptforge.enhancement: Enhancement and explanations
    - promptforge.variations: Variation orchestration
    - promptforge.api: REST API server
    - promptforge.cli: Command-line interface
"""

from typing import List, Optional, Union

from .core.types import (
    Intent,
    Domain,
    Tone,
    ApiFormat,
    EnhancementType,
    Platform,
    PromptAnalysis,
    EnhanceOptions,
    PatternMetadata,
    EnhancedPrompt,
    VariationReport,
)
from .core.exceptions import (
    PromptForgeError,
    InvalidInputError,
    InvalidPlatformError,
    BudgetExceededError,
    EnhancementError,
    ConfigurationError,
)
from .core.config import Settings, get_settings
from .platforms import (
    PLATFORMS,
    PlatformCatalog,
    catalog as default_catalog,
    get_platform_by_id,
    get_all_categories,
    get_platforms_by_category,
)
from .tokenization import count_tokens, calculate_cost, estimate_cost, compare_costs
from .analysis import PromptAnalyzer, analyze_prompt
from .enhancement import (
    PromptEnhancer,
    EnhancementResult,
    ImprovementExplainer,
    enhance_prompt,
    explain_improvements,
    calculate_improvement,
)
from .variations import VariationOrchestrator, generate_variations


__version__ = "1.0.0"
__all__ = [
    # Main class
    "PromptForge",
    # Core types
    "Intent",
    "Domain",
    "Tone",
    "ApiFormat",
    "EnhancementType",
    "Platform",
    "PromptAnalysis",
    "EnhanceOptions",
    "PatternMetadata",
    "EnhancedPrompt",
    "VariationReport",
    "EnhancementResult",
    # Exceptions
    "PromptForgeError",
    "InvalidInputError",
    "InvalidPlatformError",
    "BudgetExceededError",
    "EnhancementError",
    "ConfigurationError",
    # Catalog
    "PLATFORMS",
    "PlatformCatalog",
    "get_platform_by_id",
    "get_all_categories",
    "get_platforms_by_category",
    # Functions
    "count_tokens",
    "calculate_cost",
    "estimate_cost",
    "compare_costs",
    "analyze_prompt",
    "enhance_prompt",
    "generate_variations",
    "explain_improvements",
    "calculate_improvement",
    # Individual components (for advanced use)
    "PromptAnalyzer",
    "PromptEnhancer",
    "ImprovementExplainer",
    "VariationOrchestrator",
]


class PromptForge:
    """
    Main interface for prompt analysis and enhancement.

    Unlike the module-level convenience functions, the facade validates
    its input: non-string prompts raise InvalidInputError and unknown
    platform ids raise InvalidPlatformError.

    Example:
        >>> pf = PromptForge()
        >>> pf.analyze("Summarize this report in 3 bullet points.")
        >>> pf.enhance("write code", "cursor-ai", tone="spartan")
    """

    def __init__(
        self,
        catalog: Optional[PlatformCatalog] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize PromptForge.

        Args:
            catalog: Platform catalog (the built-in one when None)
            settings: Settings (the cached environment settings when None)
        """
        self.catalog = catalog or default_catalog
        self.settings = settings or get_settings()

        # Initialize components lazily
        self._analyzer: Optional[PromptAnalyzer] = None
        self._enhancer: Optional[PromptEnhancer] = None
        self._orchestrator: Optional[VariationOrchestrator] = None

    @property
    def analyzer(self) -> PromptAnalyzer:
        """Get or create the analyzer instance."""
        if self._analyzer is None:
            self._analyzer = PromptAnalyzer(settings=self.settings.analysis)
        return self._analyzer

    @property
    def enhancer(self) -> PromptEnhancer:
        """Get or create the enhancer instance."""
        if self._enhancer is None:
            self._enhancer = PromptEnhancer(settings=self.settings.enhancement, analyzer=self.analyzer)
        return self._enhancer

    @property
    def orchestrator(self) -> VariationOrchestrator:
        """Get or create the variation orchestrator."""
        if self._orchestrator is None:
            self._orchestrator = VariationOrchestrator(
                analyzer=self.analyzer,
                enhancer=self.enhancer,
                explainer=ImprovementExplainer(analyzer=self.analyzer),
            )
        return self._orchestrator

    @staticmethod
    def _require_text(prompt, field_name: str = "prompt") -> str:
        if not isinstance(prompt, str):
            raise InvalidInputError(
                f"{field_name} must be a string, got {type(prompt).__name__}",
                field_name=field_name,
            )
        return prompt

    def platform(self, platform: Union[str, Platform]) -> Platform:
        """Resolve a platform id (or pass a Platform through)."""
        if isinstance(platform, Platform):
            return platform
        return self.catalog.require(platform)

    def platforms(self, category: Optional[str] = None) -> List[Platform]:
        """All platforms, optionally restricted to one category."""
        if category:
            return self.catalog.by_category(category)
        return list(self.catalog.platforms)

    def analyze(self, prompt: str) -> PromptAnalysis:
        """
        Analyze a prompt without modifying it.

        Raises:
            InvalidInputError: If prompt is not a string
        """
        return self.analyzer.analyze(self._require_text(prompt))

    def enhance(
        self,
        prompt: str,
        platform: Union[str, Platform],
        tone: Union[str, Tone, None] = None,
        few_shot_count: Optional[int] = None,
        resolve_ambiguity: bool = False,
        system_message: Optional[str] = None,
        dataset_content: Optional[str] = None,
        use_platform_system_prompt: bool = False,
    ) -> EnhancementResult:
        """
        Enhance a prompt for a platform.

        Args:
            prompt: The prompt to enhance
            platform: Platform id or Platform
            tone: Tone for the task text (settings default when None)
            few_shot_count: Few-shot examples to add (settings default when None)
            resolve_ambiguity: Fill missing components and settle conflicts
            system_message: Optional system message
            dataset_content: Optional reference data
            use_platform_system_prompt: Use the platform's system template
                when no system message is given

        Returns:
            EnhancementResult within the platform's token budget
        """
        text = self._require_text(prompt)
        target = self.platform(platform)
        defaults = self.settings.enhancement
        options = EnhanceOptions(
            tone=tone if tone is not None else defaults.default_tone,
            few_shot_count=few_shot_count if few_shot_count is not None else defaults.default_few_shot_count,
            resolve_ambiguity=resolve_ambiguity,
            system_message=system_message,
            dataset_content=dataset_content,
            use_platform_system_prompt=use_platform_system_prompt,
        )
        return self.enhancer.enhance(text, target, options)

    def variations(
        self,
        prompt: str,
        platform: Union[str, Platform],
        variation_count: Optional[int] = None,
        tone: Union[str, Tone, None] = None,
        few_shot_count: int = 0,
        system_message: Optional[str] = None,
        dataset_content: Optional[str] = None,
    ) -> List[EnhancedPrompt]:
        """Generate scored variations; see VariationOrchestrator."""
        return self.report(
            prompt, platform, variation_count, tone, few_shot_count, system_message, dataset_content
        ).enhanced_prompts

    def report(
        self,
        prompt: str,
        platform: Union[str, Platform],
        variation_count: Optional[int] = None,
        tone: Union[str, Tone, None] = None,
        few_shot_count: int = 0,
        system_message: Optional[str] = None,
        dataset_content: Optional[str] = None,
    ) -> VariationReport:
        """Baseline analysis plus variations, for callers that need both."""
        text = self._require_text(prompt)
        target = self.platform(platform)
        defaults = self.settings.enhancement
        count = defaults.default_variation_count if variation_count is None else variation_count
        count = min(count, defaults.max_variation_count)
        return self.orchestrator.report(
            text,
            target,
            variation_count=count,
            tone=tone if tone is not None else defaults.default_tone,
            few_shot_count=few_shot_count,
            system_message=system_message,
            dataset_content=dataset_content,
        )

    def explain(self, original: str, enhanced: str, platform: Union[str, Platform]) -> List[str]:
        """Statements describing what changed from original to enhanced."""
        return self.orchestrator.explainer.explain(
            self._require_text(original, "original"),
            self._require_text(enhanced, "enhanced"),
            self.platform(platform),
        )
