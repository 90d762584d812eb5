"""
Prompt enhancer.

Builds a platform-formatted enhanced prompt from sections, then fits it
to the platform's token budget by trimming sections in a fixed order.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from .rendering import Section, render_document
from .sections import SECTION_BUILDERS, SectionContext
from .tone import ToneEngine, resolve_conflicts
from ..analysis.analyzer import PromptAnalyzer
from ..analysis.components import detect_conflict_rules
from ..core.config import EnhancementSettings
from ..core.exceptions import BudgetExceededError, EnhancementError, PromptForgeError
from ..core.types import EnhanceOptions, Platform, PromptAnalysis
from ..platforms.templates import PlatformTemplateRenderer, get_renderer
from ..tokenization import TokenCounter, get_tokenizer

logger = logging.getLogger(__name__)


@dataclass
class EnhancementResult:
    """Enhanced text plus a record of how it was assembled."""
    text: str
    sections: List[str] = field(default_factory=list)
    trimmed: List[str] = field(default_factory=list)
    tone_rules: List[str] = field(default_factory=list)
    few_shot_count: int = 0
    dataset_truncated: bool = False
    token_count: int = 0
    resolved_conflicts: List[str] = field(default_factory=list)
    system_source: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "text": self.text,
            "sections": list(self.sections),
            "trimmed": list(self.trimmed),
            "tone_rules": list(self.tone_rules),
            "few_shot_count": self.few_shot_count,
            "dataset_truncated": self.dataset_truncated,
            "token_count": self.token_count,
            "resolved_conflicts": list(self.resolved_conflicts),
            "system_source": self.system_source,
        }


class PromptEnhancer:
    """
    Assembles enhanced prompts.

    Sections are built in a fixed order (system, dataset, role, task,
    clarifications, examples, platform) and rendered in the platform's
    API format. When the result is over ``platform.max_tokens`` sections
    are shrunk or removed in TRIM_ORDER; as a last resort the task text
    itself is truncated.

    Example:
        >>> enhancer = PromptEnhancer()
        >>> result = enhancer.enhance("write code", platform)
        >>> print(result.text)
    """

    TRIM_ORDER = ("examples", "dataset", "platform", "clarifications", "role", "system")

    def __init__(
        self,
        settings: Optional[EnhancementSettings] = None,
        token_counter: Optional[TokenCounter] = None,
        renderer: Optional[PlatformTemplateRenderer] = None,
        tone_engine: Optional[ToneEngine] = None,
        analyzer: Optional[PromptAnalyzer] = None
    ):
        if settings is None:
            from ..core.config import get_settings
            settings = get_settings().enhancement
        self.settings = settings
        self.counter = token_counter or get_tokenizer()
        self.renderer = renderer or get_renderer()
        self.tone_engine = tone_engine or ToneEngine()
        self.analyzer = analyzer or PromptAnalyzer(token_counter=self.counter)

    def enhance(
        self,
        prompt: str,
        platform: Platform,
        options: Optional[EnhanceOptions] = None,
        analysis: Optional[PromptAnalysis] = None
    ) -> EnhancementResult:
        """
        Enhance a prompt for a platform.

        Args:
            prompt: Original prompt text
            platform: Target platform
            options: Enhancement options (defaults apply when None)
            analysis: Pre-computed analysis of ``prompt``

        Returns:
            EnhancementResult whose text fits within ``platform.max_tokens``
        """
        text = prompt if isinstance(prompt, str) else ""
        options = options or EnhanceOptions(
            tone=self.settings.default_tone,
            few_shot_count=self.settings.default_few_shot_count,
        )
        analysis = analysis or self.analyzer.analyze(text)

        resolution = resolve_conflicts(
            text, options.tone, options.resolve_ambiguity, rules=detect_conflict_rules(text)
        )
        task_text, tone_rules = self.tone_engine.apply(resolution.text, options.tone)
        if not task_text.strip():
            task_text = text.strip()

        ctx = SectionContext(
            prompt=text,
            platform=platform,
            options=options,
            analysis=analysis,
            task_text=task_text,
            tone_directive=self.tone_engine.directive(options.tone),
            settings=self.settings,
            counter=self.counter,
            renderer=self.renderer,
            resolution=resolution,
        )
        sections = self._build_sections(ctx)
        rendered, sections, trimmed = self._fit(sections, ctx)

        by_name = {s.name: s for s in sections}
        examples = by_name.get("examples")
        dataset = by_name.get("dataset")
        system = by_name.get("system")
        result = EnhancementResult(
            text=rendered,
            sections=[s.name for s in sections],
            trimmed=trimmed,
            tone_rules=tone_rules,
            few_shot_count=examples.meta.get("count", 0) if examples else 0,
            dataset_truncated=bool(dataset and dataset.meta.get("truncated")),
            token_count=self.counter.count(rendered),
            resolved_conflicts=[rule.description for rule in resolution.resolved],
            system_source=system.meta.get("source") if system else None,
        )
        logger.debug(
            "Enhanced prompt for %s: %d tokens, sections=%s, trimmed=%s",
            platform.id, result.token_count, result.sections, result.trimmed,
        )
        return result

    def _build_sections(self, ctx: SectionContext) -> List[Section]:
        sections = []
        for name, builder in SECTION_BUILDERS:
            try:
                section = builder(ctx)
            except PromptForgeError:
                raise
            except Exception as e:
                raise EnhancementError(
                    f"Failed to build the {name} section: {e}",
                    stage=name,
                    cause=e,
                ) from e
            if section is not None and section.body.strip():
                sections.append(section)
        return sections

    def _check_budget(self, text: str, limit: int) -> int:
        count = self.counter.count(text)
        if count > limit:
            raise BudgetExceededError(
                f"Enhanced prompt uses {count} tokens, platform limit is {limit}",
                token_count=count,
                token_limit=limit,
            )
        return count

    def _trim_step(self, sections: List[Section]) -> Optional[Tuple[List[Section], str]]:
        """Shrink or remove the first trimmable section present."""
        for name in self.TRIM_ORDER:
            for i, section in enumerate(sections):
                if section.name != name:
                    continue
                smaller = section.shrink() if section.shrink else None
                if smaller is not None:
                    return sections[:i] + [smaller] + sections[i + 1:], f"{name}:shrunk"
                return sections[:i] + sections[i + 1:], f"{name}:removed"
        return None

    def _fit(
        self,
        sections: List[Section],
        ctx: SectionContext
    ) -> Tuple[str, List[Section], List[str]]:
        fmt = ctx.platform.api_format
        limit = ctx.platform.max_tokens
        trimmed: List[str] = []

        while True:
            rendered = render_document(sections, fmt)
            try:
                self._check_budget(rendered, limit)
                return rendered, sections, trimmed
            except BudgetExceededError as e:
                step = self._trim_step(sections)
                if step is None:
                    logger.debug("Truncating task text: %s", e.message)
                    break
                sections, note = step
                trimmed.append(note)
                logger.debug("Trimmed %s: %s", note, e.message)

        rendered, sections = self._truncate_task(sections, ctx)
        trimmed.append("task:truncated")
        return rendered, sections, trimmed

    def _truncate_task(self, sections: List[Section], ctx: SectionContext) -> Tuple[str, List[Section]]:
        """Shorten the task text until the rendered task section fits."""
        fmt = ctx.platform.api_format
        limit = ctx.platform.max_tokens
        task = next((s for s in sections if s.name == "task"), None) or Section("task", ctx.tone_directive)
        body_text = ctx.task_text or ctx.prompt.strip()

        overhead = self.counter.count(render_document([task.with_body(ctx.tone_directive)], fmt))
        target = limit - overhead
        while target > 0:
            cut = self.counter.truncate(body_text, target)
            candidate = task.with_body(f"{cut}\n\n{ctx.tone_directive}")
            rendered = render_document([candidate], fmt)
            used = self.counter.count(rendered)
            if cut.strip() and used <= limit:
                return rendered, [candidate]
            target -= max(1, used - limit)

        bare = self.counter.truncate(body_text or ctx.prompt, limit)
        return bare, [task.with_body(bare)]


def enhance_prompt(
    prompt: str,
    platform: Platform,
    options: Optional[EnhanceOptions] = None,
    tone: Union[str, None] = None,
    few_shot_count: int = 0,
    resolve_ambiguity: bool = False,
    system_message: Optional[str] = None,
    dataset_content: Optional[str] = None
) -> str:
    """
    Convenience function to enhance a prompt.

    Creates a new PromptEnhancer per call. Options may be passed as an
    EnhanceOptions or as keyword arguments.

    Returns:
        Enhanced prompt text
    """
    if options is None:
        options = EnhanceOptions(
            tone=tone,
            few_shot_count=few_shot_count,
            resolve_ambiguity=resolve_ambiguity,
            system_message=system_message,
            dataset_content=dataset_content,
        )
    return PromptEnhancer().enhance(prompt, platform, options).text
