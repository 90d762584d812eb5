"""
Section builders for enhanced prompts.

Each builder is a pure function of a SectionContext and returns a Section
or None when the section does not apply. SECTION_BUILDERS lists them in
assembly order.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Tuple

from .examples import format_examples, select_examples
from .rendering import Section
from .tone import ConflictResolution
from ..analysis.components import has_component
from ..core.config import EnhancementSettings
from ..core.types import Domain, EnhanceOptions, Intent, Platform, PromptAnalysis
from ..platforms.templates import PlatformTemplateRenderer
from ..tokenization import TokenCounter


@dataclass
class SectionContext:
    """Everything a section builder may look at."""
    prompt: str
    platform: Platform
    options: EnhanceOptions
    analysis: PromptAnalysis
    task_text: str
    tone_directive: str
    settings: EnhancementSettings
    counter: TokenCounter
    renderer: PlatformTemplateRenderer
    resolution: ConflictResolution = field(default_factory=lambda: ConflictResolution(text=""))

    def template_variables(self):
        return {
            "intent": self.analysis.intent,
            "domain": self.analysis.domain,
            "tone": self.options.tone,
        }


ROLE_BY_INTENT: Mapping[Intent, str] = MappingProxyType({
    Intent.CODE: "You are an expert software engineer who writes clean, maintainable, well-tested code.",
    Intent.CREATIVE: "You are an accomplished writer with a distinctive voice and a strong sense of narrative.",
    Intent.ANALYSIS: "You are a meticulous analyst who weighs evidence and reasons step by step.",
    Intent.CONVERSATION: "You are a knowledgeable assistant who listens carefully and answers warmly.",
    Intent.DATA_PROCESSING: "You are a data engineer who transforms data accurately and documents every assumption.",
    Intent.INSTRUCTION: "You are a patient instructor who gives clear, ordered guidance.",
})

ROLE_BY_DOMAIN: Mapping[Domain, str] = MappingProxyType({
    Domain.TECHNICAL: "You are a senior technical specialist.",
    Domain.BUSINESS: "You are an experienced business strategist.",
    Domain.ACADEMIC: "You are a scholar familiar with current research in the field.",
    Domain.CREATIVE: "You are a creative director with a keen eye for style.",
    Domain.GENERAL: "You are a knowledgeable assistant who answers accurately.",
})

IMAGE_ROLE = "You are a visual artist who writes vivid, precise image descriptions."

_IMAGE = "image"

CLARIFICATIONS: Mapping[str, Mapping[object, str]] = MappingProxyType({
    "context": MappingProxyType({
        Intent.CODE: "Context: state the language, runtime and any framework you assume before writing the code.",
        Intent.CREATIVE: "Context: establish the audience, setting and purpose of the piece before writing.",
        Intent.ANALYSIS: "Context: state the scope, data sources and assumptions behind the analysis.",
        Intent.CONVERSATION: "Context: take the background of the question into account and say what you assume.",
        Intent.DATA_PROCESSING: "Context: describe the shape of the input data and any assumptions about missing values.",
        Intent.INSTRUCTION: "Context: assume the reader is new to the topic and name any prerequisites.",
        Intent.UNKNOWN: "Context: state the background and assumptions that shape the answer.",
        _IMAGE: "Context: describe the subject, setting and mood of the image.",
    }),
    "format": MappingProxyType({
        Intent.CODE: "Format: return the code in a fenced block, followed by a usage note.",
        Intent.CREATIVE: "Format: present the finished piece with a title.",
        Intent.ANALYSIS: "Format: structure the answer as headed sections that end with a summary of findings.",
        Intent.CONVERSATION: "Format: reply in conversational paragraphs.",
        Intent.DATA_PROCESSING: "Format: return the processed data as a table or JSON with consistent field names.",
        Intent.INSTRUCTION: "Format: present the answer as a numbered list of steps.",
        Intent.UNKNOWN: "Format: organise the answer under clear headings.",
        _IMAGE: "Format: describe the image as comma-separated keywords followed by style parameters.",
    }),
    "constraints": MappingProxyType({
        Intent.CODE: (
            "Constraints: the code must handle invalid input and edge cases, avoid unnecessary "
            "dependencies and include comments for non-obvious logic."
        ),
        Intent.CREATIVE: "Constraints: keep a consistent voice and point of view, and avoid clichés.",
        Intent.ANALYSIS: "Constraints: support each claim with evidence, state assumptions explicitly and avoid speculation.",
        Intent.CONVERSATION: "Constraints: stay on topic and ask a follow-up question when the request is ambiguous.",
        Intent.DATA_PROCESSING: "Constraints: do not drop or invent records, and report any rows that cannot be processed.",
        Intent.INSTRUCTION: "Constraints: each step must be actionable and appear in the order it should be done.",
        Intent.UNKNOWN: "Constraints: stay within the scope of the request and state any limits of the answer.",
        _IMAGE: "Constraints: avoid text in the image and keep one clear focal subject.",
    }),
    "examples": MappingProxyType({
        Intent.UNKNOWN: "Examples: include at least one worked example that shows the expected result.",
    }),
})


def clarification_for(component: str, intent: Intent, image_platform: bool = False) -> Optional[str]:
    """Constraint line that supplies one missing component."""
    table = CLARIFICATIONS.get(component)
    if not table:
        return None
    if image_platform and _IMAGE in table:
        return table[_IMAGE]
    return table.get(intent) or table.get(Intent.UNKNOWN)


def build_system(ctx: SectionContext) -> Optional[Section]:
    """Caller's system message verbatim, or the platform's template when asked for."""
    message = (ctx.options.system_message or "").strip()
    if message:
        return Section("system", message, meta={"source": "custom"})
    if ctx.options.use_platform_system_prompt:
        rendered = ctx.renderer.render_system(ctx.platform, **ctx.template_variables())
        if rendered:
            return Section("system", rendered, meta={"source": "platform"})
    return None


def _dataset_section(content: str, budget: int, counter: TokenCounter, halved: bool = False) -> Section:
    lines = content.count("\n") + 1
    tokens = counter.count(content)
    header = f"Reference data ({lines} lines, about {tokens} tokens):"
    note = "[Dataset truncated to fit the token budget]"

    if counter.count(header) + tokens + 1 <= budget:
        body, truncated = f"{header}\n{content}", False
    else:
        available = max(1, budget - counter.count(header) - counter.count(note) - 2)
        body, truncated = f"{header}\n{counter.truncate_to_fit(content, available)}\n{note}", True

    def shrink() -> Optional[Section]:
        if halved or budget < 2:
            return None
        return _dataset_section(content, budget // 2, counter, halved=True)

    return Section(
        "dataset",
        body,
        meta={"truncated": truncated, "budget": budget, "lines": lines, "tokens": tokens},
        shrink=shrink,
    )


def build_dataset(ctx: SectionContext) -> Optional[Section]:
    """Dataset content under a labelled header, capped at a share of the platform budget."""
    content = (ctx.options.dataset_content or "").strip()
    if not content:
        return None
    budget = max(1, int(ctx.platform.max_tokens * ctx.settings.dataset_budget_fraction))
    return _dataset_section(content, budget, ctx.counter)


def build_role(ctx: SectionContext) -> Optional[Section]:
    """Persona matching the intent (or domain); skipped when the prompt already sets one."""
    if has_component(ctx.prompt, "role"):
        return None
    if ctx.platform.is_image_platform:
        return Section("role", IMAGE_ROLE, meta={"source": "image"})
    directive = ROLE_BY_INTENT.get(ctx.analysis.intent)
    if directive:
        return Section("role", directive, meta={"source": "intent"})
    return Section("role", ROLE_BY_DOMAIN[ctx.analysis.domain], meta={"source": "domain"})


def build_task(ctx: SectionContext) -> Optional[Section]:
    body = f"{ctx.task_text}\n\n{ctx.tone_directive}" if ctx.task_text.strip() else ctx.tone_directive
    return Section("task", body, meta={"tone": ctx.options.tone.value})


def build_clarifications(ctx: SectionContext) -> Optional[Section]:
    """
    Constraints filling the original prompt's gaps, plus a note for each
    conflict that was settled. Only built when ambiguity resolution is on.
    """
    if not ctx.options.resolve_ambiguity:
        return None

    lines = []
    filled = []
    for component in ctx.analysis.missing_components:
        if component == "role":
            continue
        if component == "examples" and ctx.options.few_shot_count > 0:
            continue
        line = clarification_for(component, ctx.analysis.intent, ctx.platform.is_image_platform)
        if line:
            lines.append(f"- {line}")
            filled.append(component)

    for rule in ctx.resolution.resolved:
        lines.append(f"- Resolved {rule.kind} conflict: {rule.resolution}")
    for rule in ctx.resolution.remaining:
        lines.append(f"- Note on {rule.kind}: {rule.resolution}")

    if not lines:
        return None
    return Section("clarifications", "\n".join(lines), meta={"filled": tuple(filled)})


def _examples_section(examples, ctx_format) -> Section:
    def shrink() -> Optional[Section]:
        if len(examples) <= 1:
            return None
        return _examples_section(examples[:-1], ctx_format)

    return Section(
        "examples",
        format_examples(examples, ctx_format),
        meta={"count": len(examples), "format": ctx_format.value},
        shrink=shrink,
    )


def build_examples(ctx: SectionContext) -> Optional[Section]:
    """``few_shot_count`` demonstrations in the platform's format."""
    count = min(ctx.options.few_shot_count, ctx.settings.max_few_shot_count)
    if count <= 0:
        return None
    examples = select_examples(
        count,
        ctx.analysis.intent,
        ctx.analysis.domain,
        task=ctx.prompt,
        image_platform=ctx.platform.is_image_platform,
    )
    return _examples_section(tuple(examples), ctx.platform.api_format)


def build_platform(ctx: SectionContext) -> Optional[Section]:
    """Special requirements, rendered user template and the output format line."""
    parts = []
    if ctx.platform.special_requirements:
        parts.append("\n".join(f"- {req}" for req in ctx.platform.special_requirements))
    user = ctx.renderer.render_user(ctx.platform, **ctx.template_variables())
    if user:
        parts.append(user)
    parts.append(f"Output format: {ctx.platform.api_format.value.upper()}.")
    return Section("platform", "\n\n".join(parts), meta={"platform": ctx.platform.id})


SECTION_BUILDERS: Tuple[Tuple[str, Callable[[SectionContext], Optional[Section]]], ...] = (
    ("system", build_system),
    ("dataset", build_dataset),
    ("role", build_role),
    ("task", build_task),
    ("clarifications", build_clarifications),
    ("examples", build_examples),
    ("platform", build_platform),
)
