"""Core type definitions for prompt analysis and enhancement."""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, Tuple, Union
from enum import Enum
from datetime import datetime, timezone

from .exceptions import ConfigurationError


class Intent(Enum):
    """Task category a prompt appears to request."""
    CREATIVE = "creative"
    CODE = "code"
    ANALYSIS = "analysis"
    CONVERSATION = "conversation"
    DATA_PROCESSING = "data_processing"
    INSTRUCTION = "instruction"
    UNKNOWN = "unknown"


class Domain(Enum):
    """Subject-matter register of a prompt."""
    TECHNICAL = "technical"
    BUSINESS = "business"
    ACADEMIC = "academic"
    CREATIVE = "creative"
    GENERAL = "general"


class Tone(Enum):
    """Writing tone applied to the task section."""
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    ACADEMIC = "academic"
    SPARTAN = "spartan"
    LACONIC = "laconic"
    SARCASTIC = "sarcastic"


class ApiFormat(Enum):
    """Structure a platform expects its prompts in."""
    JSON = "json"
    XML = "xml"
    TEXT = "text"


class EnhancementType(Enum):
    """Variation label describing how far a rewrite goes."""
    CONSERVATIVE = "conservative"
    BALANCED = "balanced"
    AGGRESSIVE = "aggressive"


# Structural prompt elements, in reporting order
COMPONENTS: Tuple[str, ...] = ("role", "context", "format", "constraints", "examples")
CRITICAL_COMPONENTS: Tuple[str, ...] = ("context", "format", "constraints")
OPTIONAL_COMPONENTS: Tuple[str, ...] = ("role", "examples")


def coerce_tone(tone: Union[Tone, str, None], default: Tone = Tone.PROFESSIONAL) -> Tone:
    """Accept a Tone or its string value."""
    if tone is None:
        return default
    if isinstance(tone, Tone):
        return tone
    try:
        return Tone(str(tone).strip().lower())
    except ValueError as e:
        raise ConfigurationError(
            f"Unknown tone: {tone}. Valid options: {', '.join(t.value for t in Tone)}",
            config_key="tone",
            cause=e
        )


@dataclass(frozen=True)
class Platform:
    """
    Descriptor of a target AI platform.

    Instances live in the static catalog and are shared by reference;
    they are never mutated after load.
    """
    id: str
    name: str
    icon: str
    category: str
    api_format: ApiFormat
    max_tokens: int
    description: str = ""
    special_requirements: Tuple[str, ...] = ()
    system_prompt_template: Optional[str] = None
    user_prompt_template: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.max_tokens, int) or self.max_tokens <= 0:
            raise ConfigurationError(
                f"Platform '{self.id}' must have a positive max_tokens",
                config_key=f"platforms.{self.id}.max_tokens",
                details={"max_tokens": self.max_tokens}
            )
        if isinstance(self.api_format, str):
            object.__setattr__(self, "api_format", ApiFormat(self.api_format))
        if isinstance(self.special_requirements, list):
            object.__setattr__(self, "special_requirements", tuple(self.special_requirements))

    @property
    def is_image_platform(self) -> bool:
        """Whether the platform produces images rather than text."""
        return self.category == "Image Generation"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "category": self.category,
            "api_format": self.api_format.value,
            "max_tokens": self.max_tokens,
            "description": self.description,
            "special_requirements": list(self.special_requirements),
            "system_prompt_template": self.system_prompt_template,
            "user_prompt_template": self.user_prompt_template,
        }


@dataclass(frozen=True)
class PromptAnalysis:
    """Heuristic analysis of a single prompt. Pure function of the text."""
    intent: Intent
    domain: Domain
    complexity: int
    missing_components: Tuple[str, ...]
    conflicts: Tuple[str, ...]
    pain_point: str
    token_count: int
    quality_score: int
    intent_confidence: float = 0.0
    signals: Dict[str, List[str]] = field(default_factory=dict, compare=False)

    def is_missing(self, component: str) -> bool:
        return component in self.missing_components

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "intent": self.intent.value,
            "domain": self.domain.value,
            "complexity": self.complexity,
            "missing_components": list(self.missing_components),
            "conflicts": list(self.conflicts),
            "pain_point": self.pain_point,
            "token_count": self.token_count,
            "quality_score": self.quality_score,
            "intent_confidence": round(self.intent_confidence, 3),
            "signals": {k: list(v) for k, v in self.signals.items()},
        }


@dataclass(frozen=True)
class EnhanceOptions:
    """Options controlling a single enhancement."""
    tone: Tone = Tone.PROFESSIONAL
    few_shot_count: int = 0
    resolve_ambiguity: bool = False
    system_message: Optional[str] = None
    dataset_content: Optional[str] = None
    use_platform_system_prompt: bool = False

    def __post_init__(self):
        object.__setattr__(self, "tone", coerce_tone(self.tone))
        try:
            count = int(self.few_shot_count or 0)
        except (TypeError, ValueError):
            count = 0
        object.__setattr__(self, "few_shot_count", max(0, count))


@dataclass(frozen=True)
class PatternMetadata:
    """Parameters a variation was produced with."""
    enhancement_type: EnhancementType
    tone: Tone
    few_shot_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enhancement_type": self.enhancement_type.value,
            "tone": self.tone.value,
            "few_shot_count": self.few_shot_count,
        }


@dataclass(frozen=True)
class EnhancedPrompt:
    """One enhanced rewrite of a prompt, re-analyzed and compared to the original."""
    id: str
    original: str
    enhanced: str
    platform: Platform
    quality_score: int
    improvements: Tuple[str, ...]
    token_count: int
    improvement: int
    analysis: PromptAnalysis
    pattern_metadata: PatternMetadata
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "original": self.original,
            "enhanced": self.enhanced,
            "platform": self.platform.id,
            "quality_score": self.quality_score,
            "improvements": list(self.improvements),
            "token_count": self.token_count,
            "improvement": self.improvement,
            "analysis": self.analysis.to_dict(),
            "pattern_metadata": self.pattern_metadata.to_dict(),
            "created_at": self.created_at.isoformat(),
        }


@dataclass
class VariationReport:
    """Baseline analysis plus the ordered variations generated from it."""
    original_analysis: PromptAnalysis
    enhanced_prompts: List[EnhancedPrompt] = field(default_factory=list)

    @property
    def best(self) -> Optional[EnhancedPrompt]:
        """Variation with the highest quality score, earliest wins ties."""
        if not self.enhanced_prompts:
            return None
        return max(self.enhanced_prompts, key=lambda p: p.quality_score)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original_analysis": self.original_analysis.to_dict(),
            "enhanced_prompts": [p.to_dict() for p in self.enhanced_prompts],
        }
