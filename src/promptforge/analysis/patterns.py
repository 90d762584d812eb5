"""
Rule tables driving prompt analysis.

Every table is ordered data so each category can be tested and extended
on its own. Patterns are matched case-insensitively.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Tuple, Mapping

from ..core.types import Intent, Domain


@dataclass(frozen=True)
class KeywordRule:
    """
    One classification category.

    ``patterns`` pairs a regex with the weight each match contributes
    (at most two matches per pattern count). The rule fires when the
    summed weight reaches ``threshold``.
    """
    label: object
    patterns: Tuple[Tuple[str, float], ...]
    threshold: float = 1.0


@dataclass(frozen=True)
class ConflictRule:
    """Two directive vocabularies that contradict each other."""
    kind: str
    side_a: str
    side_b: str
    label_a: str
    label_b: str
    resolution: str

    @property
    def description(self) -> str:
        return f"Conflicting {self.kind} directive ({self.label_a} vs {self.label_b})"


# Intent rules in priority order: the first rule reaching its threshold wins.
INTENT_RULES: Tuple[KeywordRule, ...] = (
    KeywordRule(Intent.CODE, (
        (r"\b(code|coding|program|programming|script|function|class|method|algorithm|api|endpoint"
         r"|debug|bug|refactor|compile|unit tests?|regex)\b", 1.0),
        (r"\b(python|javascript|typescript|java|rust|golang|c\+\+|c#|sql|html|css|react|django"
         r"|flask|node\.?js|bash)\b", 1.0),
        (r"```", 1.0),
    )),
    KeywordRule(Intent.CREATIVE, (
        (r"\b(story|stories|poem|poetry|novel|fiction|narrative|lyrics|song|screenplay|haiku"
         r"|fairy tale|plot)\b", 1.0),
        (r"\b(creative|imaginative|imagine|whimsical)\b", 1.0),
        (r"\b(image|picture|illustration|painting|portrait|landscape|logo|artwork|scene)\b", 1.0),
        (r"\b(write|compose|draft)\b.*\b(blog|article|essay|slogan|tagline|speech)\b", 1.0),
    )),
    KeywordRule(Intent.ANALYSIS, (
        (r"\b(analy[sz]e|analysis|evaluate|assess|compare|contrast|examine|investigate|critique)\b", 1.0),
        (r"\b(pros and cons|trade-?offs?|strengths|weaknesses|swot|root cause|insights?)\b", 1.0),
        (r"\bwhy (does|do|is|are|did)\b", 0.5),
    )),
    KeywordRule(Intent.CONVERSATION, (
        (r"^\s*(hi|hello|hey|good (morning|afternoon|evening))\b", 1.0),
        (r"\b(how are you|chat with me|let'?s talk|let'?s discuss|tell me about yourself)\b", 1.0),
        (r"\b(what do you think|your opinion|do you (like|think|believe))\b", 1.0),
    )),
    KeywordRule(Intent.DATA_PROCESSING, (
        (r"\b(csv|json|xml|spreadsheet|dataset|rows?|columns?|records?|database|excel)\b", 0.5),
        (r"\b(extract|parse|transform|convert|clean|normali[sz]e|aggregate|filter|deduplicate|merge)\b", 0.5),
        (r"\b(data|entries|fields)\b", 0.5),
    )),
    KeywordRule(Intent.INSTRUCTION, (
        (r"^\s*(please\s+)?(write|create|make|generate|build|give|list|explain|describe|summari[sz]e"
         r"|translate|tell|show|help|provide|draft|plan|outline|design|find|suggest|recommend)\b", 1.0),
        (r"\bhow (do|can|should) (i|we)\b|\bhow to\b", 1.0),
        (r"\b(please|step[- ]by[- ]step)\b", 0.5),
    )),
)


DOMAIN_RULES: Tuple[KeywordRule, ...] = (
    KeywordRule(Domain.TECHNICAL, (
        (r"\b(software|code|api|server|database|algorithm|python|javascript|typescript|cloud"
         r"|kubernetes|docker|network|backend|frontend|devops|machine learning|neural|function"
         r"|bug|deploy|engineering)\b", 1.0),
    )),
    KeywordRule(Domain.BUSINESS, (
        (r"\b(business|market|marketing|sales|revenue|customers?|clients?|strategy|roi|startup"
         r"|investors?|budget|profit|stakeholders?|brand|kpis?|product launch)\b", 1.0),
    )),
    KeywordRule(Domain.ACADEMIC, (
        (r"\b(research|study|studies|thesis|dissertation|paper|journal|citations?|hypothesis"
         r"|literature review|academic|scholarly|peer[- ]review|methodology|theory)\b", 1.0),
    )),
    KeywordRule(Domain.CREATIVE, (
        (r"\b(story|poem|novel|fiction|characters?|plot|art|artistic|music|song|painting"
         r"|illustration|creative)\b", 1.0),
    )),
)


# Presence patterns for structural prompt elements.
COMPONENT_PATTERNS: Mapping[str, str] = MappingProxyType({
    "role": (
        r"\b(you are|act as|acting as|as an? (expert|senior|professional|experienced|seasoned)"
        r"|pretend (to be|you are)|role:|persona|take the role)\b"
    ),
    "context": (
        r"\b(context|background|situation|scenario|currently|given that|because|regarding"
        r"|i am working on|i'm working on|we are building|my (project|team|company|goal|audience)"
        r"|our (project|team|company|goal|audience)|audience|the goal is)\b"
    ),
    "format": (
        r"\b(format|formatted|structure[d]?|template|bullet points?|numbered list|table"
        r"|json|markdown|yaml|csv|respond with|return (a|an|the)|as a list|in a list)\b"
    ),
    "constraints": (
        r"\b(must|must not|should not|do not|don't|never|always|avoid|limit|limits|at most"
        r"|at least|no more than|within|maximum|minimum|exactly|required|requirements?"
        r"|constraints?|ensure)\b"
        r"|\b\d+\s*(words|sentences|characters|tokens|lines|paragraphs|items|bullets?)\b"
    ),
    "examples": (
        r"\b(for example|for instance|e\.g\.|examples?|such as|sample|input:)"
    ),
})

COMPONENT_LABELS: Mapping[str, str] = MappingProxyType({
    "role": "role or persona",
    "context": "context or background information",
    "format": "output format specification",
    "constraints": "constraints or limitations",
    "examples": "examples or reference cases",
})


# Antagonistic directive pairs. Section wording produced by the enhancer
# deliberately avoids every vocabulary listed here.
CONFLICT_RULES: Tuple[ConflictRule, ...] = (
    ConflictRule(
        kind="length",
        side_a=r"\b(concise|concisely|brief|briefly|short|succinct|terse|to the point)\b",
        side_b=r"\b(detailed|in[- ]depth|thorough|thoroughly|elaborate|extensive|lengthy|long[- ]form"
               r"|in great detail)\b",
        label_a="concise",
        label_b="detailed",
        resolution="Favor a focused answer and expand only where the task requires it.",
    ),
    ConflictRule(
        kind="complexity",
        side_a=r"\b(simple|basic|beginner[- ]friendly|easy to understand|eli5)\b",
        side_b=r"\b(complex|complicated|advanced|sophisticated|expert[- ]level|intricate)\b",
        label_a="simple",
        label_b="complex",
        resolution="Explain advanced points in plain terms, one idea at a time.",
    ),
    ConflictRule(
        kind="tone",
        side_a=r"\b(formal|formally|polite|professional tone|business tone)\b",
        side_b=r"\b(casual|casually|informal|laid[- ]back|chill|relaxed|slang)\b",
        label_a="formal",
        label_b="casual",
        resolution="Use a single consistent register throughout.",
    ),
    ConflictRule(
        kind="scope",
        side_a=r"\b(comprehensive|complete|exhaustive|everything|all aspects|cover all)\b",
        side_b=r"\b(quick|quickly|one sentence|single sentence|tl;?dr|in a nutshell|one line)\b",
        label_a="comprehensive",
        label_b="quick",
        resolution="Cover the essential points first and list the rest as follow-ups.",
    ),
    ConflictRule(
        kind="length limit",
        side_a=r"\b(under|within|at most|no more than|max(imum)?( of)?|in|only)\s+[1-9]\d?\s+"
               r"(words|sentences|lines|tokens|characters)\b",
        side_b=r"\b(detailed|in[- ]depth|thorough|comprehensive|exhaustive|extensive|elaborate)\b",
        label_a="word limit",
        label_b="detailed",
        resolution="Keep to the stated limit and prioritise the most important points.",
    ),
)


ACTION_VERB_PATTERN = (
    r"\b(write|create|generate|build|explain|analy[sz]e|summari[sz]e|list|design|draft|compare"
    r"|describe|translate|implement|develop|review|plan|outline|classify|extract|convert"
    r"|calculate|find|give|make|provide|suggest|answer|identify)\b"
)

# (low, high) complexity band considered a good fit for each intent
INTENT_COMPLEXITY_BANDS: Mapping[Intent, Tuple[int, int]] = MappingProxyType({
    Intent.CODE: (3, 8),
    Intent.CREATIVE: (2, 7),
    Intent.ANALYSIS: (3, 9),
    Intent.CONVERSATION: (1, 5),
    Intent.DATA_PROCESSING: (2, 7),
    Intent.INSTRUCTION: (2, 6),
})

CONSTRAINT_MARKER_PATTERN = COMPONENT_PATTERNS["constraints"]
NESTING_PATTERN = r"\([^)]*\)|\b(if|unless|except|otherwise|only when|provided that|depending on)\b"
CLAUSE_SPLIT_PATTERN = r"[.!?;,:\n]+|\b(?:and|or|but|then|also|while|whereas)\b"
