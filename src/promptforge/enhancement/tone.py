"""Rule-based tone rewriting and conflict resolution for the task text."""

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from ..analysis.components import conflict_sides, detect_conflict_rules, matches_side
from ..analysis.patterns import ConflictRule
from ..core.types import Tone


class RulePriority(Enum):
    """Priority levels for tone rules."""
    HIGH = 1        # Vocabulary changes
    MEDIUM = 2      # Sentence restructuring
    LOW = 3         # Clean-up


@dataclass
class ToneRule:
    """A single tone transformation."""
    name: str
    description: str
    priority: RulePriority
    tones: Tuple[Tone, ...]
    transform: Callable[[str], str]
    condition: Callable[[str], bool] = lambda text: True
    tags: List[str] = field(default_factory=list)


def _word_map_pattern(words: Mapping[str, str]) -> re.Pattern:
    alternatives = sorted(words, key=len, reverse=True)
    return re.compile(r"\b(" + "|".join(re.escape(w) for w in alternatives) + r")\b", re.IGNORECASE)


def _keep_case(original: str, replacement: str) -> str:
    if replacement and original[:1].isupper():
        return replacement[0].upper() + replacement[1:]
    return replacement


def _substitute(words: Mapping[str, str]) -> Callable[[str], str]:
    pattern = _word_map_pattern(words)

    def transform(text: str) -> str:
        return pattern.sub(lambda m: _keep_case(m.group(0), words[m.group(0).lower()]), text)

    return transform


CONTRACTIONS: Mapping[str, str] = MappingProxyType({
    "can't": "cannot", "won't": "will not", "don't": "do not", "doesn't": "does not",
    "didn't": "did not", "isn't": "is not", "aren't": "are not", "wasn't": "was not",
    "shouldn't": "should not", "couldn't": "could not", "wouldn't": "would not",
    "i'm": "I am", "it's": "it is", "that's": "that is", "there's": "there is",
    "what's": "what is", "you're": "you are", "we're": "we are", "they're": "they are",
    "i've": "I have", "we've": "we have", "i'll": "I will", "you'll": "you will",
    "i'd": "I would", "let's": "let us",
})

# "you are" stays expanded so role statements keep their meaning
RELAXED_CONTRACTIONS: Mapping[str, str] = MappingProxyType({
    "cannot": "can't", "will not": "won't", "do not": "don't", "does not": "doesn't",
    "is not": "isn't", "are not": "aren't", "it is": "it's", "that is": "that's",
    "i am": "I'm", "we are": "we're", "let us": "let's",
})

INFORMAL_WORDS: Mapping[str, str] = MappingProxyType({
    "gonna": "going to", "wanna": "want to", "gotta": "have to", "kinda": "somewhat",
    "sorta": "somewhat", "stuff": "material", "lots of": "many", "a lot of": "many",
    "yeah": "yes", "nope": "no", "pretty much": "largely", "awesome": "excellent",
    "super": "very", "guys": "everyone", "u": "you", "pls": "please", "plz": "please",
    "thx": "thank you", "ok": "acceptable", "okay": "acceptable",
})

FORMAL_CONNECTIVES: Mapping[Tone, Mapping[str, str]] = MappingProxyType({
    Tone.PROFESSIONAL: MappingProxyType({
        "also": "Additionally,", "but": "However,", "so": "Therefore,", "and": "Furthermore,",
    }),
    Tone.ACADEMIC: MappingProxyType({
        "also": "Moreover,", "but": "Nevertheless,", "so": "Consequently,", "and": "Furthermore,",
    }),
})

RELAXED_CONNECTIVES: Mapping[str, str] = MappingProxyType({
    "additionally": "also", "furthermore": "plus", "however": "but",
    "therefore": "so", "moreover": "also", "consequently": "so",
})

FILLER_PATTERN = re.compile(
    r"\b(please|kindly|just|really|very|basically|actually|literally|simply|quite|rather"
    r"|somewhat|totally|definitely|certainly|maybe|perhaps|super)\b[ \t]*",
    re.IGNORECASE,
)

WORDY_PHRASES: Mapping[str, str] = MappingProxyType({
    "in order to": "to",
    "due to the fact that": "because",
    "at this point in time": "now",
    "for the purpose of": "for",
    "in the event that": "if",
    "with regard to": "about",
    "a large number of": "many",
    "is able to": "can",
    "are able to": "can",
    "has the ability to": "can",
    "it is important to note that": "",
    "i would like you to": "",
    "i want you to": "",
    "i was wondering if you could": "",
    "would you mind": "",
    "could you": "",
    "can you": "",
})

PLEASANTRIES_PATTERN = re.compile(
    r"\b(thank you( in advance)?|thanks|i appreciate it|hope this makes sense|if possible)\b[,.!]*[ \t]*",
    re.IGNORECASE,
)

SARCASTIC_MARKER = "Oh, what a thrill, another request."

TONE_DIRECTIVES: Mapping[Tone, str] = MappingProxyType({
    Tone.PROFESSIONAL: "Tone: professional. Use precise wording and full sentences.",
    Tone.CASUAL: "Tone: conversational. Use everyday words and contractions.",
    Tone.ACADEMIC: "Tone: academic. Use precise terminology and measured claims.",
    Tone.SPARTAN: "Tone: spartan. Every sentence must carry information, with no filler.",
    Tone.LACONIC: "Tone: laconic. Use as few words as the task allows.",
    Tone.SARCASTIC: "Tone: dry and ironic, while keeping every fact accurate.",
})

# Which side of a conflict rule each tone keeps ("a" or "b"), by rule kind
TONE_PREFERENCES: Mapping[Tone, Mapping[str, str]] = MappingProxyType({
    Tone.PROFESSIONAL: MappingProxyType({"tone": "a"}),
    Tone.ACADEMIC: MappingProxyType({"tone": "a"}),
    Tone.CASUAL: MappingProxyType({"tone": "b"}),
    Tone.SARCASTIC: MappingProxyType({"tone": "b"}),
    Tone.SPARTAN: MappingProxyType({"length": "a", "scope": "b", "length limit": "a"}),
    Tone.LACONIC: MappingProxyType({"length": "a", "scope": "b", "length limit": "a", "complexity": "a"}),
})

_SENTENCE_SPLIT = re.compile(r"(?<=[.!?;])\s+")
_CLAUSE_SPLIT = re.compile(r"(,\s*|\s+(?:and|but|while|whereas)\s+)", re.IGNORECASE)
_LONG_SENTENCE_WORDS = 20


def _split_long_sentences(text: str) -> str:
    """Break sentences over the word limit at their first coordinating joint."""
    def split_line(line: str) -> str:
        sentences = _SENTENCE_SPLIT.split(line)
        out = []
        for sentence in sentences:
            if len(sentence.split()) > _LONG_SENTENCE_WORDS:
                sentence = re.sub(
                    r"(,\s+(?:and|but|which)\s+|;\s+)(\w)",
                    lambda m: ". " + m.group(2).upper(),
                    sentence,
                    count=1,
                )
            out.append(sentence)
        return " ".join(out)

    return "\n".join(split_line(line) for line in text.split("\n"))


def _capitalize_sentences(text: str) -> str:
    return re.sub(r"(^|[.!?]\s+)([a-z])", lambda m: m.group(1) + m.group(2).upper(), text, flags=re.MULTILINE)


def _tidy(text: str) -> str:
    text = re.sub(r"[ \t]{2,}", " ", text)
    text = re.sub(r"[ \t]+([,.!?;:])", r"\1", text)
    text = re.sub(r"([,;:])(?=[.!?])", "", text)
    text = re.sub(r"^[ \t]*[,;:][ \t]*", "", text, flags=re.MULTILINE)
    text = "\n".join(line.strip() for line in text.split("\n"))
    return _capitalize_sentences(text).strip()


def _upgrade_connectives(tone: Tone) -> Callable[[str], str]:
    mapping = FORMAL_CONNECTIVES[tone]
    lead = "Additionally," if tone is Tone.PROFESSIONAL else "Moreover,"
    pattern = re.compile(r"(^|[.!?]\s+)(also|but|so|and)\b,?\s*", re.IGNORECASE | re.MULTILINE)

    def transform(text: str) -> str:
        upgraded, n = pattern.subn(lambda m: f"{m.group(1)}{mapping[m.group(2).lower()]} ", text)
        if n:
            return upgraded
        if "\n" in text.strip():
            return text
        # No connective to upgrade: link the final sentence to the one before
        sentences = _SENTENCE_SPLIT.split(text.strip())
        if len(sentences) >= 2:
            last = sentences[-1]
            if not last.lower().startswith(lead.lower().rstrip(",")):
                head = last[:1].lower() if not last.startswith("I ") else last[:1]
                sentences[-1] = f"{lead} {head}{last[1:]}"
                return " ".join(sentences)
        return text

    return transform


def _relax_connectives(text: str) -> str:
    pattern = re.compile(r"\b(" + "|".join(RELAXED_CONNECTIVES) + r"),?", re.IGNORECASE)
    return pattern.sub(lambda m: _keep_case(m.group(0), RELAXED_CONNECTIVES[m.group(1).lower()]), text)


def _add_sarcastic_marker(text: str) -> str:
    return f"{SARCASTIC_MARKER} {text}"


class ToneEngine:
    """
    Deterministic tone rewriting.

    Rules are applied in priority order; each tone uses only the rules
    registered for it.
    """

    def __init__(self):
        self.rules: List[ToneRule] = []
        self._load_builtin_rules()

    def _load_builtin_rules(self) -> None:
        """Load built-in tone rules."""
        formal = (Tone.PROFESSIONAL, Tone.ACADEMIC)
        terse = (Tone.SPARTAN, Tone.LACONIC)

        self.rules.append(ToneRule(
            name="expand_contractions",
            description="Write contractions out in full",
            priority=RulePriority.HIGH,
            tones=formal,
            transform=_substitute(CONTRACTIONS),
            condition=lambda t: "'" in t,
            tags=["vocabulary"],
        ))
        self.rules.append(ToneRule(
            name="formalize_vocabulary",
            description="Replace informal words with neutral equivalents",
            priority=RulePriority.HIGH,
            tones=formal,
            transform=_substitute(INFORMAL_WORDS),
            condition=lambda t: bool(_word_map_pattern(INFORMAL_WORDS).search(t)),
            tags=["vocabulary"],
        ))
        self.rules.append(ToneRule(
            name="professional_connectives",
            description="Link sentences with formal connectives",
            priority=RulePriority.MEDIUM,
            tones=(Tone.PROFESSIONAL,),
            transform=_upgrade_connectives(Tone.PROFESSIONAL),
            tags=["structure"],
        ))
        self.rules.append(ToneRule(
            name="academic_connectives",
            description="Link sentences with scholarly connectives",
            priority=RulePriority.MEDIUM,
            tones=(Tone.ACADEMIC,),
            transform=_upgrade_connectives(Tone.ACADEMIC),
            tags=["structure"],
        ))
        self.rules.append(ToneRule(
            name="relax_contractions",
            description="Use everyday contractions",
            priority=RulePriority.HIGH,
            tones=(Tone.CASUAL,),
            transform=_substitute(RELAXED_CONTRACTIONS),
            tags=["vocabulary"],
        ))
        self.rules.append(ToneRule(
            name="relax_connectives",
            description="Swap formal connectives for conversational ones",
            priority=RulePriority.MEDIUM,
            tones=(Tone.CASUAL,),
            transform=_relax_connectives,
            tags=["structure"],
        ))
        self.rules.append(ToneRule(
            name="replace_wordy_phrases",
            description="Replace wordy phrases with single words",
            priority=RulePriority.HIGH,
            tones=terse,
            transform=_substitute(WORDY_PHRASES),
            tags=["brevity"],
        ))
        self.rules.append(ToneRule(
            name="strip_filler",
            description="Remove filler words",
            priority=RulePriority.HIGH,
            tones=terse,
            transform=lambda t: FILLER_PATTERN.sub("", t),
            condition=lambda t: bool(FILLER_PATTERN.search(t)),
            tags=["brevity"],
        ))
        self.rules.append(ToneRule(
            name="strip_pleasantries",
            description="Remove pleasantries",
            priority=RulePriority.HIGH,
            tones=(Tone.LACONIC,),
            transform=lambda t: PLEASANTRIES_PATTERN.sub("", t),
            condition=lambda t: bool(PLEASANTRIES_PATTERN.search(t)),
            tags=["brevity"],
        ))
        self.rules.append(ToneRule(
            name="drop_parentheticals",
            description="Remove parenthetical asides",
            priority=RulePriority.HIGH,
            tones=(Tone.LACONIC,),
            transform=lambda t: re.sub(r"[ \t]*\([^()]*\)", "", t),
            condition=lambda t: "(" in t,
            tags=["brevity"],
        ))
        self.rules.append(ToneRule(
            name="split_long_sentences",
            description="Split long sentences at their first joint",
            priority=RulePriority.MEDIUM,
            tones=terse,
            transform=_split_long_sentences,
            condition=lambda t: any(
                len(s.split()) > _LONG_SENTENCE_WORDS for s in _SENTENCE_SPLIT.split(t)
            ),
            tags=["structure"],
        ))
        self.rules.append(ToneRule(
            name="ironic_framing",
            description="Open with a fixed ironic aside",
            priority=RulePriority.LOW,
            tones=(Tone.SARCASTIC,),
            transform=_add_sarcastic_marker,
            condition=lambda t: SARCASTIC_MARKER not in t,
            tags=["framing"],
        ))

        self.rules.sort(key=lambda r: r.priority.value)

    def rules_for(self, tone: Tone) -> List[ToneRule]:
        return [r for r in self.rules if tone in r.tones]

    def apply(self, text: str, tone: Tone) -> Tuple[str, List[str]]:
        """
        Rewrite text for a tone.

        Args:
            text: Task text
            tone: Target tone

        Returns:
            Tuple of (rewritten_text, list_of_applied_rule_names); the
            original text is returned when rewriting would empty it
        """
        if not text or not text.strip():
            return text, []

        result = text
        applied = []
        for rule in self.rules_for(tone):
            if not rule.condition(result):
                continue
            updated = rule.transform(result)
            if updated != result:
                result = updated
                applied.append(rule.name)

        result = _tidy(result)
        if not result:
            return text.strip(), []
        return result, applied

    @staticmethod
    def directive(tone: Tone) -> str:
        """Closing line stating the tone."""
        return TONE_DIRECTIVES[tone]


def drop_clauses(text: str, should_drop: Callable[[str], bool]) -> Tuple[str, int]:
    """
    Remove clauses for which ``should_drop`` is true.

    Clauses are split on sentence ends, commas and coordinating
    conjunctions, line by line. Never removes everything: when every
    clause would go, the text is returned unchanged.
    """
    dropped = 0
    lines_out = []
    for line in text.split("\n"):
        if not line.strip():
            lines_out.append(line)
            continue
        sentences_out = []
        for sentence in _SENTENCE_SPLIT.split(line.strip()):
            parts = _CLAUSE_SPLIT.split(sentence)
            clauses, joints = parts[0::2], parts[1::2]
            terminal = re.search(r"[.!?;]$", sentence.rstrip())
            kept: List[Tuple[str, str]] = []
            for i, clause in enumerate(clauses):
                if clause.strip() and should_drop(clause):
                    dropped += 1
                    continue
                kept.append((joints[i - 1] if i > 0 else "", clause))
            if not kept:
                continue
            rebuilt = kept[0][1] + "".join(j + c for j, c in kept[1:])
            rebuilt = rebuilt.strip().rstrip(",;").strip()
            if not rebuilt:
                continue
            if terminal and rebuilt[-1] not in ".!?;":
                rebuilt += terminal.group(0)
            sentences_out.append(rebuilt[0].upper() + rebuilt[1:])
        if sentences_out:
            lines_out.append(" ".join(sentences_out))

    result = "\n".join(lines_out).strip()
    if not result:
        return text, 0
    return result, dropped


@dataclass
class ConflictResolution:
    """Outcome of resolving directive conflicts in the task text."""
    text: str
    resolved: List[ConflictRule] = field(default_factory=list)
    kept_sides: Dict[str, str] = field(default_factory=dict)
    remaining: List[ConflictRule] = field(default_factory=list)


def _drop_side(text: str, rule: ConflictRule, keep: str) -> str:
    drop = "b" if keep == "a" else "a"
    updated, _ = drop_clauses(
        text,
        lambda clause: matches_side(clause, rule, drop) and not matches_side(clause, rule, keep),
    )
    return updated


def resolve_conflicts(
    text: str,
    tone: Tone,
    resolve_ambiguity: bool = False,
    rules: Optional[Sequence[ConflictRule]] = None
) -> ConflictResolution:
    """
    Keep one side of each contradictory directive pair.

    The tone decides for the conflict kinds it has a preference on. With
    ``resolve_ambiguity`` the remaining conflicts keep whichever side the
    prompt mentions first. A conflict counts as resolved once both sides
    no longer occur together.
    """
    active = list(rules) if rules is not None else detect_conflict_rules(text)
    resolution = ConflictResolution(text=text)
    preferences = TONE_PREFERENCES.get(tone, {})

    for rule in active:
        keep = preferences.get(rule.kind)
        if keep is None and resolve_ambiguity:
            pos_a, pos_b = conflict_sides(resolution.text, rule)
            if pos_a is not None and pos_b is not None:
                keep = "a" if pos_a <= pos_b else "b"
        if keep is None:
            continue
        resolution.text = _drop_side(resolution.text, rule, keep)
        resolution.kept_sides[rule.kind] = rule.label_a if keep == "a" else rule.label_b

    still_active = detect_conflict_rules(resolution.text)
    for rule in active:
        if rule in still_active:
            resolution.remaining.append(rule)
        else:
            resolution.resolved.append(rule)
    return resolution
