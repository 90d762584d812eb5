"""Few-shot example bank and per-format example rendering."""

import json
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Sequence, Tuple
from xml.sax.saxutils import escape

from ..core.types import ApiFormat, Domain, Intent


@dataclass(frozen=True)
class Example:
    """One input/output demonstration pair."""
    input: str
    output: str

    def to_dict(self):
        return {"input": self.input, "output": self.output}


def _bank(*pairs: Tuple[str, str]) -> Tuple[Example, ...]:
    return tuple(Example(i, o) for i, o in pairs)


# Entries avoid the vocabulary the conflict rules react to
INTENT_EXAMPLES: Mapping[Intent, Tuple[Example, ...]] = MappingProxyType({
    Intent.CODE: _bank(
        ("Write a function that reverses a string.",
         "def reverse_string(s: str) -> str:\n    return s[::-1]"),
        ("Create a class for a user profile with a name and an email.",
         "class UserProfile:\n    def __init__(self, name, email):\n        self.name = name\n        self.email = email"),
        ("Write a function that checks whether a number is prime.",
         "def is_prime(n: int) -> bool:\n    return n > 1 and all(n % d for d in range(2, int(n ** 0.5) + 1))"),
    ),
    Intent.CREATIVE: _bank(
        ("A mountain valley at sunset, painted in watercolor.",
         "Warm amber light spills over the ridgeline while soft washes of violet settle into the valley floor."),
        ("A city of the future with flying cars and neon signs.",
         "Towers glow in magenta and teal as traffic streams between them in ribbons of light."),
        ("Open a story about a lighthouse keeper who finds a letter.",
         "The letter was dry, which was impossible, because the storm had not stopped for three days."),
    ),
    Intent.ANALYSIS: _bank(
        ("Analyze the pros and cons of remote work.",
         "Pros: flexibility, no commute, better focus time. Cons: isolation, slower feedback, blurred work hours."),
        ("Compare SQL and NoSQL databases.",
         "SQL: fixed schema, joins, ACID transactions. NoSQL: flexible schema, horizontal scaling, document or key-value models."),
        ("Evaluate a subscription pricing model for a mobile app.",
         "Recurring revenue and predictable cash flow, offset by churn risk and higher expectations for ongoing updates."),
    ),
    Intent.CONVERSATION: _bank(
        ("What is machine learning?",
         "Machine learning is a branch of AI in which systems learn patterns from data instead of following hand-written rules."),
        ("Hi! Can you recommend a good book?",
         "Happy to help. What kinds of stories do you usually enjoy?"),
    ),
    Intent.DATA_PROCESSING: _bank(
        ("Convert these CSV rows to JSON: name,age / Ada,36",
         '[{"name": "Ada", "age": 36}]'),
        ("Extract every email address from the text below.",
         "A list of the unique addresses, one per line, in the order they appear."),
    ),
    Intent.INSTRUCTION: _bank(
        ("How do I make a paper airplane?",
         "1. Fold the sheet in half lengthwise. 2. Fold the top corners to the center. 3. Fold the wings down. 4. Test the flight."),
        ("Explain how to reset a router.",
         "1. Locate the reset button. 2. Hold it for ten seconds. 3. Wait for the lights to settle. 4. Reconnect with the default password."),
    ),
})

DOMAIN_EXAMPLES: Mapping[Domain, Tuple[Example, ...]] = MappingProxyType({
    Domain.TECHNICAL: _bank(
        ("Describe what a load balancer does.",
         "It spreads incoming requests across several servers so no single server becomes a bottleneck."),
    ),
    Domain.BUSINESS: _bank(
        ("Summarize our quarterly sales results for the board.",
         "Revenue grew 12% on the quarter, led by enterprise renewals; churn held steady at 3%."),
    ),
    Domain.ACADEMIC: _bank(
        ("State the research question of a study on sleep and memory.",
         "Does restricting sleep to five hours reduce next-day recall of newly learned word pairs?"),
    ),
    Domain.CREATIVE: _bank(
        ("Suggest a title for a mystery novel set in Venice.",
         "The Glass Tide"),
    ),
    Domain.GENERAL: _bank(
        ("List three tips for staying focused.",
         "1. Work in timed blocks. 2. Silence notifications. 3. Keep a written list of the next actions."),
    ),
})

IMAGE_EXAMPLES: Tuple[Example, ...] = _bank(
    ("A cozy reading nook on a rainy afternoon",
     "cozy reading nook, rain on the window, warm lamp light, stacked books, soft focus, 35mm photo --ar 3:2 --v 6"),
    ("A robot gardener tending roses",
     "friendly robot gardener, rose garden, morning mist, pastel palette, storybook illustration --ar 16:9 --v 6"),
    ("An ancient library inside a mountain",
     "ancient library carved into a mountain, towering shelves, shafts of sunlight, dust motes, epic scale --ar 16:9 --v 6"),
)


def _placeholder(n: int, task: str) -> Example:
    subject = " ".join(task.split()[:8]) or "the task"
    return Example(
        input=f"Sample request {n} in the style of: {subject}",
        output="A response that fulfils the request in the format described above.",
    )


def select_examples(
    count: int,
    intent: Intent,
    domain: Domain,
    task: str = "",
    image_platform: bool = False
) -> List[Example]:
    """
    Pick ``count`` examples.

    Image platforms draw from the image bank; other platforms use the
    intent bank, then the domain bank. Any shortfall is filled with
    synthesized placeholders.
    """
    if count <= 0:
        return []
    if image_platform:
        pool: List[Example] = list(IMAGE_EXAMPLES)
    else:
        pool = list(INTENT_EXAMPLES.get(intent, ())) + [
            e for e in DOMAIN_EXAMPLES.get(domain, ()) if e not in INTENT_EXAMPLES.get(intent, ())
        ]
    chosen = pool[:count]
    while len(chosen) < count:
        chosen.append(_placeholder(len(chosen) + 1, task))
    return chosen


def format_examples(examples: Sequence[Example], api_format: ApiFormat) -> str:
    """
    Render examples for a platform format.

    JSON: one object per line. XML: ``<example>`` elements. Text:
    numbered ``Example N:`` blocks.
    """
    if api_format is ApiFormat.JSON:
        return "\n".join(json.dumps(e.to_dict(), ensure_ascii=False) for e in examples)
    if api_format is ApiFormat.XML:
        return "\n".join(
            f"<example>\n<input>{escape(e.input)}</input>\n<output>{escape(e.output)}</output>\n</example>"
            for e in examples
        )
    return "\n\n".join(
        f"Example {i}:\nInput: {e.input}\nOutput: {e.output}" for i, e in enumerate(examples, 1)
    )


def count_rendered_examples(body: str, api_format: ApiFormat) -> int:
    """Number of examples in a rendered examples body."""
    if not body:
        return 0
    if api_format is ApiFormat.JSON:
        return sum(1 for line in body.splitlines() if line.startswith('{"input"'))
    if api_format is ApiFormat.XML:
        return body.count("<example>")
    return sum(1 for line in body.splitlines() if line.startswith("Example ") and line.rstrip().endswith(":"))
