"""Rendering of enhanced-prompt sections for a platform's API format."""

import re
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from ..core.types import ApiFormat

# Fixed assembly order
SECTION_ORDER = ("system", "dataset", "role", "task", "clarifications", "examples", "platform")

SECTION_TITLES: Mapping[str, str] = MappingProxyType({
    "system": "System",
    "dataset": "Dataset Context",
    "role": "Role",
    "task": "Task",
    "clarifications": "Clarifications",
    "examples": "Examples",
    "platform": "Platform Requirements",
})

# Tag names follow the structure XML-oriented assistants recommend
SECTION_TAGS: Mapping[str, str] = MappingProxyType({
    "system": "system",
    "dataset": "context",
    "role": "role",
    "task": "instructions",
    "clarifications": "clarifications",
    "examples": "examples",
    "platform": "platform",
})


@dataclass(frozen=True)
class Section:
    """
    One block of an enhanced prompt.

    ``shrink`` returns a smaller version of the section, or None when it
    cannot shrink further; the budget pass then removes it entirely.
    """
    name: str
    body: str
    meta: Dict[str, Any] = field(default_factory=dict, compare=False)
    shrink: Optional[Callable[[], Optional["Section"]]] = field(default=None, compare=False, repr=False)

    def with_body(self, body: str, **meta) -> "Section":
        return replace(self, body=body, meta={**self.meta, **meta}, shrink=None)


def render_section(name: str, body: str, api_format: ApiFormat) -> str:
    """Wrap a section body in XML tags or a markdown heading."""
    body = body.strip()
    if api_format is ApiFormat.XML:
        tag = SECTION_TAGS[name]
        return f"<{tag}>\n{body}\n</{tag}>"
    return f"### {SECTION_TITLES[name]}\n{body}"


def render_document(sections: Sequence[Section], api_format: ApiFormat) -> str:
    """Render sections in the given order, separated by blank lines."""
    return "\n\n".join(
        render_section(s.name, s.body, api_format) for s in sections if s.body.strip()
    )


def _marker(name: str, api_format: ApiFormat) -> re.Pattern:
    if api_format is ApiFormat.XML:
        return re.compile(rf"^<{SECTION_TAGS[name]}>\s*$", re.MULTILINE)
    return re.compile(rf"^### {re.escape(SECTION_TITLES[name])}\s*$", re.MULTILINE)


_MARKERS: Dict[ApiFormat, Dict[str, re.Pattern]] = {
    fmt: {name: _marker(name, fmt) for name in SECTION_ORDER} for fmt in ApiFormat
}


def find_sections(text: str, api_format: ApiFormat) -> List[str]:
    """Names of the sections whose markers appear in text, in assembly order."""
    if not isinstance(text, str):
        return []
    return [name for name, pattern in _MARKERS[api_format].items() if pattern.search(text)]


def section_body(text: str, name: str, api_format: ApiFormat) -> Optional[str]:
    """Body of one rendered section, or None when it is absent."""
    match = _MARKERS[api_format][name].search(text or "")
    if not match:
        return None
    rest = text[match.end():]
    if api_format is ApiFormat.XML:
        end = rest.find(f"</{SECTION_TAGS[name]}>")
    else:
        following = re.search(r"^### ", rest, re.MULTILINE)
        end = following.start() if following else -1
    return (rest[:end] if end >= 0 else rest).strip()
