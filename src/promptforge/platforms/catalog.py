"""Static catalog of target AI platforms."""

import logging
from typing import Dict, List, Optional, Iterable, Tuple

from ..core.types import Platform, ApiFormat
from ..core.exceptions import InvalidPlatformError, ConfigurationError

logger = logging.getLogger(__name__)


# Wording here is appended to enhanced prompts, so it stays clear of the
# length, tone and scope vocabulary the conflict rules look for.
PLATFORMS: Tuple[Platform, ...] = (
    # AI Assistants
    Platform(
        id="claude-sonnet",
        name="Claude Sonnet",
        icon="🟣",
        category="AI Assistants",
        api_format=ApiFormat.XML,
        max_tokens=8192,
        description="Long-context assistant that follows XML-tagged structure well",
        special_requirements=(
            "Use XML tags for structure: <context>, <instructions>, <examples>",
            "Reason step by step inside <thinking> tags before the final answer",
        ),
        system_prompt_template=(
            "You are Claude, an assistant that reads the tagged sections below "
            "and answers the {{ intent }} request precisely."
        ),
        user_prompt_template="Place the final answer inside <answer> tags.",
    ),
    Platform(
        id="chatgpt-4",
        name="ChatGPT-4",
        icon="🟢",
        category="AI Assistants",
        api_format=ApiFormat.JSON,
        max_tokens=8192,
        description="General-purpose assistant with strong reasoning and JSON mode",
        special_requirements=(
            "Use clear sections and markdown formatting",
            "Return structured data as valid JSON when asked for data",
        ),
        system_prompt_template="You are ChatGPT, a helpful assistant for {{ domain }} tasks.",
        user_prompt_template="Answer the {{ intent }} request using the sections above.",
    ),
    Platform(
        id="chatgpt-3.5",
        name="ChatGPT-3.5",
        icon="🟩",
        category="AI Assistants",
        api_format=ApiFormat.JSON,
        max_tokens=4096,
        description="Fast, low-cost assistant for everyday conversation",
        special_requirements=(
            "Keep the request focused and direct",
        ),
        system_prompt_template="You are a helpful assistant.",
    ),
    Platform(
        id="gemini-pro",
        name="Gemini Pro",
        icon="🔷",
        category="AI Assistants",
        api_format=ApiFormat.TEXT,
        max_tokens=8192,
        description="Multimodal assistant with a very large context window",
        special_requirements=(
            "Use markdown headers and clear structure",
        ),
        system_prompt_template="You are Gemini, an assistant for {{ domain }} work.",
    ),
    # Speed-Optimized
    Platform(
        id="groq-llama",
        name="Groq Llama",
        icon="⚡",
        category="Speed-Optimized",
        api_format=ApiFormat.TEXT,
        max_tokens=4096,
        description="Low-latency open model served on Groq hardware",
        special_requirements=(
            "State the request directly with one task per prompt",
        ),
    ),
    # Image Generation
    Platform(
        id="midjourney",
        name="Midjourney",
        icon="🎨",
        category="Image Generation",
        api_format=ApiFormat.TEXT,
        max_tokens=500,
        description="Image generation from keyword-style descriptions",
        special_requirements=(
            "Use comma-separated keywords with style parameters",
            "Append parameters such as --ar 16:9 --v 6",
        ),
        user_prompt_template="Style: {{ tone }}, high detail, cinematic lighting",
    ),
    Platform(
        id="dall-e-3",
        name="DALL-E 3",
        icon="🖼️",
        category="Image Generation",
        api_format=ApiFormat.TEXT,
        max_tokens=400,
        description="Image generation from natural language descriptions",
        special_requirements=(
            "Describe the scene in natural language",
        ),
    ),
    # Code-Specific
    Platform(
        id="cursor-ai",
        name="Cursor AI",
        icon="💻",
        category="Code-Specific",
        api_format=ApiFormat.TEXT,
        max_tokens=8000,
        description="AI code editor that works on files in the open project",
        special_requirements=(
            "Include file paths and code context",
            "Name the language and framework in use",
        ),
        system_prompt_template="You are a coding assistant working inside the user's editor.",
        user_prompt_template="Reply with the changed code in fenced blocks, one per file.",
    ),
    Platform(
        id="github-copilot",
        name="GitHub Copilot",
        icon="🐙",
        category="Code-Specific",
        api_format=ApiFormat.TEXT,
        max_tokens=4000,
        description="Inline code completion driven by comments and surrounding code",
        special_requirements=(
            "Use code comments as prompts",
        ),
    ),
    # Research & Analysis
    Platform(
        id="perplexity",
        name="Perplexity",
        icon="🔍",
        category="Research & Analysis",
        api_format=ApiFormat.TEXT,
        max_tokens=4096,
        description="Search-backed answers with cited sources",
        special_requirements=(
            "Phrase the request as a research question",
            "Cite sources for factual claims",
        ),
    ),
    Platform(
        id="notebooklm",
        name="NotebookLM",
        icon="📓",
        category="Research & Analysis",
        api_format=ApiFormat.TEXT,
        max_tokens=8192,
        description="Question answering grounded in uploaded documents",
        special_requirements=(
            "Refer to the uploaded documents by name",
        ),
        user_prompt_template="Answer only from the provided sources.",
    ),
)


class PlatformCatalog:
    """
    Read-only index over a set of platforms.

    The module-level ``catalog`` wraps ``PLATFORMS``; tests and services
    can build their own catalog from any iterable of Platform objects.
    """

    def __init__(self, platforms: Iterable[Platform] = PLATFORMS):
        self._platforms: Tuple[Platform, ...] = tuple(platforms)
        self._by_id: Dict[str, Platform] = {}
        for platform in self._platforms:
            if platform.id in self._by_id:
                raise ConfigurationError(
                    f"Duplicate platform id: {platform.id}",
                    config_key="platforms"
                )
            self._by_id[platform.id] = platform

    def __len__(self) -> int:
        return len(self._platforms)

    def __iter__(self):
        return iter(self._platforms)

    def __contains__(self, platform_id: str) -> bool:
        return platform_id in self._by_id

    @property
    def platforms(self) -> Tuple[Platform, ...]:
        return self._platforms

    def ids(self) -> List[str]:
        return [p.id for p in self._platforms]

    def get(self, platform_id: str) -> Optional[Platform]:
        """Platform for an id, or None."""
        if not isinstance(platform_id, str):
            return None
        return self._by_id.get(platform_id)

    def require(self, platform_id: str) -> Platform:
        """
        Platform for an id.

        Raises:
            InvalidPlatformError: If the id is not in the catalog
        """
        platform = self.get(platform_id)
        if platform is None:
            logger.debug("Rejected unknown platform id %r", platform_id)
            raise InvalidPlatformError(
                f"Unknown platform: {platform_id}",
                platform_id=platform_id,
                available=self.ids()
            )
        return platform

    def categories(self) -> List[str]:
        """Distinct categories in first-seen order."""
        seen: List[str] = []
        for platform in self._platforms:
            if platform.category not in seen:
                seen.append(platform.category)
        return seen

    def by_category(self, category: str) -> List[Platform]:
        return [p for p in self._platforms if p.category == category]


# Global catalog instance
catalog = PlatformCatalog()


def get_platform_by_id(platform_id: str) -> Optional[Platform]:
    """Look up a platform in the global catalog."""
    return catalog.get(platform_id)


def require_platform(platform_id: str) -> Platform:
    """Look up a platform, raising InvalidPlatformError when unknown."""
    return catalog.require(platform_id)


def get_all_categories() -> List[str]:
    """Platform categories in catalog order."""
    return catalog.categories()


def get_platforms_by_category(category: str) -> List[Platform]:
    """Platforms belonging to one category."""
    return catalog.by_category(category)
