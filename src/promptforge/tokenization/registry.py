"""Tokenizer registry for managing token counters."""

import logging
from typing import Dict, List

from .base import TokenCounter, HeuristicTokenCounter

logger = logging.getLogger(__name__)

_HEURISTIC_NAMES = ("heuristic", "simple", "default")


class TokenizerRegistry:
    """
    Registry for managing tokenizer instances.

    Counters are created lazily and cached by name. Unknown names fall
    back to the heuristic counter.
    """

    def __init__(self, chars_per_token: float = None):
        self._counters: Dict[str, TokenCounter] = {}
        self._chars_per_token = chars_per_token

    def _ratio(self) -> float:
        if self._chars_per_token is not None:
            return self._chars_per_token
        from ..core.config import get_settings
        return get_settings().tokenizer.chars_per_token

    def get(self, name: str = "heuristic") -> TokenCounter:
        """
        Get or create a token counter.

        Args:
            name: Tokenizer name

        Returns:
            TokenCounter instance
        """
        if name not in self._counters:
            self._counters[name] = self._create_counter(name)
        return self._counters[name]

    def _create_counter(self, name: str) -> TokenCounter:
        """Create a token counter for the given name."""
        if name not in _HEURISTIC_NAMES:
            logger.debug("No tokenizer registered as %r, using heuristic estimate", name)
        return HeuristicTokenCounter(self._ratio())

    def register(self, name: str, counter: TokenCounter) -> None:
        """
        Register a custom token counter.

        Args:
            name: Name to register under
            counter: TokenCounter instance
        """
        self._counters[name] = counter

    def list_available(self) -> List[str]:
        """List available tokenizer names."""
        available = set(self._counters.keys())
        available.update(_HEURISTIC_NAMES)
        return sorted(available)

    def clear_cache(self) -> None:
        """Clear cached tokenizer instances."""
        self._counters.clear()

    def is_loaded(self, name: str) -> bool:
        """Check if a tokenizer is loaded."""
        return name in self._counters


# Global registry instance
tokenizer_registry = TokenizerRegistry()


def get_tokenizer(name: str = "heuristic") -> TokenCounter:
    """
    Get a tokenizer by name.

    Convenience function for accessing the global registry.
    """
    return tokenizer_registry.get(name)


def count_tokens(text: str, tokenizer: str = "heuristic") -> int:
    """
    Count tokens in text.

    Convenience function for quick token counting. Returns 0 for empty
    or non-string input.

    Args:
        text: Text to count tokens for
        tokenizer: Tokenizer name

    Returns:
        Token count
    """
    if not isinstance(text, str) or not text:
        return 0
    return tokenizer_registry.get(tokenizer).count(text)
