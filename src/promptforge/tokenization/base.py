"""Abstract base class for token counters."""

import math
import re
from abc import ABC, abstractmethod
from typing import List

_WORD_RE = re.compile(r"\S+")


class TokenCounter(ABC):
    """
    Abstract base class for token counters.

    Only ``count`` is required; truncation is derived from it and cuts
    at word boundaries, so it works for any counter whose estimate does
    not decrease when text is appended.
    """

    name: str = "base"

    @abstractmethod
    def count(self, text: str) -> int:
        """
        Count tokens in text.

        Args:
            text: Text to count tokens for

        Returns:
            Token count (0 for empty or non-string input)
        """
        pass

    def fits(self, text: str, max_tokens: int) -> bool:
        """Whether text is within max_tokens."""
        return self.count(text) <= max_tokens

    def truncate(self, text: str, max_tokens: int) -> str:
        """
        Truncate text to maximum tokens.

        Keeps the longest run of whole words that fits. When even the
        first word is over budget it is cut by characters, so the result
        is non-empty whenever text is non-empty and max_tokens >= 1.

        Args:
            text: Text to truncate
            max_tokens: Maximum number of tokens

        Returns:
            Truncated text
        """
        if not isinstance(text, str) or not text or max_tokens <= 0:
            return ""
        if self.count(text) <= max_tokens:
            return text

        ends = [m.end() for m in _WORD_RE.finditer(text)]
        lo, hi = 0, len(ends)
        while lo < hi:
            mid = (lo + hi + 1) // 2
            if self.count(text[:ends[mid - 1]]) <= max_tokens:
                lo = mid
            else:
                hi = mid - 1
        if lo > 0:
            return text[:ends[lo - 1]]

        stripped = text.lstrip()
        lo, hi = 1, len(stripped)
        while lo < hi:
            mid = (lo + hi + 1) // 2
            if self.count(stripped[:mid]) <= max_tokens:
                lo = mid
            else:
                hi = mid - 1
        return stripped[:lo]

    def truncate_to_fit(
        self,
        text: str,
        max_tokens: int,
        suffix: str = "..."
    ) -> str:
        """
        Truncate text to fit within max_tokens, adding suffix if truncated.

        Args:
            text: Text to truncate
            max_tokens: Maximum tokens including suffix
            suffix: Suffix to add if truncated

        Returns:
            Truncated text with suffix if needed
        """
        if self.count(text) <= max_tokens:
            return text

        available = max_tokens - self.count(suffix)
        if available <= 0:
            return self.truncate(text, max_tokens)

        # Suffix is glued to the last word, so it adds no extra word
        truncated = self.truncate(text, available).rstrip()
        while truncated and self.count(truncated + suffix) > max_tokens:
            truncated = self.truncate(truncated, self.count(truncated) - 1).rstrip()
        if not truncated:
            return self.truncate(text, max_tokens)
        return truncated + suffix

    def split_by_tokens(self, text: str, chunk_size: int) -> List[str]:
        """
        Split text into consecutive chunks of at most chunk_size tokens.

        Args:
            text: Text to split
            chunk_size: Target tokens per chunk

        Returns:
            List of text chunks
        """
        if chunk_size <= 0 or self.count(text) <= chunk_size:
            return [text] if text else []

        chunks = []
        remaining = text.strip()
        while remaining:
            chunk = self.truncate(remaining, chunk_size)
            chunks.append(chunk.strip())
            remaining = remaining[len(chunk):].strip()
        return chunks


class HeuristicTokenCounter(TokenCounter):
    """
    Token estimate from characters and words.

    ``max(ceil(chars / chars_per_token), words)``: the character ratio
    approximates subword tokenizers on prose, and the word floor keeps
    short or whitespace-heavy text from under-counting. Both terms grow
    when text is appended, so the estimate is monotone.
    """

    name = "heuristic"

    def __init__(self, chars_per_token: float = 4.0):
        """
        Initialize with characters per token ratio.

        Args:
            chars_per_token: Average characters per token (default: 4.0)
        """
        if chars_per_token <= 0:
            raise ValueError("chars_per_token must be positive")
        self.chars_per_token = chars_per_token

    def count(self, text: str) -> int:
        """Count tokens using the character ratio with a word floor."""
        if not isinstance(text, str) or not text:
            return 0
        by_chars = math.ceil(len(text) / self.chars_per_token)
        by_words = len(text.split())
        return max(by_chars, by_words)
