"""Shared pytest fixtures for PromptForge tests."""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from promptforge.core.types import Platform, ApiFormat  # noqa: E402


# Sample prompts for testing
@pytest.fixture
def short_prompt():
    """The classic underspecified prompt."""
    return "write code"


@pytest.fixture
def code_prompt():
    """A code-related prompt."""
    return "Write a Python function that implements a binary search algorithm"


@pytest.fixture
def conflict_prompt():
    """A prompt asking for two registers at once."""
    return "Write a product announcement. Be very formal, but keep it super casual."


@pytest.fixture
def structured_prompt():
    """A prompt with role, context, format and constraints."""
    return (
        "You are a senior data analyst. Our team is preparing the quarterly review "
        "for the board. Summarize the sales results as a table with one row per region. "
        "Do not include personal customer data."
    )


@pytest.fixture
def long_prompt():
    """A long prompt for budget testing."""
    sentence = (
        "Explain how the billing service reconciles invoices with payment records "
        "and describe every failure mode you can think of"
    )
    return ". ".join([sentence] * 12) + "."


@pytest.fixture
def empty_prompt():
    """An empty prompt."""
    return ""


@pytest.fixture
def sample_prompts(short_prompt, code_prompt, conflict_prompt, structured_prompt):
    """Collection of sample prompts."""
    return {
        "short": short_prompt,
        "code": code_prompt,
        "conflict": conflict_prompt,
        "structured": structured_prompt,
    }


# Ad-hoc platforms outside the catalog
@pytest.fixture
def code_platform():
    """A plain-text code platform with a 4000-token budget."""
    return Platform(
        id="code-helper",
        name="Code Helper",
        icon="💻",
        category="Code-Specific",
        api_format=ApiFormat.TEXT,
        max_tokens=4000,
        special_requirements=("Include file paths and code context",),
    )


@pytest.fixture
def tiny_platform():
    """A platform whose budget forces trimming."""
    return Platform(
        id="tiny",
        name="Tiny",
        icon="🔹",
        category="AI Assistants",
        api_format=ApiFormat.TEXT,
        max_tokens=30,
        special_requirements=("Answer in plain text",),
    )


@pytest.fixture
def fixed_clock():
    """Deterministic time source for variation ids."""
    return lambda: 1700000000.0
