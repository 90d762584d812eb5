"""Integration tests for the command line interface."""

import json
import logging

import pytest
from click.testing import CliRunner

from promptforge.cli.main import cli


@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI installs handlers on the root logger; put them back afterwards."""
    names = ("", "uvicorn", "uvicorn.error", "uvicorn.access", "fastapi")
    saved = {}
    for name in names:
        lg = logging.getLogger(name)
        saved[name] = (list(lg.handlers), lg.level, lg.propagate)
    yield
    for name, (handlers, level, propagate) in saved.items():
        lg = logging.getLogger(name)
        lg.handlers = handlers
        lg.setLevel(level)
        lg.propagate = propagate


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner, *args, **kwargs):
    """Run the CLI with INFO logs kept out of the output."""
    return runner.invoke(cli, ["--log-level", "WARNING", *args], **kwargs)


class TestCliBasics:
    """Tests for the CLI group."""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "promptforge" in result.output
        assert "1.0.0" in result.output

    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("analyze", "enhance", "variations", "platforms", "tokens", "serve"):
            assert command in result.output

    def test_info(self, runner):
        result = invoke(runner, "info")
        assert result.exit_code == 0
        assert "11 across 5 categories" in result.output


class TestAnalyzeCommand:
    """Tests for `promptforge analyze`."""

    def test_json(self, runner, short_prompt):
        result = invoke(runner, "analyze", short_prompt, "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["intent"] == "code"
        assert data["missing_components"] == ["role", "context", "format", "constraints"]

    def test_table(self, runner, conflict_prompt):
        result = invoke(runner, "analyze", conflict_prompt)
        assert result.exit_code == 0
        assert "Prompt Analysis" in result.output
        assert "Conflicts:" in result.output

    def test_from_file(self, runner, tmp_path, short_prompt):
        path = tmp_path / "prompt.txt"
        path.write_text(short_prompt, encoding="utf-8")
        result = invoke(runner, "analyze", "-f", str(path), "--json")
        assert json.loads(result.output)["token_count"] == 3

    def test_empty_prompt(self, runner):
        """Test a blank prompt aborts with a message."""
        result = invoke(runner, "analyze", "   ")
        assert result.exit_code == 1
        assert "No prompt provided" in result.output


class TestEnhanceCommand:
    """Tests for `promptforge enhance`."""

    def test_prints_enhanced_text(self, runner, short_prompt):
        result = invoke(runner, "enhance", short_prompt, "-p", "claude-sonnet", "--resolve")
        assert result.exit_code == 0
        assert "<instructions>" in result.output

    def test_tone_option(self, runner, short_prompt):
        result = invoke(runner, "enhance", short_prompt, "-t", "spartan")
        assert result.exit_code == 0
        assert "Tone: spartan." in result.output

    def test_output_file(self, runner, tmp_path, short_prompt):
        path = tmp_path / "enhanced.txt"
        result = invoke(runner, "enhance", short_prompt, "-o", str(path))
        assert result.exit_code == 0
        assert "Saved to:" in result.output
        assert path.read_text(encoding="utf-8").strip()

    def test_unknown_platform(self, runner, short_prompt):
        """Test unknown platforms abort and list the alternatives."""
        result = invoke(runner, "enhance", short_prompt, "-p", "nope")
        assert result.exit_code == 1
        assert "Unknown platform: nope" in result.output
        assert "Available platforms:" in result.output

    def test_invalid_tone(self, runner, short_prompt):
        result = invoke(runner, "enhance", short_prompt, "-t", "grumpy")
        assert result.exit_code == 2


class TestVariationsCommand:
    """Tests for `promptforge variations`."""

    def test_json(self, runner, short_prompt):
        result = invoke(runner, "variations", short_prompt, "-p", "chatgpt-4", "-c", "3", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["original_analysis"]["intent"] == "code"
        assert [p["pattern_metadata"]["enhancement_type"] for p in data["enhanced_prompts"]] == [
            "conservative",
            "balanced",
            "aggressive",
        ]

    def test_panels(self, runner, short_prompt):
        result = invoke(runner, "variations", short_prompt, "-c", "2")
        assert result.exit_code == 0
        assert "Best variation:" in result.output

    def test_count_out_of_range(self, runner, short_prompt):
        assert invoke(runner, "variations", short_prompt, "-c", "9").exit_code == 2


class TestCatalogCommands:
    """Tests for `promptforge platforms` and `promptforge platform`."""

    def test_platforms_json(self, runner):
        result = invoke(runner, "platforms", "--json")
        assert result.exit_code == 0
        assert len(json.loads(result.output)) == 11

    def test_platforms_by_category(self, runner):
        result = invoke(runner, "platforms", "-c", "Image Generation", "--json")
        assert [p["id"] for p in json.loads(result.output)] == ["midjourney", "dall-e-3"]

    def test_platforms_unknown_category(self, runner):
        result = invoke(runner, "platforms", "-c", "Nope")
        assert result.exit_code == 0
        assert "No platforms in category" in result.output

    def test_platform_detail(self, runner):
        result = invoke(runner, "platform", "claude-sonnet")
        assert result.exit_code == 0
        assert "Claude Sonnet" in result.output
        assert "Format: xml" in result.output

    def test_platform_unknown(self, runner):
        result = invoke(runner, "platform", "nope")
        assert result.exit_code == 1
        assert "Unknown platform: nope" in result.output


class TestTokensCommand:
    """Tests for `promptforge tokens`."""

    def test_count(self, runner):
        result = invoke(runner, "tokens", "hello world")
        assert result.exit_code == 0
        assert "Tokens: 3" in result.output
        assert "Characters: 11" in result.output

    def test_cost(self, runner):
        result = invoke(runner, "tokens", "hello world", "-p", "chatgpt-4")
        assert "Cost (ChatGPT-4): $0.0000" in result.output

    def test_compare(self, runner):
        result = invoke(runner, "tokens", "hello world", "--compare")
        assert result.exit_code == 0
        assert "Cost Comparison" in result.output
