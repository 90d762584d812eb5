"""Helpers shared by CLI commands."""

import click
from rich.console import Console

from ...core.exceptions import InvalidPlatformError, PromptForgeError

console = Console()

TONE_CHOICES = ["professional", "casual", "academic", "spartan", "laconic", "sarcastic"]


def read_prompt(prompt, input_file):
    """Prompt from the argument, ``--file`` or stdin, in that order."""
    if input_file:
        with open(input_file, encoding="utf-8") as f:
            prompt = f.read()
    elif not prompt:
        prompt = click.get_text_stream("stdin").read()

    if not prompt or not prompt.strip():
        console.print("[red]Error:[/red] No prompt provided")
        raise click.Abort()
    return prompt


def read_optional_file(path):
    if not path:
        return None
    with open(path, encoding="utf-8") as f:
        return f.read()


def report_error(error: PromptForgeError) -> None:
    """Print a library error and abort the command."""
    console.print(f"[red]Error:[/red] {error.message}")
    if isinstance(error, InvalidPlatformError) and error.available:
        console.print(f"[dim]Available platforms: {', '.join(error.available)}[/dim]")
    raise click.Abort()
