"""Main CLI entry point."""

import click
from rich.console import Console

from .commands import (
    analyze,
    enhance,
    variations,
    platforms,
    platform,
    tokens,
)
from ..core.config import get_settings
from ..core.logging_config import configure_logging

console = Console()


@click.group()
@click.version_option(version="1.0.0", prog_name="promptforge")
@click.option("--log-level", default=None, help="Logging level (default: from settings)")
def cli(log_level):
    """PromptForge - Prompt analysis and enhancement.

    Analyze prompts, enhance them for a target platform and compare
    scored variations.

    \b
    Examples:
        promptforge analyze "write code"
        promptforge enhance "write code" -p claude-sonnet --resolve
        promptforge variations "write code" -p chatgpt-4 -c 3
        promptforge tokens "Your prompt" --compare

    Use --help on any command for more details.
    """
    settings = get_settings()
    # Plain text on the terminal; JSON is for the server
    configure_logging(log_level or settings.logging.level, "text")


# Analysis commands
cli.add_command(analyze)

# Enhancement commands
cli.add_command(enhance)
cli.add_command(variations)

# Catalog and token commands
cli.add_command(platforms)
cli.add_command(platform)
cli.add_command(tokens)


@cli.command()
@click.option("-h", "--host", default=None, help="Host to bind to (default: from settings)")
@click.option("-p", "--port", default=None, type=int, help="Port to listen on (default: from settings)")
@click.option("--reload", is_flag=True, help="Enable auto-reload")
@click.option("-w", "--workers", default=1, type=int, help="Number of workers")
def serve(host, port, reload, workers):
    """Start the REST API server.

    Example:

        promptforge serve --port 8080 --reload
    """
    api = get_settings().api
    host = host or api.host
    port = port or api.port

    console.print("[bold]Starting PromptForge API server...[/bold]")
    console.print(f"  Host: {host}")
    console.print(f"  Port: {port}")
    console.print(f"  Workers: {workers}")
    console.print(f"  Reload: {'Yes' if reload else 'No'}")
    console.print(f"\n[dim]API docs available at http://{host}:{port}/docs[/dim]\n")

    from ..api import run_server
    run_server(host=host, port=port, reload=reload, workers=workers)


@cli.command()
def info():
    """Show information about PromptForge."""
    from rich.panel import Panel
    from ..platforms import catalog

    info_text = f"""[bold]PromptForge[/bold] - Prompt analysis and enhancement

[bold]Features:[/bold]
  • [cyan]Analysis[/cyan]: Intent, domain, complexity, gaps, conflicts and quality score
  • [cyan]Enhancement[/cyan]: Platform-formatted prompts within the token budget
  • [cyan]Variations[/cyan]: Conservative to aggressive rewrites, scored and explained
  • [cyan]Tokens[/cyan]: Token estimates and cost comparison

[bold]Platforms:[/bold] {len(catalog)} across {len(catalog.categories())} categories

[bold]Deployment:[/bold]
  • Python SDK: import promptforge
  • REST API: promptforge serve
  • CLI: promptforge <command>

[bold]Documentation:[/bold]
  API Docs: http://localhost:8000/docs (when server running)
  CLI Help: promptforge --help
  Command Help: promptforge <command> --help"""

    console.print(Panel(info_text, title="PromptForge v1.0.0", border_style="green"))


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
