"""Platform catalog CLI commands."""

import json

import click
from rich.panel import Panel
from rich.table import Table

from .common import console, report_error
from ...core.exceptions import PromptForgeError
from ...platforms import catalog


@click.command()
@click.option("-c", "--category", help="Only list platforms in this category")
@click.option("--json", "as_json", is_flag=True, help="Print platforms as JSON")
def platforms(category, as_json):
    """List the supported AI platforms.

    Example:

        promptforge platforms --category "Image Generation"
    """
    selected = catalog.by_category(category) if category else list(catalog.platforms)

    if as_json:
        click.echo(json.dumps([p.to_dict() for p in selected], indent=2))
        return

    if not selected:
        console.print(f"[yellow]No platforms in category:[/yellow] {category}")
        console.print(f"[dim]Categories: {', '.join(catalog.categories())}[/dim]")
        return

    table = Table(title="Platforms")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Format", style="green")
    table.add_column("Max Tokens", justify="right")

    for p in selected:
        table.add_row(p.id, f"{p.icon} {p.name}", p.category, p.api_format.value, str(p.max_tokens))

    console.print(table)


@click.command()
@click.argument("platform_id")
def platform(platform_id):
    """Show one platform in detail.

    Example:

        promptforge platform claude-sonnet
    """
    try:
        p = catalog.require(platform_id)
    except PromptForgeError as e:
        report_error(e)

    lines = [
        f"[bold]Category:[/bold] {p.category}",
        f"[bold]Format:[/bold] {p.api_format.value}",
        f"[bold]Max tokens:[/bold] {p.max_tokens}",
    ]
    if p.description:
        lines.append(f"[bold]Description:[/bold] {p.description}")
    if p.special_requirements:
        lines.append("[bold]Requirements:[/bold]")
        lines.extend(f"  • {req}" for req in p.special_requirements)

    console.print(Panel("\n".join(lines), title=f"{p.icon} {p.name}", border_style="green"))
