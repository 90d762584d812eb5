"""Analysis CLI command."""

import json

import click
from rich.table import Table

from .common import console, read_prompt
from ...analysis import PromptAnalyzer, complexity_breakdown
from ...analysis.patterns import COMPONENT_LABELS


@click.command()
@click.argument("prompt", required=False)
@click.option("-f", "--file", "input_file", type=click.Path(exists=True), help="Read prompt from file")
@click.option("--json", "as_json", is_flag=True, help="Print the analysis as JSON")
@click.option("-v", "--verbose", is_flag=True, help="Show the complexity breakdown and intent signals")
def analyze(prompt, input_file, as_json, verbose):
    """Analyze a prompt without modifying it.

    Shows intent, domain, complexity, missing components, conflicting
    directives and a quality score.

    Example:

        promptforge analyze "write code"
    """
    prompt = read_prompt(prompt, input_file)
    result = PromptAnalyzer().analyze(prompt)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    table = Table(title="Prompt Analysis", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Intent", f"{result.intent.value} ({result.intent_confidence:.0%})")
    table.add_row("Domain", result.domain.value)
    table.add_row("Complexity", f"{result.complexity}/10")
    table.add_row("Quality Score", f"{result.quality_score}/100")
    table.add_row("Tokens", str(result.token_count))
    table.add_row("Pain Point", result.pain_point)
    console.print(table)

    if result.missing_components:
        console.print("\n[bold yellow]Missing:[/bold yellow]")
        for component in result.missing_components:
            console.print(f"  - {COMPONENT_LABELS.get(component, component)}")

    if result.conflicts:
        console.print("\n[bold red]Conflicts:[/bold red]")
        for conflict in result.conflicts:
            console.print(f"  - {conflict}")

    if verbose:
        breakdown = complexity_breakdown(prompt)
        console.print("\n[bold]Complexity Breakdown:[/bold]")
        for name, points in breakdown.to_dict().items():
            console.print(f"  {name}: {points}")
        if result.signals:
            console.print("\n[bold]Intent Signals:[/bold]")
            for label, hits in result.signals.items():
                console.print(f"  {label}: {', '.join(str(h) for h in hits)}")
