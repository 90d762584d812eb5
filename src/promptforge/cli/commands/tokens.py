"""Token counting CLI command."""

import click
from rich.table import Table

from .common import console, read_prompt, report_error
from ...core.exceptions import PromptForgeError
from ...platforms import catalog
from ...tokenization import compare_costs, count_tokens, estimate_cost, format_cost


@click.command()
@click.argument("text", required=False)
@click.option("-f", "--file", "input_file", type=click.Path(exists=True), help="Read text from file")
@click.option("-p", "--platform", "platform_id", help="Estimate cost for this platform")
@click.option("--compare", is_flag=True, help="Compare the cost across all platforms")
def tokens(text, input_file, platform_id, compare):
    """Estimate token count and cost.

    Examples:

        promptforge tokens "Your prompt here..."

        promptforge tokens -f prompt.txt -p claude-sonnet

        promptforge tokens "..." --compare
    """
    text = read_prompt(text, input_file)
    count = count_tokens(text)
    console.print(f"[bold]Tokens:[/bold] {count}")
    console.print(f"[bold]Characters:[/bold] {len(text)}")

    if platform_id:
        try:
            platform = catalog.require(platform_id)
        except PromptForgeError as e:
            report_error(e)
        cost = estimate_cost(count, platform.id)
        console.print(f"[bold]Cost ({platform.name}):[/bold] {format_cost(cost)}")
        if count > platform.max_tokens:
            console.print(f"[yellow]Warning:[/yellow] exceeds the {platform.max_tokens}-token limit")

    if compare:
        report = compare_costs(count, catalog.platforms)
        table = Table(title="Cost Comparison")
        table.add_column("Platform", style="cyan")
        table.add_column("Cost", style="green", justify="right")
        table.add_column("Savings", justify="right")
        for comparison in report.comparisons:
            table.add_row(
                comparison.platform_name,
                format_cost(comparison.estimated_cost),
                format_cost(comparison.savings),
            )
        console.print(table)
        for recommendation in report.recommendations:
            console.print(f"  - {recommendation}")
