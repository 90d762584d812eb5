"""Enhancement CLI commands."""

import json

import click
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .common import TONE_CHOICES, console, read_optional_file, read_prompt, report_error
from ...core.exceptions import PromptForgeError


@click.command()
@click.argument("prompt", required=False)
@click.option("-p", "--platform", "platform_id", default="chatgpt-4", show_default=True, help="Target platform id")
@click.option("-f", "--file", "input_file", type=click.Path(exists=True), help="Read prompt from file")
@click.option("-o", "--output", "output_file", type=click.Path(), help="Write result to file")
@click.option("-t", "--tone", type=click.Choice(TONE_CHOICES), default="professional", help="Tone of the task text")
@click.option("-n", "--few-shot", "few_shot_count", default=0, type=click.IntRange(0, 10), help="Few-shot examples")
@click.option("-r", "--resolve", "resolve_ambiguity", is_flag=True, help="Fill missing components and settle conflicts")
@click.option("-s", "--system", "system_message", help="System message to include")
@click.option("-d", "--dataset", "dataset_file", type=click.Path(exists=True), help="File with reference data")
@click.option("--platform-system", is_flag=True, help="Use the platform's system prompt template")
@click.option("-v", "--verbose", is_flag=True, help="Show detailed output")
def enhance(
    prompt, platform_id, input_file, output_file, tone, few_shot_count,
    resolve_ambiguity, system_message, dataset_file, platform_system, verbose
):
    """Enhance a prompt for a target platform.

    Examples:

        promptforge enhance "write code" -p claude-sonnet

        promptforge enhance -f prompt.txt -p cursor-ai --resolve -n 2

        promptforge enhance "..." --tone spartan -v
    """
    from ... import PromptForge

    prompt = read_prompt(prompt, input_file)
    forge = PromptForge()

    try:
        with console.status("[bold green]Enhancing..."):
            result = forge.enhance(
                prompt,
                platform_id,
                tone=tone,
                few_shot_count=few_shot_count,
                resolve_ambiguity=resolve_ambiguity,
                system_message=system_message,
                dataset_content=read_optional_file(dataset_file),
                use_platform_system_prompt=platform_system,
            )
    except PromptForgeError as e:
        report_error(e)

    # Output
    if output_file:
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(result.text)
        console.print(f"[green]Saved to:[/green] {output_file}")
    elif verbose:
        console.print(Panel(Text(result.text), title="Enhanced Prompt", expand=False))
    else:
        click.echo(result.text)

    if verbose:
        platform = forge.platform(platform_id)
        table = Table(title="Enhancement Results")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green")

        table.add_row("Platform", f"{platform.name} ({platform.api_format.value})")
        table.add_row("Tokens", f"{result.token_count} / {platform.max_tokens}")
        table.add_row("Sections", ", ".join(result.sections))
        table.add_row("Tone Rules", ", ".join(result.tone_rules) or "None")
        table.add_row("Few-shot Examples", str(result.few_shot_count))
        table.add_row("Trimmed", ", ".join(result.trimmed) or "None")
        console.print(table)

        improvements = forge.explain(prompt, result.text, platform)
        if improvements:
            console.print("\n[bold]Improvements:[/bold]")
            for statement in improvements:
                console.print(f"  - {statement}")


@click.command()
@click.argument("prompt", required=False)
@click.option("-p", "--platform", "platform_id", default="chatgpt-4", show_default=True, help="Target platform id")
@click.option("-f", "--file", "input_file", type=click.Path(exists=True), help="Read prompt from file")
@click.option("-c", "--count", "variation_count", default=2, type=click.IntRange(1, 5), help="Number of variations")
@click.option("-t", "--tone", type=click.Choice(TONE_CHOICES), default="professional", help="Requested tone")
@click.option("-n", "--few-shot", "few_shot_count", default=0, type=click.IntRange(0, 10), help="Few-shot examples")
@click.option("-s", "--system", "system_message", help="System message to include")
@click.option("-d", "--dataset", "dataset_file", type=click.Path(exists=True), help="File with reference data")
@click.option("--json", "as_json", is_flag=True, help="Print variations as JSON")
def variations(
    prompt, platform_id, input_file, variation_count, tone, few_shot_count,
    system_message, dataset_file, as_json
):
    """Generate scored variations of a prompt.

    Variations go from conservative to aggressive; each one is
    re-analyzed and compared with the original.

    Example:

        promptforge variations "write code" -p claude-sonnet -c 3
    """
    from ... import PromptForge

    prompt = read_prompt(prompt, input_file)

    try:
        with console.status("[bold green]Generating variations..."):
            report = PromptForge().report(
                prompt,
                platform_id,
                variation_count=variation_count,
                tone=tone,
                few_shot_count=few_shot_count,
                system_message=system_message,
                dataset_content=read_optional_file(dataset_file),
            )
    except PromptForgeError as e:
        report_error(e)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        return

    baseline = report.original_analysis
    console.print(
        f"[bold]Original:[/bold] quality {baseline.quality_score}/100, "
        f"intent {baseline.intent.value}, complexity {baseline.complexity}/10"
    )

    for variation in report.enhanced_prompts:
        meta = variation.pattern_metadata
        title = (
            f"{variation.id} | {meta.enhancement_type.value} | tone {meta.tone.value} | "
            f"quality {variation.quality_score} ({variation.improvement:+d})"
        )
        console.print(Panel(Text(variation.enhanced), title=Text(title), expand=False))
        for statement in variation.improvements:
            console.print(f"  - {statement}")

    best = report.best
    if best:
        console.print(f"\n[bold green]Best variation:[/bold green] {best.id}")
