"""
Command-line interface for the Product SEO Engine.

Two commands:
- generate: turn generator output into a compliant content record
- health: audit a product export and summarize content health
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .config import ComplianceConfig, HealthCheckConfig
from .engine import GenerationResult, build_content_record
from .health import ContentHealthAnalyzer
from .models import FieldStatus, HealthSummary, ProductDescriptor
from .product_loader import ProductLoadError, load_products, results_to_dataframe
from .profiles import profile_names

console = Console()

STATUS_STYLES = {
    FieldStatus.PASS: "green",
    FieldStatus.REPAIRED: "yellow",
    FieldStatus.WARNING: "red",
}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output.",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """
    Product SEO Engine - compliant product content and content health.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose)


@main.command()
@click.option("--name", "-n", required=True, help="Product name.")
@click.option(
    "--category",
    "-c",
    "categories",
    multiple=True,
    help="Product category name (repeatable).",
)
@click.option("--store-url", default="", help="Store base URL for internal links.")
@click.option(
    "--raw",
    "raw_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="File with labeled generator output. Reads stdin when omitted.",
)
@click.option("--permalink", "permalink_override", default=None, help="Literal permalink override.")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the record and report as JSON to this path.",
)
@click.option(
    "--lenient",
    is_flag=True,
    default=False,
    help="Skip word-count and density advisories.",
)
@click.pass_context
def generate(
    ctx: click.Context,
    name: str,
    categories: tuple[str, ...],
    store_url: str,
    raw_path: Optional[Path],
    permalink_override: Optional[str],
    output: Optional[Path],
    lenient: bool,
) -> None:
    """
    Build a compliant content record from generator output.

    Examples:

        seo-engine generate -n "UltraSound Pro Wireless Earbuds X200" -c Audio --raw out.txt

        cat out.txt | seo-engine generate -n "Desk Lamp" -o record.json
    """
    if raw_path is not None:
        raw_text = raw_path.read_text(encoding="utf-8")
    elif not sys.stdin.isatty():
        raw_text = sys.stdin.read()
    else:
        raw_text = ""

    descriptor = ProductDescriptor(name=name, categories=tuple(categories), store_url=store_url)
    config = ComplianceConfig.lenient() if lenient else ComplianceConfig()
    result = build_content_record(descriptor, raw_text, config, permalink_override=permalink_override)

    _display_generation(result, ctx.obj.get("verbose", False))

    if output:
        output.write_text(json.dumps(result.to_dict(), indent=2), encoding="utf-8")
        console.print(f"\n[bold green]Success![/bold green] Record saved to: {output}")


@main.command()
@click.option(
    "--products",
    "-p",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Product export (CSV or Excel).",
)
@click.option(
    "--plugin",
    type=click.Choice(profile_names(), case_sensitive=False),
    default="none",
    show_default=True,
    help="SEO plugin whose meta keys are read.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write per-product results as CSV to this path.",
)
@click.option("--min-meta-description", type=int, default=80, show_default=True,
              help="Characters below which a meta description is poor.")
@click.option("--min-short-words", type=int, default=10, show_default=True,
              help="Words below which a short description is poor.")
@click.option("--workers", type=int, default=1, show_default=True,
              help="Threads used to analyze products.")
@click.pass_context
def health(
    ctx: click.Context,
    products: Path,
    plugin: str,
    output: Optional[Path],
    min_meta_description: int,
    min_short_words: int,
    workers: int,
) -> None:
    """
    Audit stored products for SEO content completeness.

    Examples:

        seo-engine health -p products.csv --plugin rankmath -o health.csv
    """
    try:
        with console.status("[bold green]Loading products..."):
            product_list = load_products(products)
    except ProductLoadError as e:
        console.print(f"[red]Product loading error:[/red] {e}")
        sys.exit(1)

    try:
        config = HealthCheckConfig(
            min_meta_description_length=min_meta_description,
            min_short_description_words=min_short_words,
        )
    except ValueError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(1)

    analyzer = ContentHealthAnalyzer(config)
    results = analyzer.analyze_batch(product_list, plugin, max_workers=workers)
    summary = analyzer.summarize(results)

    _display_health(results, summary, ctx.obj.get("verbose", False))

    if output:
        results_to_dataframe(results).to_csv(output, index=False)
        console.print(f"\n[bold green]Success![/bold green] Results saved to: {output}")


def _display_generation(result: GenerationResult, verbose: bool) -> None:
    """Display record and compliance report."""
    console.print(Panel.fit(
        f"[bold blue]Content Record[/bold blue]\n"
        f"Primary keyword: [green]{result.primary_keyword}[/green]",
        border_style="blue",
    ))

    table = Table(title="Compliance Report", show_header=True)
    table.add_column("Field", style="cyan")
    table.add_column("Status")
    table.add_column("Detail")
    if verbose:
        table.add_column("Value", overflow="fold")

    for field_name, outcome in result.report.outcomes.items():
        style = STATUS_STYLES.get(outcome.status, "white")
        row = [field_name, f"[{style}]{outcome.status.value}[/{style}]", outcome.detail]
        if verbose:
            row.append(getattr(result.record, field_name, ""))
        table.add_row(*row)

    console.print(table)
    console.print(
        f"Keyword density: {result.density.density_percent:.2f}% "
        f"({result.density.count} occurrences / {result.density.word_count} words)"
    )


def _display_health(results: list, summary: HealthSummary, verbose: bool) -> None:
    """Display health summary."""
    summary_table = Table(title="Content Health Summary", show_header=True)
    summary_table.add_column("Metric", style="cyan")
    summary_table.add_column("Count", style="green")
    summary_table.add_row("Total products", str(summary.total))
    summary_table.add_row("Complete", str(summary.complete))
    summary_table.add_row("Needs attention (1+)", str(summary.needs_attention_one_plus))
    summary_table.add_row("Critical", str(summary.critical))
    console.print(summary_table)

    if summary.common_missing_fields:
        missing_table = Table(title="Most Common Missing Fields", show_header=True)
        missing_table.add_column("Field", style="cyan")
        missing_table.add_column("Products", style="yellow")
        for field_name, count in summary.common_missing_fields:
            missing_table.add_row(field_name, str(count))
        console.print(missing_table)

    if verbose:
        product_table = Table(title="Products", show_header=True)
        product_table.add_column("Product", style="cyan")
        product_table.add_column("Status")
        product_table.add_column("Score", style="green")
        for result in results:
            product_table.add_row(
                result.product_name, result.overall_status.value, str(result.seo_score)
            )
        console.print(product_table)


def run_cli() -> None:
    """Entry point for the CLI."""
    main()


if __name__ == "__main__":
    run_cli()
