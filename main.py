#!/usr/bin/env python3
"""Revenue intelligence CLI - gather the intelligence package for one assessment.

Usage:
    # Bundled local database
    python main.py --business-type "Marketing Agency" --challenge "manual lead qualification" \
        --stack "HubSpot, Slack" --investment "Quick Win"

    # Hosted intelligence API, package written to ./outputs
    python main.py --business-type SaaS --challenge "proposal generation" --backend http --output ./outputs
"""

import sys
import json
from datetime import datetime
from pathlib import Path
from typing import Optional

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
    from rich.panel import Panel
    from rich.table import Table
except ImportError:
    print("Missing dependencies. Run: pip install click rich")
    sys.exit(1)

from config import settings
from contracts import AssessmentContext, IntelligencePackage
from librarian import LocalIntelligenceRetriever, get_retriever, list_retrievers
from log_setup import configure_logging
from orchestrator import IntelligenceOrchestrator


console = Console()


def write_package(package: IntelligencePackage, output_dir: str) -> Path:
    """Write the package as JSON into output_dir.

    Args:
        package: Package to write
        output_dir: Target directory (created if missing)

    Returns:
        Path of the written file
    """
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    path = out / f"intelligence_{package.metadata.icp}_{stamp}.json"
    path.write_text(json.dumps(package.model_dump(mode="json"), indent=2), encoding="utf-8")
    return path


def render_package(package: IntelligencePackage, show_quality: bool = False) -> None:
    """Print a summary of the package."""
    meta = package.metadata
    source = "[yellow]curated fallback blended in[/yellow]" if meta.using_fallback else "[green]live[/green]"
    console.print(Panel.fit(
        f"[bold]ICP:[/bold] {meta.icp}    [bold]Data:[/bold] {source}\n"
        f"[bold]Data points:[/bold] {meta.industry_data_points}    "
        f"[bold]Implementations:[/bold] {meta.successful_implementations}",
        title="Intelligence Package",
        border_style="blue",
    ))

    if package.tools:
        table = Table(title="Recommended tools")
        table.add_column("Tool")
        table.add_column("Category")
        table.add_column("Stack fit", justify="right")
        table.add_column("Effort")
        table.add_column("Why")
        for tool in package.tools:
            fit = f"{tool.stack_compatibility:.0%}" if tool.stack_compatibility is not None else "-"
            table.add_row(
                tool.name,
                tool.category,
                fit,
                tool.effort_estimate or "-",
                tool.recommendation_reason or "",
            )
        console.print(table)

    for pattern in package.patterns:
        console.print(
            f"[bold]Pattern:[/bold] {pattern.name} "
            f"[dim]({pattern.estimated_timeline or pattern.typical_timeline}, {pattern.typical_cost_range})[/dim]"
        )

    costs = package.costs
    console.print(f"\n[bold]Costs:[/bold] median {costs.median} | custom {costs.custom_build} | SaaS {costs.saas_range}")

    insights = package.insights
    if insights.primary_recommendation:
        console.print(f"[bold]Recommendation:[/bold] {insights.primary_recommendation}")
    if insights.quick_wins:
        console.print(f"[bold]Quick wins:[/bold] {', '.join(insights.quick_wins)}")
    if insights.risk_factors:
        console.print(f"[bold]Risks:[/bold] {', '.join(insights.risk_factors)}")
    if insights.long_term_strategy:
        console.print(f"[bold]Long term:[/bold] {insights.long_term_strategy}")

    if show_quality:
        console.print(f"\n[bold]Quality score:[/bold] {meta.quality_score:.2f}")
        console.print(f"[bold]Data freshness:[/bold] {meta.data_freshness:.2f}")
        for issue in meta.quality_issues:
            console.print(f"  [yellow]- {issue}[/yellow]")
        if meta.failed_streams:
            console.print(f"  [red]Failed streams:[/red] {', '.join(meta.failed_streams)}")


@click.command()
@click.option(
    "--business-type", "-t",
    default=None,
    help="Business type label, e.g. 'Marketing Agency', 'ITSM', 'SaaS'"
)
@click.option(
    "--challenge", "-c",
    default=None,
    help="Primary revenue challenge, e.g. 'manual lead qualification'"
)
@click.option(
    "--stack", "-s",
    default=None,
    help="Comma-separated solution stack, e.g. 'HubSpot, Slack'"
)
@click.option(
    "--investment", "-i",
    type=click.Choice(["Quick Win", "Transformation", "Enterprise"]),
    default=None,
    help="Investment level (default: Quick Win)"
)
@click.option(
    "--backend", "-b",
    type=click.Choice(list_retrievers()),
    default=None,
    help=f"Retrieval backend (default: {settings.retriever_backend})"
)
@click.option(
    "--data", "data_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Local intelligence JSON database (local backend only). The bundled one is a "
         "snapshot and reads as stale once its updated_at is more than 14 days old"
)
@click.option(
    "--output", "-o", "output_dir",
    default=None,
    help="Write the package JSON into this directory"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Verbose output"
)
@click.option(
    "--show-quality",
    is_flag=True,
    help="Show quality score, issues and failed streams"
)
def main(
    business_type: Optional[str],
    challenge: Optional[str],
    stack: Optional[str],
    investment: Optional[str],
    backend: Optional[str],
    data_path: Optional[str],
    output_dir: Optional[str],
    verbose: bool,
    show_quality: bool,
):
    """Revenue intelligence: tools, patterns, benchmarks, costs and trends for a report."""
    if verbose:
        configure_logging("DEBUG", handler=RichHandler(console=console, show_path=False))
    else:
        configure_logging("WARNING")

    if data_path and (backend or settings.retriever_backend) == "local":
        retriever = LocalIntelligenceRetriever(data_path=data_path)
    else:
        retriever = get_retriever(backend)

    if not retriever.is_available():
        console.print(f"[yellow]Warning:[/yellow] backend '{retriever.name}' is not available; curated data will be used")

    assessment = AssessmentContext(
        business_type=business_type,
        revenue_challenge=challenge,
        solution_stack=stack,
        investment_level=investment,
    )

    with console.status("Gathering intelligence..."):
        package = IntelligenceOrchestrator(retriever=retriever).gather_for_report(assessment)

    render_package(package, show_quality=show_quality)

    if output_dir:
        path = write_package(package, output_dir)
        console.print(f"\n[bold]Package saved to:[/bold] {path}")


if __name__ == "__main__":
    main()
