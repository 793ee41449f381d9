"""CLI for the Vendor Matching Engine.

Provides command-line interface for ranking vendors against an
assessment and prioritizing its compliance gaps.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import BaseModel
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import find_config_file, load_config, save_default_config
from .engine import (
    VendorMatchingEngine,
    load_gaps,
    load_priorities,
    load_vendors,
    validate_priorities,
    validate_priorities_file,
    validate_vendors_file,
)
from .schema import PrioritizedGap, Severity, VendorMatchScore

console = Console()
err_console = Console(stderr=True)


@click.group()
@click.version_option(version="1.0.0", prog_name="vendor-matcher")
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True),
    help="Path to matcher configuration YAML"
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug logging"
)
def main(config_path: Optional[str], debug: bool):
    """Compliance Vendor Matching Engine.

    Ranks vendors against an assessment's gaps and buyer priorities,
    and prioritizes the gaps for remediation.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    path = Path(config_path) if config_path else find_config_file()
    if path:
        load_config(path)


@main.command("match")
@click.option(
    "--vendors", "-V",
    required=True,
    type=click.Path(exists=True),
    help="Path to vendors JSON file"
)
@click.option(
    "--priorities", "-p",
    required=True,
    type=click.Path(exists=True),
    help="Path to assessment priorities JSON file"
)
@click.option(
    "--gaps", "-g",
    type=click.Path(exists=True),
    help="Path to assessment gaps JSON file (default: no gaps)"
)
@click.option(
    "--limit", "-n",
    type=int,
    help="Maximum number of vendors to return"
)
@click.option(
    "--min-score",
    type=float,
    help="Minimum total score (0-140) to include a vendor"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Output file for JSON results"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show score breakdowns"
)
def match_cmd(
    vendors: str,
    priorities: str,
    gaps: Optional[str],
    limit: Optional[int],
    min_score: Optional[float],
    out: Optional[str],
    json_output: bool,
    verbose: bool,
):
    """Rank vendors against an assessment.

    Examples:
        vendor-matcher match -V vendors.json -p priorities.json -g gaps.json
        vendor-matcher match -V vendors.json -p priorities.json -n 5 -v
    """
    try:
        vendor_list = load_vendors(vendors)
        assessment_priorities = load_priorities(priorities)
        gap_list = load_gaps(gaps) if gaps else []

        _, issues = validate_priorities(assessment_priorities)

        engine = VendorMatchingEngine()
        matches = engine.match_vendors(
            vendor_list,
            assessment_priorities,
            gap_list,
            limit=limit,
            min_score=min_score,
        )

        if json_output:
            for issue in issues:
                err_console.print(f"[yellow]⚠ {issue}[/yellow]")
            output_json(matches, out)
        else:
            console.print("\n[bold blue]Vendor Matching Engine[/bold blue]")
            console.print(f"Vendors: {vendors} ({len(vendor_list)} vendors)")
            console.print(f"Gaps: {len(gap_list)}")
            console.print()
            for issue in issues:
                console.print(f"[yellow]⚠ {issue}[/yellow]")
            display_matches(matches, verbose)
            if out:
                output_json(matches, out)
                console.print(f"\n[green]Results saved to {out}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("gaps")
@click.option(
    "--gaps", "-g",
    required=True,
    type=click.Path(exists=True),
    help="Path to assessment gaps JSON file"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Output file for JSON results"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text"
)
def gaps_cmd(gaps: str, out: Optional[str], json_output: bool):
    """Prioritize compliance gaps for remediation.

    Examples:
        vendor-matcher gaps -g gaps.json
        vendor-matcher gaps -g gaps.json -j -o prioritized.json
    """
    try:
        engine = VendorMatchingEngine()
        prioritized = engine.prioritize_gaps(load_gaps(gaps))

        if json_output:
            output_json(prioritized, out)
        else:
            display_gaps(prioritized)
            if out:
                output_json(prioritized, out)
                console.print(f"\n[green]Results saved to {out}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("validate")
@click.option(
    "--vendors", "-V",
    type=click.Path(),
    help="Path to vendors JSON file"
)
@click.option(
    "--priorities", "-p",
    type=click.Path(),
    help="Path to assessment priorities JSON file"
)
def validate_cmd(vendors: Optional[str], priorities: Optional[str]):
    """Validate vendors and/or priorities files.

    Examples:
        vendor-matcher validate -V vendors.json
        vendor-matcher validate -p priorities.json
        vendor-matcher validate -V vendors.json -p priorities.json
    """
    if not vendors and not priorities:
        console.print("[yellow]Please specify --vendors and/or --priorities to validate[/yellow]")
        return

    all_valid = True

    if vendors:
        is_valid, issues = validate_vendors_file(vendors)
        if is_valid:
            console.print(f"[green]✓ Vendors valid: {vendors}[/green]")
        else:
            console.print(f"[red]✗ Vendors invalid: {vendors}[/red]")
            for issue in issues:
                console.print(f"  - {issue}")
            all_valid = False

    if priorities:
        is_valid, issues = validate_priorities_file(priorities)
        if is_valid:
            console.print(f"[green]✓ Priorities valid: {priorities}[/green]")
        else:
            console.print(f"[red]✗ Priorities invalid: {priorities}[/red]")
            for issue in issues:
                console.print(f"  - {issue}")
            all_valid = False

    sys.exit(0 if all_valid else 1)


@main.command("init-config")
@click.option(
    "--out", "-o",
    default="matcher-config.yaml",
    help="Output path for the configuration file"
)
@click.option(
    "--force", "-f",
    is_flag=True,
    help="Overwrite existing config file"
)
def init_config_cmd(out: str, force: bool):
    """Generate a default matcher configuration file.

    Creates a YAML configuration file with all available settings
    and their default values.

    Example:
        vendor-matcher init-config --out my-config.yaml
    """
    out_path = Path(out)
    if out_path.exists() and not force:
        console.print(f"[red]Error:[/red] Config file already exists: {out}")
        console.print("Use --force to overwrite")
        sys.exit(1)

    try:
        save_default_config(out_path)
        console.print(f"[green]✓[/green] Config file created: {out}")
        console.print("\nThis file configures:")
        console.print("  • scoring_weights - Points for each base score dimension")
        console.print("  • priority_boost - Points for priority, feature, deployment and speed alignment")
        console.print("  • match_tiers - Summary tier thresholds and labels")
        console.print("  • gap_prioritization - Severity, priority, effort and cost thresholds")
        console.print("\nThe matcher will look for config in this order:")
        console.print("  1. --config option")
        console.print("  2. VENDOR_MATCHER_CONFIG environment variable")
        console.print("  3. ./matcher-config.yaml or ./matcher-config.yml (current directory)")
        console.print("  4. ~/.config/vendor-matcher/config.yaml")
    except Exception as e:
        console.print(f"[red]Error creating config:[/red] {e}")
        sys.exit(1)


def display_matches(matches: list[VendorMatchScore], verbose: bool):
    """Display ranked vendors in formatted text."""
    if not matches:
        console.print("[yellow]No vendors matched.[/yellow]")
        return

    top = matches[0]
    console.print(Panel(
        f"Top Match: [bold cyan]{top.vendor_name or top.vendor_id or 'Unnamed vendor'}[/bold cyan]\n"
        f"Score: [bold]{top.total_score:.0f}[/bold] / 140\n"
        f"{top.summary}",
        title="Matching Summary",
    ))

    table = Table(title="Ranked Vendors")
    table.add_column("#", justify="right")
    table.add_column("Vendor", style="cyan")
    table.add_column("Base", justify="right")
    table.add_column("Boost", justify="right")
    table.add_column("Total", justify="right", style="bold")
    table.add_column("Summary")

    for i, match in enumerate(matches, 1):
        table.add_row(
            str(i),
            match.vendor_name or match.vendor_id or "-",
            f"{match.base_score.total_base:.0f}",
            f"{match.priority_boost.total_boost:.0f}",
            f"{match.total_score:.0f}",
            match.summary,
        )

    console.print(table)

    if verbose:
        for i, match in enumerate(matches, 1):
            base = match.base_score
            boost = match.priority_boost
            console.print(f"\n  [bold cyan]{i}. {match.vendor_name or match.vendor_id or '-'}[/bold cyan]")
            console.print(
                f"     Base: coverage {base.risk_area_coverage:.1f}, size {base.size_fit:.0f}, "
                f"geo {base.geo_coverage:.1f}, price {base.price_score:.0f}"
            )
            console.print(
                f"     Boost: priority {boost.top_priority_boost:.0f}, features {boost.feature_boost:.0f}, "
                f"deployment {boost.deployment_boost:.0f}, speed {boost.speed_boost:.0f}"
            )
            for reason in match.match_reasons:
                console.print(f"     [green]•[/green] {reason}")


def display_gaps(gaps: list[PrioritizedGap]):
    """Display prioritized gaps in formatted text."""
    if not gaps:
        console.print("[green]No gaps to prioritize.[/green]")
        return

    severity_color = {
        Severity.CRITICAL: "red",
        Severity.HIGH: "yellow",
        Severity.MEDIUM: "cyan",
        Severity.LOW: "green",
    }

    table = Table(title=f"Prioritized Gaps ({len(gaps)})")
    table.add_column("Score", justify="right", style="bold")
    table.add_column("Category")
    table.add_column("Gap")
    table.add_column("Severity")
    table.add_column("Priority")
    table.add_column("Effort")
    table.add_column("Cost")

    for gap in gaps:
        color = severity_color.get(gap.severity, "white")
        table.add_row(
            str(gap.priority_score),
            gap.category,
            gap.title or gap.id or "-",
            f"[{color}]{gap.severity.value}[/{color}]",
            gap.priority.value,
            gap.effort.value,
            gap.cost.value,
        )

    console.print(table)


def output_json(results: list[BaseModel], out_path: Optional[str]):
    """Output results as JSON."""
    json_str = json.dumps([r.model_dump(mode="json") for r in results], indent=2)

    if out_path:
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(json_str)
    else:
        print(json_str)


if __name__ == "__main__":
    main()
