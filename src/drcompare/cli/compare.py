"""CLI commands for running the algorithm comparison."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from omegaconf import DictConfig
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from drcompare.config import config_to_yaml, load_config, validate_config
from drcompare.evaluate.ranking import algorithm_leaderboard
from drcompare.exceptions import DrCompareError
from drcompare.logging import configure_logging_from_config
from drcompare.pipeline import export_artifacts, run_comparison

logger = logging.getLogger(__name__)
console = Console()


def _resolve_config(
    config_path: Optional[Path],
    overrides: Optional[List[str]],
    seed: Optional[int] = None,
    output_dir: Optional[Path] = None,
    formats: Optional[List[str]] = None,
    prefix: Optional[str] = None,
) -> DictConfig:
    """Load config, then apply explicit CLI options on top of file and ``--set`` values."""
    config = load_config(config_path, overrides)
    if seed is not None:
        config.seed = seed
    if output_dir is not None:
        config.output.dir = str(output_dir)
    if formats:
        config.output.formats = [f.lower() for f in formats]
    if prefix is not None:
        config.output.prefix = prefix
    validate_config(config)
    return config


def run_command(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML configuration file", exists=True, dir_okay=False
    ),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed (default: 123)"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="Directory for all artifacts"),
    formats: Optional[List[str]] = typer.Option(
        None, "--format", "-f", help="Image format; repeat for several (png, pdf, svg, jpg)"
    ),
    prefix: Optional[str] = typer.Option(None, "--prefix", help="File name prefix for artifacts"),
    overrides: Optional[List[str]] = typer.Option(
        None, "--set", help="Dotlist override, e.g. --set 'analytes=[DOX]'"
    ),
    no_plots: bool = typer.Option(False, "--no-plots", help="Skip table and chart images"),
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="Logging level"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write logs to this file"),
    structured_logs: bool = typer.Option(False, "--structured-logs", help="Emit JSON log lines"),
) -> None:
    """Simulate, rank and export the dimension-reduction comparison.

    Examples:

        drcompare run --output-dir results

        drcompare run --seed 7 --format png --format pdf --no-plots
    """
    try:
        config = _resolve_config(config_path, overrides, seed, output_dir, formats, prefix)
    except DrCompareError as e:
        console.print(f"[bold red]Configuration error: {escape(str(e))}[/bold red]")
        raise typer.Exit(code=1) from e

    if log_level is not None:
        config.logging.level = log_level
    if log_file is not None:
        config.logging.file = str(log_file)
    if structured_logs:
        config.logging.structured = True
    configure_logging_from_config(config.logging)

    console.print("[bold blue]Dimension Reduction Algorithm Comparison[/bold blue]")
    console.print(f"Seed: {config.seed}")
    console.print(
        f"Grid: {len(config.algorithms)} algorithms x {len(config.analytes)} analytes x "
        f"{len(config.dataset_types)} dataset types x {len(config.metrics)} metrics"
    )
    console.print(f"Output: {config.output.dir}\n")

    try:
        results = run_comparison(config)
    except DrCompareError as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        raise typer.Exit(code=1) from e

    board = algorithm_leaderboard(results.totals)
    table = Table(title="Algorithm Leaderboard (lower Total Rank is better)")
    table.add_column("#", justify="right")
    table.add_column("Algorithm")
    table.add_column("Total Rank", justify="right")
    for row in board.itertuples(index=False):
        table.add_row(str(row.Position), str(row.Algorithm), str(row.TotalRank))
    console.print(table)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Writing artifacts...", total=None)
        written = export_artifacts(results, include_plots=not no_plots)
        progress.update(task, description="[green]✓ Wrote artifacts")

    for key, paths in written.items():
        for path in paths:
            console.print(f"[green]✓[/green] {key}: {path}")

    console.print(f"\n[bold green]✓ Complete![/bold green] Results saved to: {config.output.dir}")


def show_config_command(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML configuration file", exists=True, dir_okay=False
    ),
    overrides: Optional[List[str]] = typer.Option(None, "--set", help="Dotlist override"),
) -> None:
    """Print the resolved configuration as YAML."""
    try:
        config = _resolve_config(config_path, overrides)
    except DrCompareError as e:
        console.print(f"[bold red]Configuration error: {escape(str(e))}[/bold red]")
        raise typer.Exit(code=1) from e
    typer.echo(config_to_yaml(config))
