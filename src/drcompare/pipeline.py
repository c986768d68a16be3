"""End-to-end comparison pipeline.

:func:`run_comparison` performs the in-memory stages (simulate, rank, total,
reshape) and :func:`export_artifacts` writes every artifact of a run. The two
are kept apart so results can be inspected or tested without touching disk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pandas as pd
from omegaconf import DictConfig

from drcompare.config import (
    SUPPORTED_FORMATS,
    ComparisonConfig,
    ConfigurationError,
    load_config,
    to_dictconfig,
    validate_config,
)
from drcompare.data.simulate import simulate_observations
from drcompare.evaluate.ranking import rank_and_total
from drcompare.evaluate.reshape import to_wide
from drcompare.plot import plot_combined, plot_comparison_bars, render_comparison_table, save_figure_formats
from drcompare.report.export import export_simulated_data, export_wide_table_csv, save_summary_statistics

logger = logging.getLogger(__name__)

# Artifact key -> file name suffix appended to the configured prefix
ARTIFACT_SUFFIXES = {
    "table": "Comparison_Table",
    "plot": "Comparison_Plot",
    "combined": "Combined",
    "data": "Simulated_Data",
    "wide_csv": "Wide_Table",
    "summary": "Summary",
}


@dataclass
class ComparisonResults:
    """Structured container for one comparison run.

    Attributes
    ----------
    config : DictConfig
        Validated configuration used for the run.
    observations : pd.DataFrame
        Simulated observations (labels + ``Value``) in generation order.
    ranked : pd.DataFrame
        Observations with ``Rank`` and ``TotalRank``.
    totals : pd.DataFrame
        ``Algorithm`` -> ``TotalRank``.
    wide : pd.DataFrame
        One row per ``(DatasetType, Analyte, Algorithm)``.
    """

    config: DictConfig
    observations: pd.DataFrame
    ranked: pd.DataFrame
    totals: pd.DataFrame
    wide: pd.DataFrame


def artifact_path(output_dir: Path, prefix: str, key: str, extension: Optional[str] = None) -> Path:
    """Return ``<output_dir>/<prefix>_<suffix>[.<extension>]`` for an artifact key."""
    name = f"{prefix}_{ARTIFACT_SUFFIXES[key]}"
    if extension:
        name = f"{name}.{extension}"
    return Path(output_dir) / name


def run_comparison(config: Optional[DictConfig | ComparisonConfig] = None) -> ComparisonResults:
    """Simulate, rank and reshape.

    Parameters
    ----------
    config : DictConfig or ComparisonConfig, optional
        Run configuration; defaults to :func:`drcompare.config.load_config`.

    Returns
    -------
    ComparisonResults
        All in-memory results of the run.

    Raises
    ------
    ConfigurationError
        If the configuration is invalid.
    """
    if config is None:
        config = load_config()
    else:
        config = to_dictconfig(config)
    validate_config(config)

    observations = simulate_observations(config)
    ranked, totals = rank_and_total(observations)
    wide = to_wide(ranked)
    logger.info(
        "Comparison complete: %d observations, %d algorithms, %d wide rows",
        len(ranked),
        len(totals),
        len(wide),
    )
    return ComparisonResults(config=config, observations=observations, ranked=ranked, totals=totals, wide=wide)


def export_artifacts(
    results: ComparisonResults,
    output_dir: Optional[Path] = None,
    *,
    prefix: Optional[str] = None,
    formats: Optional[Sequence[str]] = None,
    dpi: Optional[int] = None,
    include_plots: bool = True,
) -> Dict[str, List[Path]]:
    """Write table, chart, combined figure, spreadsheet and summaries.

    Options left as ``None`` are taken from ``results.config.output``.

    Parameters
    ----------
    results : ComparisonResults
        Output of :func:`run_comparison`.
    output_dir : Path, optional
        Destination directory.
    prefix : str, optional
        File name prefix.
    formats : sequence of str, optional
        Image formats for each figure.
    dpi : int, optional
        Raster resolution.
    include_plots : bool, default=True
        Skip all figures when ``False``.

    Returns
    -------
    dict[str, list[Path]]
        Artifact key -> written files.
    """
    out_cfg = results.config.output
    output_dir = Path(output_dir if output_dir is not None else out_cfg.dir)
    prefix = prefix or out_cfg.prefix
    formats = [str(f).lower() for f in (formats or out_cfg.formats)]
    dpi = int(dpi or out_cfg.dpi)
    unsupported = [f for f in formats if f not in SUPPORTED_FORMATS]
    if unsupported:
        raise ConfigurationError(f"Unsupported output formats {unsupported}. Valid: {SUPPORTED_FORMATS}")
    output_dir.mkdir(parents=True, exist_ok=True)

    written: Dict[str, List[Path]] = {}

    if include_plots:
        fig, _ = render_comparison_table(results.wide)
        written["table"] = save_figure_formats(fig, artifact_path(output_dir, prefix, "table"), formats, dpi)

        fig, _ = plot_comparison_bars(results.ranked)
        written["plot"] = save_figure_formats(fig, artifact_path(output_dir, prefix, "plot"), formats, dpi)

        fig = plot_combined(results.wide, results.ranked)
        written["combined"] = save_figure_formats(fig, artifact_path(output_dir, prefix, "combined"), formats, dpi)

    written["data"] = [export_simulated_data(results.ranked, artifact_path(output_dir, prefix, "data", "xlsx"))]
    written["wide_csv"] = [export_wide_table_csv(results.wide, artifact_path(output_dir, prefix, "wide_csv", "csv"))]
    written["summary"] = [save_summary_statistics(results, artifact_path(output_dir, prefix, "summary", "txt"))]

    logger.info("Wrote %d artifacts to %s", sum(len(v) for v in written.values()), output_dir)
    return written


__all__ = ["ARTIFACT_SUFFIXES", "ComparisonResults", "artifact_path", "export_artifacts", "run_comparison"]
