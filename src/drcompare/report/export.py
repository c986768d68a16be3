"""Tabular exports for comparison results."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import pandas as pd

from drcompare.data.constants import LONG_COLUMNS, TOTAL_RANK
from drcompare.evaluate.ranking import algorithm_leaderboard

if TYPE_CHECKING:
    from drcompare.pipeline import ComparisonResults

logger = logging.getLogger(__name__)

SHEET_NAME = "Simulated_Data"


def export_simulated_data(df: pd.DataFrame, output_path: Path, sheet_name: str = SHEET_NAME) -> Path:
    """Write long ranked observations to a one-sheet Excel workbook.

    Parameters
    ----------
    df : pandas.DataFrame
        Ranked observations with ``TotalRank``.
    output_path : Path
        Destination ``.xlsx`` file.
    sheet_name : str
        Worksheet name (truncated to Excel's 31 characters).

    Returns
    -------
    Path
        The written file.

    Raises
    ------
    ValueError
        If a required column is missing.
    """
    missing = [c for c in LONG_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Cannot export observations without columns: {missing}")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    out = df[list(LONG_COLUMNS)].copy()
    # Excel writers expect plain labels
    for col in out.columns:
        if isinstance(out[col].dtype, pd.CategoricalDtype):
            out[col] = out[col].astype(str)

    try:
        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            out.to_excel(writer, index=False, sheet_name=sheet_name[:31] or "Sheet1")
        logger.info("Simulated data written to: %s", output_path)
    except Exception as e:
        logger.error("Failed to write simulated data: %s", e)
        raise
    return output_path


def export_wide_table_csv(wide: pd.DataFrame, output_path: Path) -> Path:
    """Write the wide comparison table to CSV."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    wide.to_csv(output_path, index=False, float_format="%.6f")
    logger.info("Wide table CSV saved to: %s", output_path)
    return output_path


def save_summary_statistics(results: "ComparisonResults", output_path: Path) -> Path:
    """Save a plain-text summary of a comparison run.

    Lists the run parameters and the algorithm leaderboard ordered by
    ``TotalRank`` (lower is better).

    Parameters
    ----------
    results : ComparisonResults
        Pipeline results.
    output_path : Path
        Destination text file.

    Returns
    -------
    Path
        The written file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    cfg = results.config
    n_partitions = len(cfg.analytes) * len(cfg.dataset_types) * len(cfg.metrics)
    lines = []
    lines.append("Dimension Reduction Algorithm Comparison Summary")
    lines.append("=" * 70)
    lines.append(f"Seed: {cfg.seed}")
    lines.append(f"Algorithms: {len(cfg.algorithms)}")
    lines.append(f"Analytes: {', '.join(cfg.analytes)}")
    lines.append(f"Dataset types: {', '.join(cfg.dataset_types)}")
    lines.append(f"Metrics: {', '.join(cfg.metrics)}")
    lines.append(f"Observations: {len(results.ranked)} ({n_partitions} partitions)\n")

    lines.append("Algorithm Leaderboard (Total Rank, lower is better):")
    board = algorithm_leaderboard(results.totals)
    for row in board.itertuples(index=False):
        row = row._asdict()
        lines.append(f"  {row['Position']:>3}. {str(row['Algorithm']):<22} {row[TOTAL_RANK]:>5}")

    content = "\n".join(lines) + "\n"
    try:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)
        logger.info("Summary statistics saved to: %s", output_path)
    except Exception as e:
        logger.error("Failed to write summary statistics: %s", e)
        raise
    return output_path


__all__ = ["SHEET_NAME", "export_simulated_data", "export_wide_table_csv", "save_summary_statistics"]
