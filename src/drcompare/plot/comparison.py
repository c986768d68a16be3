"""Grouped bar charts of simulated metric values.

One panel per ``DatasetType x Analyte`` combination; within each panel bars
are grouped by algorithm with one bar per metric.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd
import seaborn as sns
from matplotlib import pyplot as plt
from matplotlib.figure import Figure, SubFigure
from matplotlib.patches import Patch

from drcompare.data.constants import ALGORITHM, ANALYTE, DATASET_TYPE, METRIC, VALUE
from drcompare.plot import GLASBEY_PALETTE
from drcompare.plot.table import TABLE_SUBTITLE, TABLE_TITLE, draw_comparison_table

logger = logging.getLogger(__name__)

PLOT_TITLE = "Comparison of Dimension Reduction Algorithms"


def _ordered_labels(series: pd.Series) -> List[str]:
    present = set(series.astype(object).unique())
    if isinstance(series.dtype, pd.CategoricalDtype):
        return [c for c in series.cat.categories if c in present]
    return list(dict.fromkeys(series.astype(object)))


def save_figure_formats(
    fig: Figure,
    output_path: Path,
    formats: Sequence[str] = ("png",),
    dpi: int = 300,
) -> List[Path]:
    """Save a figure once per format and close it.

    Parameters
    ----------
    fig : Figure
        Matplotlib figure to save.
    output_path : Path
        Base output path without extension; ``<name>.<fmt>`` is written next
        to it.
    formats : sequence of str, default=("png",)
        File formats to save.
    dpi : int, default=300
        Raster resolution.

    Returns
    -------
    list[Path]
        Written files.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    written = []
    try:
        for fmt in formats:
            out_file = output_path.parent / f"{output_path.name}.{fmt}"
            fig.savefig(out_file, dpi=dpi, bbox_inches="tight")
            logger.debug("Saved figure to: %s", out_file)
            written.append(out_file)
    finally:
        plt.close(fig)
    return written


def plot_comparison_bars(
    long_df: pd.DataFrame,
    *,
    fig: Optional[Union[Figure, SubFigure]] = None,
    figsize: Tuple[float, float] = (12, 8),
    title: str = PLOT_TITLE,
) -> Tuple[Union[Figure, SubFigure], np.ndarray]:
    """Plot metric values per algorithm, faceted by dataset type and analyte.

    Parameters
    ----------
    long_df : pandas.DataFrame
        Long ranked observations with ``Algorithm``, ``Analyte``,
        ``DatasetType``, ``Metric`` and ``Value`` columns.
    fig : Figure or SubFigure, optional
        Container to draw into. A new figure is created when omitted.
    figsize : tuple[float, float], default=(12, 8)
        Size of a newly created figure.
    title : str
        Figure title.

    Returns
    -------
    tuple[Figure | SubFigure, numpy.ndarray]
        Container and 2-D axes array (rows: dataset types, columns: analytes).
    """
    dataset_types = _ordered_labels(long_df[DATASET_TYPE])
    analytes = _ordered_labels(long_df[ANALYTE])
    algorithms = _ordered_labels(long_df[ALGORITHM])
    metrics = _ordered_labels(long_df[METRIC])
    palette = GLASBEY_PALETTE[: len(metrics)]

    created = fig is None
    if created:
        fig, axs = plt.subplots(len(dataset_types), len(analytes), figsize=figsize, sharey=True, squeeze=False)
    else:
        axs = fig.subplots(len(dataset_types), len(analytes), sharey=True, squeeze=False)

    data = long_df[[DATASET_TYPE, ANALYTE, ALGORITHM, METRIC, VALUE]].copy()
    for col in (DATASET_TYPE, ANALYTE, ALGORITHM, METRIC):
        data[col] = data[col].astype(object)

    for i, dataset_type in enumerate(dataset_types):
        for j, analyte in enumerate(analytes):
            ax = axs[i, j]
            panel = data[(data[DATASET_TYPE] == dataset_type) & (data[ANALYTE] == analyte)]
            sns.barplot(
                data=panel,
                x=ALGORITHM,
                y=VALUE,
                hue=METRIC,
                order=algorithms,
                hue_order=metrics,
                palette=palette,
                errorbar=None,
                ax=ax,
            )
            legend = ax.get_legend()
            if legend is not None:
                legend.remove()
            ax.set_title(f"{dataset_type}, {analyte}", fontsize=11)
            ax.set_xlabel("Algorithm" if i == len(dataset_types) - 1 else "")
            ax.set_ylabel("Metric Value" if j == 0 else "")
            plt.setp(ax.get_xticklabels(), rotation=45, ha="right")
            ax.grid(axis="y", linestyle="--", alpha=0.5)

    handles = [Patch(facecolor=c, edgecolor="black", label=m) for m, c in zip(metrics, palette)]
    fig.legend(handles=handles, title=METRIC, loc="upper right", frameon=True)
    fig.suptitle(title, fontsize=14, fontweight="bold")

    if created:
        fig.tight_layout(rect=(0, 0, 0.93, 1))
    return fig, axs


def plot_combined(
    wide: pd.DataFrame,
    long_df: pd.DataFrame,
    *,
    figsize: Tuple[float, float] = (15, 10),
    decimals: int = 3,
) -> Figure:
    """Place the comparison table and the bar chart side by side.

    Parameters
    ----------
    wide : pandas.DataFrame
        Wide table for the left panel.
    long_df : pandas.DataFrame
        Long observations for the right panel.
    figsize : tuple[float, float], default=(15, 10)
        Figure size.
    decimals : int, default=3
        Decimals for table values.

    Returns
    -------
    Figure
        Combined figure.
    """
    fig = plt.figure(figsize=figsize, layout="constrained")
    left, right = fig.subfigures(1, 2, width_ratios=[1.0, 1.2])

    table_ax = left.subplots()
    draw_comparison_table(wide, table_ax, decimals=decimals, fontsize=5)
    left.suptitle(TABLE_TITLE, fontsize=12, fontweight="bold")
    table_ax.set_title(TABLE_SUBTITLE, fontsize=10)

    plot_comparison_bars(long_df, fig=right)
    logger.debug("Rendered combined figure")
    return fig


__all__ = ["PLOT_TITLE", "plot_combined", "plot_comparison_bars", "save_figure_formats"]
