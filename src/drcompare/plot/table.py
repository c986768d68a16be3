"""Comparison table rendered as a matplotlib figure.

Value columns are shown with a fixed number of decimals, every cell is
centered and header cells are filled light blue.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import pandas as pd
from matplotlib import pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.table import Table

from drcompare.data.constants import RANK, TOTAL_RANK, VALUE

logger = logging.getLogger(__name__)

TABLE_TITLE = "Comparison of Dimension Reduction Algorithms"
TABLE_SUBTITLE = "Performance metrics and rankings"
HEADER_COLOR = "lightblue"


def table_column_labels(columns: Sequence[str]) -> List[str]:
    """Display labels for wide-table columns.

    ``Value_MSE`` becomes ``MSE``, ``Rank_MSE`` becomes ``Rank MSE`` and
    ``TotalRank`` becomes ``Total Rank``; other columns keep their name.
    """
    labels = []
    for col in columns:
        col = str(col)
        if col.startswith(f"{VALUE}_"):
            labels.append(col[len(VALUE) + 1 :])
        elif col.startswith(f"{RANK}_"):
            labels.append(f"Rank {col[len(RANK) + 1 :]}")
        elif col == TOTAL_RANK:
            labels.append("Total Rank")
        else:
            labels.append(col)
    return labels


def format_table_cells(wide: pd.DataFrame, decimals: int = 3) -> List[List[str]]:
    """Format wide-table cells as strings.

    ``Value_*`` columns use ``decimals`` places; rank columns are shown as
    integers; label columns are shown as-is.
    """
    formatters = []
    for col in wide.columns:
        col = str(col)
        if col.startswith(f"{VALUE}_"):
            formatters.append(lambda v: f"{float(v):.{decimals}f}")
        elif col.startswith(f"{RANK}_") or col == TOTAL_RANK:
            formatters.append(lambda v: str(int(v)))
        else:
            formatters.append(str)

    return [[fmt(v) for fmt, v in zip(formatters, row)] for row in wide.itertuples(index=False, name=None)]


def draw_comparison_table(
    wide: pd.DataFrame,
    ax: Axes,
    *,
    decimals: int = 3,
    fontsize: float = 8,
    header_color: str = HEADER_COLOR,
) -> Table:
    """Draw the wide table onto ``ax``.

    Parameters
    ----------
    wide : pandas.DataFrame
        Output of :func:`drcompare.evaluate.to_wide`.
    ax : matplotlib.axes.Axes
        Target axes; its frame and ticks are hidden.
    decimals : int, default=3
        Decimals for ``Value_*`` columns.
    fontsize : float, default=8
        Cell font size.
    header_color : str, default="lightblue"
        Fill color of header cells.

    Returns
    -------
    matplotlib.table.Table
        The table artist.

    Raises
    ------
    ValueError
        If ``wide`` has no rows.
    """
    if wide.empty:
        raise ValueError("Cannot render an empty comparison table")

    ax.axis("off")
    table = ax.table(
        cellText=format_table_cells(wide, decimals),
        colLabels=table_column_labels(wide.columns),
        cellLoc="center",
        colLoc="center",
        loc="upper center",
    )
    table.auto_set_font_size(False)
    table.set_fontsize(fontsize)
    table.scale(1.0, 1.2)

    for (row, _col), cell in table.get_celld().items():
        if row == 0:
            cell.set_facecolor(header_color)
            cell.set_text_props(fontweight="bold")
    return table


def render_comparison_table(
    wide: pd.DataFrame,
    *,
    title: str = TABLE_TITLE,
    subtitle: str = TABLE_SUBTITLE,
    decimals: int = 3,
    figsize: Optional[Tuple[float, float]] = None,
) -> Tuple[Figure, Axes]:
    """Render the wide table as a standalone figure.

    Parameters
    ----------
    wide : pandas.DataFrame
        Wide table.
    title : str
        Figure title.
    subtitle : str
        Axes title shown under the figure title.
    decimals : int, default=3
        Decimals for ``Value_*`` columns.
    figsize : tuple[float, float], optional
        Figure size; scaled to the table shape when omitted.

    Returns
    -------
    tuple[Figure, Axes]
        Figure and axes.
    """
    if figsize is None:
        figsize = (max(12.0, 1.1 * len(wide.columns)), max(3.0, 0.25 * (len(wide) + 4)))

    fig, ax = plt.subplots(figsize=figsize)
    draw_comparison_table(wide, ax, decimals=decimals)
    fig.suptitle(title, fontsize=14, fontweight="bold")
    ax.set_title(subtitle, fontsize=11)
    logger.debug("Rendered comparison table with %d rows", len(wide))
    return fig, ax


__all__ = [
    "HEADER_COLOR",
    "TABLE_SUBTITLE",
    "TABLE_TITLE",
    "draw_comparison_table",
    "format_table_cells",
    "render_comparison_table",
    "table_column_labels",
]
