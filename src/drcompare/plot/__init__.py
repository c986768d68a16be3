"""
Visualization Subpackage
========================

Comparison table and grouped bar chart rendering.

.. module:: drcompare.plot

"""

import colorcet as cc
import matplotlib
import matplotlib.pyplot as plt
import seaborn as sns
from cycler import cycler

GLASBEY_PALETTE = list(cc.glasbey)

try:
    import scienceplots  # noqa: F401 - style registration
except Exception:  # noqa: BLE001 - style import fallback
    scienceplots = None  # no-op if style not installed

# Use Agg backend for non-interactive environments (CI, headless servers)
matplotlib.use("Agg")
try:
    plt.style.use(["science", "no-latex"])
except Exception:  # noqa: BLE001 - fallback to seaborn when style not installed
    sns.set_theme(style="whitegrid", palette=GLASBEY_PALETTE)

plt.rcParams["axes.prop_cycle"] = cycler(color=GLASBEY_PALETTE)
sns.set_palette(GLASBEY_PALETTE)

# Public API exports
from drcompare.plot.comparison import (  # noqa: E402
    PLOT_TITLE,
    plot_combined,
    plot_comparison_bars,
    save_figure_formats,
)
from drcompare.plot.table import (  # noqa: E402
    TABLE_SUBTITLE,
    TABLE_TITLE,
    draw_comparison_table,
    format_table_cells,
    render_comparison_table,
    table_column_labels,
)

__all__ = [
    # Constants
    "GLASBEY_PALETTE",
    "PLOT_TITLE",
    "TABLE_TITLE",
    "TABLE_SUBTITLE",
    # Table
    "draw_comparison_table",
    "format_table_cells",
    "render_comparison_table",
    "table_column_labels",
    # Charts
    "plot_combined",
    "plot_comparison_bars",
    "save_figure_formats",
]
