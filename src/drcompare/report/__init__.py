"""Spreadsheet, CSV and text exports for comparison results.

This module writes the simulated long table to Excel, the wide comparison
table to CSV, and a plain-text summary with the algorithm leaderboard.
"""

from drcompare.report.export import (
    SHEET_NAME,
    export_simulated_data,
    export_wide_table_csv,
    save_summary_statistics,
)

__all__ = [
    "SHEET_NAME",
    "export_simulated_data",
    "export_wide_table_csv",
    "save_summary_statistics",
]
