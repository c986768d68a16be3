"""Unit tests for spreadsheet, CSV and summary exports."""

from __future__ import annotations

import pandas as pd
import pytest

from drcompare.config import ComparisonConfig
from drcompare.data import LONG_COLUMNS
from drcompare.pipeline import run_comparison
from drcompare.report.export import (
    SHEET_NAME,
    export_simulated_data,
    export_wide_table_csv,
    save_summary_statistics,
)


class TestExportSimulatedData:
    """Tests for export_simulated_data."""

    def test_writes_single_sheet(self, default_results, tmp_path) -> None:
        """Test workbook has one sheet with the long columns."""
        path = export_simulated_data(default_results.ranked, tmp_path / "data.xlsx")

        assert path.exists()
        assert pd.ExcelFile(path, engine="openpyxl").sheet_names == [SHEET_NAME]

        df = pd.read_excel(path, engine="openpyxl")
        assert list(df.columns) == list(LONG_COLUMNS)
        assert len(df) == 272

    def test_content_matches_ranked(self, small_results, tmp_path) -> None:
        """Test exported rows match the ranked frame in order."""
        path = export_simulated_data(small_results.ranked, tmp_path / "data.xlsx")
        df = pd.read_excel(path, engine="openpyxl")

        expected = small_results.ranked[list(LONG_COLUMNS)].reset_index(drop=True)
        assert list(df["Algorithm"]) == list(expected["Algorithm"].astype(str))
        assert list(df["Rank"]) == list(expected["Rank"])
        assert list(df["TotalRank"]) == list(expected["TotalRank"])
        pd.testing.assert_series_equal(df["Value"], expected["Value"], check_names=False)

    def test_identical_for_same_seed(self, small_config, tmp_path) -> None:
        """Test two runs with the same seed export identical content."""
        first = export_simulated_data(run_comparison(small_config).ranked, tmp_path / "a.xlsx")
        second = export_simulated_data(run_comparison(small_config).ranked, tmp_path / "b.xlsx")

        pd.testing.assert_frame_equal(
            pd.read_excel(first, engine="openpyxl"),
            pd.read_excel(second, engine="openpyxl"),
            check_exact=True,
        )

    def test_missing_columns_rejected(self, small_results, tmp_path) -> None:
        """Test frames without TotalRank cannot be exported."""
        with pytest.raises(ValueError, match="TotalRank"):
            export_simulated_data(small_results.observations, tmp_path / "data.xlsx")

    def test_creates_parent_directory(self, small_results, tmp_path) -> None:
        """Test missing directories are created."""
        path = export_simulated_data(small_results.ranked, tmp_path / "nested" / "data.xlsx")
        assert path.exists()


class TestExportWideTableCsv:
    """Tests for export_wide_table_csv."""

    def test_writes_wide_columns(self, small_results, tmp_path) -> None:
        """Test CSV keeps wide column names and row count."""
        path = export_wide_table_csv(small_results.wide, tmp_path / "wide.csv")
        df = pd.read_csv(path)

        assert list(df.columns) == list(small_results.wide.columns)
        assert len(df) == len(small_results.wide)


class TestSaveSummaryStatistics:
    """Tests for save_summary_statistics."""

    def test_lists_every_algorithm(self, default_results, tmp_path) -> None:
        """Test summary includes run parameters and the leaderboard."""
        path = save_summary_statistics(default_results, tmp_path / "summary.txt")
        text = path.read_text(encoding="utf-8")

        assert "Seed: 123" in text
        assert "Algorithm Leaderboard" in text
        assert "Observations: 272 (16 partitions)" in text
        for algorithm in ComparisonConfig().algorithms:
            assert algorithm in text

    def test_leaderboard_order(self, small_results, tmp_path) -> None:
        """Test the best algorithm is listed first."""
        path = save_summary_statistics(small_results, tmp_path / "summary.txt")
        lines = path.read_text(encoding="utf-8").splitlines()
        first_entry = next(line for line in lines if line.strip().startswith("1."))

        best = small_results.totals.sort_values("TotalRank", kind="stable").iloc[0]["Algorithm"]
        assert str(best) in first_entry
