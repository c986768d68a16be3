"""Tests for the end-to-end comparison pipeline."""

from __future__ import annotations

import pandas as pd
import pytest
from omegaconf import OmegaConf

from drcompare.config import ComparisonConfig, ConfigurationError, load_config
from drcompare.pipeline import ComparisonResults, artifact_path, export_artifacts, run_comparison

PREFIX = "Dimension_Reduction_Algorithms"


class TestRunComparison:
    """Tests for run_comparison."""

    def test_default_run(self, default_results) -> None:
        """Test every stage is populated with the expected sizes."""
        assert isinstance(default_results, ComparisonResults)
        assert len(default_results.observations) == 272
        assert len(default_results.ranked) == 272
        assert len(default_results.totals) == 17
        assert len(default_results.wide) == 68

    def test_accepts_dictconfig(self) -> None:
        """Test a loaded DictConfig runs."""
        results = run_comparison(load_config(overrides=["algorithms=[A, B]", "metrics=[M]"]))
        assert len(results.ranked) == 2 * 2 * 2 * 1

    def test_none_uses_defaults(self) -> None:
        """Test omitting the config uses the defaults."""
        results = run_comparison()
        assert results.config.seed == 123
        assert len(results.ranked) == 272

    def test_determinism(self, small_config) -> None:
        """Test two runs with the same config produce identical frames."""
        first = run_comparison(small_config)
        second = run_comparison(small_config)

        pd.testing.assert_frame_equal(first.ranked, second.ranked)
        pd.testing.assert_frame_equal(first.wide, second.wide)

    def test_invalid_config(self) -> None:
        """Test invalid enumerations stop the run."""
        with pytest.raises(ConfigurationError):
            run_comparison(ComparisonConfig(metrics=["MSE", "MSE"]))

    def test_non_integer_seed(self) -> None:
        """Test a float seed on the dataclass stops the run with ConfigurationError."""
        with pytest.raises(ConfigurationError):
            run_comparison(ComparisonConfig(seed=1.5))


class TestArtifactPath:
    """Tests for artifact_path."""

    def test_naming_convention(self, tmp_path) -> None:
        """Test file names follow <prefix>_<suffix>.<ext>."""
        assert artifact_path(tmp_path, "P", "table", "png") == tmp_path / "P_Comparison_Table.png"
        assert artifact_path(tmp_path, "P", "data", "xlsx") == tmp_path / "P_Simulated_Data.xlsx"
        assert artifact_path(tmp_path, "P", "combined") == tmp_path / "P_Combined"


class TestExportArtifacts:
    """Tests for export_artifacts."""

    def test_writes_all_artifacts(self, default_results, tmp_path) -> None:
        """Test the full default export writes every named file."""
        written = export_artifacts(default_results, tmp_path)

        for name in (
            f"{PREFIX}_Comparison_Table.png",
            f"{PREFIX}_Comparison_Plot.png",
            f"{PREFIX}_Combined.png",
            f"{PREFIX}_Simulated_Data.xlsx",
            f"{PREFIX}_Wide_Table.csv",
            f"{PREFIX}_Summary.txt",
        ):
            assert (tmp_path / name).exists(), name
        assert set(written) == {"table", "plot", "combined", "data", "wide_csv", "summary"}

    def test_no_plots(self, small_results, tmp_path) -> None:
        """Test figures are skipped when include_plots is False."""
        written = export_artifacts(small_results, tmp_path, include_plots=False)

        assert set(written) == {"data", "wide_csv", "summary"}
        assert not list(tmp_path.glob("*.png"))

    def test_multiple_formats_and_prefix(self, small_results, tmp_path) -> None:
        """Test each figure is written once per format with the given prefix."""
        written = export_artifacts(small_results, tmp_path, prefix="Trial", formats=["png", "svg"], dpi=50)

        assert len(written["plot"]) == 2
        assert (tmp_path / "Trial_Comparison_Plot.svg").exists()
        assert (tmp_path / "Trial_Combined.png").exists()

    def test_config_output_dir_used(self, small_config, tmp_path) -> None:
        """Test the configured output directory is the default destination."""
        config = OmegaConf.structured(small_config)
        config.output.dir = str(tmp_path / "from_config")
        results = run_comparison(config)

        export_artifacts(results, include_plots=False)

        assert (tmp_path / "from_config" / f"{PREFIX}_Simulated_Data.xlsx").exists()

    def test_unsupported_format(self, small_results, tmp_path) -> None:
        """Test unsupported formats are rejected before writing."""
        with pytest.raises(ConfigurationError):
            export_artifacts(small_results, tmp_path, formats=["bmp"])
        assert not list(tmp_path.iterdir())
