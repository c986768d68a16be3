"""Tests for the `drcompare` CLI commands."""

from __future__ import annotations

from typer.testing import CliRunner

from drcompare.cli import app

PREFIX = "Dimension_Reduction_Algorithms"


def test_run_without_plots_writes_data(tmp_path):
    outdir = tmp_path / "results"
    runner = CliRunner()
    result = runner.invoke(app, ["run", "--output-dir", str(outdir), "--no-plots", "--seed", "7"])

    assert result.exit_code == 0, result.output
    assert (outdir / f"{PREFIX}_Simulated_Data.xlsx").exists()
    assert (outdir / f"{PREFIX}_Summary.txt").exists()
    assert not list(outdir.glob("*.png"))
    assert "Seed: 7" in result.output


def test_run_passes_options_to_export(tmp_path, monkeypatch):
    called = {}

    def fake_export_artifacts(results, include_plots=True):
        called["seed"] = results.config.seed
        called["formats"] = list(results.config.output.formats)
        called["prefix"] = results.config.output.prefix
        called["include_plots"] = include_plots
        return {}

    # Patch export to avoid heavy I/O
    monkeypatch.setattr("drcompare.cli.compare.export_artifacts", fake_export_artifacts)

    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "run",
            "--output-dir",
            str(tmp_path),
            "--seed",
            "11",
            "--format",
            "PNG",
            "--format",
            "pdf",
            "--prefix",
            "Trial",
        ],
    )

    assert result.exit_code == 0, result.output
    assert called == {"seed": 11, "formats": ["png", "pdf"], "prefix": "Trial", "include_plots": True}


def test_run_with_set_overrides(tmp_path, monkeypatch):
    called = {}
    monkeypatch.setattr(
        "drcompare.cli.compare.export_artifacts",
        lambda results, include_plots=True: called.update({"rows": len(results.ranked)}) or {},
    )

    runner = CliRunner()
    result = runner.invoke(
        app,
        ["run", "--output-dir", str(tmp_path), "--set", "algorithms=[A, B, C]", "--set", "metrics=[M]"],
    )

    assert result.exit_code == 0, result.output
    assert called["rows"] == 3 * 2 * 2 * 1


def test_run_rejects_unsupported_format(tmp_path):
    runner = CliRunner()
    result = runner.invoke(app, ["run", "--output-dir", str(tmp_path), "--format", "bmp"])

    assert result.exit_code == 1
    assert "Configuration error" in result.output


def test_run_rejects_duplicate_labels(tmp_path):
    runner = CliRunner()
    result = runner.invoke(app, ["run", "--output-dir", str(tmp_path), "--set", "analytes=[DOX, DOX]"])

    assert result.exit_code == 1
    assert "duplicate" in result.output


def test_run_reads_config_file(tmp_path, monkeypatch):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("seed: 99\nanalytes: [DOX]\n")
    called = {}
    monkeypatch.setattr(
        "drcompare.cli.compare.export_artifacts",
        lambda results, include_plots=True: called.update({"seed": results.config.seed}) or {},
    )

    runner = CliRunner()
    result = runner.invoke(app, ["run", "--config", str(config_file), "--output-dir", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert called["seed"] == 99


def test_show_config_prints_yaml():
    runner = CliRunner()
    result = runner.invoke(app, ["show-config", "--set", "seed=5"])

    assert result.exit_code == 0, result.output
    assert "seed: 5" in result.output
    assert "MiniBatchSparsePCA" in result.output


def test_no_args_shows_help():
    runner = CliRunner()
    result = runner.invoke(app, [])

    assert "run" in result.output


def test_missing_config_file_is_usage_error(tmp_path):
    runner = CliRunner()
    result = runner.invoke(app, ["run", "--config", str(tmp_path / "missing.yaml"), "--output-dir", str(tmp_path)])

    assert result.exit_code == 2
    assert not isinstance(result.exception, FileNotFoundError)
    assert not list(tmp_path.iterdir())


def test_show_config_missing_file_is_usage_error(tmp_path):
    runner = CliRunner()
    result = runner.invoke(app, ["show-config", "--config", str(tmp_path / "missing.yaml")])

    assert result.exit_code == 2
    assert not isinstance(result.exception, FileNotFoundError)
