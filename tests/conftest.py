"""
Shared pytest fixtures for drcompare tests.
"""

from __future__ import annotations

import matplotlib
import pytest

from drcompare.config import ComparisonConfig
from drcompare.pipeline import ComparisonResults, run_comparison

# Use non-interactive backend for tests
matplotlib.use("Agg")


@pytest.fixture
def default_config() -> ComparisonConfig:
    """Configuration with the built-in enumerations and seed."""
    return ComparisonConfig()


@pytest.fixture
def small_config() -> ComparisonConfig:
    """A 3 x 2 x 2 x 2 grid for fast tests."""
    return ComparisonConfig(
        algorithms=["PCA", "UMAP", "t-SNE"],
        analytes=["DOX", "TYZ"],
        dataset_types=["Calibration", "Test"],
        metrics=["MSE", "R2"],
        seed=7,
    )


@pytest.fixture(scope="session")
def default_results() -> ComparisonResults:
    """Full default run, computed once per session."""
    return run_comparison(ComparisonConfig())


@pytest.fixture
def small_results(small_config) -> ComparisonResults:
    """Run over the small grid."""
    return run_comparison(small_config)
