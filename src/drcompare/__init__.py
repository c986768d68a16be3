"""
Dimension-Reduction Comparison Package
======================================

This package simulates a comparison of dimension-reduction algorithms across
analytes, dataset splits and error metrics, ranks the algorithms within each
group, and renders the results as tables, charts and spreadsheets.

.. module:: drcompare

"""

from __future__ import annotations

__version__ = "0.1.0"

from drcompare.config import ComparisonConfig, ConfigurationError, load_config
from drcompare.exceptions import DrCompareError, DuplicateKeyError, MissingGroupKeyError
from drcompare.pipeline import ComparisonResults, export_artifacts, run_comparison

__all__ = [
    "ComparisonConfig",
    "ComparisonResults",
    "ConfigurationError",
    "DrCompareError",
    "DuplicateKeyError",
    "MissingGroupKeyError",
    "export_artifacts",
    "load_config",
    "run_comparison",
]
