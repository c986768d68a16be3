"""
Data Subpackage
===============

Column constants and the simulated observation grid.

.. module:: drcompare.data

"""

from .constants import (
    ALGORITHM,
    ANALYTE,
    DATASET_TYPE,
    LABEL_COLUMNS,
    LONG_COLUMNS,
    METRIC,
    PARTITION_KEYS,
    RANK,
    TOTAL_RANK,
    VALUE,
    WIDE_KEYS,
    rank_column,
    value_column,
)
from .simulate import observation_grid, simulate_observations

__all__ = [
    # columns
    "ALGORITHM",
    "ANALYTE",
    "DATASET_TYPE",
    "METRIC",
    "VALUE",
    "RANK",
    "TOTAL_RANK",
    "LABEL_COLUMNS",
    "LONG_COLUMNS",
    "PARTITION_KEYS",
    "WIDE_KEYS",
    "rank_column",
    "value_column",
    # simulate
    "observation_grid",
    "simulate_observations",
]
