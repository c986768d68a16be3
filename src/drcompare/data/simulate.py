"""Simulated observation grid.

Builds one observation per element of the cartesian product of the four
configured enumerations and attaches a uniform ``[0, 1)`` value to each.

Rows are produced with ``Algorithm`` outermost, then ``Analyte``, then
``DatasetType``, with ``Metric`` innermost. A single
:class:`numpy.random.Generator` seeded once per call draws all values in row
order, so the same seed and enumerations always give the same frame.
"""

from __future__ import annotations

import itertools
import logging

import numpy as np
import pandas as pd
from omegaconf import DictConfig

from drcompare.config import ComparisonConfig, get_enumerations, validate_config
from drcompare.data.constants import ALGORITHM, ANALYTE, DATASET_TYPE, LABEL_COLUMNS, METRIC, VALUE

logger = logging.getLogger(__name__)

_ENUMERATION_COLUMNS = {
    "algorithms": ALGORITHM,
    "analytes": ANALYTE,
    "dataset_types": DATASET_TYPE,
    "metrics": METRIC,
}


def observation_grid(config: DictConfig | ComparisonConfig) -> pd.DataFrame:
    """Return the label columns of every observation.

    Parameters
    ----------
    config : DictConfig or ComparisonConfig
        Configuration providing the four enumerations.

    Returns
    -------
    pandas.DataFrame
        Columns ``Algorithm, Analyte, DatasetType, Metric`` as ordered
        categoricals whose categories follow the declared label order. Row
        count is the product of the enumeration sizes.

    Raises
    ------
    ConfigurationError
        If the configuration is invalid.
    """
    validate_config(config)
    enums = get_enumerations(config)
    labels = [enums[name] for name in _ENUMERATION_COLUMNS]

    rows = list(itertools.product(*labels))
    grid = pd.DataFrame(rows, columns=list(LABEL_COLUMNS))
    for name, column in _ENUMERATION_COLUMNS.items():
        grid[column] = pd.Categorical(grid[column], categories=enums[name], ordered=True)
    return grid


def simulate_observations(config: DictConfig | ComparisonConfig) -> pd.DataFrame:
    """Simulate one uniform value per observation.

    Parameters
    ----------
    config : DictConfig or ComparisonConfig
        Configuration providing the enumerations and ``seed``.

    Returns
    -------
    pandas.DataFrame
        :func:`observation_grid` plus a float ``Value`` column.

    Examples
    --------
    >>> df = simulate_observations(ComparisonConfig())
    >>> len(df)
    272
    """
    grid = observation_grid(config)
    rng = np.random.default_rng(int(config.seed))
    grid[VALUE] = rng.random(len(grid))
    logger.info(
        "Simulated %d observations (%s) with seed %d",
        len(grid),
        " x ".join(str(grid[c].cat.categories.size) for c in LABEL_COLUMNS),
        config.seed,
    )
    return grid


__all__ = ["observation_grid", "simulate_observations"]
