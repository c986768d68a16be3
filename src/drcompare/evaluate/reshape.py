"""Wide/long reshaping of ranked observations.

The wide table has one row per ``(DatasetType, Analyte, Algorithm)`` and, for
every metric, a ``Value_<Metric>`` and a ``Rank_<Metric>`` column, followed by
``TotalRank``. Rows are sorted by ``DatasetType``, then ``Analyte``, then
``Algorithm``, each in declared category order (alphabetical when a column is
not categorical). Metric columns follow declared order, or first appearance
for plain string labels such as a re-loaded spreadsheet.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import pandas as pd

from drcompare.data.constants import (
    LABEL_COLUMNS,
    LONG_COLUMNS,
    METRIC,
    RANK,
    TOTAL_RANK,
    VALUE,
    WIDE_KEYS,
    rank_column,
    value_column,
)
from drcompare.exceptions import DuplicateKeyError

logger = logging.getLogger(__name__)


def _category_order(series: pd.Series, sort_plain: bool = True) -> List[str]:
    """Declared category order restricted to observed labels.

    Plain (non-categorical) columns are sorted when ``sort_plain`` is true and
    otherwise keep first-appearance order.
    """
    if isinstance(series.dtype, pd.CategoricalDtype):
        present = set(series.astype(object).unique())
        return [c for c in series.cat.categories if c in present]
    labels = list(dict.fromkeys(series.astype(object)))
    return sorted(labels) if sort_plain else labels


def _as_ordered(series: pd.Series, categories: Sequence[str]) -> pd.Categorical:
    return pd.Categorical(series.astype(object), categories=list(categories), ordered=True)


def wide_columns(metrics: Sequence[str], include_total: bool = True) -> List[str]:
    """Column order of the wide table for ``metrics``."""
    cols = list(WIDE_KEYS)
    cols += [value_column(m) for m in metrics]
    cols += [rank_column(m) for m in metrics]
    if include_total:
        cols.append(TOTAL_RANK)
    return cols


def to_wide(df: pd.DataFrame) -> pd.DataFrame:
    """Pivot ranked observations into one row per ``(DatasetType, Analyte, Algorithm)``.

    Parameters
    ----------
    df : pandas.DataFrame
        Long ranked observations with ``Value`` and ``Rank`` columns and,
        optionally, ``TotalRank``.

    Returns
    -------
    pandas.DataFrame
        Wide table with columns ``DatasetType, Analyte, Algorithm``,
        ``Value_<M>`` and ``Rank_<M>`` for each metric in declared order, and
        ``TotalRank`` when present in ``df``.

    Raises
    ------
    DuplicateKeyError
        If any ``(DatasetType, Analyte, Algorithm, Metric)`` key occurs more
        than once.
    ValueError
        If a required column is missing or a triple lacks one of the metrics.
    """
    required = list(WIDE_KEYS) + [METRIC, VALUE, RANK]
    missing_cols = [c for c in required if c not in df.columns]
    if missing_cols:
        raise ValueError(f"Ranked frame is missing required columns: {missing_cols}")

    pivot_keys = list(WIDE_KEYS) + [METRIC]
    dup_mask = df.duplicated(subset=pivot_keys, keep=False)
    if dup_mask.any():
        dup_keys = df.loc[dup_mask, pivot_keys].astype(object).drop_duplicates()
        examples = [tuple(row) for row in dup_keys.head(5).itertuples(index=False)]
        raise DuplicateKeyError(f"{len(dup_keys)} pivot keys occur more than once, e.g. {examples}")

    orders = {col: _category_order(df[col], sort_plain=col != METRIC) for col in pivot_keys}
    metrics = orders[METRIC]
    include_total = TOTAL_RANK in df.columns

    work = df.copy()
    for col in pivot_keys:
        work[col] = work[col].astype(object)

    values = work.pivot(index=list(WIDE_KEYS), columns=METRIC, values=VALUE)
    ranks = work.pivot(index=list(WIDE_KEYS), columns=METRIC, values=RANK)
    if values.isna().any().any() or ranks.isna().any().any():
        raise ValueError("Every (DatasetType, Analyte, Algorithm) triple must have one row per metric")

    wide = pd.DataFrame(index=values.index)
    for m in metrics:
        wide[value_column(m)] = values[m].astype(float)
    for m in metrics:
        wide[rank_column(m)] = ranks[m].astype("int64")
    if include_total:
        totals = work.drop_duplicates(subset=list(WIDE_KEYS)).set_index(list(WIDE_KEYS))[TOTAL_RANK]
        wide[TOTAL_RANK] = totals.reindex(wide.index).astype("int64")

    wide = wide.reset_index()
    for col in WIDE_KEYS:
        wide[col] = _as_ordered(wide[col], orders[col])
    wide = wide.sort_values(list(WIDE_KEYS), kind="stable").reset_index(drop=True)

    logger.info("Reshaped %d observations into %d wide rows", len(df), len(wide))
    return wide[wide_columns(metrics, include_total)]


def to_long(wide: pd.DataFrame, metrics: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """Un-pivot a wide table back into one row per observation.

    Parameters
    ----------
    wide : pandas.DataFrame
        Output of :func:`to_wide` (or a re-loaded export of it).
    metrics : sequence of str, optional
        Metrics to restore. Inferred from ``Value_*`` columns when omitted.

    Returns
    -------
    pandas.DataFrame
        Long frame in ``Algorithm, Analyte, DatasetType, Metric`` nesting
        order with ``Value``, ``Rank`` and (when present) ``TotalRank``.
    """
    prefix = f"{VALUE}_"
    if metrics is None:
        metrics = [c[len(prefix):] for c in wide.columns if str(c).startswith(prefix)]
    metrics = list(metrics)
    if not metrics:
        raise ValueError("Wide table has no Value_<Metric> columns")

    carry = list(WIDE_KEYS) + ([TOTAL_RANK] if TOTAL_RANK in wide.columns else [])
    frames = []
    for m in metrics:
        part = wide[carry].copy()
        part[METRIC] = m
        part[VALUE] = wide[value_column(m)].to_numpy()
        part[RANK] = wide[rank_column(m)].to_numpy()
        frames.append(part)

    long = pd.concat(frames, ignore_index=True)
    long[METRIC] = _as_ordered(long[METRIC], metrics)
    long = long.sort_values(list(LABEL_COLUMNS), kind="stable").reset_index(drop=True)
    return long[[c for c in LONG_COLUMNS if c in long.columns]]


__all__ = ["to_long", "to_wide", "wide_columns"]
