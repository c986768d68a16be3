"""Ranking engine.

Ranks algorithms within each ``(Analyte, Metric, DatasetType)`` partition,
sums each algorithm's ranks into a ``TotalRank`` and broadcasts the total
back onto every observation.

Ties inside a partition are broken by first-encountered row order: the row
that appears earlier in the frame receives the lower rank. Averaged or random
tie-breaks would change ``TotalRank`` sums and are not used.
"""

from __future__ import annotations

import logging
from typing import Tuple

import pandas as pd

from drcompare.data.constants import ALGORITHM, PARTITION_KEYS, RANK, TOTAL_RANK, VALUE
from drcompare.exceptions import MissingGroupKeyError

logger = logging.getLogger(__name__)


def _require_columns(df: pd.DataFrame, columns, what: str) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(f"{what} is missing required columns: {missing}")


def rank_observations(df: pd.DataFrame) -> pd.DataFrame:
    """Assign per-partition ranks to ``Value``.

    Parameters
    ----------
    df : pandas.DataFrame
        Observations with ``Analyte``, ``Metric``, ``DatasetType`` and
        ``Value`` columns.

    Returns
    -------
    pandas.DataFrame
        Copy of ``df`` with an integer ``Rank`` column. Within each partition
        ranks are ``1..k`` (``k`` = partition size), ascending in ``Value``,
        ties resolved by row order.

    Raises
    ------
    ValueError
        If a required column is missing or any ``Value`` is NaN.
    """
    _require_columns(df, list(PARTITION_KEYS) + [VALUE], "Observation frame")
    if df[VALUE].isna().any():
        raise ValueError("Cannot rank observations with missing values")

    ranked = df.copy()
    ranks = ranked.groupby(list(PARTITION_KEYS), sort=False, observed=True)[VALUE].rank(
        method="first", ascending=True
    )
    ranked[RANK] = ranks.astype("int64")
    logger.debug(
        "Ranked %d observations across %d partitions",
        len(ranked),
        ranked.groupby(list(PARTITION_KEYS), observed=True).ngroups,
    )
    return ranked


def compute_total_rank(ranked: pd.DataFrame) -> pd.DataFrame:
    """Sum ranks per algorithm across every partition.

    Parameters
    ----------
    ranked : pandas.DataFrame
        Output of :func:`rank_observations`.

    Returns
    -------
    pandas.DataFrame
        Columns ``Algorithm`` and ``TotalRank``, one row per algorithm in
        first-appearance order.
    """
    _require_columns(ranked, [ALGORITHM, RANK], "Ranked frame")
    totals = ranked.groupby(ALGORITHM, sort=False, observed=True)[RANK].sum().reset_index(name=TOTAL_RANK)
    totals[TOTAL_RANK] = totals[TOTAL_RANK].astype("int64")
    return totals


def attach_total_rank(ranked: pd.DataFrame, totals: pd.DataFrame) -> pd.DataFrame:
    """Broadcast ``TotalRank`` onto every observation by ``Algorithm``.

    Parameters
    ----------
    ranked : pandas.DataFrame
        Ranked observations.
    totals : pandas.DataFrame
        Output of :func:`compute_total_rank`.

    Returns
    -------
    pandas.DataFrame
        Copy of ``ranked`` with an integer ``TotalRank`` column; row order
        and index are preserved.

    Raises
    ------
    MissingGroupKeyError
        If any observation's algorithm has no entry in ``totals``.
    ValueError
        If ``totals`` lists an algorithm more than once.
    """
    _require_columns(totals, [ALGORITHM, TOTAL_RANK], "Totals frame")
    keys = totals[ALGORITHM].astype(object)
    if keys.duplicated().any():
        raise ValueError(f"Totals frame lists algorithms more than once: {sorted(set(keys[keys.duplicated()]))}")

    lookup = dict(zip(keys, totals[TOTAL_RANK]))
    mapped = ranked[ALGORITHM].astype(object).map(lookup)
    if mapped.isna().any():
        missing = list(dict.fromkeys(ranked.loc[mapped.isna(), ALGORITHM].astype(object)))
        raise MissingGroupKeyError(f"No total rank for algorithms: {missing}")

    joined = ranked.copy()
    joined[TOTAL_RANK] = mapped.astype("int64")
    return joined


def rank_and_total(df: pd.DataFrame) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Run ranking, aggregation and join in one call.

    Returns
    -------
    tuple[pandas.DataFrame, pandas.DataFrame]
        Ranked observations with ``TotalRank``, and the per-algorithm totals.
    """
    ranked = rank_observations(df)
    totals = compute_total_rank(ranked)
    joined = attach_total_rank(ranked, totals)
    logger.info("Computed total ranks for %d algorithms", len(totals))
    return joined, totals


def algorithm_leaderboard(totals: pd.DataFrame) -> pd.DataFrame:
    """Order algorithms by ``TotalRank`` (lower is better).

    Ties keep the order of ``totals``. A 1-based ``Position`` column is
    prepended.
    """
    board = totals.sort_values(TOTAL_RANK, kind="stable").reset_index(drop=True)
    board.insert(0, "Position", range(1, len(board) + 1))
    return board


__all__ = [
    "algorithm_leaderboard",
    "attach_total_rank",
    "compute_total_rank",
    "rank_and_total",
    "rank_observations",
]
