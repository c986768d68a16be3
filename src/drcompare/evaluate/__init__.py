"""
Evaluate Subpackage
===================

Per-partition ranking, total-rank aggregation and wide/long reshaping.

.. module:: drcompare.evaluate

"""

from .ranking import algorithm_leaderboard, attach_total_rank, compute_total_rank, rank_and_total, rank_observations
from .reshape import to_long, to_wide, wide_columns

__all__ = [
    # ranking
    "algorithm_leaderboard",
    "attach_total_rank",
    "compute_total_rank",
    "rank_and_total",
    "rank_observations",
    # reshape
    "to_long",
    "to_wide",
    "wide_columns",
]
