"""Column names and key tuples shared by the data, evaluate and plot layers.

Constants
    ALGORITHM, ANALYTE, DATASET_TYPE, METRIC : Label column names.
    VALUE, RANK, TOTAL_RANK                  : Numeric column names.
    LABEL_COLUMNS    : Label columns in enumeration nesting order.
    PARTITION_KEYS   : Grouping key for per-partition ranks.
    WIDE_KEYS        : Row key of the wide table (also its sort order).
    LONG_COLUMNS     : Column order of the exported long table.
"""

from typing import Tuple

ALGORITHM = "Algorithm"
ANALYTE = "Analyte"
DATASET_TYPE = "DatasetType"
METRIC = "Metric"
VALUE = "Value"
RANK = "Rank"
TOTAL_RANK = "TotalRank"

#: Outermost first; matches the order random values are drawn.
LABEL_COLUMNS: Tuple[str, ...] = (ALGORITHM, ANALYTE, DATASET_TYPE, METRIC)

PARTITION_KEYS: Tuple[str, ...] = (ANALYTE, METRIC, DATASET_TYPE)

WIDE_KEYS: Tuple[str, ...] = (DATASET_TYPE, ANALYTE, ALGORITHM)

LONG_COLUMNS: Tuple[str, ...] = LABEL_COLUMNS + (VALUE, RANK, TOTAL_RANK)


def value_column(metric: str) -> str:
    """Wide-table column holding the value of ``metric``."""
    return f"{VALUE}_{metric}"


def rank_column(metric: str) -> str:
    """Wide-table column holding the rank of ``metric``."""
    return f"{RANK}_{metric}"
