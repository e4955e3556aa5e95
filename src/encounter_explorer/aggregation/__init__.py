"""
Aggregation Package - Grouped Statistics.

    - grouped_statistic: statistic of a column per group, sorted
    - grouped_mean: the mean shorthand
    - GroupedAggregator: config-driven stage used by the pipeline
"""

from encounter_explorer.aggregation.grouped import (
    SUPPORTED_STATISTICS,
    AggregationError,
    GroupedAggregator,
    grouped_mean,
    grouped_statistic,
)

__all__ = [
    "SUPPORTED_STATISTICS",
    "AggregationError",
    "GroupedAggregator",
    "grouped_mean",
    "grouped_statistic",
]
