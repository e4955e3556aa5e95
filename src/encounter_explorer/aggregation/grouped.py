"""
Grouped Aggregation.

Computes a summary statistic of one numeric column per combination of
categorical group keys, e.g. mean ``time_in_hospital`` by race and gender.

Ordering:
    1. Statistic, descending by default
    2. Group keys ascending (tie-breaker, keeps output deterministic)
"""

from __future__ import annotations

import logging
from typing import Sequence

import pandas as pd
from pandas.api.types import is_numeric_dtype

from encounter_explorer.config.models import AggregationConfig
from encounter_explorer.domain.value_objects import AggregationOutcome

logger = logging.getLogger(__name__)

SUPPORTED_STATISTICS = ("mean", "median", "min", "max", "count", "sum")


class AggregationError(Exception):
    """Raised when a grouped aggregation cannot be computed."""
    pass


def grouped_statistic(
    frame: pd.DataFrame,
    group_by: Sequence[str],
    value_column: str,
    statistic: str = "mean",
    descending: bool = True,
) -> AggregationOutcome:
    """
    Group rows and compute a statistic per group.

    Rows with a missing group key are dropped; missing values in the
    value column are skipped.

    Args:
        frame: Encounter table
        group_by: Categorical columns to group on
        value_column: Column to summarize
        statistic: One of SUPPORTED_STATISTICS
        descending: Sort by statistic descending (default) or ascending

    Returns:
        AggregationOutcome with one row per group

    Raises:
        AggregationError: On unknown columns/statistics or non-numeric values
    """
    keys = list(group_by)
    if not keys:
        raise AggregationError("group_by requires at least one column")
    if statistic not in SUPPORTED_STATISTICS:
        raise AggregationError(
            f"statistic={statistic} not in {', '.join(SUPPORTED_STATISTICS)}"
        )

    missing = [c for c in [*keys, value_column] if c not in frame.columns]
    if missing:
        raise AggregationError(f"Unknown columns: {', '.join(missing)}")

    result_column = f"{statistic}_{value_column}"
    if frame.empty:
        # no rows, so no dtype to check (header-only files read as object)
        table = pd.DataFrame(columns=[*keys, result_column])
    elif statistic != "count" and not is_numeric_dtype(frame[value_column]):
        raise AggregationError(
            f"value_column={value_column} is not numeric "
            f"(dtype={frame[value_column].dtype})"
        )
    else:
        table = (
            frame.groupby(keys, dropna=True, observed=True)[value_column]
            .agg(statistic)
            .reset_index(name=result_column)
        )
    table = table.sort_values(
        [result_column, *keys],
        ascending=[not descending] + [True] * len(keys),
        kind="mergesort",
    ).reset_index(drop=True)

    logger.debug(
        f"{statistic}({value_column}) over {len(frame)} rows -> {len(table)} groups"
    )
    return AggregationOutcome(
        table=table,
        group_by=tuple(keys),
        value_column=value_column,
        statistic=statistic,
    )


def grouped_mean(
    frame: pd.DataFrame,
    group_by: Sequence[str],
    value_column: str,
    descending: bool = True,
) -> AggregationOutcome:
    """Mean of ``value_column`` per group, sorted by the mean."""
    return grouped_statistic(frame, group_by, value_column, "mean", descending)


class GroupedAggregator:
    """Config-driven wrapper around grouped_statistic."""

    def __init__(self, config: AggregationConfig) -> None:
        self.config = config

    @property
    def name(self) -> str:
        return "aggregation"

    def apply(self, frame: pd.DataFrame) -> AggregationOutcome:
        return grouped_statistic(
            frame,
            self.config.group_by,
            self.config.value_column,
            self.config.statistic,
            self.config.descending,
        )
