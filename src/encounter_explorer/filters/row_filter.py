"""
Row Filter Implementation.

Keeps the rows of the encounter table that satisfy every configured
predicate, e.g.:
    - gender == 'Female'
    - age == '[70-80)'
    - time_in_hospital > 7

Missing cells never satisfy ==, <, <=, >, >= or ``in``; they do satisfy
!= and ``not in``.
"""

from __future__ import annotations

import logging
import operator
from typing import Callable, Dict

import pandas as pd
from pandas.api.types import is_numeric_dtype

from encounter_explorer.config.models import RowFilterConfig
from encounter_explorer.domain.entities import Operator, Predicate
from encounter_explorer.domain.value_objects import FilterOutcome

logger = logging.getLogger(__name__)

_COMPARISONS: Dict[Operator, Callable[[pd.Series, object], pd.Series]] = {
    Operator.EQ: operator.eq,
    Operator.NE: operator.ne,
    Operator.LT: operator.lt,
    Operator.LE: operator.le,
    Operator.GT: operator.gt,
    Operator.GE: operator.ge,
}


class FilterError(Exception):
    """Raised when a predicate cannot be evaluated against the table."""
    pass


def predicate_mask(frame: pd.DataFrame, predicate: Predicate) -> pd.Series:
    """
    Evaluate a predicate row-wise.

    Args:
        frame: Encounter table
        predicate: Condition to evaluate

    Returns:
        Boolean Series aligned with ``frame.index``

    Raises:
        FilterError: If the column is missing or its dtype does not match
            the type of the compared value
    """
    if predicate.column not in frame.columns:
        raise FilterError(f"Unknown column in predicate: {predicate.describe()}")

    series = frame[predicate.column]
    if predicate.operator is Operator.IN:
        return series.isin(predicate.value)
    if predicate.operator is Operator.NOT_IN:
        return ~series.isin(predicate.value)

    _check_comparable(series, predicate)
    try:
        mask = _COMPARISONS[predicate.operator](series, predicate.value)
    except TypeError as e:
        raise FilterError(
            f"Cannot evaluate {predicate.describe()} on dtype {series.dtype}: {e}"
        ) from e
    return mask.fillna(predicate.operator is Operator.NE).astype(bool)


def _check_comparable(series: pd.Series, predicate: Predicate) -> None:
    """Numbers compare with numeric columns only, text with text columns only."""
    if series.empty:
        # header-only tables carry object columns
        return
    numeric_value = isinstance(predicate.value, (int, float))
    if numeric_value != is_numeric_dtype(series):
        raise FilterError(
            f"Cannot evaluate {predicate.describe()} on dtype {series.dtype}"
        )


class RowFilter:
    """Filter rows by a conjunction of predicates."""

    def __init__(self, config: RowFilterConfig) -> None:
        """
        Initialize with configuration.

        Args:
            config: Row filter configuration
        """
        self.config = config

    @property
    def name(self) -> str:
        return "row_filter"

    def apply(self, frame: pd.DataFrame) -> FilterOutcome:
        """
        Apply all predicates.

        The output keeps the original index and column order; the input
        frame is left untouched.

        Args:
            frame: Encounter table

        Returns:
            FilterOutcome with kept rows and per-predicate rejection counts
        """
        if not self.config.enabled or not self.config.predicates:
            return FilterOutcome(rows=frame.copy(), input_count=len(frame))

        keep = pd.Series(True, index=frame.index)
        rejections: Dict[str, int] = {}

        for predicate in self.config.predicates:
            mask = predicate_mask(frame, predicate)
            rejections[predicate.describe()] = int((~mask).sum())
            keep &= mask

        rows = frame.loc[keep].copy()
        logger.debug(
            f"{self.name}: kept {len(rows)}/{len(frame)} rows "
            f"with {len(self.config.predicates)} predicates"
        )
        return FilterOutcome(
            rows=rows,
            input_count=len(frame),
            rejection_counts=rejections,
        )
