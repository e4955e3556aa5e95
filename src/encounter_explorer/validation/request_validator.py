"""
Request Validator - Check Configured Columns Against the Dataset.

Runs after loading and before any stage executes:
    - Aggregation group keys and value column exist
    - Every row filter predicate names an existing column
    - Boxplot category and value columns exist

Design Notes:
    - Fail-fast principle
    - All problems are collected and reported together
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

import pandas as pd

from encounter_explorer.config.models import AnalysisConfig

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Raised when configured columns do not match the dataset."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class RequestValidator:
    """Validates that enabled stages only reference existing columns."""

    def validate(self, config: AnalysisConfig, frame: pd.DataFrame) -> None:
        """
        Validate the configuration against a loaded table.

        Args:
            config: The analysis configuration
            frame: The loaded dataset

        Raises:
            ValidationError: If any enabled stage references unknown columns
        """
        columns = set(frame.columns)
        errors: List[str] = []

        if config.aggregation.enabled:
            errors.extend(
                self._missing(
                    "aggregation",
                    [*config.aggregation.group_by, config.aggregation.value_column],
                    columns,
                )
            )

        if config.row_filter.enabled:
            errors.extend(
                self._missing(
                    "row_filter",
                    [p.column for p in config.row_filter.predicates],
                    columns,
                )
            )

        if config.boxplot.enabled:
            errors.extend(
                self._missing(
                    "boxplot",
                    [config.boxplot.category_column, config.boxplot.value_column],
                    columns,
                )
            )

        if errors:
            error_message = "; ".join(errors)
            logger.error(f"Request validation failed: {error_message}")
            raise ValidationError(error_message)

        logger.debug(f"Request validated against {len(columns)} columns")

    def _missing(
        self,
        section: str,
        referenced: Iterable[str],
        columns: set,
    ) -> List[str]:
        seen: List[str] = []
        for column in referenced:
            if column not in columns and column not in seen:
                seen.append(column)
        return [f"{section}: column '{c}' not in dataset" for c in seen]
