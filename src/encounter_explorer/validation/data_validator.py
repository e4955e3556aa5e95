"""
Data Validator - Validate Loaded Encounter Data.

Validates data after loading:
    - Required columns present
    - Numeric columns parsed as numbers
    - Missing-value rate per column
    - Duplicate identifiers (e.g. encounter_id)

Design Notes:
    - Warnings for suspicious data (don't fail)
    - Errors for data the stages cannot use
    - Logs anomalies for investigation
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd
from pandas.api.types import is_numeric_dtype

logger = logging.getLogger(__name__)


class DataValidationError(Exception):
    """Raised when loaded data fails validation."""

    def __init__(self, errors: List[str]) -> None:
        self.errors = errors
        message = "; ".join(errors[:5])
        if len(errors) > 5:
            message += f" ... and {len(errors) - 5} more"
        super().__init__(f"Data validation failed: {message}")


@dataclass
class ValidationResult:
    """Result of data validation."""

    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    missing_ratios: Dict[str, float] = field(default_factory=dict)

    def add_error(self, error: str) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning (validation still passes)."""
        self.warnings.append(warning)

    @property
    def has_issues(self) -> bool:
        return bool(self.errors or self.warnings)


@dataclass
class DataValidatorConfig:
    """Configuration for data validation."""

    required_columns: List[str] = field(default_factory=list)
    numeric_columns: List[str] = field(
        default_factory=lambda: [
            "time_in_hospital",
            "num_lab_procedures",
            "num_procedures",
            "num_medications",
            "number_diagnoses",
        ]
    )
    unique_columns: List[str] = field(default_factory=lambda: ["encounter_id"])
    max_missing_ratio: float = 0.5

    raise_on_error: bool = True


class DataValidator:
    """Validates a loaded encounter table for quality issues."""

    def __init__(self, config: Optional[DataValidatorConfig] = None) -> None:
        self.config = config or DataValidatorConfig()

    def validate(self, frame: pd.DataFrame) -> ValidationResult:
        """
        Run all checks.

        Args:
            frame: Loaded dataset

        Returns:
            ValidationResult with errors, warnings and missing ratios

        Raises:
            DataValidationError: If errors were found and raise_on_error is set
        """
        result = ValidationResult()

        for column in self.config.required_columns:
            if column not in frame.columns:
                result.add_error(f"Required column missing: {column}")

        if frame.empty:
            # header-only files read every column as object
            result.add_warning("Dataset has no rows")
        else:
            self._check_numeric(frame, result)
            self._check_missing(frame, result)
            self._check_duplicates(frame, result)

        self._log_result(result)

        if not result.is_valid and self.config.raise_on_error:
            raise DataValidationError(result.errors)
        return result

    def _check_numeric(self, frame: pd.DataFrame, result: ValidationResult) -> None:
        for column in self.config.numeric_columns:
            if column in frame.columns and not is_numeric_dtype(frame[column]):
                result.add_error(
                    f"Column {column} is not numeric (dtype={frame[column].dtype})"
                )

    def _check_missing(self, frame: pd.DataFrame, result: ValidationResult) -> None:
        ratios = frame.isna().mean()
        for column, ratio in ratios.items():
            if ratio > 0:
                result.missing_ratios[str(column)] = float(ratio)
            if ratio > self.config.max_missing_ratio:
                result.add_warning(
                    f"Column {column} is {ratio:.1%} missing "
                    f"(max {self.config.max_missing_ratio:.1%})"
                )

    def _check_duplicates(self, frame: pd.DataFrame, result: ValidationResult) -> None:
        for column in self.config.unique_columns:
            if column not in frame.columns:
                continue
            duplicates = int(frame[column].dropna().duplicated().sum())
            if duplicates:
                result.add_warning(f"Column {column} has {duplicates} duplicate values")

    def _log_result(self, result: ValidationResult) -> None:
        if result.errors:
            logger.warning(f"Data validation: {len(result.errors)} errors found")
        if result.warnings:
            logger.info(f"Data validation: {len(result.warnings)} warnings")
