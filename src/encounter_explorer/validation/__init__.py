"""
Validation Package - Configuration and Data Validation.

This package provides validation for:
    - RequestValidator: configured columns exist in the loaded table
    - DataValidator: quality of the loaded data

Design Principles:
    - Fail fast on invalid input
    - Clear, actionable error messages
    - Configurable validation rules
"""

from encounter_explorer.validation.request_validator import (
    RequestValidator,
    ValidationError,
)
from encounter_explorer.validation.data_validator import (
    DataValidationError,
    DataValidator,
    DataValidatorConfig,
    ValidationResult,
)

__all__ = [
    "RequestValidator",
    "ValidationError",
    "DataValidator",
    "DataValidatorConfig",
    "DataValidationError",
    "ValidationResult",
]
