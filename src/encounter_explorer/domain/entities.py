"""
Core Domain Entities.

Predicates describe row-level conditions on the encounter table. Stage
results form the audit trail of a pipeline run.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field, model_validator

Scalar = Union[str, int, float, bool]


class Operator(str, Enum):
    """Comparison operator of a predicate."""

    EQ = "=="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    IN = "in"
    NOT_IN = "not in"

    @property
    def is_membership(self) -> bool:
        return self in (Operator.IN, Operator.NOT_IN)

    @property
    def is_ordering(self) -> bool:
        return self in (Operator.LT, Operator.LE, Operator.GT, Operator.GE)


class Predicate(BaseModel):
    """A single condition on one column, e.g. ``time_in_hospital > 7``."""

    column: str = Field(..., min_length=1, description="Column the condition applies to")
    operator: Operator = Field(default=Operator.EQ, description="Comparison operator")
    value: Union[Scalar, List[Scalar]] = Field(..., description="Right-hand operand")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_operand(self) -> "Predicate":
        if self.operator.is_membership:
            if not isinstance(self.value, list):
                raise ValueError(
                    f"operator '{self.operator.value}' requires a list value"
                )
        elif isinstance(self.value, list):
            raise ValueError(
                f"operator '{self.operator.value}' requires a scalar value"
            )
        if self.operator.is_ordering and isinstance(self.value, bool):
            raise ValueError(
                f"operator '{self.operator.value}' cannot compare against a boolean"
            )
        return self

    def describe(self) -> str:
        """Human readable form, used as key for rejection counts."""
        return f"{self.column} {self.operator.value} {self.value!r}"


class StageResult(BaseModel):
    """Result of a single analysis stage for the audit trail."""

    stage_name: str
    input_rows: int = Field(ge=0)
    output_rows: int = Field(ge=0)
    duration_seconds: float = Field(ge=0)
    details: Dict[str, Any] = Field(default_factory=dict)

    @property
    def reduction_ratio(self) -> float:
        """Share of input rows not carried to the output (0.0 = none dropped)."""
        if self.input_rows == 0:
            return 0.0
        return 1.0 - (self.output_rows / self.input_rows)
