"""
Value Objects for Domain Layer.

Outcomes of the analysis stages. They carry pandas DataFrames, so they are
frozen dataclasses rather than pydantic models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from encounter_explorer.domain.entities import StageResult

# Rejection counts: predicate description -> number of failing rows
RejectionCountsDict = Dict[str, int]


@dataclass(frozen=True, eq=False)
class DatasetPreview:
    """First rows of a loaded dataset."""

    rows: pd.DataFrame
    total_rows: int
    columns: Tuple[str, ...]

    @property
    def shown_rows(self) -> int:
        return len(self.rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DatasetPreview):
            return NotImplemented
        return (
            self.total_rows == other.total_rows
            and self.columns == other.columns
            and self.rows.equals(other.rows)
        )


@dataclass(frozen=True, eq=False)
class AggregationOutcome:
    """Per-group statistic table, sorted by the statistic."""

    table: pd.DataFrame
    group_by: Tuple[str, ...]
    value_column: str
    statistic: str

    @property
    def result_column(self) -> str:
        return f"{self.statistic}_{self.value_column}"

    @property
    def group_count(self) -> int:
        return len(self.table)

    def as_records(self) -> List[Dict[str, Any]]:
        """Rows as plain dicts, in sorted order."""
        return self.table.to_dict(orient="records")


@dataclass(frozen=True, eq=False)
class FilterOutcome:
    """Result of applying the row filter."""

    rows: pd.DataFrame
    input_count: int
    rejection_counts: RejectionCountsDict = field(default_factory=dict)

    @property
    def output_count(self) -> int:
        return len(self.rows)

    @property
    def rejected_count(self) -> int:
        return self.input_count - self.output_count

    @property
    def reduction_ratio(self) -> float:
        """Calculate reduction ratio (0.0 = no reduction, 1.0 = all filtered)."""
        if self.input_count == 0:
            return 0.0
        return self.rejected_count / self.input_count


@dataclass
class AnalysisReport:
    """Complete result of an analysis run."""

    source: str
    total_rows: int
    preview: Optional[DatasetPreview] = None
    aggregation: Optional[AggregationOutcome] = None
    row_filter: Optional[FilterOutcome] = None
    boxplot_path: Optional[str] = None
    audit_trail: List[StageResult] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def stage(self, name: str) -> Optional[StageResult]:
        """Look up a stage result by name."""
        for result in self.audit_trail:
            if result.stage_name == name:
                return result
        return None
