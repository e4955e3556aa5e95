"""
Domain Layer - Core Entities and Value Objects.

Entities:
    - Operator: Comparison operators for row predicates
    - Predicate: A single condition on one column
    - StageResult: Audit record of one analysis stage

Value Objects:
    - DatasetPreview: First rows of a loaded dataset
    - AggregationOutcome: Sorted per-group statistic table
    - FilterOutcome: Filtered rows with per-predicate rejection counts
    - AnalysisReport: Complete result of a pipeline run
"""

from encounter_explorer.domain.entities import Operator, Predicate, StageResult
from encounter_explorer.domain.value_objects import (
    AggregationOutcome,
    AnalysisReport,
    DatasetPreview,
    FilterOutcome,
)

__all__ = [
    "Operator",
    "Predicate",
    "StageResult",
    "DatasetPreview",
    "AggregationOutcome",
    "FilterOutcome",
    "AnalysisReport",
]
