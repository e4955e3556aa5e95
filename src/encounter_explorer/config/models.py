"""
Configuration Models - Pydantic Models for Type-Safe Config.

All configuration is validated at load time using Pydantic.
"""

from __future__ import annotations

from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from encounter_explorer.domain.entities import Operator, Predicate

Statistic = Literal["mean", "median", "min", "max", "count", "sum"]


class DatasetConfig(BaseModel):
    """Location and parsing options of the encounter file."""

    path: str = Field(default="data/diabetic_data.csv")
    delimiter: str = Field(default=",", min_length=1)
    na_values: List[str] = Field(default_factory=lambda: ["?"])
    usecols: Optional[List[str]] = None
    encoding: str = Field(default="utf-8")
    required_columns: List[str] = Field(default_factory=list)


class PreviewConfig(BaseModel):
    """Configuration for the head-of-table preview."""

    enabled: bool = True
    rows: int = Field(default=5, ge=0)


class AggregationConfig(BaseModel):
    """Configuration for grouped aggregation."""

    enabled: bool = True
    group_by: List[str] = Field(default_factory=lambda: ["race", "gender"])
    value_column: str = Field(default="time_in_hospital")
    statistic: Statistic = "mean"
    descending: bool = True

    @field_validator("group_by")
    @classmethod
    def _non_empty(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("group_by requires at least one column")
        return value


class RowFilterConfig(BaseModel):
    """Configuration for the predicate row filter."""

    enabled: bool = True
    predicates: List[Predicate] = Field(
        default_factory=lambda: [
            Predicate(column="gender", operator=Operator.EQ, value="Female"),
            Predicate(column="age", operator=Operator.EQ, value="[70-80)"),
            Predicate(column="time_in_hospital", operator=Operator.GT, value=7),
        ]
    )

    @field_validator("predicates")
    @classmethod
    def _no_duplicates(cls, value: List[Predicate]) -> List[Predicate]:
        # rejection counts are keyed by the predicate text
        seen = set()
        for predicate in value:
            text = predicate.describe()
            if text in seen:
                raise ValueError(f"Duplicate predicate: {text}")
            seen.add(text)
        return value


class TickLabelConfig(BaseModel):
    """Relabelling of category tick labels by string splitting."""

    delimiter: str = Field(default="-", min_length=1)
    part: Optional[int] = Field(default=0)
    joiner: str = Field(default="-")
    strip: str = Field(default="[()]")


class BoxplotConfig(BaseModel):
    """Configuration for the categorical boxplot."""

    enabled: bool = True
    category_column: str = Field(default="age")
    value_column: str = Field(default="time_in_hospital")
    category_order: Optional[List[str]] = None
    tick_labels: Optional[TickLabelConfig] = None
    title: Optional[str] = None
    output_path: Optional[str] = None
    figsize: Tuple[float, float] = (10.0, 6.0)


class AnalysisConfig(BaseModel):
    """Root configuration object."""

    version: str = "1.0"
    dataset: DatasetConfig = Field(default_factory=DatasetConfig)
    preview: PreviewConfig = Field(default_factory=PreviewConfig)
    aggregation: AggregationConfig = Field(default_factory=AggregationConfig)
    row_filter: RowFilterConfig = Field(default_factory=RowFilterConfig)
    boxplot: BoxplotConfig = Field(default_factory=BoxplotConfig)
