"""
Configuration Package - Models and Loaders.

Configuration Structure:
    - AnalysisConfig: Root configuration object
    - DatasetConfig: File location and parsing options
    - PreviewConfig: Head-of-table preview
    - AggregationConfig: Grouped statistic settings
    - RowFilterConfig: Predicates for the row filter
    - BoxplotConfig / TickLabelConfig: Boxplot rendering

Design Principles:
    - Type-safe via Pydantic
    - Validation on load (fail fast)
    - Support for profiles (e.g. readmissions)
"""

from encounter_explorer.config.loader import ConfigLoader, load_config
from encounter_explorer.config.models import (
    AggregationConfig,
    AnalysisConfig,
    BoxplotConfig,
    DatasetConfig,
    PreviewConfig,
    RowFilterConfig,
    TickLabelConfig,
)

__all__ = [
    "ConfigLoader",
    "load_config",
    "AnalysisConfig",
    "DatasetConfig",
    "PreviewConfig",
    "AggregationConfig",
    "RowFilterConfig",
    "BoxplotConfig",
    "TickLabelConfig",
]
