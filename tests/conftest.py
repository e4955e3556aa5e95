"""
Pytest Configuration and Shared Fixtures.

This module contains fixtures available to all tests.
"""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import pandas as pd  # noqa: E402
import pytest  # noqa: E402

from encounter_explorer.adapters.console_logger import ConsoleAuditLogger  # noqa: E402
from encounter_explorer.adapters.csv_reader import EncounterCsvReader  # noqa: E402
from encounter_explorer.adapters.metrics_collector import InMemoryMetricsCollector  # noqa: E402
from encounter_explorer.config.models import (  # noqa: E402
    AggregationConfig,
    AnalysisConfig,
    BoxplotConfig,
    RowFilterConfig,
)
from encounter_explorer.domain.entities import Operator, Predicate  # noqa: E402

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_csv_path() -> Path:
    """Path to the 12-row sample encounter file."""
    return FIXTURES / "sample_encounters.csv"


@pytest.fixture
def sample_config_path() -> Path:
    """Path to sample configuration file."""
    return FIXTURES / "sample_config.yaml"


@pytest.fixture
def reader() -> EncounterCsvReader:
    """Reader with default options ('?' as missing)."""
    return EncounterCsvReader()


@pytest.fixture
def encounters(reader: EncounterCsvReader, sample_csv_path: Path) -> pd.DataFrame:
    """Sample encounter table, loaded fresh per test."""
    return reader.load(sample_csv_path)


@pytest.fixture
def console_logger() -> ConsoleAuditLogger:
    """Create console logger for testing."""
    return ConsoleAuditLogger(verbose=False)


@pytest.fixture
def metrics_collector() -> InMemoryMetricsCollector:
    """Create metrics collector for testing."""
    return InMemoryMetricsCollector()


@pytest.fixture
def default_config() -> AnalysisConfig:
    """Create default analysis configuration."""
    return AnalysisConfig()


@pytest.fixture
def aggregation_config() -> AggregationConfig:
    """Mean length of stay by race and gender."""
    return AggregationConfig(
        group_by=["race", "gender"],
        value_column="time_in_hospital",
        statistic="mean",
        descending=True,
    )


@pytest.fixture
def row_filter_config() -> RowFilterConfig:
    """Women in their seventies staying more than a week."""
    return RowFilterConfig(
        enabled=True,
        predicates=[
            Predicate(column="gender", operator=Operator.EQ, value="Female"),
            Predicate(column="age", operator=Operator.EQ, value="[70-80)"),
            Predicate(column="time_in_hospital", operator=Operator.GT, value=7),
        ],
    )


@pytest.fixture
def boxplot_config(tmp_path: Path) -> BoxplotConfig:
    """Length of stay by age bracket, written under tmp_path."""
    return BoxplotConfig(
        category_column="age",
        value_column="time_in_hospital",
        output_path=str(tmp_path / "plots" / "los_by_age.png"),
    )
