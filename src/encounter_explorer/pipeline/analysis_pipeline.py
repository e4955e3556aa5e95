"""
Analysis Pipeline - Main Orchestrator.

Loads the encounter table once and runs the enabled stages in order:
    1. preview      - first rows of the table
    2. aggregation  - grouped statistic
    3. row_filter   - conjunction of predicates
    4. boxplot      - categorical boxplot

Stages are independent: each one reads the loaded table and none of them
modifies it.
"""

from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Protocol, Tuple, Union

import pandas as pd

import encounter_explorer
from encounter_explorer.adapters.console_logger import ConsoleAuditLogger
from encounter_explorer.adapters.csv_reader import EncounterCsvReader, preview
from encounter_explorer.adapters.metrics_collector import InMemoryMetricsCollector
from encounter_explorer.aggregation.grouped import GroupedAggregator
from encounter_explorer.config.loader import load_config
from encounter_explorer.config.models import AnalysisConfig
from encounter_explorer.domain.entities import StageResult
from encounter_explorer.domain.value_objects import AnalysisReport, FilterOutcome
from encounter_explorer.filters.row_filter import RowFilter
from encounter_explorer.plotting.boxplot import BoxplotRenderer
from encounter_explorer.validation.data_validator import (
    DataValidator,
    DataValidatorConfig,
)
from encounter_explorer.validation.request_validator import RequestValidator

logger = logging.getLogger(__name__)


class DatasetReaderProtocol(Protocol):
    """Protocol for dataset readers."""

    def load(self, path: Union[str, Path, None] = None) -> pd.DataFrame:
        ...


class AuditLoggerProtocol(Protocol):
    """Protocol for audit loggers."""

    def set_run_id(self, run_id: str) -> None:
        ...

    def log_stage_start(
        self, stage_name: str, input_rows: int, metadata: Optional[Dict] = None
    ) -> None:
        ...

    def log_stage_end(
        self,
        stage_name: str,
        output_rows: int,
        duration_seconds: float,
        metadata: Optional[Dict] = None,
    ) -> None:
        ...

    def log_predicate_rejections(
        self, stage_name: str, predicate: str, rejected_rows: int
    ) -> None:
        ...

    def log_anomaly(
        self, message: str, severity: str, context: Optional[Dict] = None
    ) -> None:
        ...


class MetricsCollectorProtocol(Protocol):
    """Protocol for metrics collectors."""

    def record_timing(
        self, name: str, duration_seconds: float, tags: Optional[Dict] = None
    ) -> None:
        ...

    def record_count(
        self, name: str, value: int, tags: Optional[Dict] = None
    ) -> None:
        ...

    def get_metrics(self) -> Dict[str, Any]:
        ...


class DataValidatorProtocol(Protocol):
    """Protocol for data validators."""

    def validate(self, frame: pd.DataFrame) -> Any:
        ...


class RequestValidatorProtocol(Protocol):
    """Protocol for request validators."""

    def validate(self, config: AnalysisConfig, frame: pd.DataFrame) -> None:
        ...


class AnalysisPipeline:
    """Main orchestrator for an analysis run."""

    def __init__(
        self,
        reader: DatasetReaderProtocol,
        config: AnalysisConfig,
        audit_logger: AuditLoggerProtocol,
        metrics_collector: MetricsCollectorProtocol,
        data_validator: Optional[DataValidatorProtocol] = None,
        request_validator: Optional[RequestValidatorProtocol] = None,
    ) -> None:
        """
        Initialize pipeline with all dependencies.

        Args:
            reader: Loads the encounter table
            config: Analysis configuration
            audit_logger: For audit trail
            metrics_collector: For timings and row counts
            data_validator: For data quality checks (optional)
            request_validator: For column checks (optional)
        """
        self.reader = reader
        self.config = config
        self.audit_logger = audit_logger
        self.metrics_collector = metrics_collector
        self.data_validator = data_validator
        self.request_validator = request_validator

    def run(self, path: Union[str, Path, None] = None) -> AnalysisReport:
        """
        Execute the analysis.

        Args:
            path: Dataset file (default: config.dataset.path)

        Returns:
            AnalysisReport with stage outcomes and audit trail

        Raises:
            DatasetError: If the dataset cannot be loaded
            DataValidationError: If data validation fails
            ValidationError: If configured columns are missing
        """
        start_time = time.perf_counter()
        run_id = str(uuid.uuid4())
        self.audit_logger.set_run_id(run_id)
        source = str(path if path is not None else self.config.dataset.path)

        # 1. Load
        load_start = time.perf_counter()
        frame = self.reader.load(source)
        self.metrics_collector.record_timing(
            "data_load_seconds", time.perf_counter() - load_start
        )
        self.metrics_collector.record_count("input_rows_total", len(frame))

        # 2. Validate
        if self.data_validator:
            validation = self.data_validator.validate(frame)
            if validation.has_issues:
                self.audit_logger.log_anomaly(
                    f"Data validation: {len(validation.warnings)} warnings, "
                    f"{len(validation.errors)} errors",
                    severity="WARNING" if validation.is_valid else "ERROR",
                )
        if self.request_validator:
            self.request_validator.validate(self.config, frame)
            logger.debug(f"Request validated: {run_id}")

        report = AnalysisReport(source=source, total_rows=len(frame))

        # 3. Stages
        if self.config.preview.enabled:
            report.preview = self._execute_stage(
                "preview",
                frame,
                report,
                lambda: self._preview(frame),
            )

        if self.config.aggregation.enabled:
            aggregator = GroupedAggregator(self.config.aggregation)
            report.aggregation = self._execute_stage(
                aggregator.name,
                frame,
                report,
                lambda: self._aggregate(aggregator, frame),
            )

        if self.config.row_filter.enabled:
            row_filter = RowFilter(self.config.row_filter)
            report.row_filter = self._execute_stage(
                row_filter.name,
                frame,
                report,
                lambda: self._filter(row_filter, frame),
            )

        if self.config.boxplot.enabled:
            renderer = BoxplotRenderer(self.config.boxplot)
            report.boxplot_path = self._execute_stage(
                renderer.name,
                frame,
                report,
                lambda: self._boxplot(renderer, frame),
            )

        # 4. Finish
        total_duration = time.perf_counter() - start_time
        self.metrics_collector.record_timing("analysis_total_seconds", total_duration)
        report.metrics = self.metrics_collector.get_metrics()
        report.metadata = self._build_metadata(run_id, total_duration)
        return report

    def _execute_stage(
        self,
        name: str,
        frame: pd.DataFrame,
        report: AnalysisReport,
        action: Callable[[], Tuple[Any, int, Dict[str, Any]]],
    ) -> Any:
        """Run a stage, audit it and record its metrics."""
        stage_start = time.perf_counter()
        self.audit_logger.log_stage_start(name, len(frame))

        outcome, output_rows, details = action()

        duration = time.perf_counter() - stage_start
        self.audit_logger.log_stage_end(name, output_rows, duration)
        self.metrics_collector.record_timing(
            "stage_duration_seconds", duration, {"stage": name}
        )
        self.metrics_collector.record_count(
            "stage_output_rows", output_rows, {"stage": name}
        )
        report.audit_trail.append(
            StageResult(
                stage_name=name,
                input_rows=len(frame),
                output_rows=output_rows,
                duration_seconds=duration,
                details=details,
            )
        )
        return outcome

    def _preview(self, frame: pd.DataFrame):
        result = preview(frame, self.config.preview.rows)
        return result, result.shown_rows, {"columns": len(result.columns)}

    def _aggregate(self, aggregator: GroupedAggregator, frame: pd.DataFrame):
        outcome = aggregator.apply(frame)
        return outcome, outcome.group_count, {
            "group_by": list(outcome.group_by),
            "result_column": outcome.result_column,
        }

    def _filter(self, row_filter: RowFilter, frame: pd.DataFrame):
        outcome: FilterOutcome = row_filter.apply(frame)
        for predicate, rejected in outcome.rejection_counts.items():
            self.audit_logger.log_predicate_rejections(
                row_filter.name, predicate, rejected
            )
        return outcome, outcome.output_count, {
            "rejection_counts": dict(outcome.rejection_counts)
        }

    def _boxplot(self, renderer: BoxplotRenderer, frame: pd.DataFrame):
        plotted = sum(len(values) for _, values in renderer.groups(frame))
        if self.config.boxplot.output_path:
            path: Optional[str] = str(renderer.render_to_file(frame))
        else:
            renderer.close(renderer.render(frame))
            path = None
        return path, plotted, {"output_path": path}

    def _build_metadata(self, run_id: str, duration: float) -> dict:
        return {
            "run_id": run_id,
            "timestamp": datetime.now().isoformat(),
            "duration_seconds": duration,
            "version": encounter_explorer.__version__,
        }


def create_pipeline(
    config: Optional[AnalysisConfig] = None,
    config_path: Union[str, Path, None] = None,
    profile: Optional[str] = None,
    verbose: bool = False,
) -> AnalysisPipeline:
    """
    Build a pipeline with the default adapters and validators.

    Args:
        config: Ready configuration (takes precedence over config_path)
        config_path: YAML file to load when no config is given
        profile: Optional profile to merge into the YAML file
        verbose: Print every audit event, not only summaries

    Returns:
        Configured AnalysisPipeline
    """
    if config is None:
        config = load_config(config_path, profile) if config_path else AnalysisConfig()

    return AnalysisPipeline(
        reader=EncounterCsvReader(config.dataset),
        config=config,
        audit_logger=ConsoleAuditLogger(verbose=verbose),
        metrics_collector=InMemoryMetricsCollector(),
        data_validator=DataValidator(
            DataValidatorConfig(required_columns=list(config.dataset.required_columns))
        ),
        request_validator=RequestValidator(),
    )
