"""
Console Audit Logger.

Prints the progress of an analysis run, one line per event, tagged with a
short run id.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional


class ConsoleAuditLogger:
    """Simple console-based audit logger."""

    def __init__(self, verbose: bool = True) -> None:
        """
        Initialize console logger.

        Args:
            verbose: If True, log all events. If False, only summaries.
        """
        self._verbose = verbose
        self._run_id: Optional[str] = None

    def set_run_id(self, run_id: str) -> None:
        self._run_id = run_id

    def log_stage_start(
        self,
        stage_name: str,
        input_rows: int,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        if self._verbose:
            self._log("INFO", f"Starting {stage_name} on {input_rows} rows")

    def log_stage_end(
        self,
        stage_name: str,
        output_rows: int,
        duration_seconds: float,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._log(
            "INFO",
            f"Completed {stage_name}: {output_rows} rows "
            f"({duration_seconds:.3f}s)",
        )

    def log_predicate_rejections(
        self,
        stage_name: str,
        predicate: str,
        rejected_rows: int,
    ) -> None:
        """Log how many rows a single predicate rejected."""
        if self._verbose:
            self._log("DEBUG", f"{stage_name}: {rejected_rows} rows fail {predicate}")

    def log_anomaly(
        self,
        message: str,
        severity: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._log(severity, f"ANOMALY: {message}")

    def _log(self, level: str, message: str) -> None:
        timestamp = datetime.now().strftime("%H:%M:%S")
        run_id = self._run_id[:8] if self._run_id else "--------"
        print(f"[{timestamp}] [{run_id}] [{level:5}] {message}")
