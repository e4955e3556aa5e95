"""
Adapters Package - Infrastructure Implementations.

Adapters:
    - EncounterCsvReader: Loads the encounter file with pandas
    - ConsoleAuditLogger: Prints stage progress to the console
    - InMemoryMetricsCollector: Keeps timings and counts in memory
"""

from encounter_explorer.adapters.csv_reader import (
    DatasetError,
    DatasetFormatError,
    DatasetNotFoundError,
    EncounterCsvReader,
    preview,
)
from encounter_explorer.adapters.console_logger import ConsoleAuditLogger
from encounter_explorer.adapters.metrics_collector import InMemoryMetricsCollector

__all__ = [
    "EncounterCsvReader",
    "preview",
    "DatasetError",
    "DatasetNotFoundError",
    "DatasetFormatError",
    "ConsoleAuditLogger",
    "InMemoryMetricsCollector",
]
