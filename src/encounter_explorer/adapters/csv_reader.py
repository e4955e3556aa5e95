"""
Encounter CSV Reader.

Loads the delimited encounter file into a pandas DataFrame and builds
head-of-table previews. The file is read fresh on every call and the
returned frame is never cached or shared.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from encounter_explorer.config.models import DatasetConfig
from encounter_explorer.domain.value_objects import DatasetPreview

logger = logging.getLogger(__name__)


class DatasetError(Exception):
    """Base class for dataset loading errors."""
    pass


class DatasetNotFoundError(DatasetError, FileNotFoundError):
    """Raised when the dataset file does not exist."""
    pass


class DatasetFormatError(DatasetError):
    """Raised when the dataset file is empty or cannot be parsed."""
    pass


class EncounterCsvReader:
    """Reads diabetic encounter records from a delimited text file."""

    def __init__(self, options: Optional[DatasetConfig] = None) -> None:
        """
        Initialize reader.

        Args:
            options: Parsing options (delimiter, missing markers, columns)
        """
        self.options = options or DatasetConfig()

    def load(self, path: Union[str, Path, None] = None) -> pd.DataFrame:
        """
        Load the dataset.

        Args:
            path: File to read (default: options.path)

        Returns:
            DataFrame with one row per encounter

        Raises:
            DatasetNotFoundError: If the file doesn't exist
            DatasetFormatError: If the file is empty or malformed
        """
        source = Path(path if path is not None else self.options.path)
        if not source.is_file():
            raise DatasetNotFoundError(f"Dataset not found: {source}")

        try:
            frame = pd.read_csv(
                source,
                sep=self.options.delimiter,
                na_values=self.options.na_values,
                usecols=self.options.usecols,
                encoding=self.options.encoding,
            )
        except pd.errors.EmptyDataError as e:
            raise DatasetFormatError(f"Dataset is empty: {source}") from e
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            raise DatasetFormatError(f"Cannot parse {source}: {e}") from e
        except ValueError as e:
            # usecols naming columns absent from the header
            raise DatasetFormatError(f"Cannot read columns from {source}: {e}") from e

        frame.columns = [str(c).strip() for c in frame.columns]
        logger.info(
            f"Loaded {len(frame)} rows x {len(frame.columns)} columns from {source}"
        )
        return frame


def preview(frame: pd.DataFrame, n: int = 5) -> DatasetPreview:
    """
    Build a preview of the first rows.

    Args:
        frame: Loaded dataset
        n: Number of rows to show

    Returns:
        DatasetPreview with the head of the table
    """
    if n < 0:
        raise ValueError(f"Preview row count must be >= 0, got {n}")
    return DatasetPreview(
        rows=frame.head(n).copy(),
        total_rows=len(frame),
        columns=tuple(frame.columns),
    )
