"""
Unit Tests for EncounterCsvReader and preview.

Test Aspects Covered:
    ✅ Business Logic: Loading, missing markers, column selection
    ✅ Edge Cases: Empty file, zero-row preview
    ✅ Error Handling: Missing file, unknown columns
    ✅ Idempotency: Repeated loads of a static file
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from encounter_explorer.adapters.csv_reader import (
    DatasetFormatError,
    DatasetNotFoundError,
    EncounterCsvReader,
    preview,
)
from encounter_explorer.config.models import DatasetConfig


class TestEncounterCsvReader:
    """Test cases for loading the encounter file."""

    def test_loads_all_rows_and_columns(
        self,
        reader: EncounterCsvReader,
        sample_csv_path: Path,
    ) -> None:
        """
        SCENARIO: Sample file with header and 12 encounters
        EXPECTED: 12 rows, header names as columns
        """
        # Act
        frame = reader.load(sample_csv_path)

        # Assert
        assert len(frame) == 12
        assert list(frame.columns[:5]) == [
            "encounter_id",
            "patient_nbr",
            "race",
            "gender",
            "age",
        ]
        assert frame["time_in_hospital"].dtype.kind == "i"

    def test_question_mark_is_missing(
        self,
        reader: EncounterCsvReader,
        sample_csv_path: Path,
    ) -> None:
        """
        SCENARIO: Race of encounter 1007 is written as '?'
        EXPECTED: Loaded as NaN, not as the string '?'
        """
        # Act
        frame = reader.load(sample_csv_path)

        # Assert
        race = frame.set_index("encounter_id").loc[1007, "race"]
        assert pd.isna(race)
        assert frame["weight"].isna().sum() == 11

    def test_usecols_selects_subset(self, sample_csv_path: Path) -> None:
        """
        SCENARIO: Only three columns requested
        EXPECTED: Frame holds exactly those columns
        """
        # Arrange
        reader = EncounterCsvReader(
            DatasetConfig(usecols=["encounter_id", "age", "time_in_hospital"])
        )

        # Act
        frame = reader.load(sample_csv_path)

        # Assert
        assert sorted(frame.columns) == ["age", "encounter_id", "time_in_hospital"]

    def test_custom_delimiter(self, tmp_path: Path) -> None:
        """
        SCENARIO: Semicolon-delimited file with padded header names
        EXPECTED: Parsed with stripped column names
        """
        # Arrange
        path = tmp_path / "encounters.csv"
        path.write_text("encounter_id ; age\n1;[70-80)\n2;?\n")
        reader = EncounterCsvReader(DatasetConfig(delimiter=";"))

        # Act
        frame = reader.load(path)

        # Assert
        assert list(frame.columns) == ["encounter_id", "age"]
        assert frame["age"].isna().sum() == 1

    def test_default_path_from_options(self, sample_csv_path: Path) -> None:
        """
        SCENARIO: No path argument, path set in options
        EXPECTED: Options path is read
        """
        # Arrange
        reader = EncounterCsvReader(DatasetConfig(path=str(sample_csv_path)))

        # Act
        frame = reader.load()

        # Assert
        assert len(frame) == 12

    def test_repeated_loads_are_identical(
        self,
        reader: EncounterCsvReader,
        sample_csv_path: Path,
    ) -> None:
        """
        SCENARIO: Same static file loaded and previewed twice
        EXPECTED: Frames and previews compare equal
        """
        # Act
        first = reader.load(sample_csv_path)
        second = reader.load(sample_csv_path)

        # Assert
        pd.testing.assert_frame_equal(first, second)
        assert preview(first, 5) == preview(second, 5)
        assert first is not second

    def test_missing_file_raises(self, reader: EncounterCsvReader, tmp_path: Path) -> None:
        """
        SCENARIO: Path does not exist
        EXPECTED: DatasetNotFoundError, which is also a FileNotFoundError
        """
        # Act & Assert
        with pytest.raises(DatasetNotFoundError):
            reader.load(tmp_path / "missing.csv")
        with pytest.raises(FileNotFoundError):
            reader.load(tmp_path / "missing.csv")

    def test_empty_file_raises(self, reader: EncounterCsvReader, tmp_path: Path) -> None:
        """
        SCENARIO: Zero-byte file
        EXPECTED: DatasetFormatError
        """
        # Arrange
        path = tmp_path / "empty.csv"
        path.write_text("")

        # Act & Assert
        with pytest.raises(DatasetFormatError, match="empty"):
            reader.load(path)

    def test_unknown_usecols_raises(self, sample_csv_path: Path) -> None:
        """
        SCENARIO: usecols names a column absent from the header
        EXPECTED: DatasetFormatError
        """
        # Arrange
        reader = EncounterCsvReader(DatasetConfig(usecols=["encounter_id", "bmi"]))

        # Act & Assert
        with pytest.raises(DatasetFormatError):
            reader.load(sample_csv_path)


class TestPreview:
    """Test cases for the head-of-table preview."""

    def test_shows_first_rows(self, encounters: pd.DataFrame) -> None:
        """
        SCENARIO: Preview of 5 rows
        EXPECTED: First 5 encounters, total count kept
        """
        # Act
        result = preview(encounters, 5)

        # Assert
        assert result.shown_rows == 5
        assert result.total_rows == 12
        assert list(result.rows["encounter_id"]) == [1001, 1002, 1003, 1004, 1005]
        assert result.columns == tuple(encounters.columns)

    def test_more_rows_than_available(self, encounters: pd.DataFrame) -> None:
        """
        SCENARIO: n larger than the table
        EXPECTED: Every row shown
        """
        # Act
        result = preview(encounters, 100)

        # Assert
        assert result.shown_rows == 12

    def test_zero_rows(self, encounters: pd.DataFrame) -> None:
        """
        SCENARIO: n = 0
        EXPECTED: Empty rows, columns still listed
        """
        # Act
        result = preview(encounters, 0)

        # Assert
        assert result.shown_rows == 0
        assert len(result.columns) == 10

    def test_negative_rows_rejected(self, encounters: pd.DataFrame) -> None:
        """
        SCENARIO: n < 0
        EXPECTED: ValueError
        """
        # Act & Assert
        with pytest.raises(ValueError):
            preview(encounters, -1)

    def test_preview_is_detached_copy(self, encounters: pd.DataFrame) -> None:
        """
        SCENARIO: Preview rows modified by caller
        EXPECTED: Source table unchanged
        """
        # Arrange
        result = preview(encounters, 2)

        # Act
        result.rows.loc[:, "time_in_hospital"] = 0

        # Assert
        assert encounters["time_in_hospital"].iloc[0] == 9
