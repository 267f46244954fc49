"""
Snapshot loading module.

This module provides the SnapshotLoader class for turning flat entity lists
(backend JSON responses, page envelopes or CSV exports) into records and
hierarchy indexes. All reading happens here; the rest of the package only
ever sees in-memory records.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Type

import pandas as pd

from .config import LocalizationConfig, DEFAULT_CONFIG
from .exceptions import DataLoadError, FileAccessError, create_file_error
from .hierarchy.hierarchy_index import HierarchyIndex
from .models import Country, State, District, Locality, Location, Coordinate, Zone

SUPPORTED_SUFFIXES = ('.json', '.csv')

# Envelope keys used by paginated backend responses
ENVELOPE_KEYS = ('content', 'data', 'items', 'results')


@dataclass
class HierarchySnapshot:
    """Flat record lists fetched together from the backend."""

    states: List[State] = field(default_factory=list)
    districts: List[District] = field(default_factory=list)
    localities: List[Locality] = field(default_factory=list)
    countries: List[Country] = field(default_factory=list)

    @classmethod
    def from_payloads(cls, states: Iterable[Dict[str, Any]] = (),
                      districts: Iterable[Dict[str, Any]] = (),
                      localities: Iterable[Dict[str, Any]] = (),
                      countries: Iterable[Dict[str, Any]] = ()) -> 'HierarchySnapshot':
        """Build a snapshot from backend response bodies already in memory."""
        return cls(
            states=[State.from_dict(item) for item in states],
            districts=[District.from_dict(item) for item in districts],
            localities=[Locality.from_dict(item) for item in localities],
            countries=[Country.from_dict(item) for item in countries],
        )

    def record_count(self) -> int:
        return len(self.states) + len(self.districts) + len(self.localities) + len(self.countries)


class SnapshotLoader:
    """
    Loads flat entity lists from JSON or CSV files.

    JSON files may hold a plain list or a paginated envelope
    ({"content": [...], ...}). CSV files are read with every column as text
    so that codes such as '01' keep their leading zeros.
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 config: Optional[LocalizationConfig] = None):
        """
        Initialize the SnapshotLoader.

        Args:
            logger: Optional logger instance for logging operations
            config: Optional configuration giving the field length limits
        """
        self.logger = logger or logging.getLogger(__name__)
        self.config = config or DEFAULT_CONFIG

    def read_rows(self, file_path: str) -> List[Dict[str, Any]]:
        """
        Read raw rows from a JSON or CSV file.

        Args:
            file_path: Path to the file

        Returns:
            List of row dictionaries

        Raises:
            FileAccessError: If the file is missing or unreadable
            DataLoadError: If the content cannot be parsed
        """
        path = Path(file_path)
        if not path.exists():
            raise FileAccessError(
                f"File not found: {file_path}",
                file_path=str(file_path),
                operation="read"
            )
        if not path.is_file():
            raise FileAccessError(
                f"Path is not a file: {file_path}",
                file_path=str(file_path),
                operation="read"
            )

        suffix = path.suffix.lower()
        if suffix not in SUPPORTED_SUFFIXES:
            raise DataLoadError(
                f"Unsupported file type '{suffix}', expected one of {SUPPORTED_SUFFIXES}",
                file_path=str(file_path)
            )

        try:
            if suffix == '.csv':
                rows = self._read_csv(path)
            else:
                rows = self._read_json(path)
        except (FileAccessError, DataLoadError):
            raise
        except pd.errors.EmptyDataError:
            self.logger.warning(f"Empty file: {file_path}")
            rows = []
        except pd.errors.ParserError as e:
            raise DataLoadError(
                f"Error parsing CSV file: {str(e)}",
                file_path=str(file_path),
                original_error=e
            )
        except json.JSONDecodeError as e:
            raise DataLoadError(
                f"Error parsing JSON file: {e.msg}",
                file_path=str(file_path),
                line_number=e.lineno,
                original_error=e
            )
        except OSError as e:
            raise create_file_error("read", str(file_path), e)

        self.logger.info(f"Read {len(rows):,} rows from {file_path}")
        return rows

    def _read_csv(self, path: Path) -> List[Dict[str, Any]]:
        df = pd.read_csv(path, dtype=str)
        return df.to_dict(orient='records')

    def _read_json(self, path: Path) -> List[Dict[str, Any]]:
        with open(path, 'r', encoding='utf-8') as fh:
            content = json.load(fh)

        if isinstance(content, dict):
            for key in ENVELOPE_KEYS:
                if isinstance(content.get(key), list):
                    content = content[key]
                    break
            else:
                raise DataLoadError(
                    f"JSON object has no list under any of {ENVELOPE_KEYS}",
                    file_path=str(path)
                )

        if not isinstance(content, list):
            raise DataLoadError("JSON content must be a list of objects", file_path=str(path))

        bad_rows = [position for position, row in enumerate(content, start=1)
                    if not isinstance(row, dict)]
        if bad_rows:
            raise DataLoadError(
                f"JSON rows must be objects; found {len(bad_rows)} invalid row(s), "
                f"first at position {bad_rows[0]}",
                file_path=str(path)
            )
        return content

    def load_records(self, file_path: str, record_type: Type) -> List[Any]:
        """
        Load a file and convert each row with record_type.from_dict.

        Args:
            file_path: Path to the JSON or CSV file
            record_type: Model class (State, District, Coordinate, ...)

        Returns:
            List of records in file order
        """
        records = [record_type.from_dict(row) for row in self.read_rows(file_path)]
        invalid = sum(1 for record in records if not record.is_valid(self.config))
        if invalid:
            self.logger.warning(
                f"DATA QUALITY: {invalid:,} of {len(records):,} {record_type.__name__} "
                f"record(s) in {file_path} fail validation"
            )
        return records

    def _find_file(self, directory: Path, stem: str, required: bool) -> Optional[Path]:
        for suffix in SUPPORTED_SUFFIXES:
            candidate = directory / f"{stem}{suffix}"
            if candidate.exists():
                return candidate
        if required:
            raise FileAccessError(
                f"No {stem}.json or {stem}.csv in {directory}",
                file_path=str(directory / stem),
                operation="read"
            )
        return None

    def load_snapshot(self, directory: str) -> HierarchySnapshot:
        """
        Load states, districts, localities and (optionally) countries from a directory.

        Expects files named states, districts, localities and countries with a
        .json or .csv extension.

        Args:
            directory: Directory holding the exported lists

        Returns:
            HierarchySnapshot with every list loaded
        """
        root = Path(directory)
        if not root.is_dir():
            raise FileAccessError(
                f"Snapshot directory not found: {directory}",
                file_path=str(directory),
                operation="list"
            )

        snapshot = HierarchySnapshot(
            states=self.load_records(str(self._find_file(root, 'states', True)), State),
            districts=self.load_records(str(self._find_file(root, 'districts', True)), District),
            localities=self.load_records(str(self._find_file(root, 'localities', True)), Locality),
        )
        countries_file = self._find_file(root, 'countries', False)
        if countries_file is not None:
            snapshot.countries = self.load_records(str(countries_file), Country)

        self.logger.info(f"Loaded snapshot from {directory} ({snapshot.record_count():,} records)")
        return snapshot

    def build_index(self, directory: str) -> HierarchyIndex:
        """Load a snapshot directory and build its hierarchy index."""
        return HierarchyIndex.from_snapshot(self.load_snapshot(directory), logger=self.logger)

    def load_coordinates(self, file_path: str,
                         infrastructure_id: Optional[int] = None) -> List[Coordinate]:
        """
        Load route waypoints, optionally keeping only one infrastructure's.

        Args:
            file_path: Path to the JSON or CSV file
            infrastructure_id: Keep only coordinates of this infrastructure

        Returns:
            Coordinates in file order
        """
        coordinates = [Coordinate.from_dict(row) for row in self.read_rows(file_path)]
        if infrastructure_id is not None:
            coordinates = [c for c in coordinates if c.infrastructure_id == infrastructure_id]
        return coordinates

    def load_locations(self, file_path: str) -> List[Location]:
        return self.load_records(file_path, Location)

    def load_zones(self, file_path: str) -> List[Zone]:
        return self.load_records(file_path, Zone)
