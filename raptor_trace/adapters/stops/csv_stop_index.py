"""CSV stop index adapter.

Loads the stop table (semicolon-separated by default, with a header row)
into an immutable in-memory index that implements StopIndexPort:
- Configuration injection (path, delimiter, column names)
- Storage order preserved for set-membership queries
- Rows with unusable values skipped and logged
"""

from __future__ import annotations

import csv
import io
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import AbstractSet, Dict, Iterable, List, Mapping, Optional, TextIO, Union

from ...config import StopTableConfig, get_config
from ...domain.errors import StopTableError
from ...domain.models import StopId, StopRecord
from ...parsing.tokenizer import parse_int

logger = logging.getLogger(__name__)


def _parse_row(
    row: Mapping[str, Optional[str]], config: StopTableConfig
) -> Optional[StopRecord]:
    """Parse one table row, or return None if a value is unusable.

    Offsets follow the trace's integer grammar so every id a trace can
    mention is comparable with the table. Coordinates must be finite.
    """
    offset = parse_int(row.get(config.offset_column) or "")
    if offset is None:
        return None
    try:
        lon = float((row.get(config.lon_column) or "").strip())
        lat = float((row.get(config.lat_column) or "").strip())
    except ValueError:
        return None
    if not (math.isfinite(lon) and math.isfinite(lat)):
        return None
    return StopRecord(
        offset=offset,
        lon=lon,
        lat=lat,
        name=(row.get(config.name_column) or "").strip(),
    )


def _read_records(
    handle: TextIO, config: StopTableConfig, source: Optional[str]
) -> List[StopRecord]:
    """Read every usable row of a stop table."""
    reader = csv.DictReader(handle, delimiter=config.delimiter)
    if reader.fieldnames is None:
        raise StopTableError("Stop table is empty", file_path=source)

    reader.fieldnames = [name.lstrip("\ufeff").strip() for name in reader.fieldnames]
    for column in config.required_columns:
        if column not in reader.fieldnames:
            raise StopTableError(
                f"Stop table has no {column!r} column",
                file_path=source,
                column=column,
            )

    records: List[StopRecord] = []
    skipped = 0
    # Header is line 1
    for line_number, row in enumerate(reader, start=2):
        record = _parse_row(row, config)
        if record is None:
            skipped += 1
            logger.warning(
                "Skipping stop row with invalid values",
                extra={"line_number": line_number, "source": source},
            )
            continue
        records.append(record)

    logger.info(
        "Stop table loaded",
        extra={"rows": len(records), "skipped": skipped, "source": source},
    )
    return records


@dataclass(frozen=True)
class CSVStopIndex:
    """Immutable stop index built from a delimited stop table.

    This adapter implements StopIndexPort. Rows keep the order they had
    in the file; ``lookup_many`` returns matches in that order whatever
    the order of the requested offsets.

    Attributes:
        records: All stop rows in storage order
        source: Where the rows were read from, for diagnostics
    """

    records: tuple[StopRecord, ...] = field(default_factory=tuple)
    source: Optional[str] = None

    _first_row: Mapping[StopId, int] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        first_row: Dict[StopId, int] = {}
        for position, record in enumerate(self.records):
            first_row.setdefault(record.offset, position)
        object.__setattr__(self, "_first_row", first_row)

    @classmethod
    def from_records(cls, records: Iterable[StopRecord]) -> CSVStopIndex:
        """Build an index from already parsed rows."""
        return cls(records=tuple(records))

    @classmethod
    def from_text(
        cls,
        text: str,
        config: Optional[StopTableConfig] = None,
        source: Optional[str] = None,
    ) -> CSVStopIndex:
        """Build an index from the full text of a stop table.

        Raises:
            StopTableError: If the header is missing or lacks a column.
        """
        config = config or get_config().stops
        try:
            records = _read_records(io.StringIO(text, newline=""), config, source)
        except csv.Error as e:
            raise StopTableError(
                f"Malformed stop table: {e}", file_path=source, cause=e
            )
        return cls(records=tuple(records), source=source)

    @classmethod
    def from_path(
        cls,
        path: Optional[Union[str, Path]] = None,
        config: Optional[StopTableConfig] = None,
    ) -> CSVStopIndex:
        """Load the stop table from disk.

        Args:
            path: Table location; defaults to the configured stops path.
            config: Table layout; defaults to the application config.

        Raises:
            StopTableError: If the file cannot be read or is malformed.
        """
        config = config or get_config().stops
        stops_path = Path(path) if path is not None else config.stops_path

        logger.debug("Loading stop table", extra={"path": str(stops_path)})
        try:
            with stops_path.open(encoding=config.encoding, newline="") as f:
                records = _read_records(f, config, str(stops_path))
        except OSError as e:
            raise StopTableError(
                "Failed to read stop table", file_path=str(stops_path), cause=e
            )
        except (csv.Error, UnicodeDecodeError) as e:
            raise StopTableError(
                "Malformed stop table", file_path=str(stops_path), cause=e
            )
        return cls(records=tuple(records), source=str(stops_path))

    def lookup_one(self, offset: StopId) -> Optional[StopRecord]:
        """Return the first row with this offset, or None."""
        position = self._first_row.get(offset)
        if position is None:
            return None
        return self.records[position]

    def lookup_many(self, offsets: AbstractSet[StopId]) -> tuple[StopRecord, ...]:
        """Return every row whose offset is in ``offsets``, in storage order.

        Duplicate rows for the same offset are all returned, unknown
        offsets are ignored.
        """
        if not offsets:
            return ()
        return tuple(record for record in self.records if record.offset in offsets)

    def coords_of_stop(self, offset: StopId) -> Optional[tuple[float, float]]:
        """Return ``(lon, lat)`` of a stop, or None if it is unknown."""
        record = self.lookup_one(offset)
        if record is None:
            return None
        return record.coordinates

    def row_count(self) -> int:
        return len(self.records)

    def __len__(self) -> int:
        return len(self.records)
