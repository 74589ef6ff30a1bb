"""Public entry points of the trace viewer.

The pipeline is organized in two stages:

1. Parsing: trace text -> classified lines -> Trace.
2. Resolution: (Trace, round index) -> referenced stops -> display records.

These functions wire the stages together for callers that do not need
the service layer.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .adapters.stops import CSVStopIndex
from .domain.models import StopMarker, Trace
from .parsing import RoundStateMachine, tokenize
from .ports.stops import StopIndexPort
from .services.round_resolver import RoundStopResolver


def parse(trace_text: str) -> Trace:
    """Parse a RAPTOR trace into its rounds.

    Raises:
        MalformedHeaderError: A ``round`` header has no round number.
        MissingRequiredFieldError: A route/transfer line lacks its id.
        RoundOrderError: Round numbers are out of order.
    """
    return RoundStateMachine().consume(tokenize(trace_text))


def round_count(trace: Trace) -> int:
    return trace.round_count


def resolve_round_stops(
    trace: Trace, stop_index: StopIndexPort, round_index: int
) -> tuple[StopMarker, ...]:
    """Return ``(lon, lat, name)`` records for the stops of a round.

    Out-of-range indices give an empty tuple and stops missing from the
    table are omitted. The order is the stop table's row order.
    """
    records = RoundStopResolver(stop_index).resolve(trace, round_index)
    return tuple(record.to_marker() for record in records)


def load_stop_index(path: Optional[Union[str, Path]] = None) -> CSVStopIndex:
    """Load the stop table, from the configured location by default."""
    return CSVStopIndex.from_path(path)
