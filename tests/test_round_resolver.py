"""Tests for resolving the stops of a round."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from raptor_trace import parse, resolve_round_stops
from raptor_trace.adapters.stops import CSVStopIndex
from raptor_trace.config import StopTableConfig
from raptor_trace.domain.models import StopMarker, StopRecord
from raptor_trace.services import RoundStopResolver, referenced_stops

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture
def trace():
    return parse((DATA_DIR / "sample_trace.txt").read_text(encoding="utf-8"))


@pytest.fixture
def stop_index():
    return CSVStopIndex.from_path(config=StopTableConfig(data_dir=DATA_DIR))


def test_referenced_stops_per_kind(trace):
    assert referenced_stops(trace[0]) == (1, 2, 3)
    assert referenced_stops(trace[1]) == (1, 2, 3, 4, 5, 6, 7, 8, 9)
    assert referenced_stops(trace[2]) == (45, 89, 78)


def test_init_round_with_single_known_stop(trace):
    index = CSVStopIndex.from_records(
        [StopRecord(offset=1, lon=10.0, lat=20.0, name="A")]
    )

    assert resolve_round_stops(trace, index, 0) == (
        StopMarker(lon=10.0, lat=20.0, name="A"),
    )


def test_result_follows_table_order(trace, stop_index):
    records = RoundStopResolver(stop_index).resolve(trace, 1)

    # The round references 1..9, the table stores 9 before 1 and 3
    assert [r.offset for r in records] == [9, 1, 3]


def test_transfer_round_uses_reached_stops(trace, stop_index):
    records = RoundStopResolver(stop_index).resolve(trace, 2)

    # Marked stops 42 and 43 are not looked up
    assert [r.name for r in records] == ["Louvre", "Arc de Triomphe"]


def test_duplicate_references_collapse():
    trace = parse("round,0,\n1,1,1\nround,1,\nroute,7,1,2\nroute,8,2,1\n")
    index = CSVStopIndex.from_records(
        [
            StopRecord(offset=2, lon=0.0, lat=0.0, name="Two"),
            StopRecord(offset=1, lon=1.0, lat=1.0, name="One"),
        ]
    )
    resolver = RoundStopResolver(index)

    assert [r.name for r in resolver.resolve(trace, 0)] == ["One"]
    assert [r.name for r in resolver.resolve(trace, 1)] == ["Two", "One"]


def test_lookup_receives_a_set(trace):
    index = MagicMock()
    index.lookup_many.return_value = ()

    RoundStopResolver(index).resolve(trace, 1)

    index.lookup_many.assert_called_once_with(frozenset(range(1, 10)))


@pytest.mark.parametrize("round_index", [3, 4, 100, -1])
def test_out_of_range_index_is_empty(trace, stop_index, round_index):
    assert RoundStopResolver(stop_index).resolve(trace, round_index) == ()
    assert resolve_round_stops(trace, stop_index, round_index) == ()


def test_empty_trace_resolves_nothing(stop_index):
    assert resolve_round_stops(parse(""), stop_index, 0) == ()


def test_empty_round_resolves_nothing(stop_index):
    trace = parse("round,0,\nround,1,\nroute,4,\n")

    assert resolve_round_stops(trace, stop_index, 0) == ()
    assert resolve_round_stops(trace, stop_index, 1) == ()
