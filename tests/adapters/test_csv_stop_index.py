"""Tests for the CSV stop index adapter."""

from pathlib import Path

import pytest

from raptor_trace.adapters.stops import CSVStopIndex
from raptor_trace.config import StopTableConfig
from raptor_trace.domain.errors import StopTableError
from raptor_trace.domain.models import StopRecord

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


@pytest.fixture
def table_config():
    return StopTableConfig(data_dir=DATA_DIR)


@pytest.fixture
def index(table_config):
    return CSVStopIndex.from_path(config=table_config)


def test_loads_all_rows(index):
    assert index.row_count() == 5
    assert len(index) == 5
    assert index.records[0] == StopRecord(
        offset=9, lon=2.3522, lat=48.8566, name="Chatelet"
    )


def test_lookup_one(index):
    assert index.lookup_one(45) == StopRecord(
        offset=45, lon=2.3376, lat=48.8606, name="Louvre"
    )
    assert index.lookup_one(1000) is None


def test_coords_of_stop(index):
    assert index.coords_of_stop(1) == (2.2945, 48.8584)
    assert index.coords_of_stop(2) is None


def test_lookup_many_follows_storage_order(index):
    records = index.lookup_many({1, 3, 9})

    assert [r.offset for r in records] == [9, 1, 3]


def test_lookup_many_omits_unknown_offsets(index):
    records = index.lookup_many(frozenset({2, 45, 78}))

    assert [r.offset for r in records] == [45]


def test_lookup_many_empty_set(index):
    assert index.lookup_many(set()) == ()


def test_duplicate_offsets():
    index = CSVStopIndex.from_text(
        "StopOffset;StopLng;StopLat;Stopname\n"
        "1;1.0;2.0;First\n"
        "1;3.0;4.0;Second\n",
        StopTableConfig(),
    )

    assert index.lookup_one(1).name == "First"
    assert [r.name for r in index.lookup_many({1})] == ["First", "Second"]


def test_invalid_rows_are_skipped():
    index = CSVStopIndex.from_text(
        "StopOffset;StopLng;StopLat;Stopname\n"
        "x;1.0;2.0;Bad offset\n"
        "2;;2.0;No longitude\n"
        "3;5.0;6.0;Good\n",
        StopTableConfig(),
    )

    assert [r.offset for r in index.records] == [3]


def test_non_finite_coordinates_are_skipped(caplog):
    with caplog.at_level("WARNING"):
        index = CSVStopIndex.from_text(
            "StopOffset;StopLng;StopLat;Stopname\n"
            "1;nan;48.0;A\n"
            "2;inf;48.0;B\n"
            "3;2.0;-Infinity;C\n"
            "4;2.0;48.0;D\n",
            StopTableConfig(),
        )

    assert [r.offset for r in index.records] == [4]
    assert index.coords_of_stop(1) is None
    assert len([r for r in caplog.records if r.levelname == "WARNING"]) == 3


@pytest.mark.parametrize("offset", ["1_000", "1.0", "99999999999999999999"])
def test_offsets_use_the_trace_integer_grammar(offset):
    index = CSVStopIndex.from_text(
        "StopOffset;StopLng;StopLat;Stopname\n"
        f"{offset};1.0;2.0;X\n"
        " 5 ;1.0;2.0;Y\n",
        StopTableConfig(),
    )

    assert [r.offset for r in index.records] == [5]


def test_header_whitespace_and_bom_are_tolerated():
    index = CSVStopIndex.from_text(
        "\ufeffStopOffset ; StopLng;StopLat;Stopname\n7;1.5;2.5; Gare \n",
        StopTableConfig(),
    )

    assert index.lookup_one(7) == StopRecord(offset=7, lon=1.5, lat=2.5, name="Gare")


def test_missing_column_raises():
    with pytest.raises(StopTableError) as excinfo:
        CSVStopIndex.from_text("StopOffset;StopLng;Stopname\n1;2.0;A\n", StopTableConfig())

    assert excinfo.value.column == "StopLat"


def test_empty_table_raises():
    with pytest.raises(StopTableError):
        CSVStopIndex.from_text("", StopTableConfig())


def test_custom_layout():
    config = StopTableConfig(
        delimiter=",",
        offset_column="id",
        lon_column="lon",
        lat_column="lat",
        name_column="name",
    )
    index = CSVStopIndex.from_text("id,name,lat,lon\n4,Somewhere,10.5,20.5\n", config)

    assert index.lookup_one(4) == StopRecord(offset=4, lon=20.5, lat=10.5, name="Somewhere")


def test_missing_file_raises(tmp_path):
    with pytest.raises(StopTableError) as excinfo:
        CSVStopIndex.from_path(tmp_path / "absent.csv", StopTableConfig())

    assert excinfo.value.file_path == str(tmp_path / "absent.csv")
    assert isinstance(excinfo.value.cause, OSError)


def test_from_path_strips_bom(tmp_path):
    path = tmp_path / "stops.csv"
    path.write_bytes(
        "\ufeffStopOffset;StopLng;StopLat;Stopname\n1;10.0;20.0;A\n".encode("utf-8")
    )

    index = CSVStopIndex.from_path(path, StopTableConfig())

    assert index.lookup_one(1) == StopRecord(offset=1, lon=10.0, lat=20.0, name="A")
    assert index.source == str(path)
