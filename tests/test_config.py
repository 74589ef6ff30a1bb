import logging
from pathlib import Path

import pytest

from raptor_trace.config import (
    AppConfig,
    ObservabilityConfig,
    StopTableConfig,
    configure_logging,
    get_config,
    reset_config,
)


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_defaults():
    config = StopTableConfig()

    assert config.delimiter == ";"
    assert config.required_columns == ("StopOffset", "StopLng", "StopLat", "Stopname")
    assert config.stops_path.name == "stops.csv"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("RAPTOR_STOPS_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("RAPTOR_STOPS_DELIMITER", ",")
    monkeypatch.setenv("RAPTOR_MAP_ZOOM_START", "9")

    config = AppConfig()

    assert config.stops.stops_path == Path(tmp_path) / "stops.csv"
    assert config.stops.delimiter == ","
    assert config.rendering.zoom_start == 9


def test_get_config_is_cached():
    assert get_config() is get_config()


def test_reset_config_reloads(monkeypatch):
    first = get_config()
    monkeypatch.setenv("RAPTOR_LOG_LEVEL", "DEBUG")
    reset_config()

    second = get_config()

    assert second is not first
    assert second.observability.level == "DEBUG"


def test_configure_logging_level_override(restore_root_logger):
    configure_logging(ObservabilityConfig(level="warning"), level="debug")

    assert logging.getLogger().level == logging.DEBUG

    configure_logging(ObservabilityConfig(level="warning"))

    assert logging.getLogger().level == logging.WARNING


def test_app_config_sections():
    assert set(AppConfig.model_fields) == {"stops", "rendering", "observability"}
