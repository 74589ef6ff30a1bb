"""Centralized configuration using Pydantic Settings.

Configuration can be overridden via environment variables:
- RAPTOR_STOPS_DATA_DIR=/path/to/data
- RAPTOR_STOPS_DELIMITER=,
- RAPTOR_MAP_ZOOM_START=10
- RAPTOR_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StopTableConfig(BaseSettings):
    """Stop table location and layout.

    Environment variables prefixed with RAPTOR_STOPS_.
    """

    model_config = SettingsConfigDict(env_prefix="RAPTOR_STOPS_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )
    stops_file: str = "stops.csv"
    delimiter: str = Field(default=";", min_length=1, max_length=1)
    encoding: str = "utf-8-sig"

    offset_column: str = "StopOffset"
    lon_column: str = "StopLng"
    lat_column: str = "StopLat"
    name_column: str = "Stopname"

    @property
    def stops_path(self) -> Path:
        """Full path to the stop table."""
        return self.data_dir / self.stops_file

    @property
    def required_columns(self) -> tuple[str, ...]:
        """Columns the table header must contain."""
        return (self.offset_column, self.lon_column, self.lat_column, self.name_column)


class RenderingConfig(BaseSettings):
    """Map rendering configuration.

    Environment variables prefixed with RAPTOR_MAP_.
    """

    model_config = SettingsConfigDict(env_prefix="RAPTOR_MAP_")

    zoom_start: int = 12
    init_color: str = "green"
    route_color: str = "blue"
    transfer_color: str = "orange"


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with RAPTOR_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="RAPTOR_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.stops.stops_path)
        print(config.rendering.zoom_start)

    Environment variables prefixed with RAPTOR_.
    """

    model_config = SettingsConfigDict(env_prefix="RAPTOR_")

    stops: StopTableConfig = Field(default_factory=StopTableConfig)
    rendering: RenderingConfig = Field(default_factory=RenderingConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()


def configure_logging(
    config: Optional[ObservabilityConfig] = None, level: Optional[str] = None
) -> None:
    """Apply the logging configuration to the root logger.

    Args:
        config: Logging settings, defaults to the application config.
        level: Optional level overriding the configured one.
    """
    config = config or get_config().observability
    logging.basicConfig(
        level=(level or config.level).upper(),
        format=config.format,
        force=True,
    )
