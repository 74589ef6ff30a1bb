"""Folium map renderer adapter.

Draws the stops resolved for one round on an interactive HTML map:
- One marker per stop, popup with the stop name, tooltip with its offset
- Marker colour chosen from the round kind
- Map centred on the mean position of the stops
- Stops without finite coordinates rejected before drawing
"""

from __future__ import annotations

import html
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from typing_extensions import assert_never

from ...config import RenderingConfig, get_config
from ...domain.errors import RenderingError
from ...domain.models import RoundKind, StopRecord


@dataclass
class FoliumRoundRenderer:
    """Folium-based interactive map renderer.

    This adapter implements MapRendererPort using Folium for
    generating interactive HTML maps.

    Attributes:
        config: Rendering configuration (zoom, colours)
    """

    config: RenderingConfig = field(default_factory=lambda: get_config().rendering)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def marker_color(self, kind: RoundKind) -> str:
        """Return the marker colour used for a round kind."""
        if kind is RoundKind.INIT:
            return self.config.init_color
        elif kind is RoundKind.ROUTE:
            return self.config.route_color
        elif kind is RoundKind.TRANSFER:
            return self.config.transfer_color
        else:
            assert_never(kind)

    def render(
        self,
        stops: Sequence[StopRecord],
        kind: RoundKind,
        output_path: Path,
        title: str = "",
    ) -> Path:
        """Render stops on a map and save to file.

        Args:
            stops: Stops to draw.
            kind: Kind of the round the stops come from.
            output_path: Where to save the rendered map.
            title: Optional caption shown above the map.

        Returns:
            Path to the generated map file.

        Raises:
            RenderingError: If there is nothing to draw or rendering fails.
        """
        if not stops:
            raise RenderingError(
                "Cannot render a round without resolved stops",
                output_path=str(output_path),
                renderer_type="folium",
            )

        non_finite = [
            s.offset
            for s in stops
            if not (math.isfinite(s.lat) and math.isfinite(s.lon))
        ]
        if non_finite:
            raise RenderingError(
                f"Stops without finite coordinates: {non_finite}",
                output_path=str(output_path),
                renderer_type="folium",
            )

        self._logger.info(
            "Rendering round map",
            extra={
                "stops": len(stops),
                "kind": kind.name,
                "output_path": str(output_path),
            },
        )

        try:
            import folium

            center_lat = sum(s.lat for s in stops) / len(stops)
            center_lon = sum(s.lon for s in stops) / len(stops)

            m = folium.Map(
                location=[center_lat, center_lon],
                zoom_start=self.config.zoom_start,
                control_scale=True,
            )

            if title:
                m.get_root().html.add_child(
                    folium.Element(f"<h3 style='margin:4px'>{html.escape(title)}</h3>")
                )

            color = self.marker_color(kind)
            for stop in stops:
                folium.Marker(
                    location=[stop.lat, stop.lon],
                    popup=stop.name or str(stop.offset),
                    tooltip=str(stop.offset),
                    icon=folium.Icon(color=color),
                ).add_to(m)

            if len(stops) >= 2:
                m.fit_bounds([[s.lat, s.lon] for s in stops])

            output_path.parent.mkdir(parents=True, exist_ok=True)
            m.save(str(output_path))

            self._logger.info(
                "Map rendered successfully",
                extra={"output_path": str(output_path)},
            )

            return output_path

        except ImportError as e:
            raise RenderingError(
                "Folium not installed",
                output_path=str(output_path),
                renderer_type="folium",
                cause=e,
            )
        except (OSError, ValueError) as e:
            self._logger.error(
                "Map rendering failed",
                extra={"error": str(e), "output_path": str(output_path)},
            )
            raise RenderingError(
                f"Map rendering failed: {e}",
                output_path=str(output_path),
                renderer_type="folium",
                cause=e,
            )
