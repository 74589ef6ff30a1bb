"""Rendering port - Abstraction for map generation.

This protocol defines the contract for drawing the stops of a round,
allowing different implementations (Folium, Plotly, etc.) to be used.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import RoundKind, StopRecord


class MapRendererPort(Protocol):
    """Port for map rendering.

    Implementation: adapters/rendering/folium_adapter.py
    """

    def render(
        self,
        stops: Sequence[StopRecord],
        kind: RoundKind,
        output_path: Path,
        title: str = "",
    ) -> Path:
        """Render stops on a map and save it to a file.

        Args:
            stops: Stops to draw, one marker each.
            kind: Kind of the round the stops come from.
            output_path: Where to save the rendered map.
            title: Optional caption shown on the map.

        Returns:
            Path to the generated map file.
        """
        ...
