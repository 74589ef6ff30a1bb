"""Rendering adapters - Implementations of MapRendererPort.

Available implementations:
- FoliumRoundRenderer: Folium-based interactive map rendering
"""

from .folium_adapter import FoliumRoundRenderer

__all__ = ["FoliumRoundRenderer"]
