"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the application to external systems like:
- Stop tables (CSV files)
- Rendering engines (Folium)
"""
