"""Top-level package for the RAPTOR trace viewer.

Turns the round-by-round execution trace of a RAPTOR transit search into
typed rounds, and resolves the stops each round touches to coordinates
and names for display on a map.
"""

from .pipeline import load_stop_index, parse, resolve_round_stops, round_count

__all__ = ["parse", "round_count", "resolve_round_stops", "load_stop_index"]
