"""Services layer - Application orchestration.

Available services:
- RoundStopResolver: Stop records referenced by a trace round
- TraceExplorerService: Parsing, summaries, resolution and rendering
"""

from .round_resolver import RoundStopResolver, referenced_stops
from .trace_explorer import TraceExplorerService

__all__ = ["RoundStopResolver", "TraceExplorerService", "referenced_stops"]
