"""Domain layer - Core models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    MalformedHeaderError,
    MissingRequiredFieldError,
    RenderingError,
    RoundOrderError,
    StopTableError,
    TraceParseError,
    TraceViewerError,
)
from .models import (
    InitRound,
    Round,
    RoundKind,
    RoundSummary,
    RouteExploration,
    RouteRound,
    StopId,
    StopMarker,
    StopRecord,
    Trace,
    TransferExploration,
    TransferRound,
)

__all__ = [
    # Models
    "StopId",
    "RoundKind",
    "Round",
    "InitRound",
    "RouteRound",
    "TransferRound",
    "RouteExploration",
    "TransferExploration",
    "Trace",
    "StopRecord",
    "StopMarker",
    "RoundSummary",
    # Errors
    "TraceViewerError",
    "TraceParseError",
    "MalformedHeaderError",
    "MissingRequiredFieldError",
    "RoundOrderError",
    "StopTableError",
    "RenderingError",
]
