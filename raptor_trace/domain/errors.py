"""Typed domain errors for the RAPTOR trace viewer.

All errors inherit from TraceViewerError and can optionally wrap a root
cause exception for debugging. Parse errors carry the 1-based line number
of the offending trace line.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models import RoundKind


@dataclass
class TraceViewerError(Exception):
    """Base error for the trace viewer domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class TraceParseError(TraceViewerError):
    """The trace text could not be turned into rounds.

    Attributes:
        line_number: 1-based line of the trace where parsing stopped
    """

    line_number: int = 0


@dataclass
class MalformedHeaderError(TraceParseError):
    """A ``round`` header carries no non-negative integer.

    Attributes:
        line: The raw header line
    """

    line: str = ""


@dataclass
class MissingRequiredFieldError(TraceParseError):
    """A route or transfer line lacks its identifier after the label.

    Attributes:
        round_kind: Kind of the round the line belongs to
        field_name: Name of the missing field ('route_id' or 'marked_stop')
    """

    round_kind: Optional[RoundKind] = None
    field_name: str = ""


@dataclass
class RoundOrderError(TraceParseError):
    """Round headers are not strictly increasing, or round 0 is not first.

    Attributes:
        round_number: Number found on the offending header
        previous_number: Number of the previously opened round, if any
    """

    round_number: int = 0
    previous_number: Optional[int] = None


@dataclass
class StopTableError(TraceViewerError):
    """The stop table could not be loaded.

    Attributes:
        file_path: Path to the stop table if it was read from disk
        column: Name of the missing column, if relevant
    """

    file_path: Optional[str] = None
    column: Optional[str] = None


@dataclass
class RenderingError(TraceViewerError):
    """Map rendering failed.

    Attributes:
        output_path: Path where rendering was attempted
        renderer_type: Type of renderer that failed
    """

    output_path: Optional[str] = None
    renderer_type: str = ""
