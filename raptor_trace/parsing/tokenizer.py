"""Line classification for RAPTOR trace text.

A trace is line oriented and comma separated::

    round,0,
    1,2,3,
    round,1,
    route,42,1,2,3,

Each non-blank line is either a header (first token is ``round``) or a
data line. Classification is lazy so arbitrarily long traces are
processed line by line.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from ..domain.errors import MalformedHeaderError

HEADER_LABEL = "round"
FIELD_SEPARATOR = ","

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_ROUND_NUMBER_PATTERN = re.compile(r"\+?[0-9]+")

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
_INT64_DIGITS = len(str(INT64_MAX))


@dataclass(frozen=True, slots=True)
class HeaderLine:
    """A ``round,<N>`` line opening round ``round_number``."""

    line_number: int
    round_number: int


@dataclass(frozen=True, slots=True)
class DataLine:
    """Any other non-blank line, kept as its raw comma-separated fields."""

    line_number: int
    fields: tuple[str, ...]


TraceLine = Union[HeaderLine, DataLine]


def _to_int64(token: str, pattern: re.Pattern[str]) -> Optional[int]:
    token = token.strip()
    if pattern.fullmatch(token) is None:
        return None
    # Digit count first: int() refuses very long strings
    if len(token.lstrip("+-").lstrip("0")) > _INT64_DIGITS:
        return None
    value = int(token)
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return value


def parse_int(token: str) -> Optional[int]:
    """Parse a signed 64-bit decimal integer token, or return None.

    Surrounding whitespace is ignored. Underscores, decimal points and
    other forms accepted by ``int()`` are rejected, and so are values
    outside the signed 64-bit range.
    """
    return _to_int64(token, _INT_PATTERN)


def _parse_round_number(token: str) -> Optional[int]:
    return _to_int64(token, _ROUND_NUMBER_PATTERN)


def classify_line(line: str, line_number: int) -> Optional[TraceLine]:
    """Classify a single line.

    Args:
        line: Raw line without its terminating newline.
        line_number: 1-based position of the line in the trace.

    Returns:
        HeaderLine, DataLine, or None for a blank line.

    Raises:
        MalformedHeaderError: If a header carries no round number.
    """
    if not line.strip():
        return None

    fields = tuple(line.split(FIELD_SEPARATOR))
    if fields[0] != HEADER_LABEL:
        return DataLine(line_number=line_number, fields=fields)

    # The round number is the last integer token; trailing commas are fine
    round_number: Optional[int] = None
    for token in fields[1:]:
        value = _parse_round_number(token)
        if value is not None:
            round_number = value

    if round_number is None:
        raise MalformedHeaderError(
            f"Round header without a round number on line {line_number}",
            line_number=line_number,
            line=line,
        )
    return HeaderLine(line_number=line_number, round_number=round_number)


def tokenize(text: str) -> Iterator[TraceLine]:
    """Lazily classify every line of a trace, skipping blank lines.

    Lines are separated by ``\\n``; a trailing ``\\r`` is dropped so CRLF
    files behave the same as LF files.

    Args:
        text: Full trace text.

    Yields:
        HeaderLine or DataLine, in input order.

    Raises:
        MalformedHeaderError: When the generator reaches a header without
            a round number.
    """
    for line_number, line in enumerate(text.split("\n"), start=1):
        if line.endswith("\r"):
            line = line[:-1]
        token = classify_line(line, line_number)
        if token is not None:
            yield token
