"""Fold classified trace lines into an immutable Trace.

The state machine keeps a single open round at a time. A header closes
the open round (empty rounds included) and opens the next one, whose
kind follows the round number: 0 is Init, odd is Route, other even
numbers are Transfer. Data lines feed the open round. At end of input
the open round is closed as well.

The machine is written as a fold over the line stream so it can be fed
any finite sequence of HeaderLine/DataLine values in tests. Every step
returns a new accumulator; earlier accumulators are never modified.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from functools import reduce
from typing import Generic, Iterable, Optional, TypeVar, Union

from typing_extensions import assert_never

from ..domain.errors import MissingRequiredFieldError, RoundOrderError
from ..domain.models import (
    InitRound,
    Round,
    RoundKind,
    RouteExploration,
    RouteRound,
    StopId,
    Trace,
    TransferExploration,
    TransferRound,
)
from .tokenizer import DataLine, HeaderLine, TraceLine, parse_int

T = TypeVar("T")


@dataclass(frozen=True)
class _Link(Generic[T]):
    """Persistent singly linked chain, newest value first.

    Appending shares the existing chain, so a step costs O(1) however
    long the open round already is.
    """

    value: T
    previous: Optional[_Link[T]] = None


def _push_all(chain: Optional[_Link[T]], values: Iterable[T]) -> Optional[_Link[T]]:
    for value in values:
        chain = _Link(value, chain)
    return chain


def _unwind(chain: Optional[_Link[T]]) -> tuple[T, ...]:
    """Return the chain's values in insertion order."""
    values = []
    while chain is not None:
        values.append(chain.value)
        chain = chain.previous
    values.reverse()
    return tuple(values)


def _split_identified(
    line: DataLine, kind: RoundKind, field_name: str
) -> tuple[int, tuple[StopId, ...]]:
    """Split ``label,<id>,<stop>,...`` into the id and the stops.

    The label token is skipped without being checked.
    """
    identifier = parse_int(line.fields[1]) if len(line.fields) > 1 else None
    if identifier is None:
        raise MissingRequiredFieldError(
            f"Missing {field_name} on line {line.line_number}",
            line_number=line.line_number,
            round_kind=kind,
            field_name=field_name,
        )
    stops = tuple(
        value for value in map(parse_int, line.fields[2:]) if value is not None
    )
    return identifier, stops


@dataclass(frozen=True)
class _OpenInit:
    number: int
    stops: Optional[_Link[StopId]] = None

    def add(self, line: DataLine) -> _OpenInit:
        parsed = (value for value in map(parse_int, line.fields) if value is not None)
        return replace(self, stops=_push_all(self.stops, parsed))

    def close(self) -> InitRound:
        return InitRound(number=self.number, marked_stops=_unwind(self.stops))


@dataclass(frozen=True)
class _OpenRoute:
    number: int
    explorations: Optional[_Link[RouteExploration]] = None

    def add(self, line: DataLine) -> _OpenRoute:
        route_id, stops = _split_identified(line, RoundKind.ROUTE, "route_id")
        exploration = RouteExploration(route_id=route_id, explored_stops=stops)
        return replace(self, explorations=_Link(exploration, self.explorations))

    def close(self) -> RouteRound:
        return RouteRound(number=self.number, explorations=_unwind(self.explorations))


@dataclass(frozen=True)
class _OpenTransfer:
    number: int
    explorations: Optional[_Link[TransferExploration]] = None

    def add(self, line: DataLine) -> _OpenTransfer:
        marked_stop, stops = _split_identified(line, RoundKind.TRANSFER, "marked_stop")
        exploration = TransferExploration(marked_stop=marked_stop, reached_stops=stops)
        return replace(self, explorations=_Link(exploration, self.explorations))

    def close(self) -> TransferRound:
        return TransferRound(
            number=self.number, explorations=_unwind(self.explorations)
        )


_OpenRound = Union[_OpenInit, _OpenRoute, _OpenTransfer]


def _open_round(number: int) -> _OpenRound:
    kind = RoundKind.for_round_number(number)
    if kind is RoundKind.INIT:
        return _OpenInit(number=number)
    elif kind is RoundKind.ROUTE:
        return _OpenRoute(number=number)
    elif kind is RoundKind.TRANSFER:
        return _OpenTransfer(number=number)
    else:
        assert_never(kind)


@dataclass(frozen=True)
class _FoldState:
    """Accumulator threaded through the fold."""

    closed: Optional[_Link[Round]] = None
    open_round: Optional[_OpenRound] = None
    last_number: Optional[int] = None

    def finish(self) -> Trace:
        rounds = _unwind(self.closed)
        if self.open_round is not None:
            rounds += (self.open_round.close(),)
        return Trace(rounds=rounds)


@dataclass
class RoundStateMachine:
    """Builds a Trace from classified trace lines.

    Usage:
        trace = RoundStateMachine().consume(tokenize(text))

    Raises on the first error: a misplaced round 0 or a non-increasing
    round number (RoundOrderError), or a route/transfer line without its
    identifier (MissingRequiredFieldError). Partial traces are never
    returned.
    """

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def start(self) -> _FoldState:
        """Return the accumulator before any line: no rounds, none open."""
        return _FoldState()

    def consume(self, lines: Iterable[TraceLine]) -> Trace:
        """Fold the whole line stream and return the resulting Trace."""
        state = reduce(self.step, lines, self.start())
        trace = state.finish()
        self._logger.debug("Trace folded", extra={"rounds": trace.round_count})
        return trace

    def step(self, state: _FoldState, line: TraceLine) -> _FoldState:
        """Apply one classified line and return the next accumulator."""
        if isinstance(line, HeaderLine):
            return self._open(state, line)
        elif isinstance(line, DataLine):
            return self._feed(state, line)
        else:
            assert_never(line)

    def _open(self, state: _FoldState, header: HeaderLine) -> _FoldState:
        number = header.round_number

        if number == 0 and state.last_number is not None:
            raise RoundOrderError(
                f"Round 0 must be the first round (line {header.line_number})",
                line_number=header.line_number,
                round_number=number,
                previous_number=state.last_number,
            )
        if state.last_number is not None and number <= state.last_number:
            raise RoundOrderError(
                f"Round {number} follows round {state.last_number} "
                f"(line {header.line_number})",
                line_number=header.line_number,
                round_number=number,
                previous_number=state.last_number,
            )

        closed = state.closed
        if state.open_round is not None:
            closed = _Link(state.open_round.close(), closed)

        return _FoldState(
            closed=closed,
            open_round=_open_round(number),
            last_number=number,
        )

    def _feed(self, state: _FoldState, line: DataLine) -> _FoldState:
        if state.open_round is None:
            self._logger.debug(
                "Data line before any round discarded",
                extra={"line_number": line.line_number},
            )
            return state
        return replace(state, open_round=state.open_round.add(line))
