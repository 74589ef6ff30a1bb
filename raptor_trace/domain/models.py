"""Immutable domain models for the RAPTOR trace viewer.

All models are frozen dataclasses with slots. A parsed trace is a tuple
of rounds, each round being one of three closed variants (Init, Route,
Transfer). These models have no external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, Optional, Union

StopId = int


class RoundKind(Enum):
    """Kind of a RAPTOR round.

    Round 0 seeds the search (INIT); afterwards the algorithm alternates
    route scans (odd rounds) and transfer scans (even rounds).
    """

    INIT = auto()
    ROUTE = auto()
    TRANSFER = auto()

    @classmethod
    def for_round_number(cls, number: int) -> RoundKind:
        """Return the kind a round number implies."""
        if number == 0:
            return cls.INIT
        return cls.ROUTE if number % 2 == 1 else cls.TRANSFER


@dataclass(frozen=True, slots=True)
class RouteExploration:
    """One route scanned during a route round.

    Attributes:
        route_id: Identifier of the scanned route
        explored_stops: Stops visited along the route, in trace order
    """

    route_id: int
    explored_stops: tuple[StopId, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class TransferExploration:
    """Footpaths relaxed from one marked stop during a transfer round.

    Attributes:
        marked_stop: Stop the transfers start from
        reached_stops: Stops reached by walking, in trace order
    """

    marked_stop: StopId
    reached_stops: tuple[StopId, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class InitRound:
    """Round 0: the stops marked before the first scan."""

    number: int
    marked_stops: tuple[StopId, ...] = field(default_factory=tuple)

    @property
    def kind(self) -> RoundKind:
        return RoundKind.INIT

    def __len__(self) -> int:
        return len(self.marked_stops)


@dataclass(frozen=True, slots=True)
class RouteRound:
    """An odd round: routes scanned from the previously marked stops."""

    number: int
    explorations: tuple[RouteExploration, ...] = field(default_factory=tuple)

    @property
    def kind(self) -> RoundKind:
        return RoundKind.ROUTE

    def __len__(self) -> int:
        return len(self.explorations)


@dataclass(frozen=True, slots=True)
class TransferRound:
    """A nonzero even round: footpaths relaxed from marked stops."""

    number: int
    explorations: tuple[TransferExploration, ...] = field(default_factory=tuple)

    @property
    def kind(self) -> RoundKind:
        return RoundKind.TRANSFER

    def __len__(self) -> int:
        return len(self.explorations)


Round = Union[InitRound, RouteRound, TransferRound]


@dataclass(frozen=True, slots=True)
class Trace:
    """Ordered, immutable history of the rounds of one RAPTOR run.

    Attributes:
        rounds: Rounds in the order they appear in the trace
    """

    rounds: tuple[Round, ...] = field(default_factory=tuple)

    @property
    def round_count(self) -> int:
        """Return the number of rounds in the trace."""
        return len(self.rounds)

    @property
    def is_empty(self) -> bool:
        """Check if no round was parsed."""
        return len(self.rounds) == 0

    def get(self, index: int) -> Optional[Round]:
        """Return the round at ``index``, or None when out of range.

        Negative indices are treated as out of range rather than counting
        from the end.
        """
        if 0 <= index < len(self.rounds):
            return self.rounds[index]
        return None

    def __len__(self) -> int:
        return len(self.rounds)

    def __getitem__(self, index: int) -> Round:
        return self.rounds[index]

    def __iter__(self) -> Iterator[Round]:
        return iter(self.rounds)


@dataclass(frozen=True, slots=True)
class StopMarker:
    """Display record for a stop on a map."""

    lon: float
    lat: float
    name: str


@dataclass(frozen=True, slots=True)
class StopRecord:
    """A row of the stop table.

    Attributes:
        offset: Stop identifier used in the trace
        lon: Longitude in degrees
        lat: Latitude in degrees
        name: Human-readable stop name
    """

    offset: StopId
    lon: float
    lat: float
    name: str

    @property
    def coordinates(self) -> tuple[float, float]:
        """Return ``(lon, lat)``."""
        return self.lon, self.lat

    def to_marker(self) -> StopMarker:
        """Drop the offset, keeping what a map needs."""
        return StopMarker(lon=self.lon, lat=self.lat, name=self.name)


@dataclass(frozen=True, slots=True)
class RoundSummary:
    """Compact description of one round, used for listings.

    Attributes:
        index: Position of the round in the trace
        number: Round number read from the trace header
        kind: Kind of the round
        entries: Marked stops (Init) or explorations (Route/Transfer)
        referenced_stops: Number of stop references, duplicates included
    """

    index: int
    number: int
    kind: RoundKind
    entries: int
    referenced_stops: int
