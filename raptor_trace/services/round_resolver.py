"""Round stop resolver.

Maps the stop identifiers referenced by one round of a trace to stop
records. Which identifiers a round references depends on its kind:

- Init: the marked stops
- Route: the explored stops of every scanned route
- Transfer: the reached stops of every transfer

Identifiers are passed to the stop index as a set, so the result holds
at most one record per matched row and follows the index's storage
order, not the order the round references stops in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from typing_extensions import assert_never

from ..domain.models import (
    InitRound,
    Round,
    RouteRound,
    StopId,
    StopRecord,
    Trace,
    TransferRound,
)
from ..ports.stops import StopIndexPort


def referenced_stops(round_: Round) -> tuple[StopId, ...]:
    """Return the stop identifiers a round references, duplicates kept."""
    if isinstance(round_, InitRound):
        return round_.marked_stops
    elif isinstance(round_, RouteRound):
        return tuple(
            stop for route in round_.explorations for stop in route.explored_stops
        )
    elif isinstance(round_, TransferRound):
        return tuple(
            stop
            for transfer in round_.explorations
            for stop in transfer.reached_stops
        )
    else:
        assert_never(round_)


@dataclass
class RoundStopResolver:
    """Resolves the stops of a trace round against a stop index.

    Attributes:
        stop_index: Read-only stop table
    """

    stop_index: StopIndexPort
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def resolve(self, trace: Trace, round_index: int) -> tuple[StopRecord, ...]:
        """Return the stop records referenced by round ``round_index``.

        An index outside the trace yields an empty tuple; identifiers
        missing from the stop table are left out. Never raises.
        """
        round_ = trace.get(round_index)
        if round_ is None:
            self._logger.debug(
                "Round index out of range",
                extra={"round_index": round_index, "rounds": trace.round_count},
            )
            return ()

        ids = referenced_stops(round_)
        records = tuple(self.stop_index.lookup_many(frozenset(ids)))

        self._logger.debug(
            "Round stops resolved",
            extra={
                "round_index": round_index,
                "kind": round_.kind.name,
                "referenced": len(ids),
                "resolved": len(records),
            },
        )
        return records
