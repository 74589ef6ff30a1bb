"""Trace explorer service - Main orchestrator.

Ties the parser, the stop resolver and the map renderer together for
front-ends (CLI, notebooks) that load a trace once and then browse it
round by round.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..domain.errors import RenderingError
from ..domain.models import RoundSummary, StopMarker, Trace
from ..parsing import RoundStateMachine, tokenize
from ..ports.rendering import MapRendererPort
from ..ports.stops import StopIndexPort
from .round_resolver import RoundStopResolver, referenced_stops


@dataclass
class TraceExplorerService:
    """Parse traces and look at their rounds.

    This service orchestrates:
    1. Trace parsing
    2. Round summaries
    3. Stop resolution for a round
    4. Optional map rendering

    Attributes:
        stop_index: Stop table used for resolution
        map_renderer: Optional map rendering
    """

    stop_index: StopIndexPort
    map_renderer: Optional[MapRendererPort] = None

    _resolver: RoundStopResolver = field(init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._resolver = RoundStopResolver(self.stop_index)
        self._logger = logging.getLogger(__name__)

    def load_trace(self, text: str) -> Trace:
        """Parse trace text.

        Raises:
            TraceParseError: If the text is not a valid trace.
        """
        trace = RoundStateMachine().consume(tokenize(text))
        self._logger.info(
            "Trace loaded",
            extra={"rounds": trace.round_count, "text_length": len(text)},
        )
        return trace

    def summarize(self, trace: Trace) -> tuple[RoundSummary, ...]:
        """Describe every round of a trace."""
        return tuple(
            RoundSummary(
                index=index,
                number=round_.number,
                kind=round_.kind,
                entries=len(round_),
                referenced_stops=len(referenced_stops(round_)),
            )
            for index, round_ in enumerate(trace)
        )

    def stop_markers(self, trace: Trace, round_index: int) -> tuple[StopMarker, ...]:
        """Return display records for the stops of a round."""
        return tuple(
            record.to_marker() for record in self._resolver.resolve(trace, round_index)
        )

    def render_round(self, trace: Trace, round_index: int, output_path: Path) -> Path:
        """Draw the stops of a round on a map.

        Raises:
            RenderingError: If no renderer is configured, the round does
                not exist, or none of its stops could be resolved.
        """
        if self.map_renderer is None:
            raise RenderingError(
                "No map renderer configured", output_path=str(output_path)
            )

        round_ = trace.get(round_index)
        if round_ is None:
            raise RenderingError(
                f"Round index {round_index} out of range "
                f"(trace has {trace.round_count} rounds)",
                output_path=str(output_path),
            )

        stops = self._resolver.resolve(trace, round_index)
        return self.map_renderer.render(
            stops,
            round_.kind,
            output_path,
            title=f"Round {round_.number} ({round_.kind.name.lower()}): {len(stops)} stops",
        )
