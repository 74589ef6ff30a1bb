"""Command-line front-end for browsing RAPTOR traces.

Usage:
    raptor-trace trace.txt
    raptor-trace trace.txt --stops stops.csv --round 2
    raptor-trace trace.txt --stops stops.csv --round 2 --map round2.html
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .adapters.rendering import FoliumRoundRenderer
from .adapters.stops import CSVStopIndex
from .config import configure_logging, get_config
from .domain.errors import TraceViewerError
from .domain.models import RoundSummary
from .services import TraceExplorerService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="raptor-trace",
        description="Summarize a RAPTOR round trace and resolve the stops of a round.",
    )
    parser.add_argument("trace", type=Path, help="Trace file (round,<N> headers)")
    parser.add_argument(
        "--stops",
        type=Path,
        default=None,
        help="Stop table (default: configured RAPTOR_STOPS_DATA_DIR/RAPTOR_STOPS_STOPS_FILE)",
    )
    parser.add_argument(
        "--round",
        dest="round_index",
        type=int,
        default=None,
        help="Index of the round whose stops are listed",
    )
    parser.add_argument(
        "--map",
        dest="map_path",
        type=Path,
        default=None,
        help="Write an HTML map of the selected round (requires --round)",
    )
    parser.add_argument("--log-level", default=None, help="Override RAPTOR_LOG_LEVEL")
    return parser


def format_summary(summaries: Sequence[RoundSummary]) -> str:
    if not summaries:
        return "Trace has no rounds."
    lines: List[str] = [f"{len(summaries)} round(s):"]
    for s in summaries:
        lines.append(
            f"  [{s.index}] round {s.number:<3} {s.kind.name.lower():<8} "
            f"entries={s.entries:<5} stop refs={s.referenced_stops}"
        )
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.map_path is not None and args.round_index is None:
        parser.error("--map requires --round")

    config = get_config()
    configure_logging(config.observability, level=args.log_level)

    try:
        text = args.trace.read_text(encoding="utf-8")
    except OSError as e:
        print(f"Cannot read trace: {e}", file=sys.stderr)
        return 1

    try:
        # The stop table is only needed once a round is selected
        stop_index = CSVStopIndex()
        if args.round_index is not None:
            stop_index = CSVStopIndex.from_path(args.stops, config.stops)

        explorer = TraceExplorerService(
            stop_index=stop_index,
            map_renderer=FoliumRoundRenderer(config.rendering),
        )
        trace = explorer.load_trace(text)
        print(format_summary(explorer.summarize(trace)))

        if args.round_index is not None:
            markers = explorer.stop_markers(trace, args.round_index)
            print(f"\nRound index {args.round_index}: {len(markers)} stop(s)")
            for marker in markers:
                print(f"  {marker.name}\t{marker.lon}\t{marker.lat}")

            if args.map_path is not None:
                output = explorer.render_round(trace, args.round_index, args.map_path)
                print(f"\nMap saved to: {output}")
    except TraceViewerError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
