"""Stop index port - Read-only access to the stop table.

The stop table is owned by the surrounding application and loaded once.
The resolver only needs two queries from it: an equality match and a
set-membership match.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, AbstractSet, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import StopId, StopRecord


class StopIndexPort(Protocol):
    """Port for stop lookups.

    Implementation: adapters/stops/csv_stop_index.py

    Implementations must be immutable once built so concurrent readers
    need no locking.
    """

    def lookup_one(self, offset: StopId) -> Optional[StopRecord]:
        """Find the stop with the given offset.

        Args:
            offset: The stop identifier to look up.

        Returns:
            The first matching record in storage order, or None.
        """
        ...

    def lookup_many(self, offsets: AbstractSet[StopId]) -> Sequence[StopRecord]:
        """Find every stop whose offset is in ``offsets``.

        Args:
            offsets: Set of stop identifiers.

        Returns:
            Matching records in storage order. Offsets without a row are
            silently left out.
        """
        ...

    def row_count(self) -> int:
        """Return the number of rows in the table."""
        ...
