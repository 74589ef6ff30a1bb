"""Stop index adapters - Implementations of StopIndexPort.

Available implementations:
- CSVStopIndex: In-memory index loaded from a delimited stop table
"""

from .csv_stop_index import CSVStopIndex

__all__ = ["CSVStopIndex"]
