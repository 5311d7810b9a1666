"""Mini README: Scan history subsystem.

``engine`` drives the history list (fetch, order, search, retry) and
``detail`` loads a single record for the detail screen.
"""

from .detail import ScanDetailLoader
from .engine import HistoryEngine, HistoryRow, filter_records

__all__ = ["HistoryEngine", "HistoryRow", "ScanDetailLoader", "filter_records"]
