"""Mini README: Utility helper functions for qrscan."""

from .formatting import UNKNOWN_TIMESTAMP, format_timestamp

__all__ = ["UNKNOWN_TIMESTAMP", "format_timestamp"]
