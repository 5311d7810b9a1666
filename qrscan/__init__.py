"""Mini README: Core package initializer for the QR scan platform.

The package groups the pieces that carry real control flow in a QR scanning
app: the content classifier, the error taxonomy, the scan repository, the
capture state machine and the history engine. Presentation, navigation
wiring and the remote document store stay outside and are reached through
small abstract interfaces.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
