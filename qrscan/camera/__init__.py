"""Mini README: Camera subsystem package initialiser.

``base`` holds the abstract provider and session handle, ``registry`` the
plugin lookup and ``providers`` the concrete backends.
"""

from .base import CameraProvider, CameraSession, DecodeEvent, PermissionStatus
from .registry import CameraProviderRegistry, REGISTRY
from . import providers  # noqa: F401  # ensure built-in providers register on import

__all__ = [
    "CameraProvider",
    "CameraProviderRegistry",
    "CameraSession",
    "DecodeEvent",
    "PermissionStatus",
    "REGISTRY",
]
