"""Mini README: Abstract camera boundary consumed by the capture machine.

Structure:
    * PermissionStatus - outcome of a camera permission request.
    * DecodeEvent - dataclass for one successful QR decode.
    * CameraSession - scoped handle; decode events flow only while held.
    * CameraProvider - abstract interface implemented by device backends.

Camera activation is an explicit acquire/release resource. The capture
machine opens a session when its screen gains focus and releases it on blur,
so a code left in frame cannot be detected by a screen that is not visible.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class PermissionStatus(str, Enum):
    """Result of asking the user for camera access."""

    GRANTED = "granted"
    DENIED = "denied"


@dataclass(frozen=True, slots=True)
class DecodeEvent:
    """A single decoded symbol: payload plus symbology label."""

    raw_type: str
    data: Any


DecodeHandler = Callable[[DecodeEvent], Awaitable[bool]]


class CameraSession:
    """Handle representing exclusive use of the camera stream."""

    def __init__(self, provider: "CameraProvider", handler: DecodeHandler) -> None:
        self.provider = provider
        self.handler = handler
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    async def deliver(self, event: DecodeEvent) -> bool:
        """Hand ``event`` to the handler unless the session was released meanwhile."""

        if not self._active:
            LOGGER.debug("Dropping decode event from released %s session", self.provider.provider_name)
            return False
        return await self.handler(event)

    def release(self) -> None:
        """Stop delivering decode events. Safe to call more than once."""

        if not self._active:
            return
        self._active = False
        self.provider._end_session(self)

    def __enter__(self) -> "CameraSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()


class CameraProvider(ABC):
    """Base interface for camera integrations."""

    provider_name: str = "generic"

    def __init__(self, device_id: Optional[str] = None) -> None:
        self.device_id = device_id
        self.torch_on = False
        self._session: Optional[CameraSession] = None
        LOGGER.debug("Initialising %s camera for device '%s'", self.provider_name, device_id)

    @abstractmethod
    async def request_permission(self) -> PermissionStatus:
        """Ask the platform for camera access."""

    @abstractmethod
    def _start_stream(self) -> None:
        """Begin decoding frames."""

    @abstractmethod
    def _stop_stream(self) -> None:
        """Stop decoding frames and release the sensor."""

    @property
    def session(self) -> Optional[CameraSession]:
        return self._session

    def open_session(self, handler: DecodeHandler) -> CameraSession:
        """Acquire the camera for ``handler``. Only one session may be open."""

        if self._session is not None and self._session.active:
            raise RuntimeError(f"Camera {self.provider_name} is already in use")
        self._session = CameraSession(self, handler)
        self._start_stream()
        LOGGER.debug("Camera %s session opened", self.provider_name)
        return self._session

    def _end_session(self, session: CameraSession) -> None:
        if self._session is session:
            self._session = None
            self._stop_stream()
            LOGGER.debug("Camera %s session released", self.provider_name)

    def set_torch(self, enabled: bool) -> None:
        """Switch the torch on or off."""

        self.torch_on = enabled
        LOGGER.debug("Camera %s torch %s", self.provider_name, "on" if enabled else "off")

    def metadata(self) -> Dict[str, str]:
        """Return diagnostic metadata for UI displays."""

        return {
            "provider": self.provider_name,
            "device": self.device_id or "default",
            "streaming": "yes" if self._session is not None else "no",
        }
