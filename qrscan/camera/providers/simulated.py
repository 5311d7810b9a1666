"""Mini README: Simulated camera used by the HTTP facade and tests.

Structure:
    * SimulatedCamera - camera whose decode events are injected by callers.

Frames are "presented" programmatically. A presented code is delivered to
the session handler only while a session is open, matching how a real
camera stops reporting once the scanning screen releases it.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional

from ..base import CameraProvider, DecodeEvent, PermissionStatus
from ..registry import REGISTRY
from ...logging_utils import get_logger

LOGGER = get_logger(__name__)


class SimulatedCamera(CameraProvider):
    """Camera double driven by explicit ``present`` calls."""

    provider_name = "simulated"

    def __init__(
        self,
        device_id: Optional[str] = None,
        *,
        permission: PermissionStatus = PermissionStatus.GRANTED,
        permission_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(device_id=device_id)
        self.permission = PermissionStatus(permission)
        self.permission_error = permission_error
        self.permission_requests = 0
        self.streaming = False
        self.dropped: List[DecodeEvent] = []

    async def request_permission(self) -> PermissionStatus:
        self.permission_requests += 1
        if self.permission_error is not None:
            raise self.permission_error
        return self.permission

    def _start_stream(self) -> None:
        self.streaming = True

    def _stop_stream(self) -> None:
        self.streaming = False

    def present(self, event: DecodeEvent) -> Optional["asyncio.Task[bool]"]:
        """Schedule delivery of ``event``; ``None`` if the camera is idle."""

        session = self.session
        if session is None or not session.active:
            LOGGER.debug("Dropping decode event while camera is idle")
            self.dropped.append(event)
            return None
        return asyncio.ensure_future(session.deliver(event))

    async def present_and_wait(self, event: DecodeEvent) -> bool:
        """Deliver ``event`` and wait for the handler's verdict."""

        task = self.present(event)
        if task is None:
            return False
        return await task


REGISTRY.register(SimulatedCamera)
