"""Mini README: Scan capture lifecycle for one capture screen.

Structure:
    * CaptureState - states of the capture lifecycle.
    * CaptureAction - closed set of user choices the UI may render.
    * CaptureMachine - drives permission, detection, persistence and focus.

Lifecycle::

    awaiting_permission -> denied | ready
    ready -> scanning -> saving -> result_choice | failed
    ready <-> paused            (focus lost / regained)
    result_choice | failed -> ready   (scan another, retry, dismiss, refocus)

A guard flag is set synchronously when a detection is accepted, so repeated
frames of the same code arriving while the persist is in flight are ignored
and at most one create call is outstanding per machine. Losing focus
releases the camera session but never cancels an in-flight persist; its
outcome is still applied when it resolves.
"""

from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Optional

from ..auth import AuthContext
from ..camera import CameraProvider, CameraSession, DecodeEvent, PermissionStatus
from ..classification import ClassifiedType, classify
from ..errors import ScanError
from ..logging_utils import get_logger
from ..navigation import NavigationKind, Navigator
from ..storage import ScanRecord, ScanRepository, validate_payload

LOGGER = get_logger(__name__)


class CaptureState(str, Enum):
    """States of a capture screen."""

    AWAITING_PERMISSION = "awaiting_permission"
    DENIED = "denied"
    READY = "ready"
    PAUSED = "paused"
    SCANNING = "scanning"
    SAVING = "saving"
    RESULT_CHOICE = "result_choice"
    FAILED = "failed"


class CaptureAction(str, Enum):
    """Choices offered to the user in terminal-ish states."""

    VIEW_DETAILS = "view_details"
    SCAN_ANOTHER = "scan_another"
    RETRY = "retry"
    DISMISS = "dismiss"
    GO_BACK = "go_back"


_CAMERA_STATES = frozenset(
    {
        CaptureState.READY,
        CaptureState.PAUSED,
        CaptureState.SCANNING,
        CaptureState.SAVING,
        CaptureState.RESULT_CHOICE,
        CaptureState.FAILED,
    }
)
_REARM_ON_FOCUS = frozenset({CaptureState.PAUSED, CaptureState.RESULT_CHOICE, CaptureState.FAILED})


class CaptureMachine:
    """State machine governing one device's scanning lifecycle."""

    def __init__(
        self,
        camera: CameraProvider,
        repository: ScanRepository,
        auth: AuthContext,
        navigator: Navigator,
        *,
        login_redirect_delay: float = 2.0,
    ) -> None:
        self.camera = camera
        self.repository = repository
        self.auth = auth
        self.navigator = navigator
        self.login_redirect_delay = login_redirect_delay

        self.state = CaptureState.AWAITING_PERMISSION
        self.focused = True
        self.torch_on = False
        self.hint: Optional[ClassifiedType] = None
        self.result: Optional[ScanRecord] = None
        self.error: Optional[ScanError] = None

        self._busy = False
        self._permission_requested = False
        self._session: Optional[CameraSession] = None

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def camera_active(self) -> bool:
        return self._session is not None and self._session.active

    @property
    def available_actions(self) -> FrozenSet[CaptureAction]:
        """Actions the UI may offer in the current state."""

        if self.state is CaptureState.DENIED:
            return frozenset({CaptureAction.GO_BACK})
        if self.state is CaptureState.RESULT_CHOICE:
            return frozenset({CaptureAction.VIEW_DETAILS, CaptureAction.SCAN_ANOTHER})
        if self.state is CaptureState.FAILED:
            if self.error is not None and self.error.retryable:
                return frozenset({CaptureAction.RETRY, CaptureAction.DISMISS})
            return frozenset({CaptureAction.DISMISS})
        return frozenset()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    async def start(self) -> CaptureState:
        """Request camera permission once, on mount."""

        if self._permission_requested:
            return self.state
        self._permission_requested = True
        try:
            status = await self.camera.request_permission()
        except Exception as error:
            LOGGER.error("Camera permission request failed: %s", error)
            status = PermissionStatus.DENIED
        if status is not PermissionStatus.GRANTED:
            LOGGER.warning("Camera permission denied")
            self._transition(CaptureState.DENIED)
            return self.state
        self._transition(CaptureState.READY if self.focused else CaptureState.PAUSED)
        if self.focused:
            self._acquire_camera()
        return self.state

    def focus_lost(self) -> None:
        """Release the camera when the screen is hidden."""

        self.focused = False
        self._release_camera()
        if self.state is CaptureState.READY:
            self._transition(CaptureState.PAUSED)

    def focus_gained(self) -> None:
        """Reacquire the camera and reset finished scans on return."""

        self.focused = True
        if self.state not in _CAMERA_STATES:
            return
        self._acquire_camera()
        if self.state in _REARM_ON_FOCUS:
            self._rearm()

    def close(self) -> None:
        """Unmount: release the camera for good."""

        self.focused = False
        self._release_camera()

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------
    async def handle_decode(self, event: DecodeEvent) -> bool:
        """Process a decode event; returns ``False`` when it was ignored."""

        if self.state is not CaptureState.READY or self._busy or not self.focused:
            LOGGER.debug("Ignoring decode event in state %s", self.state.value)
            return False
        self._busy = True
        self._transition(CaptureState.SCANNING)
        self.error = None
        self.result = None
        text = event.data if isinstance(event.data, str) else ""
        self.hint = classify(text, event.raw_type)

        try:
            payload = validate_payload(event.data, self.repository.max_payload_length)
        except ScanError as error:
            self._fail(error)
            return True

        self._transition(CaptureState.SAVING)
        try:
            owner = self.auth.current_user()
            record = await self.repository.create_record(owner, payload, event.raw_type)
        except Exception as error:
            self._fail(ScanError.from_exception(error))
            return True

        self.result = record
        LOGGER.info("Scan %s saved (%s)", record.record_id, self.hint.content_type.value)
        self._transition(CaptureState.RESULT_CHOICE)
        if not self.focused:
            LOGGER.debug("Scan %s completed while screen unfocused", record.record_id)
        return True

    def choose(self, action: CaptureAction) -> CaptureState:
        """Apply a user choice from ``available_actions``."""

        action = CaptureAction(action)
        if action not in self.available_actions:
            raise ValueError(f"Action {action.value} is not available in state {self.state.value}")
        if action is CaptureAction.VIEW_DETAILS:
            record = self.result
            if record is None:
                raise RuntimeError("No saved scan to show")
            self.navigator.go_to_detail(record.record_id, record)
        elif action is CaptureAction.GO_BACK:
            self.navigator.go_back()
        else:
            self._rearm()
        return self.state

    def toggle_torch(self) -> bool:
        """Flip the torch. Ignored until camera permission is granted."""

        if self.state not in _CAMERA_STATES:
            LOGGER.debug("Torch toggle ignored in state %s", self.state.value)
            return self.torch_on
        self.torch_on = not self.torch_on
        self.camera.set_torch(self.torch_on)
        return self.torch_on

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _transition(self, new_state: CaptureState) -> None:
        LOGGER.debug("Capture state %s -> %s", self.state.value, new_state.value)
        self.state = new_state

    def _fail(self, error: ScanError) -> None:
        self.error = error
        LOGGER.warning("Scan failed (%s): %s", error.category.value, error)
        self._transition(CaptureState.FAILED)
        if error.navigation is NavigationKind.GO_TO_LOGIN:
            self.navigator.go_to_login(delay_seconds=self.login_redirect_delay)
        elif error.navigation is NavigationKind.GO_BACK:
            self.navigator.go_back()

    def _rearm(self) -> None:
        self._busy = False
        self.error = None
        self.result = None
        self.hint = None
        self._transition(CaptureState.READY if self.focused else CaptureState.PAUSED)

    def _acquire_camera(self) -> None:
        if self.camera_active:
            return
        self._session = self.camera.open_session(self.handle_decode)

    def _release_camera(self) -> None:
        if self._session is not None:
            self._session.release()
            self._session = None
