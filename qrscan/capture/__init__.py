"""Mini README: Capture subsystem exporting the scan state machine."""

from .state_machine import CaptureAction, CaptureMachine, CaptureState

__all__ = ["CaptureAction", "CaptureMachine", "CaptureState"]
