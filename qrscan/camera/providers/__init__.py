"""Mini README: Concrete camera provider implementations.

New providers should subclass ``CameraProvider`` and call
``REGISTRY.register`` at import time to stay discoverable.
"""

from .simulated import SimulatedCamera

__all__ = ["SimulatedCamera"]
