"""Mini README: Payload classification subsystem.

Exports the pure classifier used by both the capture flow and the history
views to pick icons, labels and external actions for a scanned payload.
"""

from .classifier import ClassifiedType, ContentType, classify, supported_types

__all__ = ["ClassifiedType", "ContentType", "classify", "supported_types"]
