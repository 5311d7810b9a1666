"""Mini README: Provider registry for camera backends.

Structure:
    * CameraProviderRegistry - maps identifiers to ``CameraProvider`` classes
      and builds the provider named by ``QRSCAN_CAMERA_PROVIDER``.

Backends register themselves on import (see ``providers``). Lookups are
case-insensitive and an unknown identifier reports the registered choices,
since the identifier usually comes from an environment variable.
"""

from __future__ import annotations

from typing import Any, Dict, List, Type

from .base import CameraProvider
from ..configuration import QRScanSettings
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class CameraProviderRegistry:
    """Registry of camera backends keyed by ``provider_name``."""

    def __init__(self) -> None:
        self._providers: Dict[str, Type[CameraProvider]] = {}

    def register(self, provider: Type[CameraProvider]) -> None:
        """Register a camera class; re-registering a name replaces it."""

        identifier = provider.provider_name.lower()
        if identifier in self._providers and self._providers[identifier] is not provider:
            LOGGER.warning("Camera provider '%s' re-registered by %s", identifier, provider.__name__)
        self._providers[identifier] = provider

    def available_providers(self) -> List[str]:
        return sorted(self._providers)

    def provider_class(self, identifier: str) -> Type[CameraProvider]:
        """Resolve an identifier, listing the registered ones when unknown."""

        provider_cls = self._providers.get(identifier.strip().lower())
        if provider_cls is None:
            choices = ", ".join(self.available_providers()) or "none"
            raise KeyError(f"Unknown camera provider '{identifier}' (available: {choices})")
        return provider_cls

    def create(self, identifier: str, **options: Any) -> CameraProvider:
        """Instantiate the provider registered under ``identifier``."""

        provider = self.provider_class(identifier)(**options)
        LOGGER.info("Created camera provider '%s'", provider.provider_name)
        return provider

    def create_configured(self, settings: QRScanSettings, **options: Any) -> CameraProvider:
        """Instantiate the provider selected by ``settings.camera_provider``."""

        return self.create(settings.camera_provider, **options)


REGISTRY = CameraProviderRegistry()
