"""Mini README: Centralised configuration models and helpers for qrscan.

Structure:
    * QRScanSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read environment variables (``QRSCAN_`` prefix)
    for payload limits, default history ordering and the HTTP facade. The
    configuration is cached so validation runs once per process.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class QRScanSettings(BaseSettings):
    """Runtime configuration for the QR scan core."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the HTTP facade to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Default port the HTTP facade exposes.",
        ge=1,
        le=65535,
    )
    log_level: str = Field(
        "INFO",
        description="Level for the qrscan package loggers (DEBUG traces every state change).",
    )
    camera_provider: str = Field(
        "simulated",
        description="Identifier of the camera provider registered with the camera registry.",
    )
    max_payload_length: int = Field(
        2000,
        description="Longest decoded payload accepted for persistence.",
        ge=1,
    )
    default_sort_order: str = Field(
        "descending",
        description="Initial history ordering by scan time ('ascending' or 'descending').",
    )
    timestamp_format: Optional[str] = Field(
        None,
        description=(
            "strftime pattern used when rendering scan times for display and search."
            " Leave unset for the medium date plus short time style (Oct 9, 2026, 3:04 PM)."
        ),
    )
    login_redirect_delay_seconds: float = Field(
        2.0,
        description="Delay before an authentication failure redirects to the login screen.",
        ge=0.0,
    )

    class Config:
        env_prefix = "QRSCAN_"
        env_file = ".env"
        case_sensitive = False

    @validator("default_sort_order", pre=True)
    def _normalise_sort_order(cls, value: str) -> str:
        """Accept common spellings of the two supported orderings."""

        normalised = str(value).strip().lower()
        aliases = {"asc": "ascending", "desc": "descending"}
        normalised = aliases.get(normalised, normalised)
        if normalised not in {"ascending", "descending"}:
            raise ValueError(f"Unsupported sort order: {value}")
        return normalised


@lru_cache()
def get_settings() -> QRScanSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return QRScanSettings()
