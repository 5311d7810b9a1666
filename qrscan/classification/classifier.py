"""Mini README: Content classification for decoded QR payloads.

Structure:
    * ContentType - enumeration of the semantic payload categories.
    * ClassifiedType - dataclass describing the category and its action.
    * classify - pure, total classifier evaluated in fixed precedence.
    * supported_types - display metadata for UI consumption.

The classifier has no side effects so the capture flow and the history list
can both call it for icons and actions without touching the network.
Rules are evaluated top to bottom and the first match wins, which keeps
ambiguous payloads (a URL containing ``@``) predictable.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

_PHONE_PATTERN = re.compile(r"^\+?[\d\s\-()]+$")
_MAPS_MARKERS = ("maps.google.", "google.com/maps", "maps.apple.com", "goo.gl/maps")


class ContentType(str, Enum):
    """Semantic categories a decoded payload can fall into."""

    URL = "url"
    EMAIL = "email"
    PHONE = "phone"
    SMS = "sms"
    WIFI = "wifi"
    GEO = "geo"
    TEXT = "text"


# icon name, human label
_DISPLAY: Dict[ContentType, Tuple[str, str]] = {
    ContentType.URL: ("link", "Website"),
    ContentType.EMAIL: ("email", "Email address"),
    ContentType.PHONE: ("phone", "Phone number"),
    ContentType.SMS: ("sms", "Text message"),
    ContentType.WIFI: ("wifi", "Wi-Fi network"),
    ContentType.GEO: ("place", "Location"),
    ContentType.TEXT: ("text-fields", "Plain text"),
}


@dataclass(frozen=True, slots=True)
class ClassifiedType:
    """Derived classification of a payload. Never persisted."""

    content_type: ContentType
    icon: str
    label: str
    actionable: bool
    action_target: Optional[str] = None
    raw_type: str = ""


def _has_prefix(data: str, *prefixes: str) -> bool:
    lowered = data.lower()
    return any(lowered.startswith(prefix) for prefix in prefixes)


def _url_action(data: str) -> Optional[str]:
    return data if _has_prefix(data, "http://", "https://") else None


def _email_action(data: str) -> Optional[str]:
    if "@" in data and "." in data and not any(char.isspace() for char in data):
        return f"mailto:{data}"
    return None


def _phone_action(data: str) -> Optional[str]:
    if _has_prefix(data, "tel:"):
        return data
    if _PHONE_PATTERN.match(data) and any(char.isdigit() for char in data):
        return f"tel:{data}"
    return None


def _sms_action(data: str) -> Optional[str]:
    return data if _has_prefix(data, "sms:") else None


def _wifi_action(data: str) -> Optional[str]:
    # Matched but there is no external handler for join-network payloads.
    return "" if _has_prefix(data, "wifi:") else None


def _geo_action(data: str) -> Optional[str]:
    if _has_prefix(data, "geo:"):
        return data
    lowered = data.lower()
    if any(marker in lowered for marker in _MAPS_MARKERS):
        return data
    return None


_RULES: List[Tuple[ContentType, Callable[[str], Optional[str]]]] = [
    (ContentType.URL, _url_action),
    (ContentType.EMAIL, _email_action),
    (ContentType.PHONE, _phone_action),
    (ContentType.SMS, _sms_action),
    (ContentType.WIFI, _wifi_action),
    (ContentType.GEO, _geo_action),
]


def _build(content_type: ContentType, raw_type: str, target: Optional[str]) -> ClassifiedType:
    icon, label = _DISPLAY[content_type]
    return ClassifiedType(
        content_type=content_type,
        icon=icon,
        label=label,
        actionable=bool(target),
        action_target=target or None,
        raw_type=raw_type,
    )


def classify(data: str, raw_type: str = "") -> ClassifiedType:
    """Map raw decoded text to its semantic type, falling back to text."""

    text = data if isinstance(data, str) else ""
    for content_type, rule in _RULES:
        target = rule(text)
        if target is not None:
            LOGGER.debug("Classified payload as %s (raw type %s)", content_type.value, raw_type)
            return _build(content_type, raw_type, target)
    return _build(ContentType.TEXT, raw_type, None)


def supported_types() -> List[Dict[str, str]]:
    """Expose the icon and label table for UI legends."""

    return [
        {"type": content_type.value, "icon": icon, "label": label}
        for content_type, (icon, label) in _DISPLAY.items()
    ]
