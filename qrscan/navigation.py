"""Mini README: Navigation boundary used by the capture and history flows.

Structure:
    * NavigationKind - closed set of intents the core may signal.
    * NavigationIntent - dataclass describing a single intent.
    * Navigator - abstract interface implemented by the presentation layer.
    * RecordingNavigator - in-memory navigator that keeps a log of intents.

The core never owns screen transitions. It only tells the navigator where
the user should go next and leaves rendering to whoever implements it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional


class NavigationKind(str, Enum):
    """Intents the core may hand to the navigator."""

    GO_TO_LOGIN = "go_to_login"
    GO_TO_DETAIL = "go_to_detail"
    GO_BACK = "go_back"


@dataclass(frozen=True, slots=True)
class NavigationIntent:
    """A single navigation request emitted by the core."""

    kind: NavigationKind
    record_id: Optional[str] = None
    record: Optional[Any] = None
    delay_seconds: float = 0.0


class Navigator(ABC):
    """Receiver of navigation intents."""

    @abstractmethod
    def go_to_login(self, *, delay_seconds: float = 0.0) -> None:
        """Return the user to the login screen."""

    @abstractmethod
    def go_to_detail(self, record_id: str, record: Optional[Any] = None) -> None:
        """Open the detail view, optionally handing over a cached record."""

    @abstractmethod
    def go_back(self) -> None:
        """Leave the current screen."""


class RecordingNavigator(Navigator):
    """Navigator that stores intents in order for later inspection."""

    def __init__(self) -> None:
        self.intents: List[NavigationIntent] = []

    def go_to_login(self, *, delay_seconds: float = 0.0) -> None:
        self.intents.append(
            NavigationIntent(kind=NavigationKind.GO_TO_LOGIN, delay_seconds=delay_seconds)
        )

    def go_to_detail(self, record_id: str, record: Optional[Any] = None) -> None:
        self.intents.append(
            NavigationIntent(kind=NavigationKind.GO_TO_DETAIL, record_id=record_id, record=record)
        )

    def go_back(self) -> None:
        self.intents.append(NavigationIntent(kind=NavigationKind.GO_BACK))

    @property
    def kinds(self) -> List[NavigationKind]:
        """Return the intent kinds recorded so far."""

        return [intent.kind for intent in self.intents]
