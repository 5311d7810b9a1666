"""Mini README: Read-only authentication boundary.

Structure:
    * AuthContext - capability object answering "who is signed in?".
    * StaticAuthContext - fixed identity, handy for tests and the HTTP facade.

The capture machine and history engine receive an ``AuthContext`` instead of
reading a process-wide singleton. The core never signs users in or out.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from .storage.models import Owner


class AuthContext(ABC):
    """Source of the currently authenticated owner."""

    @abstractmethod
    def current_user(self) -> Optional[Owner]:
        """Return the signed-in owner, or ``None`` when signed out."""


class StaticAuthContext(AuthContext):
    """Auth context returning a fixed owner (or nobody)."""

    def __init__(self, owner: Optional[Owner] = None) -> None:
        self._owner = owner

    def current_user(self) -> Optional[Owner]:
        return self._owner
