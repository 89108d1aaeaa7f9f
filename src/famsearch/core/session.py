"""Identity collaborator consulted for the user issuing a request."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class UserIdentity:
    user_id: int
    display_name: str = ""


class SessionProvider(Protocol):
    def current_user(self) -> UserIdentity | None: ...


class StaticSessionProvider:
    """Session provider returning a fixed user (or nobody); switchable at runtime."""

    def __init__(self, user: UserIdentity | None = None) -> None:
        self.user = user

    def current_user(self) -> UserIdentity | None:
        return self.user

    def login(self, user_id: int, display_name: str = "") -> None:
        self.user = UserIdentity(user_id, display_name)

    def logout(self) -> None:
        self.user = None
