from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UserSessionPrincipal:
    user_id: str
    username: str
    email: str | None = None
    display_name: str | None = None


class UserSessionContext:
    """Acting user for audit stamping and membership checks."""

    def __init__(self):
        self._principal: UserSessionPrincipal | None = None

    @property
    def principal(self) -> UserSessionPrincipal | None:
        return self._principal

    @property
    def user_id(self) -> str | None:
        return self._principal.user_id if self._principal else None

    def set_principal(self, principal: UserSessionPrincipal) -> None:
        self._principal = principal

    def clear(self) -> None:
        self._principal = None

    def is_authenticated(self) -> bool:
        return self._principal is not None


__all__ = ["UserSessionPrincipal", "UserSessionContext"]
