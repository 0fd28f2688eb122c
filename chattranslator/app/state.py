from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AuthState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    ERROR = "error"


@dataclass
class AuthStateTracker:
    state: AuthState = AuthState.UNAUTHENTICATED
    last_error: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.state == AuthState.AUTHENTICATED

    def set_authenticating(self) -> None:
        self.state = AuthState.AUTHENTICATING
        self.last_error = None

    def set_authenticated(self) -> None:
        self.state = AuthState.AUTHENTICATED

    def set_unauthenticated(self) -> None:
        self.state = AuthState.UNAUTHENTICATED

    def set_error(self, detail: str) -> None:
        self.state = AuthState.ERROR
        self.last_error = detail
