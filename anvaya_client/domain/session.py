"""
Session Domain Model - Published state of the session manager.
"""

from dataclasses import dataclass
from typing import Optional
from enum import Enum

from anvaya_client.domain.user import User


class SessionState(Enum):
    """Session lifecycle states."""
    RESTORING = "restoring"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


@dataclass(frozen=True)
class SessionSnapshot:
    """
    Immutable view of the session at one point in time.

    Domain rules:
    - user is set iff state is AUTHENTICATED
    """
    state: SessionState
    user: Optional[User] = None

    def __post_init__(self):
        if (self.state is SessionState.AUTHENTICATED) != (self.user is not None):
            raise ValueError("user must be set exactly when state is AUTHENTICATED")

    @classmethod
    def restoring(cls) -> "SessionSnapshot":
        return cls(state=SessionState.RESTORING)

    @classmethod
    def anonymous(cls) -> "SessionSnapshot":
        return cls(state=SessionState.ANONYMOUS)

    @classmethod
    def authenticated(cls, user: User) -> "SessionSnapshot":
        return cls(state=SessionState.AUTHENTICATED, user=user)

    @property
    def is_restoring(self) -> bool:
        return self.state is SessionState.RESTORING

    @property
    def is_authenticated(self) -> bool:
        return self.state is SessionState.AUTHENTICATED
