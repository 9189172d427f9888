"""Session domain model"""

from dataclasses import dataclass
from enum import Enum

from .profile import UserProfile


class SessionStatus(Enum):
    """Session resolution states

    - UNRESOLVED: Process start, nothing checked yet
    - RESOLVING: "who am I" request in flight
    - AUTHENTICATED: Credential and profile present
    - ANONYMOUS: No usable credential
    - ANONYMOUS_RETRYABLE: Credential kept after a transient failure, gated
      exactly like ANONYMOUS until resolved again
    """

    UNRESOLVED = "unresolved"
    RESOLVING = "resolving"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"
    ANONYMOUS_RETRYABLE = "anonymous_retryable"


@dataclass(frozen=True)
class Session:
    """Snapshot of the current authentication state

    Attributes:
        token: Persisted bearer credential, if any
        user: Resolved profile; only present when token is present
        loading: True only while resolving at startup or on explicit re-fetch
    """

    token: str | None = None
    user: UserProfile | None = None
    loading: bool = False

    def __post_init__(self) -> None:
        if self.user is not None and self.token is None:
            raise ValueError("Session user requires a token")

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None
