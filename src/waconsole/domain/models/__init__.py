"""Domain models"""

from .connection import ConnectionState, ConnectionStatus
from .profile import Role, SubscriptionStatus, UserProfile
from .session import Session, SessionStatus

__all__ = [
    "ConnectionState",
    "ConnectionStatus",
    "Role",
    "Session",
    "SessionStatus",
    "SubscriptionStatus",
    "UserProfile",
]
