"""Payload validation models for the console API"""

from .connection import SendMessageResponse, StatusPayload
from .profile import AuthResponse, MeResponse, ProfilePayload
from .resources import (
    AdminStats,
    CustomerRef,
    CustomerSummary,
    GhlLocation,
    GhlStatus,
    SubAccount,
)

__all__ = [
    "AdminStats",
    "AuthResponse",
    "CustomerRef",
    "CustomerSummary",
    "GhlLocation",
    "GhlStatus",
    "MeResponse",
    "ProfilePayload",
    "SendMessageResponse",
    "StatusPayload",
    "SubAccount",
]
