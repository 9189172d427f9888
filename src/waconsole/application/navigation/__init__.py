"""View navigation"""

from .router import (
    ADMIN,
    DASHBOARD,
    LOADING,
    LOGIN,
    PUBLIC_VIEWS,
    REGISTER,
    SETTINGS,
    ViewRouter,
)

__all__ = [
    "ADMIN",
    "DASHBOARD",
    "LOADING",
    "LOGIN",
    "PUBLIC_VIEWS",
    "REGISTER",
    "SETTINGS",
    "ViewRouter",
]
