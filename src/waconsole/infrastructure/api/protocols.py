"""API protocols defining the seams around the request gateway.

These protocols keep the gateway transport-agnostic: it reads the credential
through a TokenStore and forces navigation through a Navigator without
knowing how either is implemented.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class TokenStore(Protocol):
    """Persisted bearer credential, stored under a single key."""

    def get(self) -> str | None:
        """Return the stored token, or None."""
        ...

    def set(self, token: str) -> None:
        """Replace the stored token."""
        ...

    def clear(self) -> None:
        """Remove the stored token wholesale."""
        ...


@runtime_checkable
class Navigator(Protocol):
    """Current-view tracking and hard navigation."""

    @property
    def is_public(self) -> bool:
        """True when the current view is a login/register view."""
        ...

    def navigate(self, view: str, hard: bool = False) -> None:
        """Move to another view; hard=True resets the whole application."""
        ...
