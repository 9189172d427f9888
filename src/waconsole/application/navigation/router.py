"""ViewRouter - current view tracking, hard navigation and route guards"""

from collections.abc import Callable

from loguru import logger

from waconsole.domain.models import Session

LOGIN = "login"
REGISTER = "register"
DASHBOARD = "dashboard"
ADMIN = "admin"
SETTINGS = "settings"
LOADING = "loading"

PUBLIC_VIEWS = frozenset({LOGIN, REGISTER})
ADMIN_VIEWS = frozenset({ADMIN})

NavigationListener = Callable[[str, str, bool], None]


class ViewRouter:
    """Tracks which view is active and moves between views

    Listeners receive (previous_view, new_view, hard). A hard navigation is a
    full application reset: history is dropped and views must discard any
    in-memory state.
    """

    def __init__(self, initial_view: str = DASHBOARD) -> None:
        self._current_view = initial_view
        self._history: list[str] = []
        self._listeners: list[NavigationListener] = []

    @property
    def current_view(self) -> str:
        return self._current_view

    @property
    def history(self) -> list[str]:
        return list(self._history)

    @property
    def is_public(self) -> bool:
        return self._current_view in PUBLIC_VIEWS

    def add_listener(self, listener: NavigationListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: NavigationListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def navigate(self, view: str, hard: bool = False) -> None:
        previous = self._current_view
        if hard:
            self._history.clear()
            logger.info(f"Hard navigation: {previous} -> {view}")
        else:
            self._history.append(previous)
            logger.debug(f"Navigation: {previous} -> {view}")

        self._current_view = view

        for listener in list(self._listeners):
            try:
                listener(previous, view, hard)
            except Exception:
                logger.exception("Navigation listener failed")

    def back(self) -> str:
        """Return to the previous view (dashboard when there is none)"""
        view = self._history.pop() if self._history else DASHBOARD
        previous = self._current_view
        self._current_view = view
        for listener in list(self._listeners):
            try:
                listener(previous, view, False)
            except Exception:
                logger.exception("Navigation listener failed")
        return view

    @staticmethod
    def guard(view: str, session: Session) -> str:
        """Resolve which view may actually be shown

        Public views always pass. Protected views wait while the session is
        loading, send anonymous users to login and send non-admins away from
        admin views.
        """
        if view in PUBLIC_VIEWS:
            return view
        if session.loading:
            return LOADING
        if session.user is None:
            return LOGIN
        if view in ADMIN_VIEWS and not session.user.is_admin:
            return DASHBOARD
        return view

    def open(self, view: str, session: Session) -> str:
        """Navigate to view through the route guard; returns the view shown"""
        target = self.guard(view, session)
        if target != LOADING:
            self.navigate(target)
        return target
