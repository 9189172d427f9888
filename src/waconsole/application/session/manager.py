"""SessionManager - session resolution, caching and teardown"""

import asyncio
from collections.abc import Callable

from loguru import logger
from pydantic import ValidationError as PayloadError

from waconsole.domain.models import Session, SessionStatus, UserProfile
from waconsole.infrastructure.api.gateway import RequestGateway
from waconsole.infrastructure.api.protocols import TokenStore
from waconsole.infrastructure.api.resources import CustomersClient
from waconsole.shared.exceptions import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    ValidationError,
)
from waconsole.validation import AuthResponse, MeResponse

SessionListener = Callable[[Session], None]


class SessionManager:
    """Owns the authenticated session for one application instance

    Responsibilities:
    - Exchange a persisted credential for a profile at startup
    - Keep the credential on transient failures, drop it on 401/403
    - Login, registration and logout
    - React to the gateway's session-invalid signal

    The manager is the only writer of the token store.
    """

    ME_ENDPOINT = "/auth/me"

    def __init__(
        self, gateway: RequestGateway, token_store: TokenStore
    ) -> None:
        """Initialize session manager

        Args:
            gateway: Request gateway used for every session call
            token_store: Persisted credential storage
        """
        self._gateway = gateway
        self._token_store = token_store
        self._customers = CustomersClient(gateway)

        self._status = SessionStatus.UNRESOLVED
        self._user: UserProfile | None = None
        self._loading = True

        # Bumped by login/register/logout/invalidation so that an older
        # profile fetch cannot overwrite a newer session decision.
        self._generation = 0
        self._resolve_task: asyncio.Task | None = None
        self._listeners: list[SessionListener] = []

        self._gateway.add_session_invalid_listener(
            self._handle_session_invalid
        )

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def session(self) -> Session:
        token = self._token_store.get()
        return Session(
            token=token,
            user=self._user if token else None,
            loading=self._loading,
        )

    @property
    def user(self) -> UserProfile | None:
        return self.session.user

    @property
    def is_authenticated(self) -> bool:
        return (
            self._status is SessionStatus.AUTHENTICATED
            and self.user is not None
        )

    @property
    def is_admin(self) -> bool:
        user = self.user
        return user is not None and user.is_admin

    def add_listener(self, listener: SessionListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: SessionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def close(self) -> None:
        """Detach from the gateway"""
        self._gateway.remove_session_invalid_listener(
            self._handle_session_invalid
        )
        self._listeners.clear()

    def _set_state(
        self,
        status: SessionStatus,
        user: UserProfile | None,
        loading: bool = False,
    ) -> None:
        self._status = status
        self._user = user
        self._loading = loading
        snapshot = self.session
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Session listener failed")

    async def resolve(self) -> SessionStatus:
        """Resolve the persisted credential into a session

        Only does work from UNRESOLVED or ANONYMOUS_RETRYABLE; any other
        state is returned as-is. Concurrent callers share one resolution.

        Returns:
            The session status after resolution
        """
        if self._resolve_task is not None and not self._resolve_task.done():
            return await self._resolve_task

        if self._status not in (
            SessionStatus.UNRESOLVED,
            SessionStatus.ANONYMOUS_RETRYABLE,
        ):
            return self._status

        self._resolve_task = asyncio.ensure_future(self._resolve())
        return await self._resolve_task

    async def _resolve(self) -> SessionStatus:
        if not self._token_store.get():
            logger.info("No stored credential - anonymous session")
            self._set_state(SessionStatus.ANONYMOUS, None)
            return self._status

        logger.info("Resolving stored credential...")
        await self._load_profile()
        return self._status

    async def refresh_profile(self) -> UserProfile | None:
        """Re-fetch the profile and replace the cached one

        Returns:
            The current profile, or None when no session remains
        """
        if not self._token_store.get():
            self._set_state(SessionStatus.ANONYMOUS, None)
            return None

        await self._load_profile()
        return self.user

    async def _load_profile(self) -> None:
        """Fetch /auth/me and apply the outcome

        401/403 discard the credential. Anything else that fails keeps it:
        the cached profile stays if there is one, otherwise the session
        becomes ANONYMOUS_RETRYABLE.
        """
        generation = self._generation
        cached = self._user
        status = (
            SessionStatus.RESOLVING
            if cached is None
            else SessionStatus.AUTHENTICATED
        )
        self._set_state(status, cached, loading=True)

        try:
            response = await self._gateway.get(self.ME_ENDPOINT)
            profile = MeResponse.model_validate(response).customer.to_domain()
        except (AuthenticationError, AuthorizationError) as e:
            if generation != self._generation:
                logger.debug("Discarding stale session rejection")
                return
            logger.warning(f"Stored credential rejected ({e.status_code})")
            self._token_store.clear()
            self._set_state(SessionStatus.ANONYMOUS, None)
            return
        except (ApiError, PayloadError) as e:
            if generation != self._generation:
                logger.debug("Discarding stale profile failure")
                return
            logger.warning(f"Could not fetch profile, keeping credential: {e}")
            if cached is not None:
                self._set_state(SessionStatus.AUTHENTICATED, cached)
            else:
                self._set_state(SessionStatus.ANONYMOUS_RETRYABLE, None)
            return
        except BaseException:
            if generation == self._generation:
                fallback = (
                    SessionStatus.AUTHENTICATED
                    if cached is not None
                    else SessionStatus.ANONYMOUS_RETRYABLE
                )
                self._set_state(fallback, cached)
            raise

        if generation != self._generation:
            logger.debug("Discarding stale profile response")
            return

        logger.info(f"Session authenticated as {profile.email}")
        self._set_state(SessionStatus.AUTHENTICATED, profile)

    async def login(self, email: str, password: str) -> UserProfile:
        """Authenticate with email and password

        Returns:
            The authenticated profile

        Raises:
            ApiError: On any failure; the session is left untouched
        """
        response = await self._gateway.post(
            "/auth/login",
            data={"email": email, "password": password},
            auth_exempt=True,
        )
        profile = self._store_auth_response(response)
        logger.info(f"Logged in as {profile.email}")
        return profile

    async def register(self, details: dict) -> UserProfile:
        """Create an account and start a session with it

        Args:
            details: Registration fields (name, email, password, company)
        """
        response = await self._gateway.post(
            "/auth/register", data=details, auth_exempt=True
        )
        profile = self._store_auth_response(response)
        logger.info(f"Registered and logged in as {profile.email}")
        return profile

    async def forgot_password(self, email: str) -> str:
        """Request a password reset link; never touches the session"""
        response = await self._gateway.post(
            "/auth/forgot-password", data={"email": email}, auth_exempt=True
        )
        if isinstance(response, dict):
            return response.get("message", "")
        return ""

    def _store_auth_response(self, response) -> UserProfile:
        try:
            auth = AuthResponse.model_validate(response)
        except PayloadError as e:
            raise ApiError(f"Malformed authentication response: {e}") from e

        profile = auth.customer.to_domain()
        self._generation += 1
        self._token_store.set(auth.token)
        self._set_state(SessionStatus.AUTHENTICATED, profile)
        return profile

    async def update_profile(
        self, name: str | None = None, company: str | None = None
    ) -> UserProfile | None:
        """Save name/company, then replace the cached profile from /auth/me

        Returns:
            The re-fetched profile, or None when no session remains
        """
        await self._customers.update_profile(name=name, company=company)
        logger.info("Profile updated")
        return await self.refresh_profile()

    async def change_password(
        self, current_password: str, new_password: str
    ) -> str:
        """Change the password of the logged-in customer

        The credential stays valid, so the session is not touched. A 401
        here means the session itself expired and goes through the
        gateway's reset like any other protected call.

        Raises:
            ValidationError: If either password is empty, or the backend
                rejects the current password
        """
        missing = {
            field: "required"
            for field, value in (
                ("currentPassword", current_password),
                ("newPassword", new_password),
            )
            if not value
        }
        if missing:
            raise ValidationError(
                "Current and new password are required",
                status_code=None,
                field_errors=missing,
            )

        message = await self._customers.change_password(
            current_password, new_password
        )
        logger.info("Password changed")
        return message

    async def regenerate_api_key(self) -> str:
        """Rotate the API key and re-fetch the profile that carries it"""
        api_key = await self._customers.refresh_api_key()
        await self.refresh_profile()
        return api_key

    def logout(self) -> None:
        """Drop the credential and profile; no backend call"""
        self._clear("Logged out")

    def _handle_session_invalid(self) -> None:
        self._clear("Session invalidated by backend")

    def _clear(self, reason: str) -> None:
        self._generation += 1
        self._token_store.clear()
        self._set_state(SessionStatus.ANONYMOUS, None)
        logger.info(reason)
