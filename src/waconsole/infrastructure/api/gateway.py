"""RequestGateway - single choke point for backend HTTP calls"""

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

import httpx
from loguru import logger

from waconsole.shared.exceptions import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    SessionExpiredError,
    TransientError,
    ValidationError,
)

from .protocols import Navigator, TokenStore

LOGIN_VIEW = "login"


class _LoguruHandler(logging.Handler):
    """Bridge stdlib logging into loguru"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(
            level, record.getMessage()
        )


class ResponseClass(Enum):
    """Coarse classification of a backend response"""

    SUCCESS = "success"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    OTHER_ERROR = "other_error"


class RequestGateway:
    """Authenticated HTTP client that classifies every response

    Responsibilities:
    - Attach the bearer credential read from the token store
    - Return 2xx payloads unchanged
    - Turn a 401 outside the public views into a global session reset
    - Raise typed errors for everything else, without side effects
    """

    _logging_bridge_installed = False

    def __init__(
        self,
        base_url: str,
        token_store: TokenStore,
        navigator: Navigator | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize gateway

        Args:
            base_url: API root, e.g. "http://localhost:3000/api"
            token_store: Read-only source of the bearer credential
            navigator: Router used for the forced move to the login view
            timeout: Transport timeout in seconds
        """
        self._base_url = base_url.rstrip("/")
        self._token_store = token_store
        self._navigator = navigator
        self._timeout = timeout
        self._http_client: httpx.AsyncClient | None = None
        self._session_invalid_listeners: list[Callable[[], None]] = []
        self.install_logging_bridge()

    @classmethod
    def install_logging_bridge(cls) -> None:
        """Bridge stdlib logging used by httpx into loguru once."""
        if cls._logging_bridge_installed:
            return

        std_logger = logging.getLogger("httpx")
        std_logger.setLevel(logging.DEBUG)
        std_logger.addHandler(_LoguruHandler())
        std_logger.propagate = False

        cls._logging_bridge_installed = True

    @property
    def base_url(self) -> str:
        return self._base_url

    def set_navigator(self, navigator: Navigator) -> None:
        self._navigator = navigator

    def _build_http_client(
        self,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> httpx.AsyncClient:
        """Create an AsyncClient with httpx request/response logging hooks."""
        self.install_logging_bridge()
        return httpx.AsyncClient(
            timeout=self._timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
            event_hooks={
                "request": [self._log_httpx_request],
                "response": [self._log_httpx_response],
            },
        )

    async def _log_httpx_request(self, request: httpx.Request) -> None:
        """Log outbound httpx requests with headers (auth masked)."""
        headers = {
            k: ("***" if k.lower() == "authorization" else v)
            for k, v in request.headers.items()
        }
        logger.debug(f"HTTPX request: {request.method} {request.url} {headers}")

    async def _log_httpx_response(self, response: httpx.Response) -> None:
        """Log httpx responses with status code."""
        logger.debug(
            f"HTTPX response: status={response.status_code} url={response.url}"
        )

    def set_http_client(self, client: httpx.AsyncClient) -> None:
        """Set the HTTP client (for testing or external management)"""
        self._http_client = client

    async def aclose(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    # Session-invalid listener contract

    def add_session_invalid_listener(
        self, callback: Callable[[], None]
    ) -> None:
        self._session_invalid_listeners.append(callback)

    def remove_session_invalid_listener(
        self, callback: Callable[[], None]
    ) -> None:
        if callback in self._session_invalid_listeners:
            self._session_invalid_listeners.remove(callback)

    def _notify_session_invalid(self) -> None:
        for callback in list(self._session_invalid_listeners):
            try:
                callback()
            except Exception:
                logger.exception("Session-invalid listener failed")

    @staticmethod
    def classify(status_code: int) -> ResponseClass:
        """Map an HTTP status to its response class"""
        if 200 <= status_code < 300:
            return ResponseClass.SUCCESS
        if status_code == 401:
            return ResponseClass.UNAUTHENTICATED
        if status_code == 403:
            return ResponseClass.FORBIDDEN
        return ResponseClass.OTHER_ERROR

    async def request(
        self,
        method: str,
        path: str,
        data: dict | None = None,
        params: dict | None = None,
        auth_exempt: bool = False,
    ) -> Any:
        """Make a backend call and classify the response

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: Host-relative endpoint path (e.g., "/auth/me")
            data: JSON body
            params: Query parameters
            auth_exempt: True for login/register submissions, whose 401s are
                user input errors rather than session loss

        Returns:
            Parsed JSON payload ({} for an empty body)

        Raises:
            SessionExpiredError: 401 that tore down the session
            AuthenticationError: 401 on a public view or exempt call
            AuthorizationError: 403
            NotFoundError: 404
            ValidationError: Other 4xx
            TransientError: 5xx or no response at all
        """
        if self._http_client is None:
            self._http_client = self._build_http_client()

        url = f"{self._base_url}{path}"
        headers = {}
        token = self._token_store.get()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        logger.debug(f"{method.upper()} {path}")

        try:
            response = await self._http_client.request(
                method.upper(), url, headers=headers, json=data, params=params
            )
        except httpx.RequestError as e:
            logger.warning(f"Network error on {method.upper()} {path}: {e}")
            raise TransientError(f"Network error: {e}") from e

        response_class = self.classify(response.status_code)

        if response_class is ResponseClass.SUCCESS:
            return self._parse_body(response)

        message = self._extract_message(response)
        payload = self._safe_json(response)

        if response_class is ResponseClass.UNAUTHENTICATED:
            on_public_view = (
                self._navigator is not None and self._navigator.is_public
            )
            if auth_exempt or on_public_view:
                self._log_auth_failure(response, "Credentials rejected")
                raise AuthenticationError(message, 401, payload)

            self._log_auth_failure(response, "Session rejected - resetting")
            self._notify_session_invalid()
            if self._navigator is not None:
                self._navigator.navigate(LOGIN_VIEW, hard=True)
            raise SessionExpiredError(message, 401, payload)

        if response_class is ResponseClass.FORBIDDEN:
            self._log_auth_failure(response, "Action denied")
            raise AuthorizationError(message, 403, payload)

        if response.status_code == 404:
            logger.info(f"Not found: {method.upper()} {path}")
            raise NotFoundError(message, 404, payload)

        if 400 <= response.status_code < 500:
            logger.info(
                f"Client error {response.status_code} on {path}: {message}"
            )
            raise ValidationError(
                message,
                response.status_code,
                payload,
                field_errors=self._extract_field_errors(payload),
            )

        if response.status_code >= 500:
            logger.warning(
                f"Server error {response.status_code} on {path}: {message}"
            )
            raise TransientError(message, response.status_code, payload)

        logger.error(f"Unexpected status {response.status_code} on {path}")
        raise ApiError(self._format_error(response), response.status_code)

    async def get(self, path: str, params: dict | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(
        self, path: str, data: dict | None = None, auth_exempt: bool = False
    ) -> Any:
        return await self.request(
            "POST", path, data=data, auth_exempt=auth_exempt
        )

    async def put(self, path: str, data: dict | None = None) -> Any:
        return await self.request("PUT", path, data=data)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    def _parse_body(self, response: httpx.Response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return response.text

    def _safe_json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    def _extract_message(self, response: httpx.Response) -> str:
        """Pull a user-facing message out of an error body without assuming keys."""
        body = self._safe_json(response)
        if isinstance(body, dict):
            for key in ("error", "message"):
                value = body.get(key)
                if isinstance(value, str) and value:
                    return value
        text = response.text.strip()
        if text and body is None:
            return text
        return f"Request failed with status {response.status_code}"

    def _extract_field_errors(self, payload: Any) -> dict[str, str]:
        """Field errors from {"errors": {...}} or {"errors": [{field, message}]}"""
        if not isinstance(payload, dict):
            return {}
        errors = payload.get("errors")
        if isinstance(errors, dict):
            return {str(k): str(v) for k, v in errors.items()}
        if isinstance(errors, list):
            result = {}
            for item in errors:
                if not isinstance(item, dict):
                    continue
                field = item.get("field") or item.get("path") or item.get("param")
                text = item.get("message") or item.get("msg")
                if field and text:
                    result[str(field)] = str(text)
            return result
        return {}

    def _format_error(self, response: httpx.Response) -> str:
        """Return a safe string describing an HTTP error without assuming keys."""
        body: str
        try:
            parsed = response.json()
            body = str(parsed)
        except ValueError:
            body = response.text
        return f"Request failed: {response.status_code} - {body}"

    def _log_auth_failure(self, response: httpx.Response, prefix: str) -> None:
        """Log auth failures with safe body parsing to avoid KeyError."""
        body = self._safe_json(response)
        if body is None:
            body = response.text
        logger.warning(f"{prefix} ({response.status_code}): {body}")
