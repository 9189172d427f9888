"""Pytest fixtures for waconsole tests"""

import asyncio
import inspect
import sys
from pathlib import Path

import httpx
import pytest

from waconsole.application.navigation import ViewRouter
from waconsole.application.session import SessionManager
from waconsole.core.app import ConsoleApp
from waconsole.core.config import Config
from waconsole.domain.models import ConnectionState
from waconsole.infrastructure.api import MemoryTokenStore, RequestGateway

# =============================================================================
# Global Test Setup
# =============================================================================

# Add src to Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

API_URL = "http://test/api"


class FakeBackend:
    """Route table served through httpx.MockTransport

    Routes are keyed by (METHOD, path) with the /api prefix stripped. A route
    may hold a single response or a list consumed in order (the last
    one repeats). Each reply is one of:
    - (status, json_body) tuple
    - an httpx exception class, raised as a transport failure
    - a callable taking the request, sync or async, returning an
      httpx.Response
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], list] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, *replies) -> None:
        self.routes[(method.upper(), path)] = list(replies)

    def calls(self, method: str, path: str) -> int:
        return sum(
            1
            for r in self.requests
            if r.method == method.upper() and self._path(r) == path
        )

    @staticmethod
    def _path(request: httpx.Request) -> str:
        path = request.url.path
        return path[len("/api") :] if path.startswith("/api") else path

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        replies = self.routes.get((request.method, self._path(request)))
        if not replies:
            return httpx.Response(404, json={"error": "no route"})

        reply = replies.pop(0) if len(replies) > 1 else replies[0]

        if inspect.isclass(reply) and issubclass(reply, Exception):
            raise reply("backend unreachable", request=request)
        if callable(reply):
            result = reply(request)
            if inspect.isawaitable(result):
                result = await result
            return result

        status, body = reply
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)


def attach_backend(gateway: RequestGateway, backend: FakeBackend) -> None:
    gateway.set_http_client(
        gateway._build_http_client(transport=httpx.MockTransport(backend))
    )


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def token_store() -> MemoryTokenStore:
    return MemoryTokenStore()


@pytest.fixture
def router() -> ViewRouter:
    return ViewRouter()


@pytest.fixture
def gateway(backend, token_store, router) -> RequestGateway:
    gw = RequestGateway(API_URL, token_store, navigator=router)
    attach_backend(gw, backend)
    return gw


@pytest.fixture
def session_manager(gateway, token_store) -> SessionManager:
    return SessionManager(gateway, token_store)


@pytest.fixture
def config(tmp_path) -> Config:
    return Config(
        api_url=API_URL,
        token_path=str(tmp_path / "session.json"),
        poll_interval=0.01,
        request_timeout=1.0,
    )


@pytest.fixture
def app(config, backend, token_store) -> ConsoleApp:
    console_app = ConsoleApp(config, token_store=token_store)
    attach_backend(console_app.gateway, backend)
    return console_app


@pytest.fixture
def customer_payload() -> dict:
    """Customer record as the backend serialises it"""
    return {
        "id": "c0ffee00-0000-4000-8000-000000000001",
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "role": "customer",
        "isActive": True,
        "hasUnlimitedAccess": False,
        "planType": "standard",
        "subscriptionStatus": "active",
        "company": "Analytical Engines",
    }


@pytest.fixture
def admin_payload(customer_payload) -> dict:
    return {
        **customer_payload,
        "id": "c0ffee00-0000-4000-8000-000000000002",
        "name": "Root",
        "email": "root@example.com",
        "role": "admin",
    }


class FakeWhatsApp:
    """Controllable stand-in for WhatsAppClient

    get_status snapshots `current` when the request starts, then optionally
    waits on `gate`, so tests can hold a response while the backend state
    changes underneath it.
    """

    def __init__(self, current: ConnectionState | None = None) -> None:
        self.current = current or ConnectionState("disconnected")
        self.gate: asyncio.Event | None = None
        self.delay = 0.0
        self.fail_with: Exception | None = None

        self.status_calls = 0
        self.outstanding = 0
        self.max_outstanding = 0

        self.connect_calls = 0
        self.connect_gate: asyncio.Event | None = None
        self.connect_error: Exception | None = None
        self.disconnect_calls = 0
        self.disconnect_error: Exception | None = None
        self.sent: list[tuple[str, str, str]] = []

    async def get_status(self, sub_account_id: str) -> ConnectionState:
        self.status_calls += 1
        self.outstanding += 1
        self.max_outstanding = max(self.max_outstanding, self.outstanding)
        try:
            snapshot = self.current
            if self.gate is not None:
                await self.gate.wait()
            if self.delay:
                await asyncio.sleep(self.delay)
            if self.fail_with is not None:
                raise self.fail_with
            return snapshot
        finally:
            self.outstanding -= 1

    async def connect(self, sub_account_id: str) -> dict:
        self.connect_calls += 1
        if self.connect_gate is not None:
            await self.connect_gate.wait()
        if self.connect_error is not None:
            raise self.connect_error
        self.current = ConnectionState(
            "qr_ready", qr_code="data:image/png;base64,AAA"
        )
        return {"success": True}

    async def disconnect(self, sub_account_id: str) -> dict:
        self.disconnect_calls += 1
        if self.disconnect_error is not None:
            raise self.disconnect_error
        self.current = ConnectionState("disconnected")
        return {"success": True}

    async def send_message(self, sub_account_id: str, to: str, message: str):
        from waconsole.validation import SendMessageResponse

        self.sent.append((sub_account_id, to, message))
        return SendMessageResponse(success=True, message={"id": "m1"})


@pytest.fixture
def fake_whatsapp() -> FakeWhatsApp:
    return FakeWhatsApp()
