"""Tests for RequestGateway in isolation"""

import logging

import httpx
import pytest

from waconsole.application.navigation import LOGIN
from waconsole.infrastructure.api.gateway import (
    RequestGateway,
    ResponseClass,
    _LoguruHandler,
)
from waconsole.shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    SessionExpiredError,
    TransientError,
    ValidationError,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "status_code, expected",
    [
        (200, ResponseClass.SUCCESS),
        (204, ResponseClass.SUCCESS),
        (401, ResponseClass.UNAUTHENTICATED),
        (403, ResponseClass.FORBIDDEN),
        (400, ResponseClass.OTHER_ERROR),
        (404, ResponseClass.OTHER_ERROR),
        (500, ResponseClass.OTHER_ERROR),
    ],
)
def test_classify(status_code, expected):
    assert RequestGateway.classify(status_code) is expected


@pytest.mark.unit
@pytest.mark.asyncio
async def test_attaches_bearer_token_when_present(gateway, backend, token_store):
    token_store.set("tok-123")
    backend.on("GET", "/sub-accounts", (200, {"subAccounts": []}))

    await gateway.get("/sub-accounts")

    assert backend.requests[-1].headers["Authorization"] == "Bearer tok-123"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_omits_authorization_without_token(gateway, backend):
    backend.on("POST", "/auth/forgot-password", (200, {"message": "ok"}))

    await gateway.post("/auth/forgot-password", data={"email": "a@b.c"})

    assert "Authorization" not in backend.requests[-1].headers


@pytest.mark.unit
@pytest.mark.asyncio
async def test_success_returns_payload_unchanged(gateway, backend):
    payload = {"status": "qr_ready", "qrCode": "data:x", "extra": [1, 2]}
    backend.on("GET", "/whatsapp/42/status", (200, payload))

    result = await gateway.get("/whatsapp/42/status")

    assert result == payload


@pytest.mark.unit
@pytest.mark.asyncio
async def test_empty_success_body_returns_empty_dict(gateway, backend):
    backend.on("DELETE", "/sub-accounts/7", (204, None))

    assert await gateway.delete("/sub-accounts/7") == {}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_401_on_protected_view_invalidates_and_navigates(
    gateway, backend, router
):
    backend.on("GET", "/sub-accounts", (401, {"error": "Token expired"}))
    signals = []
    gateway.add_session_invalid_listener(lambda: signals.append("invalid"))
    router.navigate("sub-accounts")

    with pytest.raises(SessionExpiredError) as exc_info:
        await gateway.get("/sub-accounts")

    assert signals == ["invalid"]
    assert router.current_view == LOGIN
    assert router.history == []
    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "Token expired"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_401_on_public_view_has_no_global_effect(gateway, backend, router):
    backend.on("POST", "/auth/login", (401, {"error": "Invalid credentials"}))
    signals = []
    gateway.add_session_invalid_listener(lambda: signals.append("invalid"))
    router.navigate(LOGIN)

    with pytest.raises(AuthenticationError) as exc_info:
        await gateway.post("/auth/login", data={"email": "x", "password": "y"})

    assert not isinstance(exc_info.value, SessionExpiredError)
    assert signals == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_401_on_exempt_call_has_no_global_effect(gateway, backend, router):
    backend.on("POST", "/auth/login", (401, {"error": "Invalid credentials"}))
    signals = []
    gateway.add_session_invalid_listener(lambda: signals.append("invalid"))

    with pytest.raises(AuthenticationError) as exc_info:
        await gateway.post("/auth/login", data={}, auth_exempt=True)

    assert not isinstance(exc_info.value, SessionExpiredError)
    assert signals == []
    assert router.current_view == "dashboard"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_401_does_not_write_token_store(gateway, backend, token_store):
    token_store.set("tok")
    backend.on("GET", "/auth/me", (401, {"error": "expired"}))

    with pytest.raises(SessionExpiredError):
        await gateway.get("/auth/me")

    assert token_store.get() == "tok"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_403_passes_through_without_side_effects(gateway, backend, router):
    backend.on(
        "GET", "/sub-accounts", (403, {"error": "Account is deactivated"})
    )
    signals = []
    gateway.add_session_invalid_listener(lambda: signals.append("invalid"))
    router.navigate("sub-accounts")

    with pytest.raises(AuthorizationError) as exc_info:
        await gateway.get("/sub-accounts")

    assert exc_info.value.message == "Account is deactivated"
    assert signals == []
    assert router.current_view == "sub-accounts"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_404_raises_not_found(gateway, backend):
    backend.on("GET", "/sub-accounts/9", (404, {"error": "Sub-account not found"}))

    with pytest.raises(NotFoundError) as exc_info:
        await gateway.get("/sub-accounts/9")

    assert exc_info.value.message == "Sub-account not found"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_400_carries_field_errors(gateway, backend):
    backend.on(
        "POST",
        "/sub-accounts",
        (
            400,
            {
                "error": "Validation failed",
                "errors": [{"field": "name", "message": "Name is required"}],
            },
        ),
    )

    with pytest.raises(ValidationError) as exc_info:
        await gateway.post("/sub-accounts", data={})

    assert exc_info.value.status_code == 400
    assert exc_info.value.field_errors == {"name": "Name is required"}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_5xx_raises_transient(gateway, backend):
    backend.on("GET", "/admin/stats", (502, None))

    with pytest.raises(TransientError) as exc_info:
        await gateway.get("/admin/stats")

    assert exc_info.value.status_code == 502


@pytest.mark.unit
@pytest.mark.asyncio
async def test_network_failure_raises_transient(gateway, backend):
    backend.on("GET", "/auth/me", httpx.ConnectError)

    with pytest.raises(TransientError) as exc_info:
        await gateway.get("/auth/me")

    assert exc_info.value.status_code is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_failing_listener_does_not_block_others(gateway, backend):
    backend.on("GET", "/sub-accounts", (401, None))
    seen = []

    def broken():
        raise RuntimeError("listener bug")

    gateway.add_session_invalid_listener(broken)
    gateway.add_session_invalid_listener(lambda: seen.append(True))

    with pytest.raises(SessionExpiredError):
        await gateway.get("/sub-accounts")

    assert seen == [True]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_removed_listener_is_not_called(gateway, backend):
    backend.on("GET", "/sub-accounts", (401, None))
    seen = []

    def listener():
        seen.append(True)

    gateway.add_session_invalid_listener(listener)
    gateway.remove_session_invalid_listener(listener)

    with pytest.raises(SessionExpiredError):
        await gateway.get("/sub-accounts")

    assert seen == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_httpx_event_hooks_log_with_masked_token(
    gateway, backend, token_store
):
    """HTTPX request/response logs should flow into loguru."""
    from loguru import logger

    messages: list[str] = []
    token = logger.add(messages.append, format="{message}", level="DEBUG")
    token_store.set("super-secret")
    backend.on("GET", "/ghl/status", (200, {"connected": False}))

    try:
        await gateway.get("/ghl/status")
    finally:
        logger.remove(token)

    assert any("GET" in msg and "/ghl/status" in msg for msg in messages)
    assert any("status=200" in msg for msg in messages)
    assert not any("super-secret" in msg for msg in messages)


@pytest.mark.unit
def test_logging_bridge_hooks_only_httpx(gateway):
    def bridged(name):
        return any(
            isinstance(h, _LoguruHandler)
            for h in logging.getLogger(name).handlers
        )

    assert bridged("httpx")
    assert not bridged("waconsole")
