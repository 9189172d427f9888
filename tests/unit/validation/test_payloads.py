"""Unit tests for backend payload validation"""

import pytest
from pydantic import ValidationError as PayloadError

from waconsole.domain.models import Role, SubscriptionStatus
from waconsole.validation import (
    AuthResponse,
    MeResponse,
    ProfilePayload,
    StatusPayload,
)
from waconsole.validation.resources import AdminStats, SubAccount


def test_profile_payload_reads_camel_case(customer_payload):
    profile = ProfilePayload.model_validate(customer_payload).to_domain()

    assert profile.role is Role.CUSTOMER
    assert profile.has_unlimited_access is False
    assert profile.plan_type == "standard"
    assert profile.subscription is SubscriptionStatus.ACTIVE
    assert profile.company == "Analytical Engines"


def test_profile_payload_coerces_numeric_id(customer_payload):
    payload = {**customer_payload, "id": 17}

    assert ProfilePayload.model_validate(payload).id == "17"


@pytest.mark.parametrize("raw", [None, "inactive"])
def test_missing_subscription_reads_as_none(customer_payload, raw):
    payload = {**customer_payload, "subscriptionStatus": raw}

    profile = ProfilePayload.model_validate(payload).to_domain()

    assert profile.subscription is SubscriptionStatus.NONE


def test_unknown_subscription_keeps_raw_value(customer_payload):
    payload = {**customer_payload, "subscriptionStatus": "trialing"}

    profile = ProfilePayload.model_validate(payload).to_domain()

    assert profile.subscription_status == "trialing"
    assert profile.subscription is SubscriptionStatus.NONE


def test_admin_role(admin_payload):
    profile = MeResponse.model_validate({"customer": admin_payload})

    assert profile.customer.to_domain().is_admin


def test_auth_response_requires_token(customer_payload):
    with pytest.raises(PayloadError):
        AuthResponse.model_validate({"token": "", "customer": customer_payload})


def test_unknown_role_is_rejected(customer_payload):
    with pytest.raises(PayloadError):
        ProfilePayload.model_validate({**customer_payload, "role": "owner"})


def test_status_payload_defaults_to_disconnected():
    state = StatusPayload.model_validate({}).to_domain()

    assert state.status == "disconnected"
    assert state.qr_code is None


def test_status_payload_drops_empty_qr():
    state = StatusPayload.model_validate(
        {"status": "connecting", "qrCode": ""}
    ).to_domain()

    assert state.qr_code is None
    assert state.visible_qr_code is None


def test_connected_state_hides_stale_qr():
    state = StatusPayload.model_validate(
        {
            "status": "connected",
            "qrCode": "data:image/png;base64,OLD",
            "phoneNumber": "+61400000000",
        }
    ).to_domain()

    assert state.is_connected
    assert state.visible_qr_code is None
    assert state.visible_phone_number == "+61400000000"


def test_sub_account_nested_customer():
    account = SubAccount.model_validate(
        {
            "id": 3,
            "name": "Sales",
            "ghlLocationId": "loc-1",
            "customer": {"id": 9, "email": "owner@example.com"},
        }
    )

    assert account.id == "3"
    assert account.ghl_location_id == "loc-1"
    assert account.customer.id == "9"
    assert account.status == "disconnected"


def test_admin_stats_defaults():
    stats = AdminStats.model_validate(
        {
            "totalCustomers": 4,
            "activeCustomers": 3,
            "totalSubAccounts": 6,
            "connectedSubAccounts": 2,
        }
    )

    assert stats.connected_sub_accounts == 2
    assert stats.total_messages is None
