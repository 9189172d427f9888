"""Pydantic models for sub-account, CRM, billing and admin payloads"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class CustomerRef(_CamelModel):
    """Owner reference embedded in admin sub-account listings"""

    id: str
    email: str | None = None
    name: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return str(v) if isinstance(v, int) else v


class SubAccount(_CamelModel):
    """A tenant-owned WhatsApp number"""

    id: str
    name: str
    status: str = "disconnected"
    phone_number: str | None = None
    ghl_location_id: str | None = None
    is_paid: bool = False
    is_active: bool = True
    customer: CustomerRef | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return str(v) if isinstance(v, int) else v


class CustomerSummary(_CamelModel):
    """Customer row in the admin listing"""

    id: str
    name: str
    email: str
    role: str = "customer"
    is_active: bool = True
    has_unlimited_access: bool = False
    plan_type: str = "standard"
    subscription_status: str | None = None
    sub_account_count: int | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return str(v) if isinstance(v, int) else v


class AdminStats(_CamelModel):
    """Dashboard counters from GET /admin/stats"""

    total_customers: int = Field(0, ge=0)
    active_customers: int = Field(0, ge=0)
    total_sub_accounts: int = Field(0, ge=0)
    connected_sub_accounts: int = Field(0, ge=0)
    total_messages: int | None = Field(None, ge=0)


class GhlStatus(_CamelModel):
    """CRM link state from GET /ghl/status"""

    connected: bool = False
    company_id: str | None = None
    location_id: str | None = None


class GhlLocation(_CamelModel):
    """A CRM location that can be linked to a sub-account"""

    id: str
    name: str
    address: str | None = None
