"""Pydantic models for session payload validation

The backend speaks camelCase JSON; these models accept it and convert to
the domain UserProfile.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from waconsole.domain.models import Role, UserProfile


class ProfilePayload(BaseModel):
    """Customer record as returned by /auth/me and /auth/login"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    id: str = Field(..., min_length=1, description="Customer ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., min_length=3, description="Login email")
    role: Role = Field(Role.CUSTOMER, description="Account role")
    is_active: bool = True
    has_unlimited_access: bool = False
    plan_type: str = "standard"
    subscription_status: str = "none"
    company: str | None = None
    api_key: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        """Accept numeric IDs as well as UUID strings"""
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("subscription_status", mode="before")
    @classmethod
    def normalise_subscription(cls, v):
        """Backend uses 'inactive' (or nothing) where the console shows none"""
        if v is None or v == "inactive":
            return "none"
        return v

    def to_domain(self) -> UserProfile:
        return UserProfile(
            id=self.id,
            name=self.name,
            email=self.email,
            role=self.role,
            is_active=self.is_active,
            has_unlimited_access=self.has_unlimited_access,
            plan_type=self.plan_type,
            subscription_status=self.subscription_status,
            company=self.company,
            api_key=self.api_key,
        )


class AuthResponse(BaseModel):
    """Response body of /auth/login and /auth/register"""

    model_config = ConfigDict(extra="ignore")

    token: str = Field(..., min_length=1, description="Bearer credential")
    customer: ProfilePayload


class MeResponse(BaseModel):
    """Response body of /auth/me"""

    model_config = ConfigDict(extra="ignore")

    customer: ProfilePayload
