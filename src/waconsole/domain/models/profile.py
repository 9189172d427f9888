"""User profile domain model"""

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    """Account role"""

    CUSTOMER = "customer"
    ADMIN = "admin"


class SubscriptionStatus(Enum):
    """Billing subscription status as shown in the console"""

    NONE = "none"
    ACTIVE = "active"
    CANCELING = "canceling"
    PAST_DUE = "past_due"


@dataclass(frozen=True)
class UserProfile:
    """Authenticated user snapshot (domain model)

    Replaced wholesale on refresh, never patched field by field.
    """

    id: str
    name: str
    email: str
    role: Role
    is_active: bool = True
    has_unlimited_access: bool = False
    plan_type: str = "standard"
    subscription_status: str = SubscriptionStatus.NONE.value
    company: str | None = None
    api_key: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @property
    def subscription(self) -> SubscriptionStatus:
        """Subscription status folded into the known set

        Unknown backend values (trialing, canceled, ...) read as NONE while
        subscription_status keeps the raw string.
        """
        try:
            return SubscriptionStatus(self.subscription_status)
        except ValueError:
            return SubscriptionStatus.NONE
