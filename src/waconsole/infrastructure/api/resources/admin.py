"""Administrator operations on customers and sub-accounts"""

from loguru import logger

from waconsole.infrastructure.api.gateway import RequestGateway
from waconsole.validation import AdminStats, CustomerSummary, SubAccount


class AdminClient:
    """Admin-only endpoints

    Non-admin sessions get a 403 from every method, which surfaces as
    AuthorizationError without touching the session.
    """

    def __init__(self, gateway: RequestGateway) -> None:
        self.gateway = gateway

    async def stats(self) -> AdminStats:
        response = await self.gateway.get("/admin/stats")
        return AdminStats.model_validate(response or {})

    async def customers(self) -> list[CustomerSummary]:
        response = await self.gateway.get("/admin/customers")
        items = response.get("customers", []) if response else []
        return [CustomerSummary.model_validate(item) for item in items]

    async def sub_accounts(self) -> list[SubAccount]:
        response = await self.gateway.get("/admin/sub-accounts")
        items = response.get("subAccounts", []) if response else []
        return [SubAccount.model_validate(item) for item in items]

    async def toggle_customer(self, customer_id: str) -> dict:
        logger.info(f"Toggling customer {customer_id}")
        return await self.gateway.put(f"/admin/customers/{customer_id}/toggle")

    async def set_access(
        self, customer_id: str, unlimited: bool
    ) -> CustomerSummary:
        """Grant or revoke free unlimited access

        Granting moves the customer to the free plan; revoking returns them
        to standard.
        """
        body = {
            "hasUnlimitedAccess": unlimited,
            "planType": "free" if unlimited else "standard",
        }
        logger.info(f"Setting unlimited access={unlimited} for {customer_id}")
        response = await self.gateway.put(
            f"/admin/customers/{customer_id}/access", data=body
        )
        return CustomerSummary.model_validate(response["customer"])

    async def delete_customer(self, customer_id: str) -> None:
        logger.info(f"Deleting customer {customer_id}")
        await self.gateway.delete(f"/admin/customers/{customer_id}")

    async def toggle_sub_account(self, sub_account_id: str) -> dict:
        logger.info(f"Toggling sub-account {sub_account_id}")
        return await self.gateway.put(
            f"/admin/sub-accounts/{sub_account_id}/toggle"
        )

    async def set_payment(
        self, sub_account_id: str, is_paid: bool | None = None
    ) -> SubAccount:
        """Mark paid/unpaid; None toggles the current value server-side"""
        body = {} if is_paid is None else {"isPaid": is_paid}
        response = await self.gateway.put(
            f"/admin/sub-accounts/{sub_account_id}/payment", data=body
        )
        return SubAccount.model_validate(response["subAccount"])
