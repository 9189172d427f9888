"""Sub-account CRUD operations"""

from loguru import logger

from waconsole.infrastructure.api.gateway import RequestGateway
from waconsole.validation import SubAccount


class SubAccountsClient:
    """Customer-side sub-account listing, creation, update and deletion"""

    def __init__(self, gateway: RequestGateway) -> None:
        self.gateway = gateway

    async def list_all(self) -> list[SubAccount]:
        response = await self.gateway.get("/sub-accounts")
        items = response.get("subAccounts", []) if response else []
        return [SubAccount.model_validate(item) for item in items]

    async def get(self, sub_account_id: str) -> SubAccount:
        response = await self.gateway.get(f"/sub-accounts/{sub_account_id}")
        return SubAccount.model_validate(response["subAccount"])

    async def create(
        self, name: str, ghl_location_id: str | None = None
    ) -> SubAccount:
        """Create a sub-account; the location ID is optional"""
        body: dict = {"name": name}
        if ghl_location_id:
            body["ghlLocationId"] = ghl_location_id

        logger.info(f"Creating sub-account '{name}'")
        response = await self.gateway.post("/sub-accounts", data=body)
        return SubAccount.model_validate(response["subAccount"])

    async def update(self, sub_account_id: str, **fields) -> SubAccount:
        """Update profile fields (name, ghlLocationId, ...)"""
        response = await self.gateway.put(
            f"/sub-accounts/{sub_account_id}", data=fields
        )
        return SubAccount.model_validate(response["subAccount"])

    async def delete(self, sub_account_id: str) -> None:
        logger.info(f"Deleting sub-account {sub_account_id}")
        await self.gateway.delete(f"/sub-accounts/{sub_account_id}")
