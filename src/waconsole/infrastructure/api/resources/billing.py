"""Billing endpoints; each returns a hosted-checkout or portal URL"""

from waconsole.infrastructure.api.gateway import RequestGateway


class BillingClient:
    def __init__(self, gateway: RequestGateway) -> None:
        self.gateway = gateway

    async def portal_url(self) -> str:
        response = await self.gateway.get("/billing/portal")
        return response["url"]

    async def subscribe(self) -> str:
        response = await self.gateway.post("/billing/subscribe")
        return response["url"]

    async def checkout(self, sub_account_id: str) -> str:
        response = await self.gateway.post(f"/billing/checkout/{sub_account_id}")
        return response["url"]
