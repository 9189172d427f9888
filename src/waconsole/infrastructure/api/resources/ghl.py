"""CRM (GHL) location linking"""

from loguru import logger

from waconsole.infrastructure.api.gateway import RequestGateway
from waconsole.validation import GhlLocation, GhlStatus


class GhlClient:
    """Links sub-accounts to CRM locations"""

    def __init__(self, gateway: RequestGateway) -> None:
        self.gateway = gateway

    async def get_status(self) -> GhlStatus:
        response = await self.gateway.get("/ghl/status")
        return GhlStatus.model_validate(response or {})

    async def list_locations(self) -> list[GhlLocation]:
        response = await self.gateway.get("/ghl/locations")
        items = response.get("locations", []) if response else []
        return [GhlLocation.model_validate(item) for item in items]

    async def link_location(self, sub_account_id: str, location_id: str) -> dict:
        logger.info(f"Linking {sub_account_id} to location {location_id}")
        return await self.gateway.post(
            f"/ghl/link-location/{sub_account_id}",
            data={"locationId": location_id},
        )

    async def unlink_location(self, sub_account_id: str) -> dict:
        logger.info(f"Unlinking location from {sub_account_id}")
        return await self.gateway.post(f"/ghl/unlink-location/{sub_account_id}")
