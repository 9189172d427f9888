"""Account settings endpoints for the logged-in customer"""

from loguru import logger

from waconsole.infrastructure.api.gateway import RequestGateway
from waconsole.shared.exceptions import ApiError


class CustomersClient:
    """Profile edits, password change and API-key rotation

    None of these return a profile the console trusts; callers re-fetch
    /auth/me afterwards.
    """

    def __init__(self, gateway: RequestGateway) -> None:
        self.gateway = gateway

    async def update_profile(
        self, name: str | None = None, company: str | None = None
    ) -> dict:
        body: dict = {}
        if name:
            body["name"] = name
        if company is not None:
            body["company"] = company
        return await self.gateway.put("/customers/profile", data=body)

    async def change_password(
        self, current_password: str, new_password: str
    ) -> str:
        response = await self.gateway.put(
            "/customers/password",
            data={
                "currentPassword": current_password,
                "newPassword": new_password,
            },
        )
        if isinstance(response, dict):
            return response.get("message", "")
        return ""

    async def refresh_api_key(self) -> str:
        logger.info("Requesting a new API key")
        response = await self.gateway.post("/auth/refresh-api-key")
        api_key = response.get("apiKey") if isinstance(response, dict) else None
        if not api_key:
            raise ApiError("API key refresh returned no key", payload=response)
        return api_key
