"""WhatsApp connection endpoints for a single sub-account"""

from loguru import logger

from waconsole.domain.models import ConnectionState
from waconsole.infrastructure.api.gateway import RequestGateway
from waconsole.validation import SendMessageResponse, StatusPayload


class WhatsAppClient:
    """Status, connect, disconnect and send for WhatsApp sessions"""

    def __init__(self, gateway: RequestGateway) -> None:
        self.gateway = gateway

    async def get_status(self, sub_account_id: str) -> ConnectionState:
        response = await self.gateway.get(f"/whatsapp/{sub_account_id}/status")
        return StatusPayload.model_validate(response or {}).to_domain()

    async def connect(self, sub_account_id: str) -> dict:
        logger.info(f"Requesting WhatsApp connect for {sub_account_id}")
        return await self.gateway.post(f"/whatsapp/{sub_account_id}/connect")

    async def disconnect(self, sub_account_id: str) -> dict:
        logger.info(f"Requesting WhatsApp disconnect for {sub_account_id}")
        return await self.gateway.post(
            f"/whatsapp/{sub_account_id}/disconnect"
        )

    async def send_message(
        self, sub_account_id: str, to: str, message: str
    ) -> SendMessageResponse:
        response = await self.gateway.post(
            f"/whatsapp/{sub_account_id}/send",
            data={"to": to, "message": message},
        )
        return SendMessageResponse.model_validate(response or {})
