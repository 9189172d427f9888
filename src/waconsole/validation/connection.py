"""Pydantic models for WhatsApp connection status validation"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from waconsole.domain.models import ConnectionState


class StatusPayload(BaseModel):
    """Body of GET /whatsapp/:id/status

    The status string is kept verbatim, even when it is not one of the
    known values.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    status: str = Field("disconnected", description="Raw connection status")
    qr_code: str | None = None
    phone_number: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def default_missing_status(cls, v):
        if v is None:
            return "disconnected"
        return str(v)

    def to_domain(self) -> ConnectionState:
        return ConnectionState(
            status=self.status,
            qr_code=self.qr_code or None,
            phone_number=self.phone_number or None,
        )


class SendMessageResponse(BaseModel):
    """Body of POST /whatsapp/:id/send"""

    model_config = ConfigDict(extra="ignore")

    success: bool = False
    message: dict | str | None = None
