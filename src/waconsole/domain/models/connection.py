"""WhatsApp connection state domain model"""

from dataclasses import dataclass
from enum import Enum


class ConnectionStatus(Enum):
    """Lifecycle of a sub-account's WhatsApp link"""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    QR_READY = "qr_ready"
    CONNECTED = "connected"


@dataclass(frozen=True)
class ConnectionState:
    """Connection state for one sub-account

    status holds the backend value verbatim; display_status folds anything
    unrecognised into DISCONNECTED for rendering.
    """

    status: str = ConnectionStatus.DISCONNECTED.value
    qr_code: str | None = None
    phone_number: str | None = None

    @property
    def display_status(self) -> ConnectionStatus:
        try:
            return ConnectionStatus(self.status)
        except ValueError:
            return ConnectionStatus.DISCONNECTED

    @property
    def is_recognised(self) -> bool:
        return self.status in {s.value for s in ConnectionStatus}

    @property
    def is_connected(self) -> bool:
        return self.display_status is ConnectionStatus.CONNECTED

    @property
    def visible_qr_code(self) -> str | None:
        """QR image only while a pairing code is awaiting a scan"""
        if self.display_status is ConnectionStatus.QR_READY:
            return self.qr_code
        return None

    @property
    def visible_phone_number(self) -> str | None:
        if self.display_status is ConnectionStatus.CONNECTED:
            return self.phone_number
        return None
