"""Typed resource clients layered on the request gateway"""

from .admin import AdminClient
from .billing import BillingClient
from .customers import CustomersClient
from .ghl import GhlClient
from .sub_accounts import SubAccountsClient
from .whatsapp import WhatsAppClient

__all__ = [
    "AdminClient",
    "BillingClient",
    "CustomersClient",
    "GhlClient",
    "SubAccountsClient",
    "WhatsAppClient",
]
