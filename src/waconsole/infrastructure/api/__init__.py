"""Backend API infrastructure

RequestGateway - Authenticated HTTP calls with response classification
FileTokenStore / MemoryTokenStore - Persisted bearer credential
Resource clients - Sub-accounts, WhatsApp, GHL, billing and admin endpoints
"""

from .gateway import LOGIN_VIEW, RequestGateway, ResponseClass
from .protocols import Navigator, TokenStore
from .resources import (
    AdminClient,
    BillingClient,
    CustomersClient,
    GhlClient,
    SubAccountsClient,
    WhatsAppClient,
)
from .token_store import TOKEN_KEY, FileTokenStore, MemoryTokenStore

__all__ = [
    "LOGIN_VIEW",
    "TOKEN_KEY",
    "AdminClient",
    "BillingClient",
    "CustomersClient",
    "FileTokenStore",
    "GhlClient",
    "MemoryTokenStore",
    "Navigator",
    "RequestGateway",
    "ResponseClass",
    "SubAccountsClient",
    "TokenStore",
    "WhatsAppClient",
]
