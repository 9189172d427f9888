"""waconsole - WhatsApp-to-CRM administration console

Composition root that wires the gateway, session manager and resource
clients for one application instance.
"""

from loguru import logger

from waconsole.application.connection import ConnectionStatusPoller
from waconsole.application.navigation import DASHBOARD, ViewRouter
from waconsole.application.session import SessionManager
from waconsole.core.config import Config
from waconsole.domain.models import SessionStatus
from waconsole.infrastructure.api import (
    AdminClient,
    BillingClient,
    FileTokenStore,
    GhlClient,
    RequestGateway,
    SubAccountsClient,
    TokenStore,
    WhatsAppClient,
)


class ConsoleApp:
    """One console instance

    Owns shared services and hands them to views. Nothing here is global:
    tests build their own ConsoleApp with a fake token store.
    """

    def __init__(
        self,
        config: Config,
        token_store: TokenStore | None = None,
        router: ViewRouter | None = None,
    ):
        """Initialise console with configuration"""
        logger.debug("Initialising console...")
        self.config = config
        self.token_store = token_store or FileTokenStore(config.token_path)
        self.router = router or ViewRouter(initial_view=DASHBOARD)

        self.gateway = RequestGateway(
            config.api_url,
            self.token_store,
            navigator=self.router,
            timeout=config.request_timeout,
        )
        self.session = SessionManager(self.gateway, self.token_store)

        self.sub_accounts = SubAccountsClient(self.gateway)
        self.whatsapp = WhatsAppClient(self.gateway)
        self.ghl = GhlClient(self.gateway)
        self.billing = BillingClient(self.gateway)
        self.admin = AdminClient(self.gateway)

    async def start(self) -> SessionStatus:
        """Resolve the stored session; call once at startup"""
        status = await self.session.resolve()
        logger.debug(f"Session status after start: {status.value}")
        return status

    def create_poller(self, sub_account_id: str) -> ConnectionStatusPoller:
        """New poller for a detail view; the caller owns its lifecycle"""
        return ConnectionStatusPoller(
            sub_account_id,
            self.whatsapp,
            poll_interval=self.config.poll_interval,
        )

    async def aclose(self) -> None:
        self.session.close()
        await self.gateway.aclose()

    async def __aenter__(self) -> "ConsoleApp":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
