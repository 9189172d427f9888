"""ConnectionStatusPoller - keeps one sub-account's WhatsApp state in sync"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable

from loguru import logger
from pydantic import ValidationError as PayloadError

from waconsole.domain.models import ConnectionState
from waconsole.infrastructure.api.resources import WhatsAppClient
from waconsole.shared.exceptions import ConsoleError, ValidationError
from waconsole.validation import SendMessageResponse

StateListener = Callable[[ConnectionState], None]
Confirmation = Callable[[], bool | Awaitable[bool]]


class ConnectionStatusPoller:
    """Polls GET /whatsapp/:id/status for a single sub-account

    Responsibilities:
    - Fetch once on activation, then every poll_interval seconds
    - At most one status fetch outstanding at any time
    - Connect/disconnect commands followed by an immediate re-fetch
    - No state mutation once deactivated

    Fetched states are applied in arrival order. Each successful command
    bumps an epoch; a fetch started under an older epoch is dropped and
    replaced by a fresh one, so a pre-disconnect "connected" reading can
    never land after the disconnect.

    An instance lives for exactly one view: deactivate() is final.
    """

    DEFAULT_POLL_INTERVAL = 3.0

    def __init__(
        self,
        sub_account_id: str,
        whatsapp: WhatsAppClient,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        """Initialize poller

        Args:
            sub_account_id: Sub-account whose connection is observed
            whatsapp: WhatsApp resource client
            poll_interval: Seconds between scheduled fetches
        """
        if poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive: {poll_interval}")

        self._sub_account_id = sub_account_id
        self._whatsapp = whatsapp
        self._poll_interval = poll_interval

        self._state: ConnectionState | None = None
        self._listeners: list[StateListener] = []

        self._started = False
        self._alive = True
        self._task: asyncio.Task | None = None

        self._fetch_in_flight = False
        self._refetch_requested = False
        self._epoch = 0
        self._connecting = False
        self._consecutive_failures = 0

    @property
    def sub_account_id(self) -> str:
        return self._sub_account_id

    @property
    def state(self) -> ConnectionState | None:
        """Last applied state; None until the first successful fetch"""
        return self._state

    @property
    def is_active(self) -> bool:
        return self._started and self._alive

    @property
    def is_connecting(self) -> bool:
        """True while a connect command is in flight (control disabled)"""
        return self._connecting

    @property
    def fetch_in_flight(self) -> bool:
        return self._fetch_in_flight

    @property
    def consecutive_failures(self) -> int:
        return self._consecutive_failures

    def add_listener(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def activate(self) -> None:
        """Fetch immediately, then start the polling schedule

        Raises:
            RuntimeError: If the poller was already deactivated
        """
        if not self._alive:
            raise RuntimeError("Poller was deactivated; create a new one")
        if self._started:
            logger.warning(f"Poller for {self._sub_account_id} already active")
            return

        self._started = True
        logger.info(
            f"Watching {self._sub_account_id} every {self._poll_interval}s"
        )

        await self._fetch(out_of_band=True)

        if self._alive:
            self._task = asyncio.create_task(
                self._poll_loop(), name=f"status-poll-{self._sub_account_id}"
            )

    async def deactivate(self) -> None:
        """Stop polling; responses still in flight are discarded"""
        if not self._alive:
            return

        self._alive = False
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._listeners.clear()
        logger.info(f"Stopped watching {self._sub_account_id}")

    async def _poll_loop(self) -> None:
        while self._alive:
            await asyncio.sleep(self._poll_interval)
            try:
                await self._fetch(out_of_band=False)
            except Exception:
                logger.exception(
                    f"Unexpected error polling {self._sub_account_id}"
                )

    async def refresh(self) -> None:
        """Out-of-band fetch, coalesced with any fetch already running"""
        await self._fetch(out_of_band=True)

    async def _fetch(self, out_of_band: bool) -> None:
        if not self._alive:
            return

        if self._fetch_in_flight:
            if out_of_band:
                self._refetch_requested = True
            else:
                logger.debug(
                    f"Skipping tick for {self._sub_account_id}: fetch in flight"
                )
            return

        self._fetch_in_flight = True
        try:
            self._refetch_requested = True
            while self._refetch_requested and self._alive:
                self._refetch_requested = False
                await self._fetch_once()
        finally:
            self._fetch_in_flight = False

    async def _fetch_once(self) -> None:
        epoch = self._epoch
        try:
            state = await self._whatsapp.get_status(self._sub_account_id)
        except (ConsoleError, PayloadError) as e:
            if not self._alive:
                return
            self._consecutive_failures += 1
            logger.warning(
                f"Status fetch failed for {self._sub_account_id} "
                f"({self._consecutive_failures} in a row): {e}"
            )
            return

        if not self._alive:
            logger.debug(
                f"Discarding status for {self._sub_account_id}: deactivated"
            )
            return

        if epoch != self._epoch:
            logger.debug(
                f"Dropping status for {self._sub_account_id} fetched "
                "before the latest command"
            )
            self._refetch_requested = True
            return

        self._consecutive_failures = 0
        self._apply(state)

    def _apply(self, state: ConnectionState) -> None:
        previous = self._state
        self._state = state

        if previous is None or previous.status != state.status:
            logger.info(
                f"{self._sub_account_id}: "
                f"{previous.status if previous else 'unknown'} -> {state.status}"
            )
        if not state.is_recognised:
            logger.warning(
                f"Unrecognised status '{state.status}' for "
                f"{self._sub_account_id}; rendering as disconnected"
            )

        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Connection state listener failed")

    async def connect(self) -> bool:
        """Issue a connect command and re-fetch at once

        Returns:
            True if the command was sent, False if one was already in flight

        Raises:
            ConsoleError: If the command fails; state is left unchanged
        """
        if self._connecting:
            logger.debug(f"Connect already in flight for {self._sub_account_id}")
            return False

        self._connecting = True
        try:
            await self._whatsapp.connect(self._sub_account_id)
        except ConsoleError as e:
            logger.error(f"Connect failed for {self._sub_account_id}: {e}")
            raise
        finally:
            self._connecting = False

        self._epoch += 1
        await self.refresh()
        return True

    async def disconnect(self, confirm: Confirmation) -> bool:
        """Drop the WhatsApp session after explicit confirmation

        Args:
            confirm: Sync or async callable; a falsy answer cancels

        Returns:
            True if the command was sent, False if the user declined

        Raises:
            ConsoleError: If the command fails
        """
        answer = confirm()
        if inspect.isawaitable(answer):
            answer = await answer
        if not answer:
            logger.info(f"Disconnect of {self._sub_account_id} cancelled")
            return False

        try:
            await self._whatsapp.disconnect(self._sub_account_id)
        except ConsoleError as e:
            logger.error(f"Disconnect failed for {self._sub_account_id}: {e}")
            raise

        self._epoch += 1
        await self.refresh()
        return True

    async def send_message(self, to: str, message: str) -> SendMessageResponse:
        """Send a text message through this sub-account

        Raises:
            ValidationError: If recipient or message is empty
        """
        if not to or not to.strip() or not message or not message.strip():
            raise ValidationError(
                "To and message are required",
                status_code=None,
                field_errors={
                    k: "required"
                    for k, v in (("to", to), ("message", message))
                    if not v or not v.strip()
                },
            )
        return await self._whatsapp.send_message(
            self._sub_account_id, to.strip(), message
        )
