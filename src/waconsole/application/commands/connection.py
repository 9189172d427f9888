import asyncio

from loguru import logger
from rich.console import Console
from rich.prompt import Confirm

from waconsole.application.commands.base import (
    ConnectCommand,
    DisconnectCommand,
    SendCommand,
    WatchCommand,
)
from waconsole.application.navigation import LOGIN
from waconsole.domain.models import ConnectionState, ConnectionStatus
from waconsole.shared.exceptions import (
    AuthorizationError,
    ConsoleError,
    NotFoundError,
    ValidationError,
)

_STATUS_STYLE = {
    ConnectionStatus.DISCONNECTED: "red",
    ConnectionStatus.CONNECTING: "yellow",
    ConnectionStatus.QR_READY: "cyan",
    ConnectionStatus.CONNECTED: "green",
}


def detail_view(sub_account_id: str) -> str:
    return f"sub-accounts/{sub_account_id}"


def render_state(
    console: Console, sub_account_id: str, state: ConnectionState
) -> None:
    """Print one connection state line (plus QR / phone details)"""
    display = state.display_status
    style = _STATUS_STYLE[display]
    label = display.value
    if not state.is_recognised:
        label = f"{label} [dim](reported: {state.status})[/dim]"
    console.print(f"[{style}]●[/{style}] {sub_account_id}: {label}")

    if state.visible_qr_code:
        console.print(
            "  QR code ready - scan it from WhatsApp > Linked devices "
            f"({len(state.visible_qr_code)} byte data URI)"
        )
    if state.visible_phone_number:
        console.print(f"  Phone: {state.visible_phone_number}")


def report_error(console: Console, action: str, error: ConsoleError) -> None:
    if isinstance(error, AuthorizationError):
        console.print(f"[red]{action} denied: {error.message}[/red]")
    elif isinstance(error, NotFoundError):
        console.print("[red]Sub-account not found[/red]")
    elif isinstance(error, ValidationError):
        console.print(f"[red]{action} failed: {error.message}[/red]")
        for field, text in error.field_errors.items():
            console.print(f"  [yellow]{field}[/yellow]: {text}")
    else:
        console.print(f"[red]{action} failed: {error}[/red]")


def _open_detail(app, sub_account_id: str, console: Console) -> bool:
    view = detail_view(sub_account_id)
    if app.router.open(view, app.session.session) != view:
        console.print("[yellow]Not logged in[/yellow]")
        return False
    return True


async def handle_watch(app, command: WatchCommand, console: Console) -> int:
    """Follow connection state until the duration ends or the view closes

    Args:
        app: ConsoleApp instance
        command: WatchCommand with sub-account ID and optional duration
        console: Output console

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if not _open_detail(app, command.sub_account_id, console):
        return 1

    view = detail_view(command.sub_account_id)
    poller = app.create_poller(command.sub_account_id)
    left_view = asyncio.Event()

    def on_navigate(previous: str, current: str, hard: bool) -> None:
        if current != view:
            left_view.set()

    poller.add_listener(
        lambda state: render_state(console, command.sub_account_id, state)
    )
    app.router.add_listener(on_navigate)
    try:
        await poller.activate()
        try:
            await asyncio.wait_for(left_view.wait(), timeout=command.duration)
        except TimeoutError:
            pass
    finally:
        app.router.remove_listener(on_navigate)
        await poller.deactivate()

    if app.router.current_view == LOGIN:
        console.print("[red]Session expired - please log in again[/red]")
        return 1
    if poller.state is None:
        console.print("[yellow]Connection status unavailable[/yellow]")
    return 0


async def handle_connect(
    app, command: ConnectCommand, console: Console
) -> int:
    """Connect and wait until a QR code (or a connection) shows up

    Waiting also ends when the detail view is left, e.g. by the forced move
    to login after the session expires.
    """
    if not _open_detail(app, command.sub_account_id, console):
        return 1

    view = detail_view(command.sub_account_id)
    poller = app.create_poller(command.sub_account_id)
    settled = asyncio.Event()
    failed = False

    def on_state(state: ConnectionState) -> None:
        render_state(console, command.sub_account_id, state)
        if state.display_status in (
            ConnectionStatus.QR_READY,
            ConnectionStatus.CONNECTED,
        ):
            settled.set()

    def on_navigate(previous: str, current: str, hard: bool) -> None:
        if current != view:
            settled.set()

    poller.add_listener(on_state)
    app.router.add_listener(on_navigate)
    try:
        await poller.activate()
        if app.router.current_view == view:
            try:
                await poller.connect()
            except ConsoleError as e:
                failed = True
                if app.router.current_view != LOGIN:
                    report_error(console, "Connect", e)

        if not failed and app.router.current_view == view:
            console.print("Connecting... Please scan the QR code")
            try:
                await asyncio.wait_for(
                    settled.wait(), timeout=command.wait_seconds
                )
            except TimeoutError:
                logger.info(
                    f"No QR code for {command.sub_account_id} "
                    f"after {command.wait_seconds}s"
                )
                console.print(
                    "[yellow]Still waiting for a QR code; "
                    f"run 'watch {command.sub_account_id}' to keep following"
                    "[/yellow]"
                )
    finally:
        app.router.remove_listener(on_navigate)
        await poller.deactivate()

    if app.router.current_view == LOGIN:
        console.print("[red]Session expired - please log in again[/red]")
        return 1
    return 1 if failed else 0


async def handle_disconnect(
    app, command: DisconnectCommand, console: Console
) -> int:
    if not _open_detail(app, command.sub_account_id, console):
        return 1

    def confirm() -> bool:
        if command.assume_yes:
            return True
        return Confirm.ask(
            "Are you sure you want to disconnect WhatsApp?", console=console
        )

    poller = app.create_poller(command.sub_account_id)
    poller.add_listener(
        lambda state: render_state(console, command.sub_account_id, state)
    )
    try:
        sent = await poller.disconnect(confirm)
    except ConsoleError as e:
        report_error(console, "Disconnect", e)
        return 1
    finally:
        await poller.deactivate()

    if not sent:
        console.print("Cancelled")
        return 0
    console.print("[green]✓ WhatsApp disconnected[/green]")
    return 0


async def handle_send(app, command: SendCommand, console: Console) -> int:
    if not _open_detail(app, command.sub_account_id, console):
        return 1

    poller = app.create_poller(command.sub_account_id)
    try:
        result = await poller.send_message(command.to, command.message)
    except ConsoleError as e:
        report_error(console, "Send", e)
        return 1
    finally:
        await poller.deactivate()

    if not result.success:
        console.print("[red]Message was not accepted[/red]")
        return 1
    console.print(f"[green]✓ Message sent to {command.to}[/green]")
    return 0
