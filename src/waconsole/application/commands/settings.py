from loguru import logger
from rich.console import Console
from rich.prompt import Confirm, Prompt

from waconsole.application.commands.base import (
    ChangePasswordCommand,
    RotateApiKeyCommand,
    UpdateProfileCommand,
)
from waconsole.application.commands.connection import report_error
from waconsole.application.navigation import LOGIN, SETTINGS
from waconsole.shared.exceptions import ConsoleError


def _open_settings(app, console: Console) -> bool:
    if app.router.open(SETTINGS, app.session.session) != SETTINGS:
        console.print("[yellow]Not logged in[/yellow]")
        return False
    return True


def _report(app, console: Console, action: str, error: ConsoleError) -> None:
    if app.router.current_view == LOGIN:
        console.print("[red]Session expired - please log in again[/red]")
    else:
        report_error(console, action, error)


async def handle_update_profile(
    app, command: UpdateProfileCommand, console: Console
) -> int:
    """Save name/company and show the re-fetched profile"""
    if not _open_settings(app, console):
        return 1
    if not command.display_name and command.company is None:
        console.print(
            "[red]Nothing to update: pass --name and/or --company[/red]"
        )
        return 1

    try:
        profile = await app.session.update_profile(
            name=command.display_name, company=command.company
        )
    except ConsoleError as e:
        _report(app, console, "Profile update", e)
        return 1

    if profile is None:
        console.print("[yellow]Profile saved, but the session ended[/yellow]")
        return 1
    console.print(
        f"[green]✓ Profile updated: {profile.name}"
        f"{f' ({profile.company})' if profile.company else ''}[/green]"
    )
    return 0


async def handle_change_password(
    app, command: ChangePasswordCommand, console: Console
) -> int:
    if not _open_settings(app, console):
        return 1

    current = command.current_password
    if current is None:
        current = Prompt.ask("Current password", password=True, console=console)
    new = command.new_password
    if new is None:
        new = Prompt.ask("New password", password=True, console=console)

    try:
        message = await app.session.change_password(current, new)
    except ConsoleError as e:
        _report(app, console, "Password change", e)
        return 1

    console.print(f"[green]✓ {message or 'Password changed'}[/green]")
    return 0


async def handle_rotate_api_key(
    app, command: RotateApiKeyCommand, console: Console
) -> int:
    """Rotate the API key after confirmation"""
    if not _open_settings(app, console):
        return 1

    if not command.assume_yes and not Confirm.ask(
        "Are you sure? This will invalidate your current API key.",
        console=console,
    ):
        console.print("Cancelled")
        return 0

    try:
        api_key = await app.session.regenerate_api_key()
    except ConsoleError as e:
        _report(app, console, "API key refresh", e)
        return 1

    logger.info("API key rotated")
    console.print(f"[green]✓ New API key:[/green] {api_key}")
    return 0
