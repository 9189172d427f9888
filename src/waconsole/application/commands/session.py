from loguru import logger
from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from waconsole.application.commands.base import (
    ForgotPasswordCommand,
    LoginCommand,
    LogoutCommand,
    WhoamiCommand,
)
from waconsole.application.navigation import DASHBOARD, LOGIN
from waconsole.domain.models import SessionStatus
from waconsole.shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConsoleError,
    ValidationError,
)


async def handle_login(app, command: LoginCommand, console: Console) -> int:
    """Log in and persist the session

    Args:
        app: ConsoleApp instance
        command: LoginCommand with email and optional password
        console: Output console

    Returns:
        Exit code (0 for success, 1 for error)
    """
    app.router.navigate(LOGIN)
    password = command.password
    if password is None:
        password = Prompt.ask("Password", password=True, console=console)

    try:
        profile = await app.session.login(command.email, password)
    except AuthenticationError as e:
        console.print(f"[red]Login failed: {e.message}[/red]")
        return 1
    except AuthorizationError as e:
        # Valid credentials, but the account is deactivated
        console.print(f"[red]{e.message}[/red]")
        return 1
    except ValidationError as e:
        console.print(f"[red]{e.message}[/red]")
        for field, text in e.field_errors.items():
            console.print(f"  [yellow]{field}[/yellow]: {text}")
        return 1
    except ConsoleError as e:
        logger.error(f"Login error: {e}")
        console.print(f"[red]Login failed: {e}[/red]")
        return 1

    app.router.navigate(DASHBOARD)
    console.print(
        f"[green]✓ Logged in as {profile.name} ({profile.email})[/green]"
    )
    return 0


async def handle_logout(app, command: LogoutCommand, console: Console) -> int:
    app.session.logout()
    app.router.navigate(LOGIN, hard=True)
    console.print("[green]✓ Logged out[/green]")
    return 0


async def handle_whoami(app, command: WhoamiCommand, console: Console) -> int:
    """Show the resolved profile, or why there is none"""
    if command.refresh and app.session.session.token:
        await app.session.refresh_profile()

    status = app.session.status
    user = app.session.user

    if user is None:
        if status is SessionStatus.ANONYMOUS_RETRYABLE:
            console.print(
                "[yellow]Could not reach the server; your session was kept. "
                "Try again shortly.[/yellow]"
            )
        else:
            console.print("[yellow]Not logged in[/yellow]")
        return 1

    table = Table(title="Current user", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Name", user.name)
    table.add_row("Email", user.email)
    table.add_row("Role", user.role.value)
    table.add_row("Active", "yes" if user.is_active else "no")
    table.add_row("Plan", user.plan_type)
    table.add_row("Subscription", user.subscription.value)
    table.add_row(
        "Unlimited access", "yes" if user.has_unlimited_access else "no"
    )
    if user.api_key:
        table.add_row("API key", user.api_key)
    console.print(table)
    return 0


async def handle_forgot_password(
    app, command: ForgotPasswordCommand, console: Console
) -> int:
    try:
        message = await app.session.forgot_password(command.email)
    except ConsoleError as e:
        logger.error(f"Password reset request failed: {e}")
        console.print(f"[red]Could not request a reset link: {e}[/red]")
        return 1

    console.print(message or "If the email exists, a reset link has been sent")
    return 0
