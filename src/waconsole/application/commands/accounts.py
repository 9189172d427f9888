from rich.console import Console
from rich.table import Table

from waconsole.application.commands.base import (
    AccountsCommand,
    AdminStatsCommand,
)
from waconsole.application.commands.connection import report_error
from waconsole.application.navigation import ADMIN
from waconsole.shared.exceptions import ConsoleError


async def handle_accounts(
    app, command: AccountsCommand, console: Console
) -> int:
    """List the customer's sub-accounts"""
    if app.router.open("sub-accounts", app.session.session) != "sub-accounts":
        console.print("[yellow]Not logged in[/yellow]")
        return 1

    try:
        sub_accounts = await app.sub_accounts.list_all()
    except ConsoleError as e:
        report_error(console, "Fetching sub-accounts", e)
        return 1

    if not sub_accounts:
        console.print("No sub-accounts yet")
        return 0

    table = Table(title="Sub-accounts")
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Status")
    table.add_column("Phone")
    table.add_column("Location")
    table.add_column("Paid")
    for account in sub_accounts:
        table.add_row(
            account.id,
            account.name,
            account.status,
            account.phone_number or "-",
            account.ghl_location_id or "Not set",
            "yes" if account.is_paid else "no",
        )
    console.print(table)
    return 0


async def handle_admin_stats(
    app, command: AdminStatsCommand, console: Console
) -> int:
    """Show admin counters; non-admins are turned away before any call"""
    shown = app.router.open(ADMIN, app.session.session)
    if shown != ADMIN:
        message = (
            "Not logged in" if app.session.user is None else "Admins only"
        )
        console.print(f"[yellow]{message}[/yellow]")
        return 1

    try:
        stats = await app.admin.stats()
    except ConsoleError as e:
        report_error(console, "Fetching admin stats", e)
        return 1

    table = Table(title="Admin dashboard", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Customers", str(stats.total_customers))
    table.add_row("Active customers", str(stats.active_customers))
    table.add_row("Sub-accounts", str(stats.total_sub_accounts))
    table.add_row("Connected", str(stats.connected_sub_accounts))
    if stats.total_messages is not None:
        table.add_row("Messages", str(stats.total_messages))
    console.print(table)
    return 0
