from loguru import logger
from rich.console import Console

from waconsole.application.commands.accounts import (
    handle_accounts,
    handle_admin_stats,
)
from waconsole.application.commands.base import (
    AccountsCommand,
    AdminStatsCommand,
    ChangePasswordCommand,
    ConnectCommand,
    DisconnectCommand,
    ForgotPasswordCommand,
    LoginCommand,
    LogoutCommand,
    RotateApiKeyCommand,
    SendCommand,
    UpdateProfileCommand,
    WatchCommand,
    WhoamiCommand,
)
from waconsole.application.commands.connection import (
    handle_connect,
    handle_disconnect,
    handle_send,
    handle_watch,
)
from waconsole.application.commands.session import (
    handle_forgot_password,
    handle_login,
    handle_logout,
    handle_whoami,
)
from waconsole.application.commands.settings import (
    handle_change_password,
    handle_rotate_api_key,
    handle_update_profile,
)

USAGE = (
    "Available: login <email> [password], logout, whoami [--refresh], "
    "forgot-password <email>, update-profile [--name N] [--company C], "
    "change-password, rotate-api-key [--yes], accounts, "
    "watch <id> [seconds], connect <id>, disconnect <id> [--yes], "
    "send <id> <to> <message>, admin-stats"
)


class CommandDispatcher:
    """Dispatches CLI commands to appropriate handlers"""

    def __init__(self, app, console: Console | None = None) -> None:
        self.app = app
        self.console = console or Console()
        self._handlers = {
            "login": self._handle_login,
            "logout": self._handle_logout,
            "whoami": self._handle_whoami,
            "forgot-password": self._handle_forgot_password,
            "update-profile": self._handle_update_profile,
            "change-password": self._handle_change_password,
            "rotate-api-key": self._handle_rotate_api_key,
            "accounts": self._handle_accounts,
            "watch": self._handle_watch,
            "connect": self._handle_connect,
            "disconnect": self._handle_disconnect,
            "send": self._handle_send,
            "admin-stats": self._handle_admin_stats,
        }

    async def dispatch(self, argv: list[str]) -> int:
        """Parse and execute command

        Args:
            argv: Command line arguments (sys.argv)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        if len(argv) < 2:
            self._print_usage()
            return 1

        method = argv[1]
        handler = self._handlers.get(method)

        if handler is None:
            logger.error(f"Unknown command: {method}")
            self._print_usage(f"Unknown command: {method}.")
            return 1

        return await handler(argv)

    def _print_usage(self, reason: str = "No command specified.") -> None:
        """Print available commands"""
        self.console.print(f"[red]{reason}[/red] {USAGE}")

    def _require_args(self, argv: list[str], count: int, usage: str) -> bool:
        if len(argv) < count + 2:
            self.console.print(f"[red]Usage:[/red] waconsole {usage}")
            return False
        return True

    async def _handle_login(self, argv: list[str]) -> int:
        if not self._require_args(argv, 1, "login <email> [password]"):
            return 1
        password = argv[3] if len(argv) > 3 else None
        command = LoginCommand(name="login", email=argv[2], password=password)
        return await handle_login(self.app, command, self.console)

    async def _handle_logout(self, argv: list[str]) -> int:
        command = LogoutCommand(name="logout")
        return await handle_logout(self.app, command, self.console)

    async def _handle_whoami(self, argv: list[str]) -> int:
        command = WhoamiCommand(name="whoami", refresh="--refresh" in argv[2:])
        return await handle_whoami(self.app, command, self.console)

    @staticmethod
    def _option(argv: list[str], flag: str) -> str | None:
        """Value following flag, e.g. --name Ada"""
        if flag in argv:
            index = argv.index(flag)
            if index + 1 < len(argv):
                return argv[index + 1]
        return None

    async def _handle_forgot_password(self, argv: list[str]) -> int:
        if not self._require_args(argv, 1, "forgot-password <email>"):
            return 1
        command = ForgotPasswordCommand(name="forgot-password", email=argv[2])
        return await handle_forgot_password(self.app, command, self.console)

    async def _handle_update_profile(self, argv: list[str]) -> int:
        command = UpdateProfileCommand(
            name="update-profile",
            display_name=self._option(argv, "--name"),
            company=self._option(argv, "--company"),
        )
        return await handle_update_profile(self.app, command, self.console)

    async def _handle_change_password(self, argv: list[str]) -> int:
        command = ChangePasswordCommand(name="change-password")
        return await handle_change_password(self.app, command, self.console)

    async def _handle_rotate_api_key(self, argv: list[str]) -> int:
        command = RotateApiKeyCommand(
            name="rotate-api-key",
            assume_yes="--yes" in argv[2:] or "-y" in argv[2:],
        )
        return await handle_rotate_api_key(self.app, command, self.console)

    async def _handle_accounts(self, argv: list[str]) -> int:
        command = AccountsCommand(name="accounts")
        return await handle_accounts(self.app, command, self.console)

    async def _handle_watch(self, argv: list[str]) -> int:
        if not self._require_args(argv, 1, "watch <id> [seconds]"):
            return 1
        duration = None
        if len(argv) > 3:
            try:
                duration = float(argv[3])
            except ValueError:
                self.console.print(f"[red]Invalid duration: {argv[3]}[/red]")
                return 1
        command = WatchCommand(
            name="watch", sub_account_id=argv[2], duration=duration
        )
        return await handle_watch(self.app, command, self.console)

    async def _handle_connect(self, argv: list[str]) -> int:
        if not self._require_args(argv, 1, "connect <id>"):
            return 1
        command = ConnectCommand(name="connect", sub_account_id=argv[2])
        return await handle_connect(self.app, command, self.console)

    async def _handle_disconnect(self, argv: list[str]) -> int:
        if not self._require_args(argv, 1, "disconnect <id> [--yes]"):
            return 1
        command = DisconnectCommand(
            name="disconnect",
            sub_account_id=argv[2],
            assume_yes="--yes" in argv[3:] or "-y" in argv[3:],
        )
        return await handle_disconnect(self.app, command, self.console)

    async def _handle_send(self, argv: list[str]) -> int:
        if not self._require_args(argv, 3, "send <id> <to> <message>"):
            return 1
        command = SendCommand(
            name="send",
            sub_account_id=argv[2],
            to=argv[3],
            message=" ".join(argv[4:]),
        )
        return await handle_send(self.app, command, self.console)

    async def _handle_admin_stats(self, argv: list[str]) -> int:
        command = AdminStatsCommand(name="admin-stats")
        return await handle_admin_stats(self.app, command, self.console)
