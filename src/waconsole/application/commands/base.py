from dataclasses import dataclass


@dataclass
class Command:
    """Base command class"""

    name: str


@dataclass
class LoginCommand(Command):
    """Start a session with email and password"""

    email: str = ""
    password: str | None = None


@dataclass
class LogoutCommand(Command):
    """Drop the stored session"""

    pass


@dataclass
class WhoamiCommand(Command):
    """Show the current profile, optionally re-fetched first"""

    refresh: bool = False


@dataclass
class AccountsCommand(Command):
    """List sub-accounts"""

    pass


@dataclass
class WatchCommand(Command):
    """Follow a sub-account's connection state"""

    sub_account_id: str = ""
    duration: float | None = None


@dataclass
class ConnectCommand(Command):
    """Start a WhatsApp session and wait for the QR code"""

    sub_account_id: str = ""
    wait_seconds: float = 30.0


@dataclass
class DisconnectCommand(Command):
    """Drop a WhatsApp session"""

    sub_account_id: str = ""
    assume_yes: bool = False


@dataclass
class SendCommand(Command):
    """Send a WhatsApp text message"""

    sub_account_id: str = ""
    to: str = ""
    message: str = ""


@dataclass
class AdminStatsCommand(Command):
    """Show admin dashboard counters"""

    pass


@dataclass
class ForgotPasswordCommand(Command):
    """Request a password reset link"""

    email: str = ""


@dataclass
class UpdateProfileCommand(Command):
    """Change the display name and/or company"""

    display_name: str | None = None
    company: str | None = None


@dataclass
class ChangePasswordCommand(Command):
    """Change the password; prompts for anything not given"""

    current_password: str | None = None
    new_password: str | None = None


@dataclass
class RotateApiKeyCommand(Command):
    """Issue a new API key, invalidating the current one"""

    assume_yes: bool = False
