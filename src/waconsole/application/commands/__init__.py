from waconsole.application.commands.base import (
    AccountsCommand,
    AdminStatsCommand,
    ChangePasswordCommand,
    Command,
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

__all__ = [
    "Command",
    "LoginCommand",
    "LogoutCommand",
    "WhoamiCommand",
    "ForgotPasswordCommand",
    "UpdateProfileCommand",
    "ChangePasswordCommand",
    "RotateApiKeyCommand",
    "AccountsCommand",
    "WatchCommand",
    "ConnectCommand",
    "DisconnectCommand",
    "SendCommand",
    "AdminStatsCommand",
]
