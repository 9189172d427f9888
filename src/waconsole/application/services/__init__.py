from waconsole.application.services.command_dispatcher import (
    CommandDispatcher,
)

__all__ = ["CommandDispatcher"]
