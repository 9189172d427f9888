import asyncio
import sys

from loguru import logger

from waconsole.application.services.command_dispatcher import (
    CommandDispatcher,
)
from waconsole.core.app import ConsoleApp
from waconsole.core.config import Config
from waconsole.shared.exceptions import ConfigurationError


def configure_logging(level: str) -> None:
    """stderr at the configured level plus a rotating debug file"""
    logger.remove()
    logger.add(sys.stderr, level=level)
    logger.add(
        "logs/waconsole_{time}.log",
        rotation="1 day",
        retention="30 days",
        compression="gz",
        level="DEBUG",
    )


def main() -> int:
    """CLI entry point for the console

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        config = Config.from_env()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    configure_logging(config.log_level)

    app = ConsoleApp(config)
    dispatcher = CommandDispatcher(app)

    async def run():
        try:
            await app.start()
            return await dispatcher.dispatch(sys.argv)
        finally:
            await app.aclose()

    try:
        return asyncio.run(run())
    except KeyboardInterrupt:
        logger.warning("Interrupted.")
        return 130
    except Exception as e:
        logger.opt(exception=e).critical(f"Unhandled exception: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
