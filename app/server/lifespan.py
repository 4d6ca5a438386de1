from contextlib import asynccontextmanager
import sys
import threading
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from slack_bolt import App
from slack_bolt.adapter.socket_mode import SocketModeHandler
from structlog.stdlib import BoundLogger

from core.config import Settings, settings as app_settings
from core.logging import get_module_logger
from modules.qm import qm
from modules.qm.registry import registry


def _is_test_environment() -> bool:
    """Detect if running in a test environment."""
    return "pytest" in sys.modules


def list_configs(settings: Settings, logger: BoundLogger) -> None:
    """Log the base settings and the keys of every nested settings group."""
    config_settings: dict[str, list[object]] = {"settings": []}

    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            config_settings[key] = list(value.keys())
        else:
            config_settings["settings"].append({key: value})

    logger.info("configuration_initialized", base_settings=config_settings["settings"])
    for key, value in config_settings.items():
        if key != "settings":
            logger.info("configuration_loaded", config_setting=key, keys=value)


def get_bot(settings: Settings) -> Optional[App]:
    """Create Slack App instance if token available and not in test environment."""
    if _is_test_environment():
        return None

    slack_token = settings.slack.SLACK_TOKEN
    if not bool(slack_token):
        return None

    return App(token=slack_token)


def _start_socket_mode(
    bot: App, app_token: str, logger: BoundLogger
) -> tuple[SocketModeHandler, threading.Thread]:
    handler = SocketModeHandler(bot, app_token)
    thread = threading.Thread(
        target=handler.connect,
        daemon=True,
        name="slack-socket-mode",
    )
    thread.start()
    logger.info("socket_mode_started")
    return handler, thread


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger = get_module_logger()

    app.state.settings = app_settings
    app.state.command_registry = registry

    logger.info("application_startup")
    list_configs(app_settings, logger)

    bot = get_bot(app_settings)
    app.state.bot = bot
    socket_mode_handler = None

    if bot is not None:
        qm.register(bot)
        logger.info(
            "qm_commands_registered",
            count=len(registry.list_commands()),
        )
        socket_mode_handler, socket_mode_thread = _start_socket_mode(
            bot,
            app_settings.slack.APP_TOKEN,
            logger,
        )
        app.state.socket_mode_thread = socket_mode_thread
    else:
        logger.info(
            "api_only_mode",
            message="No Slack token configured - API endpoints only",
        )

    app.state.socket_mode_handler = socket_mode_handler

    yield

    logger.info("application_shutdown")

    if app.state.socket_mode_handler is not None:
        app.state.socket_mode_handler.close()
        logger.info("socket_mode_stopped")
