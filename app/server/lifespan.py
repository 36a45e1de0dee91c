from contextlib import asynccontextmanager
from typing import AsyncIterator, TYPE_CHECKING

from fastapi import FastAPI
from structlog.stdlib import BoundLogger

from infrastructure.logging.setup import configure_logging
from infrastructure.services import get_aws_clients, get_settings
from modules.messages.schema import ensure_tables

if TYPE_CHECKING:
    from infrastructure.configuration import Settings


def _list_configs(settings: "Settings", logger: BoundLogger) -> None:
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


def _bootstrap_tables(settings: "Settings", logger: BoundLogger) -> None:
    if not settings.messages.CREATE_TABLES:
        logger.info("table_bootstrap_skipped", reason="create_tables_disabled")
        return

    created = ensure_tables(get_aws_clients().dynamodb, settings)
    logger.info("table_bootstrap_completed", created=created)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger = configure_logging(
        log_level=settings.LOG_LEVEL, is_production=settings.is_production
    )

    app.state.settings = settings
    app.state.logger = logger

    logger.info("application_startup")
    _list_configs(settings, logger)
    _bootstrap_tables(settings, logger)

    yield

    logger.info("application_shutdown")
