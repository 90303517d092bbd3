from contextlib import asynccontextmanager
from typing import AsyncIterator, TYPE_CHECKING

from fastapi import FastAPI
from structlog.stdlib import BoundLogger

from infrastructure.i18n import facade
from infrastructure.logging.setup import configure_logging
from infrastructure.services import get_message_service, get_settings

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


def _bind_message_service(app: FastAPI, settings: "Settings", logger: BoundLogger) -> None:
    if not settings.i18n.enabled:
        logger.info("message_service_skipped", reason="i18n_disabled")
        return

    service = get_message_service()
    app.state.message_service = service
    facade.bind_service(service)
    logger.info(
        "message_service_ready",
        supported_locales=[loc.tag for loc in service.get_supported_locales()],
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger = configure_logging(settings=settings)
    logger.info("application_startup")
    _list_configs(settings, logger)
    _bind_message_service(app, settings, logger)
    try:
        yield
    finally:
        facade.reset_service()
        logger.info("application_shutdown")
