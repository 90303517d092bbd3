from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.router import api_router
from infrastructure.configuration import Settings
from infrastructure.i18n.middleware import RequestLocaleMiddleware
from infrastructure.i18n.resolvers import RequestLocaleResolver
from infrastructure.logging import (
    CORRELATION_ID_HEADER,
    bind_request_context,
    get_correlation_id,
    get_module_logger,
)
from infrastructure.services import get_locale_resolver, get_settings
from server.lifespan import lifespan

logger = get_module_logger()


def create_app(
    settings: Optional[Settings] = None,
    resolver: Optional[RequestLocaleResolver] = None,
) -> FastAPI:
    """Build the FastAPI application.

    The locale middleware is registered only when i18n is enabled. It sits
    inside the request logging middleware, so request logs carry both the
    correlation ID and the resolved locale.
    """
    settings = settings or get_settings()
    app = FastAPI(lifespan=lifespan)

    allow_origins = (
        ["*"]
        if settings.is_production
        else [
            "http://localhost:8000",
            "http://127.0.0.1:8000",
        ]
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.i18n.enabled:
        app.add_middleware(
            RequestLocaleMiddleware,
            resolver=resolver or get_locale_resolver(),
        )
    else:
        logger.info("locale_middleware_skipped", reason="i18n_disabled")

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        with bind_request_context(
            correlation_id=request.headers.get(CORRELATION_ID_HEADER),
            request_path=request.url.path,
            request_method=request.method,
        ):
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = get_correlation_id() or ""
            return response

    app.include_router(api_router)
    return app


handler = create_app()
