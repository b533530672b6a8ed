import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .models import ErrorResponse
from .routes import router
from ..config import Settings, settings as default_settings
from ..core.entrypoint import AgentContext
from ..core.errors import (
    CalendarError,
    InvalidBusinessDayCountError,
    InvalidCountryError,
    InvalidDateError,
    InvalidRangeError,
    ProviderError,
    UnsupportedCountryError,
)
from ..core.registry import EntrypointRegistry
from ..providers import NagerDateProvider, WikipediaEventsProvider

logger = logging.getLogger(__name__)

# Most specific first
ERROR_STATUS = [
    (UnsupportedCountryError, 404),
    (ProviderError, 502),
    (InvalidDateError, 400),
    (InvalidRangeError, 400),
    (InvalidCountryError, 400),
    (InvalidBusinessDayCountError, 400),
]


async def calendar_error_handler(request: Request, exc: CalendarError) -> JSONResponse:
    status_code = next((code for kind, code in ERROR_STATUS if isinstance(exc, kind)), 500)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    body = ErrorResponse(error=type(exc).__name__, detail=str(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump())


def create_app(context: Optional[AgentContext] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or (context.settings if context else default_settings)
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: register all entrypoint modules
        EntrypointRegistry.discover_entrypoints()
        owns_context = context is None
        app.state.context = context or AgentContext(
            holiday_provider=NagerDateProvider(settings=settings),
            events_provider=WikipediaEventsProvider(settings=settings),
            settings=settings,
        )
        logger.info(f"{settings.app_name} ready with {len(EntrypointRegistry.list_entrypoints())} entrypoints")
        yield
        # Shutdown: close provider HTTP clients we created
        if owns_context:
            await app.state.context.aclose()

    app = FastAPI(
        title=settings.app_name,
        description=settings.app_description,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_exception_handler(CalendarError, calendar_error_handler)
    app.include_router(router)

    return app
