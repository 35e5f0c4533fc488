from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.agent.context_loader import ContextLoader
from app.agent.errors import ServiceError
from app.agent.gemini_client import GeminiClient
from app.api.main import api_router
from app.core.config import Settings, settings as default_settings
from app.core.logging import get_logger, setup_logging
from app.models import ErrorResponse

logger = get_logger(__name__)


def error_response(settings: Settings, status_code: int, error: str, details: str | None = None) -> JSONResponse:
    """Render an ErrorResponse envelope; details are withheld in production."""
    body = ErrorResponse(error=error, details=None if settings.is_production else details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Loaded once per process; handlers receive it through app.api.deps.
        app.state.project_context = ContextLoader(settings.PROJECTS_FILE).load()
        app.state.gemini_client = GeminiClient(settings)
        if not settings.GEMINI_API_KEY:
            logger.warn("GEMINI_API_KEY is not set; chat requests will be rejected upstream")
        logger.info(
            "Service ready",
            service=settings.SERVICE_NAME,
            environment=settings.ENVIRONMENT,
            projects=len(app.state.project_context.records),
        )
        yield

    app = FastAPI(
        title=settings.SERVICE_NAME,
        description="Relays portfolio questions to the Gemini API with project context.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    if settings.all_cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.all_cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        return error_response(settings, exc.status_code, exc.error, exc.details)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return error_response(settings, 400, "Invalid request body", str(exc.errors()))

    app.include_router(api_router, prefix="/api")
    return app


app = create_app()


def run() -> None:
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)
