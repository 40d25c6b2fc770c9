import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from homefinder.api.limiter import limiter
from homefinder.api.responses import create_error_response, create_success_response
from homefinder.core.config import Settings, get_settings
from homefinder.core.database import create_engine, create_session_factory
from homefinder.services.store import SQLAlchemyPropertyStore

__all__ = ["app", "create_app"]

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):

    logger.info(f"Starting {app.title} {app.version}")
    yield
    await app.state.engine.dispose()

def create_app(settings: Settings | None = None) -> FastAPI:

    settings = settings or get_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Personalized property listings API",
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
        openapi_url="/api/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    # One store and settings object per process, handed to request handlers
    # through get_store and get_app_settings.
    app.state.settings = settings
    app.state.engine = create_engine(settings)
    app.state.store = SQLAlchemyPropertyStore(create_session_factory(app.state.engine))
    app.state.limiter = limiter

    _configure_cors(app, settings)

    _configure_error_handlers(app, settings)

    _include_routers(app, settings)

    return app

def _configure_cors(app: FastAPI, settings: Settings) -> None:

    origins = ["*"] if settings.debug else settings.get_cors_origins()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

def _configure_error_handlers(app: FastAPI, settings: Settings) -> None:

    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle Pydantic validation errors with consistent format."""
        errors = []
        for error in exc.errors():
            field = ".".join(str(loc) for loc in error["loc"] if loc != "body")
            errors.append({
                "field": field,
                "message": error["msg"],
            })

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=create_error_response(
                code="VALIDATION_ERROR",
                message="Invalid input data",
                details=errors,
            ),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=create_error_response(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred" if not settings.debug else str(exc),
            ),
        )

def _include_routers(app: FastAPI, settings: Settings) -> None:

    from homefinder.api.v1.router import api_router

    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:

        return create_success_response(data={"status": "healthy"})

app = create_app()
