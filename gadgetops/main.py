"""
Gadget Inventory API

FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gadgetops.api.deps import get_request_id
from gadgetops.api.middleware.request_id import REQUEST_ID_HEADER, RequestIdMiddleware
from gadgetops.api.routes import router as api_router
from gadgetops.config import Settings, get_settings
from gadgetops.database import Database
from gadgetops.errors import GadgetOpsError
from gadgetops.logging_config import configure_logging, get_logger
from gadgetops.schemas.common import HealthResponse

logger = get_logger(__name__)


def _error_response(request: Request, status_code: int, content: dict) -> JSONResponse:
    headers = {}
    req_id = get_request_id(request)
    if req_id:
        headers[REQUEST_ID_HEADER] = req_id
        if status_code >= 500:
            content["request_id"] = req_id
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Map domain and framework errors onto structured JSON bodies."""

    @app.exception_handler(GadgetOpsError)
    async def domain_exception_handler(request: Request, exc: GadgetOpsError):
        """Known failure kinds: status and code come from the error class."""
        if exc.status_code >= 500:
            logger.error("Request failed: %s", exc.message, extra={"code": exc.code})
        else:
            logger.info("Request rejected: %s", exc.code, extra={"path": request.url.path})
        content = {"detail": exc.message, "code": exc.code, **exc.extra}
        return _error_response(request, exc.status_code, content)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(request, exc.status_code, {"detail": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Flatten pydantic errors into field/message/type triples."""
        errors = [
            {
                "field": ".".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
            for error in exc.errors()
        ]
        return _error_response(
            request,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            {"detail": "Validation error", "code": "validation_error", "errors": errors},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Collaborator failures surface as a generic 500 without internals."""
        logger.exception("Unhandled exception: %s", exc)
        if settings.debug:
            content = {"detail": str(exc), "code": "internal_error", "type": type(exc).__name__}
        else:
            content = {"detail": "Internal server error", "code": "internal_error"}
        return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, content)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application and its Database.

    The database engine is created here and disposed in the lifespan
    shutdown hook; tables are created on startup.
    """
    settings = settings or get_settings()
    database = Database(settings.database_url, echo=settings.debug)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator:
        configure_logging(
            log_level=settings.log_level,
            environment=settings.environment,
            debug=settings.debug,
        )

        logger.info("Starting %s v%s", settings.project_name, settings.version)
        await database.create_all()
        logger.info("Database initialized")

        yield

        logger.info("Shutting down...")
        await database.dispose()
        logger.info("Database connections closed")

    app = FastAPI(
        title=settings.project_name,
        description="""
        Inventory of covert-operations gadgets.

        - **Auth**: sign up as BASIC or ADMIN, sign in for a one-hour token
          sent back in the `token` header
        - **Gadgets**: any signed-in user may list; only ADMIN may add,
          patch, decommission or self-destruct
        """,
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.database = database

    # Last added = outermost; CORS wraps everything
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
        allow_headers=["Content-Type", settings.token_header, REQUEST_ID_HEADER],
    )

    register_exception_handlers(app, settings)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check():
        """Check application health."""
        return HealthResponse(status="ok", version=settings.version)

    app.include_router(api_router)
    return app


app = create_app()


# Main entry point for development
if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "gadgetops.main:app",
        host="0.0.0.0",
        port=8000,
        reload=_settings.debug,
    )
