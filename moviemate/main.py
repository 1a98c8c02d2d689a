"""
MovieMate backend

FastAPI application entry point. Run with:
    uvicorn moviemate.main:create_app --factory
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from moviemate.api.middleware.rate_limit import RateLimitMiddleware
from moviemate.api.middleware.request_id import REQUEST_ID_HEADER, RequestIdMiddleware
from moviemate.api.v1 import router as api_router
from moviemate.chat import ChatService, build_chat_service
from moviemate.config import Settings, get_settings
from moviemate.database import Database
from moviemate.kernel.identity.credential_service import CredentialService
from moviemate.kernel.identity.errors import HashingFailure, SigningFailure
from moviemate.logging_config import configure_logging, get_logger
from moviemate.schemas.common import HealthResponse

logger = get_logger(__name__)


def _request_headers(request: Request) -> dict:
    req_id = getattr(request.state, "request_id", None)
    return {REQUEST_ID_HEADER: req_id} if req_id else {}


def _register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        headers = _request_headers(request)
        if exc.headers:
            headers.update(exc.headers)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": ".".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": "Invalid request data", "errors": errors},
            headers=_request_headers(request),
        )

    @app.exception_handler(HashingFailure)
    @app.exception_handler(SigningFailure)
    async def credential_failure_handler(request: Request, exc: Exception):
        logger.error("Credential primitive failed", extra={"reason": type(exc).__name__})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "Internal server error",
                "request_id": getattr(request.state, "request_id", None),
            },
            headers=_request_headers(request),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception: %s", type(exc).__name__)
        req_id = getattr(request.state, "request_id", None)
        if settings.debug:
            content = {"detail": str(exc), "type": type(exc).__name__, "request_id": req_id}
        else:
            content = {"detail": "Internal server error", "request_id": req_id}
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=content,
            headers=_request_headers(request),
        )


def create_app(
    settings: Optional[Settings] = None,
    *,
    credentials: Optional[CredentialService] = None,
    chat_service: Optional[ChatService] = None,
) -> FastAPI:
    """
    Build the application.

    The signing key is read once here; everything downstream receives the
    same CredentialService instance.
    """
    settings = settings or get_settings()
    database = Database(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator:
        configure_logging(
            log_level=settings.log_level,
            environment=settings.environment,
            debug=settings.debug,
        )
        logger.info(
            "Starting %s v%s (chat provider: %s)",
            settings.project_name,
            settings.version,
            app.state.chat_service.name,
        )
        await database.init()
        logger.info("Database initialized")

        yield

        logger.info("Shutting down...")
        await database.close()
        logger.info("Database connections closed")

    app = FastAPI(
        title=settings.project_name,
        description="Accounts, watchlists and a movie chatbot.",
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.state.settings = settings
    app.state.database = database
    app.state.credentials = credentials or CredentialService(settings.jwt_secret)
    app.state.chat_service = chat_service or build_chat_service(settings)

    # add_middleware stacks innermost-first, so CORS (added last) is outermost
    app.add_middleware(RateLimitMiddleware, settings=settings)
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "Content-Type", "Accept", "Authorization", REQUEST_ID_HEADER],
    )

    _register_exception_handlers(app, settings)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check():
        return HealthResponse(provider=app.state.chat_service.name, version=settings.version)

    @app.get("/debug", tags=["Health"])
    async def debug_info():
        """Chat provider configuration flags. Never exposes the key itself."""
        return {
            "gemini_api_key_set": settings.gemini_configured,
            "gemini_model": settings.gemini_model,
            "gemini_system_prompt_set": bool(settings.gemini_system_prompt),
        }

    app.include_router(api_router, prefix=settings.api_prefix)
    return app


if __name__ == "__main__":
    import os

    import uvicorn

    uvicorn.run(
        "moviemate.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=int(os.environ.get("PORT", "8080")),
    )
