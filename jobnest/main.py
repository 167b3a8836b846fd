"""
JobNest API - FastAPI Application Entry Point.

Job board backend: job seekers, recruiters and admins signed in through an
external identity provider; companies, job postings and reviews.
"""
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.ext.asyncio import AsyncSession

from jobnest.core.config import settings
from jobnest.core.database import async_session_maker, close_db, init_db
from jobnest.core.exceptions import APIException
from jobnest.core.logging import RequestIDMiddleware, get_logger, setup_logging
from jobnest.core.rate_limit import limiter
from jobnest.core.security import TokenVerifier
from jobnest.api.gate import IdentityGateMiddleware, RequestIdentityGate
from jobnest.api.routes import api_router
from jobnest.services.user_synchronizer import UserSynchronizer

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - startup and shutdown."""
    setup_logging()
    logger.info("starting_app", app_name=settings.app_name, env=settings.environment)
    if not settings.has_idp_key_material:
        logger.warning("idp_key_not_configured", detail="every bearer token will be rejected")
    await init_db()
    logger.info("database_initialized")

    yield

    await close_db()
    logger.info("shutting_down")


async def api_exception_handler(request: Request, exc: APIException):
    """Handle custom API exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions - log full detail, return sanitized message."""
    logger.error(
        "unhandled_exception",
        exc_type=type(exc).__name__,
        exc_message=str(exc),
        path=request.url.path,
        exc_info=True,
    )

    if settings.debug:
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_error",
                "message": str(exc),
            },
        )

    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred",
        },
    )


def create_app(
    session_factory: Callable[[], AsyncSession] = async_session_maker,
    verifier: Optional[TokenVerifier] = None,
    synchronizer: Optional[UserSynchronizer] = None,
    use_lifespan: bool = True,
) -> FastAPI:
    """
    Build the application.

    The identity gate gets its own session factory so it never shares a
    transaction with the route it protects.
    """
    app = FastAPI(
        title=settings.app_name,
        description="Job board API with identity-provider backed users",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan if use_lifespan else None,
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Middleware: last added runs first. CORS -> request id -> identity gate
    app.add_middleware(
        IdentityGateMiddleware,
        gate=RequestIdentityGate(synchronizer or UserSynchronizer(), session_factory),
        verifier=verifier or TokenVerifier(),
    )
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )

    # Exception handlers
    app.add_exception_handler(APIException, api_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # Include API routes
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/")
    async def root():
        """Root endpoint - API info."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs" if settings.debug else None,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "jobnest.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
