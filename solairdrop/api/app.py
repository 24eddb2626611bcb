"""
FastAPI application exposing the airdrop endpoints.
"""

import importlib.metadata
import logging
import threading
from typing import Callable, Optional

from fastapi import FastAPI, Request, status
from starlette.exceptions import HTTPException
from starlette.middleware.cors import CORSMiddleware

from solairdrop.config import Settings, load_settings
from solairdrop.errors import AirdropError
from solairdrop.service import AirdropService, build_service

from .auth import Auth
from .error import APIExceptionResponse
from .rate_limit import SlidingWindowRateLimiter
from .routes import router

logger = logging.getLogger(__name__)

try:
    VERSION = importlib.metadata.version("solairdrop")
except importlib.metadata.PackageNotFoundError:
    VERSION = "0.1.0"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Referrer-Policy": "no-referrer",
}


def _lazy_service(settings: Settings) -> Callable[[], AirdropService]:
    """Build the service on first use."""
    lock = threading.Lock()
    holder: dict = {}

    def provider() -> AirdropService:
        with lock:
            if "service" not in holder:
                holder["service"] = build_service(settings)
            return holder["service"]

    return provider


def create_app(
    settings: Optional[Settings] = None,
    service: Optional[AirdropService] = None,
    rate_limiter: Optional[SlidingWindowRateLimiter] = None,
) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(
        title="Solana Airdrop API",
        description="Distribute an SPL token to a list of wallets",
        version=VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    app.state.settings = settings
    app.state.auth = Auth(settings.jwt_secret, exp_hours=settings.jwt_expires_hours)
    app.state.service_provider = (lambda: service) if service is not None else _lazy_service(settings)
    app.state.rate_limiter = rate_limiter or SlidingWindowRateLimiter(
        points=settings.rate_limit_points,
        duration=settings.rate_limit_duration,
    )

    # Middleware added last runs first: CORS wraps the security headers, which wrap the rate limiter.
    @app.middleware("http")
    async def rate_limit(request: Request, call_next):
        if request.method == "OPTIONS":
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        if not app.state.rate_limiter.consume(client_ip):
            logger.warning(f"Rate limit exceeded for {client_ip}")
            return APIExceptionResponse(
                status.HTTP_429_TOO_MANY_REQUESTS, "Too many requests, please try again later"
            )
        return await call_next(request)

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins if isinstance(settings.cors_origins, list) else [settings.cors_origins],
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        response = APIExceptionResponse(exc.status_code, exc.detail)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(AirdropError)
    async def airdrop_error_handler(request: Request, exc: AirdropError):
        logger.error(f"Error in airdrop endpoint: {exc}")
        return APIExceptionResponse(status.HTTP_500_INTERNAL_SERVER_ERROR, exc)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error")
        return APIExceptionResponse(status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong!")

    app.include_router(router)
    return app
