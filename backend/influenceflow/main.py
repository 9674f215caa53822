import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .core.config import Settings
from .api.api import build_api_router
from .api.errors import (
    http_exception_handler,
    validation_exception_handler,
    general_exception_handler
)
from .middleware.auth_middleware import AuthenticationMiddleware
from .services.auth_service import AuthenticationService
from .services.password_hasher import PasswordHasher
from .services.token_service import TokenService
from .services.user_registry_service import UserRegistryService

logger = logging.getLogger(__name__)


def public_paths(settings: Settings) -> list[str]:
    """Paths under the API prefix that do not require a bearer token"""
    prefix = settings.API_PREFIX.rstrip("/")
    return [
        f"{prefix}/auth/register",
        f"{prefix}/auth/login",
        f"{prefix}/health",
    ]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application and its services from a single Settings instance"""
    settings = settings or Settings()

    if settings.uses_default_secret:
        logger.warning(
            "JWT_SECRET is not set; using the insecure development default. "
            "Set JWT_SECRET for any non-development deployment."
        )

    user_registry = UserRegistryService(settings.DATABASE_PATH)
    token_service = TokenService(
        secret=settings.JWT_SECRET,
        ttl=timedelta(seconds=settings.token_max_age_seconds),
        salt=settings.TOKEN_SALT,
    )
    auth_service = AuthenticationService(
        user_registry=user_registry,
        password_hasher=PasswordHasher(rounds=settings.BCRYPT_ROUNDS),
        token_service=token_service,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        await user_registry.initialize()
        logger.info(f"Credential store ready at {settings.DATABASE_PATH}")
        yield

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="Authentication and user-session API for the InfluenceFlow dashboard",
        version=settings.VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.state.settings = settings
    app.state.user_registry = user_registry
    app.state.token_service = token_service
    app.state.auth_service = auth_service

    # Session gate for everything under the API prefix
    app.add_middleware(
        AuthenticationMiddleware,
        token_service=token_service,
        protected_prefix=settings.API_PREFIX,
        public_paths=public_paths(settings),
    )

    # Configure CORS (added last so it wraps the gate and answers preflights)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add exception handlers
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Include API routes
    app.include_router(build_api_router(settings.API_PREFIX))

    return app
