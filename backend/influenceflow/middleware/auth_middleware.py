import logging
from typing import Iterable, Optional

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from ..services.auth_exceptions import InvalidTokenError
from ..services.token_service import TokenService

logger = logging.getLogger(__name__)

MISSING_HEADER_MESSAGE = "Authorization header missing."


def extract_bearer_token(auth_header: Optional[str]) -> Optional[str]:
    """Return the token from ``Bearer <token>``, or None if the header is absent or not Bearer"""
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    return auth_header[len("Bearer "):].strip()


def unauthorized(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"success": False, "message": message, "status_code": status.HTTP_401_UNAUTHORIZED},
        headers={"WWW-Authenticate": "Bearer"},
    )


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """
    Requires a valid bearer token for every path under ``protected_prefix``
    except the public ones. Each request is verified on its own; decoded
    claims are attached as ``request.state.user``.
    """

    def __init__(
        self,
        app,
        token_service: TokenService,
        protected_prefix: str = "/api",
        public_paths: Iterable[str] = (),
    ):
        super().__init__(app)
        self.token_service = token_service
        self.protected_prefix = protected_prefix.rstrip("/")
        self.public_paths = {p.rstrip("/") or "/" for p in public_paths}

    def is_protected(self, path: str) -> bool:
        normalized = path.rstrip("/") or "/"
        if normalized in self.public_paths:
            return False
        return normalized == self.protected_prefix or normalized.startswith(self.protected_prefix + "/")

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS" or not self.is_protected(request.url.path):
            return await call_next(request)

        token = extract_bearer_token(request.headers.get("Authorization"))
        if not token:
            logger.debug(f"No bearer token for {request.url.path}")
            return unauthorized(MISSING_HEADER_MESSAGE)

        try:
            request.state.user = self.token_service.verify(token)
        except InvalidTokenError as e:
            logger.info(f"Rejected token for {request.url.path}")
            return unauthorized(e.message)

        return await call_next(request)
