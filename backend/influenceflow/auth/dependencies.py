from fastapi import HTTPException, Request, status

from ..middleware.auth_middleware import MISSING_HEADER_MESSAGE, extract_bearer_token
from ..services.auth_exceptions import InvalidTokenError
from ..services.auth_service import AuthenticationService
from ..services.token_service import TokenClaims, TokenService


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_auth_service(request: Request) -> AuthenticationService:
    return request.app.state.auth_service


async def get_current_user(request: Request) -> TokenClaims:
    """
    Dependency returning the caller's token claims.
    Uses the claims attached by AuthenticationMiddleware, or verifies the
    Authorization header itself when the route is not behind the middleware.
    """
    claims = getattr(request.state, "user", None)
    if isinstance(claims, TokenClaims):
        return claims

    token = extract_bearer_token(request.headers.get("Authorization"))
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=MISSING_HEADER_MESSAGE,
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        claims = get_token_service(request).verify(token)
    except InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    request.state.user = claims
    return claims
