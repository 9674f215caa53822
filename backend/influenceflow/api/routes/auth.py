import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status

from ...auth.dependencies import get_auth_service, get_current_user
from ...models.auth_models import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    SessionClaimsResponse,
    UserResponse,
)
from ...services.auth_exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    MissingCredentialsError,
    StorageError,
)
from ...services.auth_service import AuthenticationService, AuthResult
from ...services.token_service import TokenClaims

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])

INTERNAL_ERROR_MESSAGE = "Internal server error."


def _to_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(token=result.token, user=UserResponse(**result.user))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    request: Optional[RegisterRequest] = None,
    auth_service: AuthenticationService = Depends(get_auth_service),
):
    """Register a new user account"""
    try:
        result = await auth_service.register(request or RegisterRequest())
        return _to_response(result)

    except MissingCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except EmailAlreadyRegisteredError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    except StorageError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR_MESSAGE)
    except Exception as e:
        logger.error(f"Registration failed: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR_MESSAGE)


@router.post("/login", response_model=AuthResponse)
async def login_user(
    request: Optional[LoginRequest] = None,
    auth_service: AuthenticationService = Depends(get_auth_service),
):
    """Login with email and password"""
    try:
        result = await auth_service.login(request or LoginRequest())
        return _to_response(result)

    except MissingCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)
    except StorageError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR_MESSAGE)
    except Exception as e:
        logger.error(f"Login failed: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR_MESSAGE)


@router.get("/me", response_model=SessionClaimsResponse)
async def current_session(user: TokenClaims = Depends(get_current_user)):
    """Identity of the caller, decoded from the bearer token"""
    return SessionClaimsResponse(**user.to_dict())
