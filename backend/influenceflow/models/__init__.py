from .auth_models import (
    RegisterRequest,
    LoginRequest,
    UserResponse,
    AuthResponse,
    SessionClaimsResponse
)

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "UserResponse",
    "AuthResponse",
    "SessionClaimsResponse"
]
