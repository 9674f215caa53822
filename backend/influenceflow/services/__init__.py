from .auth_exceptions import (
    AuthError,
    MissingCredentialsError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidTokenError,
    StorageError,
    NotLoggedInError
)
from .user_registry_service import UserRegistryService, UserRecord, normalize_email
from .password_hasher import PasswordHasher
from .token_service import TokenService, TokenClaims
from .auth_service import AuthenticationService, AuthResult
from .local_session_store import LocalStorage, FileLocalStorage, LocalAuthStore, LocalAuthService

__all__ = [
    "AuthError",
    "MissingCredentialsError",
    "EmailAlreadyRegisteredError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "StorageError",
    "NotLoggedInError",
    "UserRegistryService",
    "UserRecord",
    "normalize_email",
    "PasswordHasher",
    "TokenService",
    "TokenClaims",
    "AuthenticationService",
    "AuthResult",
    "LocalStorage",
    "FileLocalStorage",
    "LocalAuthStore",
    "LocalAuthService"
]
