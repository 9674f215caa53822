import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..models.auth_models import LoginRequest, RegisterRequest
from .auth_exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    MissingCredentialsError,
)
from .password_hasher import PasswordHasher
from .token_service import TokenService
from .user_registry_service import DEFAULT_ROLE, UserRecord, UserRegistryService, normalize_email

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    """Token plus the sanitized user it was issued for"""
    token: str
    user: Dict[str, Any]


class AuthenticationService:
    """Registration and login over the credential store, hasher and token service"""

    def __init__(
        self,
        user_registry: UserRegistryService,
        password_hasher: PasswordHasher,
        token_service: TokenService,
    ):
        self.user_registry = user_registry
        self.password_hasher = password_hasher
        self.token_service = token_service

    @staticmethod
    def _require_credentials(email: Optional[str], password: Optional[str]) -> str:
        normalized = normalize_email(email)
        if not normalized or not password:
            raise MissingCredentialsError()
        return normalized

    async def register(self, request: RegisterRequest) -> AuthResult:
        """Register a new user and issue a token for it"""
        email = self._require_credentials(request.email, request.password)

        if await self.user_registry.find_by_email(email):
            raise EmailAlreadyRegisteredError()

        password_hash = await self.password_hasher.hash(request.password)

        # A concurrent registration may still win the insert; the store then
        # raises EmailAlreadyRegisteredError from its UNIQUE constraint.
        user_id = await self.user_registry.insert(
            name=request.name,
            email=email,
            password_hash=password_hash,
            role=DEFAULT_ROLE,
        )
        user = UserRecord(
            id=user_id,
            name=request.name,
            email=email,
            password_hash=password_hash,
            role=DEFAULT_ROLE,
        )
        logger.info(f"Registered user {user.id}")

        return AuthResult(token=self.token_service.issue(user), user=user.public_dict())

    async def login(self, request: LoginRequest) -> AuthResult:
        """Authenticate with email and password.

        Unknown email and wrong password raise the same InvalidCredentialsError.
        """
        email = self._require_credentials(request.email, request.password)

        user = await self.user_registry.find_by_email(email)
        if not user:
            raise InvalidCredentialsError()

        if not await self.password_hasher.verify(request.password, user.password_hash):
            raise InvalidCredentialsError()

        return AuthResult(token=self.token_service.issue(user), user=user.public_dict())
