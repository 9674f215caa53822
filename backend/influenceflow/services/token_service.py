import logging
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Mapping, Union

from itsdangerous import BadData, TimestampSigner, URLSafeTimedSerializer

from .auth_exceptions import InvalidTokenError
from .user_registry_service import UserRecord

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(days=7)


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried inside a session token"""
    id: int
    email: str
    role: str
    issued_at: datetime
    expires_at: datetime

    def identity(self) -> Dict[str, Any]:
        return {"id": self.id, "email": self.email, "role": self.role}

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.identity(),
            "issued_at": self.issued_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
        }


class _ClockedSigner(TimestampSigner):
    """TimestampSigner whose notion of "now" comes from an injected clock"""

    def __init__(self, *args, clock: Callable[[], float] = time.time, **kwargs):
        super().__init__(*args, **kwargs)
        self._clock = clock

    def get_timestamp(self) -> int:
        return int(self._clock())


class TokenService:
    """Stateless issue/verify pair over a shared signing secret.

    Nothing is stored server side: a token is valid while its signature
    matches and it is younger than ``ttl``.
    """

    def __init__(
        self,
        secret: str,
        ttl: timedelta = DEFAULT_TTL,
        salt: str = "influenceflow.session.v1",
        clock: Callable[[], float] = time.time,
    ):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self.ttl = ttl
        self._serializer = URLSafeTimedSerializer(
            secret_key=secret,
            salt=salt,
            signer=_ClockedSigner,
            signer_kwargs={"clock": clock},
        )

    def issue(self, claims: Union[Mapping[str, Any], UserRecord]) -> str:
        """Sign ``{id, email, role}`` into a URL-safe token"""
        if isinstance(claims, UserRecord):
            claims = {"id": claims.id, "email": claims.email, "role": claims.role}
        payload = {"id": claims["id"], "email": claims["email"], "role": claims.get("role") or "user"}
        return self._serializer.dumps(payload)

    def verify(self, token: str) -> TokenClaims:
        """Decode a token or raise InvalidTokenError.

        Malformed input, a bad signature and expiry all surface as the same error.
        """
        if not token:
            raise InvalidTokenError()
        try:
            payload, issued_at = self._serializer.loads(
                token,
                max_age=int(self.ttl.total_seconds()),
                return_timestamp=True,
            )
        except BadData as e:
            logger.debug(f"Token rejected: {type(e).__name__}")
            raise InvalidTokenError() from e

        if not isinstance(payload, dict) or not payload.keys() >= {"id", "email", "role"}:
            logger.debug("Token rejected: payload is missing claims")
            raise InvalidTokenError()

        if issued_at.tzinfo is None:
            issued_at = issued_at.replace(tzinfo=timezone.utc)
        return TokenClaims(
            id=payload["id"],
            email=payload["email"],
            role=payload["role"],
            issued_at=issued_at,
            expires_at=issued_at + self.ttl,
        )
