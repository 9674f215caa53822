import asyncio
import bcrypt
import logging
from functools import partial

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode('utf-8')[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """Salted bcrypt hashing that runs off the event loop.

    The cost factor is written into every hash (``$2b$10$...``), so changing
    ``rounds`` only affects new hashes and older ones keep verifying.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds

    def hash_sync(self, password: str) -> str:
        """Hash password using bcrypt"""
        if not password:
            raise ValueError("Password must not be empty")
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(_encode(password), salt)
        return hashed.decode('utf-8')

    def verify_sync(self, password: str, hashed: str) -> bool:
        """Verify password against hash"""
        if not password or not hashed:
            return False
        try:
            return bcrypt.checkpw(_encode(password), hashed.encode('utf-8'))
        except ValueError:
            logger.warning("Stored credential is not a valid bcrypt hash")
            return False

    async def hash(self, password: str) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(self.hash_sync, password))

    async def verify(self, password: str, hashed: str) -> bool:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(self.verify_sync, password, hashed))
