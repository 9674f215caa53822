import aiosqlite
import logging
import os
from dataclasses import dataclass
from typing import Optional, List, Dict, Any

from ..db.user_registry_schema import USER_REGISTRY_SCHEMA
from .auth_exceptions import EmailAlreadyRegisteredError, StorageError

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "user"


def normalize_email(email: Optional[str]) -> str:
    """Trim and lower-case an email; the result is the uniqueness key."""
    return (email or "").strip().lower()


@dataclass(frozen=True)
class UserRecord:
    """A stored user row"""
    id: int
    name: Optional[str]
    email: str
    password_hash: str
    role: str = DEFAULT_ROLE
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "UserRecord":
        return cls(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            password_hash=row["password_hash"],
            role=row["role"] or DEFAULT_ROLE,
            created_at=row.get("created_at"),
        )

    def public_dict(self) -> Dict[str, Any]:
        """User fields that are safe to return to a client (no credential)"""
        return {"id": self.id, "name": self.name, "email": self.email, "role": self.role}


class UserRegistryService:
    """Credential store backed by a SQLite users table"""

    def __init__(self, registry_path: str = "crm.db"):
        self.registry_path = registry_path
        self._ensure_directory()

    def _ensure_directory(self):
        """Ensure the database directory exists"""
        directory = os.path.dirname(self.registry_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

    async def initialize(self):
        """Create the users table if it does not exist yet"""
        try:
            async with aiosqlite.connect(self.registry_path) as db:
                await db.executescript(USER_REGISTRY_SCHEMA)
                await db.commit()
        except aiosqlite.Error as e:
            logger.error(f"Failed to initialize user registry at {self.registry_path}: {e}", exc_info=True)
            raise StorageError() from e

    async def insert(
        self,
        name: Optional[str],
        email: str,
        password_hash: str,
        role: str = DEFAULT_ROLE,
    ) -> int:
        """Insert a new user and return its id.

        The UNIQUE constraint on ``email`` makes this an atomic insert-if-absent:
        a concurrent registration that slipped past the lookup fails here.
        """
        normalized = normalize_email(email)
        try:
            async with aiosqlite.connect(self.registry_path) as db:
                cursor = await db.execute("""
                    INSERT INTO users (name, email, password_hash, role)
                    VALUES (?, ?, ?, ?)
                """, (name, normalized, password_hash, role))
                await db.commit()
                return cursor.lastrowid
        except aiosqlite.IntegrityError as e:
            if "email" in str(e):
                logger.info(f"Duplicate email rejected by store: {normalized}")
                raise EmailAlreadyRegisteredError() from e
            logger.error(f"DB error (insert user): {e}", exc_info=True)
            raise StorageError() from e
        except aiosqlite.Error as e:
            logger.error(f"DB error (insert user): {e}", exc_info=True)
            raise StorageError() from e

    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        """Get user by normalized email"""
        row = await self._fetch_one(
            "SELECT * FROM users WHERE email = ?", (normalize_email(email),)
        )
        return UserRecord.from_row(row) if row else None

    async def get_by_id(self, user_id: int) -> Optional[UserRecord]:
        """Get user by ID"""
        row = await self._fetch_one("SELECT * FROM users WHERE id = ?", (user_id,))
        return UserRecord.from_row(row) if row else None

    async def list_all(self) -> List[UserRecord]:
        """List every user in insertion order"""
        try:
            async with aiosqlite.connect(self.registry_path) as db:
                db.row_factory = aiosqlite.Row
                cursor = await db.execute("SELECT * FROM users ORDER BY id")
                rows = await cursor.fetchall()
                return [UserRecord.from_row(dict(row)) for row in rows]
        except aiosqlite.Error as e:
            logger.error(f"DB error (list users): {e}", exc_info=True)
            raise StorageError() from e

    async def _fetch_one(self, query: str, params: tuple) -> Optional[Dict[str, Any]]:
        try:
            async with aiosqlite.connect(self.registry_path) as db:
                db.row_factory = aiosqlite.Row
                cursor = await db.execute(query, params)
                row = await cursor.fetchone()
                return dict(row) if row else None
        except aiosqlite.Error as e:
            logger.error(f"DB error (lookup user): {e}", exc_info=True)
            raise StorageError() from e
