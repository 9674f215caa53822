"""
Local demo-mode accounts and the "current user" marker.

This is a device-local, offline sign-in path. Passwords are stored and
compared in PLAINTEXT on purpose: it is a lower-trust demo mode, kept
separate from the hashed, token-based server mode, and must not be used
for real accounts.

State lives in a JSON key/value file that stands in for browser local
storage:

- ``influenceflow_users``        -> list of ``{id, fullName, email, password}``
- ``influenceflow_current_user`` -> ``{fullName, email}`` or absent
"""

import json
import logging
import os
import tempfile
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

from .auth_exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    MissingCredentialsError,
    NotLoggedInError,
)

logger = logging.getLogger(__name__)

USERS_KEY = "influenceflow_users"
CURRENT_USER_KEY = "influenceflow_current_user"

DEMO_USER = {
    "fullName": "Demo Brand Manager",
    "email": "demo@brand.com",
    "password": "demo123",
}


class LocalStorage:
    """In-memory key/value storage holding JSON-encoded strings"""

    def __init__(self):
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()


class FileLocalStorage(LocalStorage):
    """LocalStorage persisted to a single JSON file, rewritten atomically on change"""

    def __init__(self, path: str):
        super().__init__()
        self.path = Path(path)
        self._items = self._load()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Ignoring unreadable local storage {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _atomic_write(self) -> None:
        """Write JSON file atomically"""
        dir_path = self.path.parent
        dir_path.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(mode='w', dir=dir_path, delete=False, encoding='utf-8') as tf:
            json.dump(self._items, tf, indent=2, ensure_ascii=False)
            temp_path = Path(tf.name)
        try:
            os.replace(temp_path, self.path)
        except OSError:
            if temp_path.exists():
                temp_path.unlink()
            raise

    def set_item(self, key: str, value: str) -> None:
        super().set_item(key, value)
        self._atomic_write()

    def remove_item(self, key: str) -> None:
        super().remove_item(key)
        self._atomic_write()

    def clear(self) -> None:
        super().clear()
        self._atomic_write()


class LocalAuthStore:
    """Account list and current-user marker on top of a LocalStorage"""

    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def _load_json(self, key: str, fallback: Any) -> Any:
        raw = self.storage.get_item(key)
        if not raw:
            return fallback
        try:
            return json.loads(raw)
        except ValueError:
            return fallback

    def _save_json(self, key: str, value: Any) -> None:
        self.storage.set_item(key, json.dumps(value))

    def get_users(self) -> List[Dict[str, Any]]:
        users = self._load_json(USERS_KEY, [])
        if not isinstance(users, list):
            return []
        return [u for u in users if isinstance(u, dict) and u.get("email")]

    def save_users(self, users: List[Dict[str, Any]]) -> None:
        self._save_json(USERS_KEY, users)

    def find_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        wanted = (email or "").strip().lower()
        for user in self.get_users():
            if str(user["email"]).strip().lower() == wanted:
                return user
        return None

    def get_current_user(self) -> Optional[Dict[str, Any]]:
        current = self._load_json(CURRENT_USER_KEY, None)
        return current if isinstance(current, dict) else None

    def set_current_user(self, user: Dict[str, Any]) -> Dict[str, Any]:
        marker = {"fullName": user.get("fullName"), "email": user.get("email")}
        self._save_json(CURRENT_USER_KEY, marker)
        return marker

    def clear_current_user(self) -> None:
        self.storage.remove_item(CURRENT_USER_KEY)

    def seed_demo_user_if_needed(self) -> bool:
        """Create the demo account when no accounts exist. Returns True if it seeded."""
        users = self.get_users()
        if users:
            return False
        users.append({"id": uuid.uuid4().hex, **DEMO_USER})
        self.save_users(users)
        logger.info(f"Seeded local demo account {DEMO_USER['email']}")
        return True


class LocalAuthService:
    """Sign-up, login and logout for the local demo mode"""

    def __init__(self, store: LocalAuthStore):
        self.store = store

    @staticmethod
    def _clean(full_name: Optional[str], email: Optional[str], password: Optional[str]):
        return (full_name or "").strip(), (email or "").strip(), password or ""

    def login(self, full_name: str, email: str, password: str) -> Dict[str, Any]:
        full_name, email, password = self._clean(full_name, email, password)
        if not full_name or not email or not password:
            raise MissingCredentialsError("Please fill in all fields.")

        user = self.store.find_user_by_email(email)
        # Plaintext comparison: demo mode only.
        if not user or user.get("password") != password:
            raise InvalidCredentialsError()

        return self.store.set_current_user(user)

    def sign_up(self, full_name: str, email: str, password: str) -> Dict[str, Any]:
        full_name, email, password = self._clean(full_name, email, password)
        if not full_name or not email or not password:
            raise MissingCredentialsError("Enter a name, email and password to create an account.")

        if self.store.find_user_by_email(email):
            raise EmailAlreadyRegisteredError("An account with this email already exists.")

        new_user = {"id": uuid.uuid4().hex, "fullName": full_name, "email": email, "password": password}
        users = self.store.get_users()
        users.append(new_user)
        self.store.save_users(users)
        return self.store.set_current_user(new_user)

    def logout(self) -> None:
        self.store.clear_current_user()

    def require_current_user(self) -> Dict[str, Any]:
        """Return the logged-in marker or raise NotLoggedInError (page guard)"""
        user = self.store.get_current_user()
        if not user:
            raise NotLoggedInError()
        return user
