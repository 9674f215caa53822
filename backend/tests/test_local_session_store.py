"""Local demo mode. Credentials here are PLAINTEXT by design, unlike server mode."""

import json

import pytest

from influenceflow.services.auth_exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    MissingCredentialsError,
    NotLoggedInError,
)
from influenceflow.services.local_session_store import (
    CURRENT_USER_KEY,
    DEMO_USER,
    USERS_KEY,
    FileLocalStorage,
    LocalAuthService,
    LocalAuthStore,
    LocalStorage,
)


@pytest.fixture()
def store():
    return LocalAuthStore(LocalStorage())


@pytest.fixture()
def service(store):
    store.seed_demo_user_if_needed()
    return LocalAuthService(store)


def test_seed_creates_exactly_one_demo_account(store):
    assert store.seed_demo_user_if_needed() is True
    assert store.seed_demo_user_if_needed() is False

    users = store.get_users()
    assert len(users) == 1
    assert users[0]["email"] == DEMO_USER["email"]


def test_seed_is_noop_when_accounts_exist(store):
    store.save_users([{"fullName": "Someone", "email": "s@x.com", "password": "p"}])
    assert store.seed_demo_user_if_needed() is False
    assert [u["email"] for u in store.get_users()] == ["s@x.com"]


def test_demo_login_then_logout(service, store):
    marker = service.login("Demo Brand Manager", "demo@brand.com", "demo123")

    assert marker == {"fullName": "Demo Brand Manager", "email": "demo@brand.com"}
    assert store.get_current_user() == marker

    service.logout()
    assert store.get_current_user() is None
    with pytest.raises(NotLoggedInError):
        service.require_current_user()


def test_password_is_stored_and_compared_in_plaintext(service, store):
    service.sign_up("Ana", "ana@example.com", "pw-plain")

    stored = store.find_user_by_email("ana@example.com")
    assert stored["password"] == "pw-plain"


def test_login_email_lookup_ignores_case_and_whitespace(service):
    assert service.login("x", "  DEMO@Brand.com ", "demo123")["email"] == "demo@brand.com"


def test_login_failures_share_message(service):
    with pytest.raises(InvalidCredentialsError) as wrong_password:
        service.login("Demo", "demo@brand.com", "nope")
    with pytest.raises(InvalidCredentialsError) as unknown:
        service.login("Demo", "ghost@brand.com", "demo123")
    assert str(wrong_password.value) == str(unknown.value) == "Invalid email or password."


def test_login_requires_all_fields(service):
    with pytest.raises(MissingCredentialsError, match="Please fill in all fields."):
        service.login("", "demo@brand.com", "demo123")


def test_sign_up_records_account_and_session(service, store):
    marker = service.sign_up(" Ana ", "ana@example.com", "pw")

    assert marker == {"fullName": "Ana", "email": "ana@example.com"}
    assert store.get_current_user() == marker
    assert len(store.get_users()) == 2
    assert store.find_user_by_email("ana@example.com")["id"]


def test_sign_up_rejects_duplicate_and_missing_fields(service):
    with pytest.raises(EmailAlreadyRegisteredError, match="already exists"):
        service.sign_up("Other", "DEMO@brand.com", "pw")
    with pytest.raises(MissingCredentialsError, match="create an account"):
        service.sign_up("Ana", "", "pw")


def test_corrupt_storage_reads_as_empty():
    storage = LocalStorage()
    storage.set_item(USERS_KEY, "{not json")
    storage.set_item(CURRENT_USER_KEY, "[]")
    store = LocalAuthStore(storage)

    assert store.get_users() == []
    assert store.get_current_user() is None
    assert store.seed_demo_user_if_needed() is True


def test_file_storage_persists_across_instances(tmp_path):
    path = tmp_path / "nested" / "local.json"
    first = LocalAuthService(LocalAuthStore(FileLocalStorage(str(path))))
    first.store.seed_demo_user_if_needed()
    first.login("Demo", "demo@brand.com", "demo123")

    reopened = LocalAuthStore(FileLocalStorage(str(path)))
    assert reopened.get_current_user()["email"] == "demo@brand.com"
    assert reopened.seed_demo_user_if_needed() is False

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert set(raw) == {USERS_KEY, CURRENT_USER_KEY}


def test_unreadable_file_storage_starts_empty(tmp_path):
    path = tmp_path / "local.json"
    path.write_text("not json", encoding="utf-8")

    store = LocalAuthStore(FileLocalStorage(str(path)))
    assert store.get_users() == []
