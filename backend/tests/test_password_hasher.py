import asyncio

from influenceflow.services.password_hasher import PasswordHasher

import pytest


def test_hash_embeds_default_cost_and_verifies():
    hasher = PasswordHasher()
    hashed = asyncio.run(hasher.hash("correct horse"))

    assert hashed.startswith("$2b$10$")
    assert asyncio.run(hasher.verify("correct horse", hashed)) is True
    assert asyncio.run(hasher.verify("wrong horse", hashed)) is False


def test_same_password_gets_a_fresh_salt():
    hasher = PasswordHasher(rounds=4)
    assert hasher.hash_sync("pw") != hasher.hash_sync("pw")


def test_old_cost_still_verifies_after_retuning():
    old = PasswordHasher(rounds=4).hash_sync("pw")
    retuned = PasswordHasher(rounds=6)

    assert old.startswith("$2b$04$")
    assert retuned.verify_sync("pw", old) is True
    assert retuned.hash_sync("pw").startswith("$2b$06$")


def test_malformed_or_empty_credentials_do_not_verify():
    hasher = PasswordHasher(rounds=4)
    assert hasher.verify_sync("pw", "not-a-bcrypt-hash") is False
    assert hasher.verify_sync("pw", "") is False
    assert hasher.verify_sync("", hasher.hash_sync("pw")) is False


def test_empty_password_is_rejected():
    with pytest.raises(ValueError):
        PasswordHasher(rounds=4).hash_sync("")
