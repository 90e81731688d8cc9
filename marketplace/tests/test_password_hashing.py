from __future__ import annotations

import pytest

from marketplace.application.services.password_hashing import WerkzeugPasswordHasher
from marketplace.application.services.tokens import generate_token, hash_token, verify_token

# Cheap parameters keep the suite fast; production uses scrypt:65536:8:1
FAST_METHOD = "scrypt:1024:8:1"


@pytest.fixture()
def hasher() -> WerkzeugPasswordHasher:
    return WerkzeugPasswordHasher(FAST_METHOD)


def test_round_trip(hasher: WerkzeugPasswordHasher) -> None:
    hashed = hasher.hash("Passw0rd!")

    assert hashed.startswith("scrypt:")
    assert hasher.verify("Passw0rd!", hashed) is True
    assert hasher.verify("Passw0rd?", hashed) is False


def test_hashes_are_salted(hasher: WerkzeugPasswordHasher) -> None:
    assert hasher.hash("Passw0rd!") != hasher.hash("Passw0rd!")


@pytest.mark.parametrize("password", ["", "   "])
def test_empty_password_cannot_be_hashed(hasher: WerkzeugPasswordHasher, password: str) -> None:
    with pytest.raises(ValueError):
        hasher.hash(password)


def test_verify_rejects_bad_input(hasher: WerkzeugPasswordHasher) -> None:
    hashed = hasher.hash("Passw0rd!")

    assert hasher.verify("", hashed) is False
    assert hasher.verify("Passw0rd!", "") is False
    assert hasher.verify("Passw0rd!", "not-a-hash") is False
    assert hasher.verify("Passw0rd!", "bogus:1:2$salt$digest") is False


def test_default_method_is_memory_hard() -> None:
    hashed = WerkzeugPasswordHasher().hash("Passw0rd!")

    assert hashed.startswith("scrypt:65536:8:1$")


def test_token_shape_and_uniqueness() -> None:
    token = generate_token()

    prefix, _, suffix = token.rpartition("-")
    assert len(prefix) == 36
    assert len(suffix) == 64
    assert generate_token() != token


def test_token_hashing() -> None:
    token = generate_token()
    digest = hash_token(token)

    assert len(digest) == 64
    assert hash_token(token) == digest
    assert verify_token(digest, token) is True
    assert verify_token(digest, token + "x") is False
