from datetime import timedelta

import pytest

from job_tracker.security.auth import create_access_token, verify_token
from job_tracker.security.passwords import hash_password, verify_password


def test_password_hash_round_trip() -> None:
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)


def test_overlong_password_is_rejected() -> None:
    with pytest.raises(ValueError):
        hash_password("x" * 73)


def test_verify_password_with_malformed_hash_is_false() -> None:
    assert verify_password("secret123", "not-a-bcrypt-hash") is False


def test_token_carries_identity_claims() -> None:
    token = create_access_token(5, "user@example.com", roles=["User"])
    payload = verify_token(token)
    assert payload["sub"] == "5"
    assert payload["email"] == "user@example.com"
    assert payload["roles"] == ["User"]
    assert payload["jti"]


def test_tokens_are_unique_and_expire() -> None:
    assert create_access_token(1, "a@example.com") != create_access_token(1, "a@example.com")
    expired = create_access_token(1, "a@example.com", expires_delta=timedelta(seconds=-1))
    assert verify_token(expired) is None
    assert verify_token("garbage") is None
