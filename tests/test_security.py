import uuid

import pytest
from jose import JWTError, jwt

from bookcatalog.core.jwt import create_access_token, decode_access_token, token_for_user
from bookcatalog.core.security import PasswordHash, PlaintextPassword, hash_password, verify_password
from bookcatalog.models.user import User, UserRole


def test_hash_is_salted_and_never_plaintext():
    first = hash_password(PlaintextPassword("Passw0rd!"))
    second = hash_password(PlaintextPassword("Passw0rd!"))
    assert first != second
    assert "Passw0rd!" not in first
    assert first.startswith("pbkdf2_sha256$")


def test_verify_password():
    stored = hash_password(PlaintextPassword("Passw0rd!"))
    assert verify_password(PlaintextPassword("Passw0rd!"), stored)
    assert not verify_password(PlaintextPassword("passw0rd!"), stored)


@pytest.mark.parametrize("stored", ["", "not-a-hash", "bcrypt$aa$bb", "pbkdf2_sha256$zz$yy"])
def test_verify_rejects_malformed_hashes(stored):
    assert not verify_password(PlaintextPassword("Passw0rd!"), PasswordHash(stored))


def test_token_carries_id_email_and_role():
    u = User(
        id=uuid.uuid4(),
        email="a@example.com",
        password_hash="x",
        first_name="Ann",
        last_name="Lee",
        role=UserRole.ADMIN,
    )
    payload = decode_access_token(token_for_user(u))
    assert payload["sub"] == str(u.id)
    assert payload["email"] == "a@example.com"
    assert payload["role"] == "admin"
    assert payload["exp"] > payload["iat"]


def test_decode_rejects_foreign_signature():
    forged = jwt.encode({"sub": "x"}, "other-secret", algorithm="HS256")
    with pytest.raises(JWTError):
        decode_access_token(forged)


def test_create_access_token_does_not_mutate_input():
    data = {"sub": "abc"}
    create_access_token(data)
    assert data == {"sub": "abc"}


def test_decode_rejects_expired_token():
    from jose import ExpiredSignatureError

    from bookcatalog.config import settings

    expired = jwt.encode({"sub": "x", "exp": 1}, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    with pytest.raises(ExpiredSignatureError):
        decode_access_token(expired)
