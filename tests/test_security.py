from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt as jose_jwt
from pydantic import ValidationError

from aacshare.app.core.config import Settings, settings
from aacshare.app.core.errors import InvalidToken
from aacshare.app.security import hashing, jwt


def test_access_token_round_trip():
    token = jwt.create_access_token(42)

    assert jwt.decode_access_token(token) == 42


def test_access_token_claims():
    token = jwt.create_access_token(7, expires_delta=timedelta(minutes=5))
    claims = jose_jwt.get_unverified_claims(token)

    assert claims["sub"] == "7"
    assert claims["exp"] - claims["iat"] == 300


def test_expired_access_token():
    token = jwt.create_access_token(1, expires_delta=timedelta(seconds=-10))

    with pytest.raises(InvalidToken):
        jwt.decode_access_token(token)


def test_access_token_signed_with_other_key():
    token = jose_jwt.encode(
        {"sub": "1", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        "another-secret-key-of-sufficient-length!",
        algorithm="HS256",
    )

    with pytest.raises(InvalidToken):
        jwt.decode_access_token(token)


@pytest.mark.parametrize(
    "claims",
    [
        {"exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        {"sub": "not-a-number", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        {"sub": "1"},
    ],
)
def test_access_token_with_bad_claims(claims):
    token = jose_jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    with pytest.raises(InvalidToken):
        jwt.decode_access_token(token)


def test_garbage_access_token():
    with pytest.raises(InvalidToken):
        jwt.decode_access_token("not.a.jwt")


def test_refresh_tokens_are_unique():
    assert jwt.generate_refresh_token() != jwt.generate_refresh_token()


def test_password_hash():
    hashed = hashing.get_password_hash("secret")

    assert hashed != "secret"
    assert hashing.verify_password("secret", hashed)
    assert not hashing.verify_password("Secret", hashed)
    assert hashing.get_password_hash("secret") != hashed


def test_short_secret_key_is_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, SECRET_KEY="too-short", DATABASE_URL="sqlite:///x.db")


def test_database_url_is_required(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("DB_HOST", raising=False)

    with pytest.raises(ValidationError):
        Settings(_env_file=None, SECRET_KEY="x" * 32)


def test_database_url_from_parts(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)

    config = Settings(
        _env_file=None,
        SECRET_KEY="x" * 32,
        DB_HOST="db",
        DB_USERNAME="audio",
        DB_PASSWORD="p@ss",
        DB_NAME="storage",
    )

    assert config.DATABASE_URL == "postgresql+asyncpg://audio:p%40ss@db:5432/storage?ssl=disable"


@pytest.mark.parametrize(
    "url, expected",
    [
        ("postgres://u:p@h/db", "postgresql+asyncpg://u:p@h/db"),
        ("postgresql://u:p@h/db", "postgresql+asyncpg://u:p@h/db"),
        ("sqlite:///./a.db", "sqlite+aiosqlite:///./a.db"),
    ],
)
def test_database_url_is_normalized(url, expected):
    config = Settings(_env_file=None, SECRET_KEY="x" * 32, DATABASE_URL=url)

    assert config.DATABASE_URL == expected
