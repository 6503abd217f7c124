from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

from portfolio_api.infrastructure.security.password_hasher import PasswordHasher
from portfolio_api.infrastructure.security.session_token_service import JwtSessionTokenService


def test_password_hasher_round_trip_and_rejects_wrong_password():
    hasher = PasswordHasher(rounds=4)

    password_hash = hasher.hash("correct horse")

    assert password_hash.startswith("$2")
    assert password_hash != "correct horse"
    assert hasher.verify("correct horse", password_hash) is True
    assert hasher.verify("wrong horse", password_hash) is False


def test_password_hasher_returns_false_for_malformed_hash():
    assert PasswordHasher(rounds=4).verify("anything", "not-a-bcrypt-hash") is False


def test_default_password_hasher_uses_twelve_rounds():
    password_hash = PasswordHasher().hash("correct horse")

    assert password_hash.split("$")[2] == "12"


def test_session_tokens_are_random_and_hashed():
    service = JwtSessionTokenService(secret="s3cret", ttl_days=7)

    first = service.generate_token()
    second = service.generate_token()

    assert first != second
    assert len(first) >= 64
    assert service.hash_token(token=first) == service.hash_token(token=first)
    assert service.hash_token(token=first) != first
    assert service.ttl_seconds == 7 * 24 * 3600


def test_session_token_sign_and_unsign():
    service = JwtSessionTokenService(secret="s3cret", ttl_days=7)
    expires_at = service.expires_at(now=datetime.now(timezone.utc))

    signed = service.sign(token="opaque", expires_at=expires_at)

    assert service.unsign(signed_value=signed) == "opaque"


def test_session_token_unsign_rejects_tampering_and_other_secrets():
    service = JwtSessionTokenService(secret="s3cret", ttl_days=7)
    signed = service.sign(token="opaque", expires_at=datetime.now(timezone.utc) + timedelta(days=1))

    assert service.unsign(signed_value=signed[:-2] + "xx") is None
    assert JwtSessionTokenService(secret="other", ttl_days=7).unsign(signed_value=signed) is None
    assert service.unsign(signed_value="not-a-jwt") is None


def test_session_token_unsign_rejects_expired_or_foreign_payloads():
    service = JwtSessionTokenService(secret="s3cret", ttl_days=7)
    expired = service.sign(token="opaque", expires_at=datetime.now(timezone.utc) - timedelta(seconds=5))
    foreign = jwt.encode({"sid": "opaque", "type": "access"}, "s3cret", algorithm="HS256")

    assert service.unsign(signed_value=expired) is None
    assert service.unsign(signed_value=foreign) is None
