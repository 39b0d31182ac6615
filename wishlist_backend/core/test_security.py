# wishlist_backend/core/test_security.py
"""
비밀번호 해시 및 토큰 발급기 테스트

사용법: python -m pytest wishlist_backend/core/test_security.py -v
"""

import jwt
import pytest
from datetime import datetime, timedelta, timezone

from wishlist_backend.core.exceptions import AuthError
from wishlist_backend.core.security import PasswordHasher, TokenIssuer
from wishlist_backend.models.user import FederatedCredential, LocalCredential

SECRET = "unit-test-secret-key-with-enough-length"


def test_password_hash_and_verify():
    hasher = PasswordHasher()
    credential = hasher.hash("s3cret")

    assert isinstance(credential, LocalCredential)
    assert credential.password_hash != "s3cret"
    assert hasher.verify("s3cret", credential)
    assert not hasher.verify("wrong", credential)


def test_federated_credential_never_verifies():
    """외부 인증 전용 계정은 어떤 비밀번호로도 검증되지 않아야 함"""
    hasher = PasswordHasher()
    for guess in ["googleAuth", "auth0_password", "", "anything"]:
        assert not hasher.verify(guess, FederatedCredential())


def test_issued_token_decodes_to_claims():
    issuer = TokenIssuer(SECRET)
    token = issuer.issue("user-1", "ada")

    assert issuer.decode(token) == {"userId": "user-1", "username": "ada"}


def test_token_valid_for_seven_days():
    issuer = TokenIssuer(SECRET)
    issued_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
    token = issuer.issue("user-1", "ada", now=issued_at)

    payload = jwt.decode(token, SECRET, algorithms=["HS256"], options={"verify_exp": False})
    assert payload["exp"] - payload["iat"] == int(timedelta(days=7).total_seconds())
    assert payload["sub"] == "user-1"
    assert payload["type"] == "access"


def test_expired_token_is_rejected():
    issuer = TokenIssuer(SECRET)
    token = issuer.issue("user-1", "ada", now=datetime.now(timezone.utc) - timedelta(days=8))

    with pytest.raises(AuthError) as exc_info:
        issuer.decode(token)
    assert exc_info.value.error_code == "TOKEN_EXPIRED"
    assert exc_info.value.status_code == 401


def test_token_signed_with_other_secret_is_rejected():
    token = TokenIssuer("another-secret-key-with-enough-length").issue("user-1", "ada")

    with pytest.raises(AuthError):
        TokenIssuer(SECRET).decode(token)


def test_issuer_requires_secret():
    with pytest.raises(ValueError):
        TokenIssuer("")
