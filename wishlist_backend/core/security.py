# wishlist_backend/core/security.py
import uuid
import jwt
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional
from werkzeug.security import generate_password_hash, check_password_hash

from wishlist_backend.core.exceptions import AuthError
from wishlist_backend.models.user import Credential, LocalCredential

ALGORITHM = "HS256"
TOKEN_LIFETIME = timedelta(days=7)


class PasswordHasher:
    """단방향 비밀번호 해시 및 검증"""

    def hash(self, password: str) -> LocalCredential:
        return LocalCredential(password_hash=generate_password_hash(password))

    def verify(self, password: str, credential: Credential) -> bool:
        """
        LocalCredential에 대해서만 비밀번호를 비교합니다.
        FederatedCredential은 비교할 해시가 없으므로 항상 실패합니다.
        """
        if not isinstance(credential, LocalCredential):
            return False
        return check_password_hash(credential.password_hash, password)


class TokenIssuer:
    """
    {userId, username} 클레임을 담은 Bearer 토큰을 발급/검증합니다.

    서명 키는 생성 시 주입받습니다. 발급되는 토큰은 flask-jwt-extended의
    @jwt_required()에서도 그대로 검증됩니다 (sub = userId, type = access).
    """

    def __init__(self, secret_key: str, expires_delta: timedelta = TOKEN_LIFETIME, algorithm: str = ALGORITHM):
        if not secret_key:
            raise ValueError("JWT secret key is not configured.")
        self.secret_key = secret_key
        self.expires_delta = expires_delta
        self.algorithm = algorithm

    def issue(self, user_id: str, username: str, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "userId": user_id,
            "username": username,
            "type": "access",
            "jti": str(uuid.uuid4()),
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> Dict[str, str]:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthError("Token has expired", error_code="TOKEN_EXPIRED")
        except jwt.InvalidTokenError:
            raise AuthError("Invalid token", error_code="INVALID_TOKEN")
        return {"userId": payload["userId"], "username": payload["username"]}
