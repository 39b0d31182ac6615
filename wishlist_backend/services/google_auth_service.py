# wishlist_backend/services/google_auth_service.py

import logging
from typing import Any, Dict, Optional

from google.auth.transport.requests import Request as GoogleAuthRequest
from google.oauth2 import id_token as google_id_token

from wishlist_backend.core.exceptions import AuthError

logger = logging.getLogger(__name__)


class GoogleAuthService:
    """Google Sign-In ID 토큰 검증을 담당하는 서비스 클래스입니다."""

    def __init__(self, client_id: Optional[str] = None):
        self.client_id = client_id

    @property
    def enabled(self) -> bool:
        return bool(self.client_id)

    def verify_id_token(self, token: str) -> Dict[str, Any]:
        """
        ID 토큰의 서명, 만료, audience(client_id)를 검증하고 클레임을 반환합니다.
        검증 실패 시 AuthError를 발생시킵니다.
        """
        if not self.enabled:
            raise AuthError("Google sign-in is not configured", error_code="GOOGLE_AUTH_DISABLED")
        try:
            claims = google_id_token.verify_oauth2_token(token, GoogleAuthRequest(), self.client_id)
        except ValueError as e:
            logger.warning(f"Google ID 토큰 검증 실패: {e}")
            raise AuthError("Invalid Google credential", error_code="INVALID_GOOGLE_CREDENTIAL")

        if not claims.get('email_verified', False):
            raise AuthError("Google account email is not verified", error_code="INVALID_GOOGLE_CREDENTIAL")
        return claims
