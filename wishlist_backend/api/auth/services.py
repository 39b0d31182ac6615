# wishlist_backend/api/auth/services.py
import uuid
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from wishlist_backend.core.exceptions import (
    ServiceError, RequestValidationError, ConflictError, AuthError, InternalError
)
from wishlist_backend.core.security import PasswordHasher, TokenIssuer
from wishlist_backend.models.user import User, FederatedCredential
from wishlist_backend.services.google_auth_service import GoogleAuthService
from wishlist_backend.services.user_store import UserStore, DuplicateField

logger = logging.getLogger(__name__)

ACCOUNT_EXISTS_MESSAGE = "You already have an account with this email or username"
INVALID_CREDENTIALS_MESSAGE = "Invalid username or password"
USERNAME_EXISTS_MESSAGE = "Username already exists"


@dataclass
class AuthResult:
    user: User
    token: str
    created: bool = False


def split_display_name(name: Optional[str]) -> Tuple[str, str]:
    """
    "이름 성" 형태의 표시 이름을 (firstname, lastname)으로 나눕니다.
    세 번째 이후 토큰(중간 이름 등)은 버립니다.
    """
    parts = (name or "").split()
    firstname = parts[0] if parts else "Unknown"
    lastname = parts[1] if len(parts) > 1 else ""
    return firstname, lastname


def email_local_part(email: str) -> str:
    return email.split('@')[0]


class IdentityReconciler:
    """
    로컬 자격 증명 또는 외부(Google) 신원 정보를 정확히 하나의 사용자 문서로
    매핑하고, 필요하면 생성한 뒤 Bearer 토큰을 발급합니다.

    저장소 실패는 InternalError로, 유일성 위반은 ConflictError로 변환되어
    호출자에게 저장소 내부가 드러나지 않습니다.
    """

    def __init__(self, user_store: UserStore, token_issuer: TokenIssuer,
                 password_hasher: Optional[PasswordHasher] = None,
                 google_auth: Optional[GoogleAuthService] = None):
        self.user_store = user_store
        self.token_issuer = token_issuer
        self.password_hasher = password_hasher or PasswordHasher()
        self.google_auth = google_auth or GoogleAuthService()

    def _issue(self, user: User, created: bool = False) -> AuthResult:
        token = self.token_issuer.issue(user.user_id, user.username)
        return AuthResult(user=user, token=token, created=created)

    # --- 로컬 회원가입 ---
    def register_local(self, firstname: str, lastname: str, username: str, email: str, password: str) -> AuthResult:
        if not all([firstname, lastname, username, email, password]):
            raise RequestValidationError("All fields are required")

        try:
            if self.user_store.find_by_email_or_username(email, username):
                raise ConflictError(ACCOUNT_EXISTS_MESSAGE)

            new_user = User(
                user_id=str(uuid.uuid4()),
                firstname=firstname,
                lastname=lastname,
                username=username,
                email=email,
                credential=self.password_hasher.hash(password),
            )
            result = self.user_store.create(new_user)
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f"회원가입 처리 중 저장소 오류 (username: {username}): {e}", exc_info=True)
            raise InternalError("Internal server error") from e

        # 조회와 생성 사이에 다른 요청이 같은 값을 선점한 경우
        if result.duplicate:
            raise ConflictError(ACCOUNT_EXISTS_MESSAGE)

        logger.info(f"신규 로컬 사용자 생성 (user_id: {result.user.user_id})")
        return self._issue(result.user, created=True)

    # --- 로컬 로그인 ---
    def authenticate_local(self, username: str, password: str) -> AuthResult:
        if not username or not password:
            raise RequestValidationError("Username and password are required")

        try:
            user = self.user_store.find_by_username(username)
        except Exception as e:
            logger.error(f"로그인 처리 중 저장소 오류 (username: {username}): {e}", exc_info=True)
            raise InternalError("Internal server error") from e

        # 존재하지 않는 사용자, 비밀번호 불일치, 외부 인증 전용 계정 모두 같은 메시지로 응답합니다.
        if not user or not self.password_hasher.verify(password, user.credential):
            raise AuthError(INVALID_CREDENTIALS_MESSAGE)

        logger.info(f"로컬 로그인 성공 (user_id: {user.user_id})")
        return self._issue(user)

    # --- Google 신원 조정 (가입/로그인 공용) ---
    def reconcile_federated(self, email: Optional[str] = None, firstname: Optional[str] = None, lastname: Optional[str] = None,
                            username: Optional[str] = None, name: Optional[str] = None,
                            picture: Optional[str] = None) -> AuthResult:
        """
        이메일로 기존 사용자를 찾고, 없으면 외부 인증 전용 계정을 생성합니다.
        기존 사용자의 프로필은 어떤 경우에도 수정하지 않습니다.
        """
        if not email:
            raise RequestValidationError("Email is required")

        try:
            existing = self.user_store.find_by_email(email)
            if existing:
                logger.info(f"기존 사용자 Google 로그인 (user_id: {existing.user_id})")
                return self._issue(existing)

            if name and not (firstname or lastname):
                firstname, lastname = split_display_name(name)

            new_user = User(
                user_id=str(uuid.uuid4()),
                firstname=firstname or "Unknown",
                lastname=lastname or "",
                username=username or email_local_part(email),
                email=email,
                credential=FederatedCredential(provider="google"),
                profile_picture=picture or "",
            )
            result = self.user_store.create(new_user)

            if result.duplicate == DuplicateField.USERNAME:
                raise ConflictError(USERNAME_EXISTS_MESSAGE)
            if result.duplicate == DuplicateField.EMAIL:
                # 같은 이메일로 동시에 첫 로그인한 요청이 먼저 생성한 경우
                concurrent = self.user_store.find_by_email(email)
                if not concurrent:
                    raise InternalError("Internal server error")
                return self._issue(concurrent)
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f"Google 신원 조정 중 저장소 오류: {e}", exc_info=True)
            raise InternalError("Internal server error") from e

        logger.info(f"신규 Google 사용자 생성 (user_id: {result.user.user_id})")
        return self._issue(result.user, created=True)

    def federated_fields_from_token(self, id_token: str) -> Dict[str, Any]:
        """
        Google ID 토큰을 검증하고 reconcile_federated에 넘길 필드로 변환합니다.
        검증된 클레임이 클라이언트가 보낸 값보다 우선합니다.
        """
        claims = self.google_auth.verify_id_token(id_token)
        fields = {
            'email': claims.get('email'),
            'name': claims.get('name'),
            'picture': claims.get('picture'),
        }
        if claims.get('given_name'):
            fields['firstname'] = claims['given_name']
            fields['lastname'] = claims.get('family_name') or ""
        return {k: v for k, v in fields.items() if v is not None}
