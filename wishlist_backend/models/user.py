# wishlist_backend/models/user.py
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Union

from wishlist_backend.utils.datetime_utils import DateTimeUtils


class ProfileVisibility(Enum):
    PUBLIC = "public"
    PRIVATE = "private"


@dataclass(frozen=True)
class LocalCredential:
    """비밀번호로 로그인하는 계정의 자격 증명 (해시만 보관)"""
    password_hash: str


@dataclass(frozen=True)
class FederatedCredential:
    """외부 인증 제공자(Google)로만 로그인하는 계정. 로컬 비밀번호가 없습니다."""
    provider: str = "google"


Credential = Union[LocalCredential, FederatedCredential]


def credential_to_dict(credential: Credential) -> Dict[str, Any]:
    if isinstance(credential, LocalCredential):
        return {"type": "local", "password_hash": credential.password_hash}
    return {"type": "federated", "provider": credential.provider}


def credential_from_dict(data: Dict[str, Any]) -> Credential:
    if data.get("type") == "local":
        return LocalCredential(password_hash=data["password_hash"])
    return FederatedCredential(provider=data.get("provider", "google"))


@dataclass
class User:
    """
    Firestore 'users' 컬렉션의 문서 구조를 정의하는 데이터클래스.

    credential은 LocalCredential 또는 FederatedCredential 중 하나이며,
    응답 스키마에는 절대 포함되지 않습니다.
    """
    user_id: str
    firstname: str
    lastname: str
    username: str
    email: str
    credential: Credential
    profile_picture: str = ""
    profile_visibility: ProfileVisibility = ProfileVisibility.PUBLIC
    wishlist: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=DateTimeUtils.now)

    def to_document(self) -> Dict[str, Any]:
        """Firestore에 저장할 딕셔너리로 변환합니다."""
        return {
            "user_id": self.user_id,
            "firstname": self.firstname,
            "lastname": self.lastname,
            "username": self.username,
            "email": self.email,
            "credential": credential_to_dict(self.credential),
            "profile_picture": self.profile_picture,
            "profile_visibility": self.profile_visibility.value,
            "wishlist": list(self.wishlist),
            "created_at": self.created_at,
        }

    @classmethod
    def from_document(cls, data: Dict[str, Any]) -> "User":
        return cls(
            user_id=data["user_id"],
            firstname=data.get("firstname", ""),
            lastname=data.get("lastname", ""),
            username=data["username"],
            email=data["email"],
            credential=credential_from_dict(data.get("credential") or {}),
            profile_picture=data.get("profile_picture") or "",
            profile_visibility=ProfileVisibility(data.get("profile_visibility", ProfileVisibility.PUBLIC.value)),
            wishlist=list(data.get("wishlist") or []),
            created_at=DateTimeUtils.from_firestore(data.get("created_at")) or DateTimeUtils.now(),
        )
