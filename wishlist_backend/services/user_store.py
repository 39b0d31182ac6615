# wishlist_backend/services/user_store.py
"""
사용자 문서 저장소 (Credential Store).

Firestore에는 유니크 인덱스가 없으므로 'usernames', 'emails' 컬렉션에
값 자체를 문서 ID로 하는 선점(claim) 문서를 두고, 사용자 문서와 같은
트랜잭션 안에서 생성합니다. 동시에 같은 값을 선점하려는 두 요청 중
하나는 트랜잭션 재시도 시 선점 문서를 발견하고 중복으로 판정됩니다.

중복은 예외가 아니라 CreateResult / UpdateResult의 duplicate 필드로 돌려줍니다.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional
from urllib.parse import quote

from firebase_admin import firestore

from wishlist_backend.models.user import User, ProfileVisibility
from wishlist_backend.utils.datetime_utils import DateTimeUtils

logger = logging.getLogger(__name__)


class DuplicateField(Enum):
    EMAIL = "email"
    USERNAME = "username"


@dataclass
class CreateResult:
    user: Optional[User] = None
    duplicate: Optional[DuplicateField] = None


@dataclass
class UpdateResult:
    """user와 duplicate가 모두 None이면 대상 사용자가 존재하지 않는 경우입니다."""
    user: Optional[User] = None
    duplicate: Optional[DuplicateField] = None


class UserStore:
    """사용자 저장소 인터페이스. Firestore 구현과 인메모리 구현이 있습니다."""

    def find_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def find_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def find_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def find_by_email_or_username(self, email: str, username: str) -> Optional[User]:
        return self.find_by_email(email) or self.find_by_username(username)

    def create(self, user: User) -> CreateResult:
        raise NotImplementedError

    def update_profile(self, user_id: str, changes: Dict[str, Any]) -> UpdateResult:
        """changes: 'username' 및/또는 'profile_picture' 키만 허용합니다."""
        raise NotImplementedError

    def set_visibility(self, user_id: str, visibility: ProfileVisibility) -> Optional[User]:
        raise NotImplementedError

    def add_to_wishlist(self, user_id: str, game_id: str) -> Optional[bool]:
        """추가했으면 True, 이미 있으면 False, 사용자가 없으면 None"""
        raise NotImplementedError

    def remove_from_wishlist(self, user_id: str, game_id: str) -> Optional[bool]:
        """제거했으면 True, 목록에 없었으면 False, 사용자가 없으면 None"""
        raise NotImplementedError


def _claim_id(value: str) -> str:
    # 문서 ID에는 '/'를 쓸 수 없으므로 퍼센트 인코딩합니다.
    return quote(value, safe='')


class FirestoreUserStore(UserStore):

    def __init__(self, db=None):
        self.db = db
        self.users_ref = None
        self.usernames_ref = None
        self.emails_ref = None
        if db is not None:
            self._bind(db)

    def init_app(self, app=None):
        """앱 초기화 과정에서 호출되어 Firestore 연결을 설정합니다."""
        self._bind(self.db or firestore.client())

    def _bind(self, db):
        self.db = db
        self.users_ref = db.collection('users')
        self.usernames_ref = db.collection('usernames')
        self.emails_ref = db.collection('emails')

    def _to_user(self, doc) -> User:
        return User.from_document(DateTimeUtils.from_firestore(doc.to_dict()))

    def _find_one(self, field_name: str, value: str) -> Optional[User]:
        query = self.users_ref.where(field_name, '==', value).limit(1).stream()
        user_doc = next(query, None)
        return self._to_user(user_doc) if user_doc else None

    def find_by_id(self, user_id: str) -> Optional[User]:
        doc = self.users_ref.document(user_id).get()
        return self._to_user(doc) if doc.exists else None

    def find_by_email(self, email: str) -> Optional[User]:
        return self._find_one('email', email)

    def find_by_username(self, username: str) -> Optional[User]:
        return self._find_one('username', username)

    def create(self, user: User) -> CreateResult:
        user_ref = self.users_ref.document(user.user_id)
        email_ref = self.emails_ref.document(_claim_id(user.email))
        username_ref = self.usernames_ref.document(_claim_id(user.username))
        user_data = DateTimeUtils.for_firestore(user.to_document())

        @firestore.transactional
        def _create_in_transaction(transaction):
            # 트랜잭션에서는 모든 읽기가 쓰기보다 먼저 와야 합니다.
            email_taken = email_ref.get(transaction=transaction).exists
            username_taken = username_ref.get(transaction=transaction).exists
            if email_taken:
                return DuplicateField.EMAIL
            if username_taken:
                return DuplicateField.USERNAME
            transaction.create(email_ref, {'user_id': user.user_id})
            transaction.create(username_ref, {'user_id': user.user_id})
            transaction.create(user_ref, user_data)
            return None

        duplicate = _create_in_transaction(self.db.transaction())
        if duplicate:
            logger.info(f"사용자 생성 거부: 중복된 {duplicate.value}")
            return CreateResult(duplicate=duplicate)
        return CreateResult(user=user)

    def update_profile(self, user_id: str, changes: Dict[str, Any]) -> UpdateResult:
        user_ref = self.users_ref.document(user_id)
        new_username = changes.get('username')
        new_username_ref = self.usernames_ref.document(_claim_id(new_username)) if new_username else None

        @firestore.transactional
        def _update_in_transaction(transaction):
            user_snapshot = user_ref.get(transaction=transaction)
            if not user_snapshot.exists:
                return UpdateResult()
            user_data = DateTimeUtils.from_firestore(user_snapshot.to_dict())
            old_username = user_data['username']

            moving_username = new_username_ref is not None and new_username != old_username
            if moving_username:
                claim = new_username_ref.get(transaction=transaction)
                if claim.exists and claim.to_dict().get('user_id') != user_id:
                    return UpdateResult(duplicate=DuplicateField.USERNAME)

            updates = {k: v for k, v in changes.items() if k in ('username', 'profile_picture')}
            if moving_username:
                transaction.delete(self.usernames_ref.document(_claim_id(old_username)))
                transaction.set(new_username_ref, {'user_id': user_id})
            if updates:
                transaction.update(user_ref, updates)
            user_data.update(updates)
            return UpdateResult(user=User.from_document(user_data))

        return _update_in_transaction(self.db.transaction())

    def set_visibility(self, user_id: str, visibility: ProfileVisibility) -> Optional[User]:
        user_ref = self.users_ref.document(user_id)
        doc = user_ref.get()
        if not doc.exists:
            return None
        user_ref.update({'profile_visibility': visibility.value})
        user_data = DateTimeUtils.from_firestore(doc.to_dict())
        user_data['profile_visibility'] = visibility.value
        return User.from_document(user_data)

    def _change_wishlist(self, user_id: str, game_id: str, add: bool) -> Optional[bool]:
        user_ref = self.users_ref.document(user_id)

        @firestore.transactional
        def _wishlist_transaction(transaction):
            snapshot = user_ref.get(transaction=transaction)
            if not snapshot.exists:
                return None
            present = game_id in (snapshot.to_dict().get('wishlist') or [])
            if add == present:
                return False
            op = firestore.ArrayUnion([game_id]) if add else firestore.ArrayRemove([game_id])
            transaction.update(user_ref, {'wishlist': op})
            return True

        return _wishlist_transaction(self.db.transaction())

    def add_to_wishlist(self, user_id: str, game_id: str) -> Optional[bool]:
        return self._change_wishlist(user_id, game_id, add=True)

    def remove_from_wishlist(self, user_id: str, game_id: str) -> Optional[bool]:
        return self._change_wishlist(user_id, game_id, add=False)
