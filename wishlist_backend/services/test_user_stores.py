# wishlist_backend/services/test_user_stores.py
"""
사용자 저장소 테스트. 인메모리 구현은 직접, Firestore 구현은 mock 클라이언트와 dict 기반 가짜 트랜잭션으로 확인합니다.

사용법: python -m pytest wishlist_backend/services/test_user_stores.py -v
"""

import uuid
from unittest.mock import MagicMock

import pytest
from firebase_admin import firestore

from wishlist_backend.models.user import (
    User, LocalCredential, FederatedCredential, ProfileVisibility
)
from wishlist_backend.services.memory_store import InMemoryUserStore
from wishlist_backend.services.user_store import (
    DuplicateField, FirestoreUserStore, _claim_id
)


def make_user(username="ada", email="ada@example.com", credential=None):
    return User(
        user_id=str(uuid.uuid4()),
        firstname="Ada",
        lastname="Lovelace",
        username=username,
        email=email,
        credential=credential or LocalCredential(password_hash="hash"),
    )


@pytest.fixture
def store():
    return InMemoryUserStore()


def test_create_reports_duplicate_field(store):
    assert store.create(make_user()).user is not None

    assert store.create(make_user(username="other")).duplicate == DuplicateField.EMAIL
    assert store.create(make_user(email="other@example.com")).duplicate == DuplicateField.USERNAME
    assert len(store) == 1


def test_returned_users_are_copies(store):
    created = store.create(make_user()).user
    created.wishlist.append("g-1")
    created.username = "mutated"

    stored = store.find_by_id(created.user_id)
    assert stored.wishlist == []
    assert stored.username == "ada"


def test_username_change_releases_old_name(store):
    ada = store.create(make_user()).user
    bob = store.create(make_user(username="bob", email="bob@example.com")).user

    assert store.update_profile(ada.user_id, {"username": "bob"}).duplicate == DuplicateField.USERNAME
    assert store.update_profile(ada.user_id, {"username": "countess"}).user.username == "countess"
    assert store.find_by_username("ada") is None
    # 이전 사용자명은 다른 사용자가 사용할 수 있어야 함
    assert store.update_profile(bob.user_id, {"username": "ada"}).user.username == "ada"


def test_update_profile_unknown_user(store):
    result = store.update_profile("missing", {"username": "x"})

    assert result.user is None and result.duplicate is None


def test_set_visibility(store):
    user = store.create(make_user()).user

    updated = store.set_visibility(user.user_id, ProfileVisibility.PRIVATE)

    assert updated.profile_visibility == ProfileVisibility.PRIVATE
    assert store.set_visibility("missing", ProfileVisibility.PRIVATE) is None


def test_wishlist_add_remove(store):
    user = store.create(make_user()).user

    assert store.add_to_wishlist(user.user_id, "g-1") is True
    assert store.add_to_wishlist(user.user_id, "g-1") is False
    assert store.add_to_wishlist("missing", "g-1") is None
    assert store.remove_from_wishlist(user.user_id, "g-1") is True
    assert store.remove_from_wishlist(user.user_id, "g-1") is False


def test_user_document_keeps_credential_variant():
    for credential in (LocalCredential(password_hash="pbkdf2:sha256$abc"), FederatedCredential()):
        user = make_user(credential=credential)

        restored = User.from_document(user.to_document())

        assert restored.credential == credential
        assert restored.profile_visibility == ProfileVisibility.PUBLIC


def test_claim_id_escapes_slashes():
    assert "/" not in _claim_id("weird/name")
    assert _claim_id("ada") == "ada"


def test_firestore_find_by_id():
    user = make_user(credential=FederatedCredential())
    snapshot = MagicMock(exists=True)
    snapshot.to_dict.return_value = user.to_document()
    db = MagicMock()
    db.collection.return_value.document.return_value.get.return_value = snapshot

    found = FirestoreUserStore(db=db).find_by_id(user.user_id)

    assert found.user_id == user.user_id
    assert isinstance(found.credential, FederatedCredential)


def test_firestore_find_by_email_queries_email_field():
    user = make_user()
    snapshot = MagicMock()
    snapshot.to_dict.return_value = user.to_document()
    db = MagicMock()
    users_ref = db.collection.return_value
    users_ref.where.return_value.limit.return_value.stream.return_value = iter([snapshot])

    found = FirestoreUserStore(db=db).find_by_email("ada@example.com")

    users_ref.where.assert_called_with('email', '==', 'ada@example.com')
    assert found.username == "ada"


def test_firestore_find_missing_returns_none():
    db = MagicMock()
    db.collection.return_value.where.return_value.limit.return_value.stream.return_value = iter([])
    db.collection.return_value.document.return_value.get.return_value = MagicMock(exists=False)
    store = FirestoreUserStore(db=db)

    assert store.find_by_username("ghost") is None
    assert store.find_by_id("ghost") is None


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self.exists = data is not None
        self._data = data

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeDocumentRef:
    def __init__(self, docs, key):
        self._docs = docs
        self.key = key

    def get(self, transaction=None):
        return FakeSnapshot(self.key[1], self._docs.get(self.key))


class FakeTransaction:
    """firestore.transactional이 호출하는 내부 메서드만 흉내 내고 쓰기는 즉시 반영합니다."""
    _read_only = False
    _max_attempts = 1

    def __init__(self, docs):
        self._docs = docs
        self._id = None

    def _clean_up(self):
        self._id = None

    def _begin(self, retry_id=None):
        self._id = b"fake-transaction"

    def _commit(self):
        self._clean_up()
        return []

    def _rollback(self):
        self._clean_up()

    def create(self, ref, data):
        assert ref.key not in self._docs
        self._docs[ref.key] = dict(data)

    def set(self, ref, data):
        self._docs[ref.key] = dict(data)

    def delete(self, ref):
        self._docs.pop(ref.key, None)

    def update(self, ref, updates):
        current = self._docs[ref.key]
        for field, value in updates.items():
            items = list(current.get(field) or [])
            if isinstance(value, firestore.ArrayUnion):
                current[field] = items + [v for v in value.values if v not in items]
            elif isinstance(value, firestore.ArrayRemove):
                current[field] = [v for v in items if v not in value.values]
            else:
                current[field] = value


class FakeCollection:
    def __init__(self, docs, name):
        self._docs = docs
        self._name = name

    def document(self, doc_id):
        return FakeDocumentRef(self._docs, (self._name, doc_id))


class FakeFirestore:
    def __init__(self):
        self.docs = {}

    def collection(self, name):
        return FakeCollection(self.docs, name)

    def transaction(self):
        return FakeTransaction(self.docs)

    def keys(self, collection):
        return sorted(doc_id for name, doc_id in self.docs if name == collection)


@pytest.fixture
def fake_db():
    return FakeFirestore()


def test_firestore_create_writes_user_and_claims(fake_db):
    store = FirestoreUserStore(db=fake_db)
    user = make_user()

    result = store.create(user)

    assert result.user is user
    assert fake_db.keys('usernames') == ["ada"]
    assert fake_db.keys('emails') == [_claim_id("ada@example.com")]
    assert fake_db.docs[('users', user.user_id)]['username'] == "ada"


def test_firestore_create_rejects_taken_email_and_username(fake_db):
    store = FirestoreUserStore(db=fake_db)
    store.create(make_user())

    email_taken = store.create(make_user(username="other"))
    username_taken = store.create(make_user(email="other@example.com"))

    assert email_taken.duplicate == DuplicateField.EMAIL
    assert username_taken.duplicate == DuplicateField.USERNAME
    assert len(fake_db.keys('users')) == 1
    assert fake_db.keys('usernames') == ["ada"]


def test_firestore_rename_into_taken_username_leaves_record(fake_db):
    store = FirestoreUserStore(db=fake_db)
    ada = make_user()
    store.create(ada)
    store.create(make_user(username="bob", email="bob@example.com"))

    result = store.update_profile(ada.user_id, {"username": "bob"})

    assert result.duplicate == DuplicateField.USERNAME
    assert result.user is None
    assert fake_db.docs[('users', ada.user_id)]['username'] == "ada"
    assert fake_db.keys('usernames') == ["ada", "bob"]


def test_firestore_rename_moves_username_claim(fake_db):
    store = FirestoreUserStore(db=fake_db)
    ada = make_user()
    store.create(ada)

    result = store.update_profile(ada.user_id, {"username": "countess", "profile_picture": "pic.png"})

    assert result.user.username == "countess"
    assert result.user.profile_picture == "pic.png"
    assert fake_db.keys('usernames') == ["countess"]
    # 해제된 사용자명으로 새 사용자를 만들 수 있어야 함
    assert store.create(make_user(email="new@example.com")).user is not None


def test_firestore_update_profile_unknown_user(fake_db):
    result = FirestoreUserStore(db=fake_db).update_profile("missing", {"username": "x"})

    assert result.user is None and result.duplicate is None


def test_firestore_wishlist_add_remove(fake_db):
    store = FirestoreUserStore(db=fake_db)
    user = make_user()
    store.create(user)

    assert store.add_to_wishlist(user.user_id, "g-1") is True
    assert store.add_to_wishlist(user.user_id, "g-1") is False
    assert fake_db.docs[('users', user.user_id)]['wishlist'] == ["g-1"]
    assert store.remove_from_wishlist(user.user_id, "g-1") is True
    assert store.remove_from_wishlist(user.user_id, "g-1") is False
    assert store.add_to_wishlist("missing", "g-1") is None
