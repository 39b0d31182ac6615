# wishlist_backend/services/memory_store.py
"""
프로세스 내 딕셔너리 기반 저장소. testing 설정과 로컬 개발(DATA_BACKEND=memory)에서 사용합니다.

Firestore 구현과 동일하게 이메일/사용자명 유일성을 저장소 수준에서 보장하며,
잠금(lock) 하나로 쓰기를 직렬화합니다.
"""
import copy
import threading
from typing import Any, Dict, List, Optional

from wishlist_backend.models.game import Game
from wishlist_backend.models.user import User, ProfileVisibility
from wishlist_backend.services.game_store import GameStore
from wishlist_backend.services.user_store import (
    UserStore, CreateResult, UpdateResult, DuplicateField
)


class InMemoryUserStore(UserStore):

    def __init__(self):
        self._lock = threading.Lock()
        self._users: Dict[str, User] = {}
        self._user_id_by_email: Dict[str, str] = {}
        self._user_id_by_username: Dict[str, str] = {}

    def init_app(self, app=None):
        pass

    def __len__(self):
        return len(self._users)

    def _get(self, user_id: Optional[str]) -> Optional[User]:
        # 호출자가 반환값을 수정해도 저장된 상태가 바뀌지 않도록 복사본을 돌려줍니다.
        user = self._users.get(user_id) if user_id else None
        return copy.deepcopy(user) if user else None

    def find_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            return self._get(user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            return self._get(self._user_id_by_email.get(email))

    def find_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            return self._get(self._user_id_by_username.get(username))

    def create(self, user: User) -> CreateResult:
        with self._lock:
            if user.email in self._user_id_by_email:
                return CreateResult(duplicate=DuplicateField.EMAIL)
            if user.username in self._user_id_by_username:
                return CreateResult(duplicate=DuplicateField.USERNAME)
            self._users[user.user_id] = copy.deepcopy(user)
            self._user_id_by_email[user.email] = user.user_id
            self._user_id_by_username[user.username] = user.user_id
            return CreateResult(user=self._get(user.user_id))

    def update_profile(self, user_id: str, changes: Dict[str, Any]) -> UpdateResult:
        with self._lock:
            user = self._users.get(user_id)
            if not user:
                return UpdateResult()

            new_username = changes.get('username')
            if new_username and new_username != user.username:
                owner = self._user_id_by_username.get(new_username)
                if owner and owner != user_id:
                    return UpdateResult(duplicate=DuplicateField.USERNAME)
                del self._user_id_by_username[user.username]
                self._user_id_by_username[new_username] = user_id
                user.username = new_username

            if 'profile_picture' in changes:
                user.profile_picture = changes['profile_picture']
            return UpdateResult(user=self._get(user_id))

    def set_visibility(self, user_id: str, visibility: ProfileVisibility) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            if not user:
                return None
            user.profile_visibility = visibility
            return self._get(user_id)

    def add_to_wishlist(self, user_id: str, game_id: str) -> Optional[bool]:
        with self._lock:
            user = self._users.get(user_id)
            if not user:
                return None
            if game_id in user.wishlist:
                return False
            user.wishlist.append(game_id)
            return True

    def remove_from_wishlist(self, user_id: str, game_id: str) -> Optional[bool]:
        with self._lock:
            user = self._users.get(user_id)
            if not user:
                return None
            if game_id not in user.wishlist:
                return False
            user.wishlist.remove(game_id)
            return True


class InMemoryGameStore(GameStore):

    def __init__(self, games: Optional[List[Game]] = None):
        self._games: Dict[str, Game] = {}
        for game in games or []:
            self.add_game(game)

    def init_app(self, app=None):
        pass

    def add_game(self, game: Game) -> Game:
        self._games[game.game_id] = copy.deepcopy(game)
        return game

    def list_games(self) -> List[Game]:
        return sorted((copy.deepcopy(g) for g in self._games.values()), key=lambda g: g.name)

    def get_game(self, game_id: str) -> Optional[Game]:
        game = self._games.get(game_id)
        return copy.deepcopy(game) if game else None

    def get_games(self, game_ids: List[str]) -> Dict[str, Game]:
        return {gid: copy.deepcopy(self._games[gid]) for gid in game_ids if gid in self._games}
