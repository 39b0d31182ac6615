# wishlist_backend/services/game_store.py
from typing import Dict, List, Optional

from firebase_admin import firestore

from wishlist_backend.models.game import Game


class GameStore:
    """게임 카탈로그 저장소 인터페이스"""

    def list_games(self) -> List[Game]:
        raise NotImplementedError

    def get_game(self, game_id: str) -> Optional[Game]:
        raise NotImplementedError

    def get_games(self, game_ids: List[str]) -> Dict[str, Game]:
        """game_id -> Game 매핑. 존재하지 않는 ID는 결과에서 빠집니다."""
        raise NotImplementedError


class FirestoreGameStore(GameStore):

    def __init__(self, db=None):
        self.db = db
        self.games_ref = db.collection('games') if db is not None else None

    def init_app(self, app=None):
        self.db = self.db or firestore.client()
        self.games_ref = self.db.collection('games')

    def list_games(self) -> List[Game]:
        docs = self.games_ref.order_by('name').stream()
        return [Game.from_document(doc.id, doc.to_dict()) for doc in docs]

    def get_game(self, game_id: str) -> Optional[Game]:
        doc = self.games_ref.document(game_id).get()
        if not doc.exists:
            return None
        return Game.from_document(doc.id, doc.to_dict())

    def get_games(self, game_ids: List[str]) -> Dict[str, Game]:
        if not game_ids:
            return {}
        refs = [self.games_ref.document(game_id) for game_id in game_ids]
        # get_all은 요청 순서를 보장하지 않으므로 ID로 매핑해서 돌려줍니다.
        games = {}
        for doc in self.db.get_all(refs):
            if doc.exists:
                games[doc.id] = Game.from_document(doc.id, doc.to_dict())
        return games
