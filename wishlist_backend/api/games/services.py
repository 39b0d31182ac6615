# wishlist_backend/api/games/services.py
import logging
from typing import List

from wishlist_backend.core.exceptions import (
    ServiceError, RequestValidationError, ConflictError, NotFoundError, InternalError
)
from wishlist_backend.models.game import Game
from wishlist_backend.services.game_store import GameStore
from wishlist_backend.services.user_store import UserStore

logger = logging.getLogger(__name__)


class GameService:
    """
    게임 카탈로그 조회와 사용자 위시리스트 관리를 담당하는 서비스 클래스
    """

    def __init__(self, game_store: GameStore, user_store: UserStore):
        self.game_store = game_store
        self.user_store = user_store

    def list_games(self) -> List[Game]:
        try:
            return self.game_store.list_games()
        except Exception as e:
            logger.error(f"게임 목록 조회 실패: {e}", exc_info=True)
            raise InternalError("Error fetching games.") from e

    def search_games(self, name: str) -> List[Game]:
        """
        이름으로 게임을 검색합니다 (대소문자 구분 없는 부분 일치).

        Firestore는 부분 문자열 검색을 지원하지 않으므로 전체 목록을 가져와서 필터링합니다.
        """
        query = (name or "").strip().lower()
        if not query:
            raise RequestValidationError("Search query 'name' is required")
        games = self.list_games()
        results = [game for game in games if query in game.name.lower()]
        logger.info(f"게임 검색 완료: '{query}' -> {len(results)}개")
        return results

    def get_game(self, game_id: str) -> Game:
        try:
            game = self.game_store.get_game(game_id)
        except Exception as e:
            logger.error(f"게임 상세 조회 실패 (game_id: {game_id}): {e}", exc_info=True)
            raise InternalError("Error fetching game details.") from e
        if not game:
            raise NotFoundError("Game not found", error_code="GAME_NOT_FOUND")
        return game

    def _require_user(self, user_id: str):
        user = self.user_store.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found", error_code="USER_NOT_FOUND")
        return user

    def add_to_wishlist(self, user_id: str, game_id: str) -> None:
        try:
            self._require_user(user_id)
            if not self.game_store.get_game(game_id):
                raise NotFoundError("Game not found", error_code="GAME_NOT_FOUND")
            added = self.user_store.add_to_wishlist(user_id, game_id)
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f"위시리스트 추가 실패 (user_id: {user_id}, game_id: {game_id}): {e}", exc_info=True)
            raise InternalError("Error adding game to wishlist") from e

        if added is None:
            raise NotFoundError("User not found", error_code="USER_NOT_FOUND")
        if not added:
            raise ConflictError("Game already in wishlist")
        logger.info(f"위시리스트 추가 (user_id: {user_id}, game_id: {game_id})")

    def remove_from_wishlist(self, user_id: str, game_id: str) -> None:
        try:
            removed = self.user_store.remove_from_wishlist(user_id, game_id)
        except Exception as e:
            logger.error(f"위시리스트 삭제 실패 (user_id: {user_id}, game_id: {game_id}): {e}", exc_info=True)
            raise InternalError("Error removing game from wishlist") from e

        if removed is None:
            raise NotFoundError("User not found", error_code="USER_NOT_FOUND")
        if not removed:
            raise NotFoundError("Game not in wishlist", error_code="GAME_NOT_IN_WISHLIST")
        logger.info(f"위시리스트 삭제 (user_id: {user_id}, game_id: {game_id})")

    def get_wishlist(self, user_id: str) -> List[Game]:
        """위시리스트에 담긴 순서대로 게임 정보를 돌려줍니다. 삭제된 게임은 건너뜁니다."""
        try:
            user = self._require_user(user_id)
            games = self.game_store.get_games(user.wishlist)
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f"위시리스트 조회 실패 (user_id: {user_id}): {e}", exc_info=True)
            raise InternalError("Error fetching wishlist") from e
        return [games[game_id] for game_id in user.wishlist if game_id in games]
