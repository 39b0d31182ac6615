# wishlist_backend/models/game.py
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass
class Game:
    """
    Firestore 'games' 컬렉션의 문서 구조. 위시리스트는 game_id로만 참조합니다.
    """
    game_id: str
    name: str
    genre: Optional[str] = None
    platform: Optional[str] = None
    release_date: Optional[str] = None
    cover_image: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None

    def to_document(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_document(cls, game_id: str, data: Dict[str, Any]) -> "Game":
        return cls(
            game_id=game_id,
            name=data.get("name", ""),
            genre=data.get("genre"),
            platform=data.get("platform"),
            release_date=data.get("release_date"),
            cover_image=data.get("cover_image"),
            description=data.get("description"),
            price=data.get("price"),
        )
