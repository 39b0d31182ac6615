# wishlist_backend/api/games/schemas.py
from marshmallow import Schema, fields, validate, EXCLUDE


class GameSchema(Schema):
    """게임 정보 응답 스키마"""
    game_id = fields.Str(data_key="id", dump_only=True)
    name = fields.Str(required=True)
    genre = fields.Str(allow_none=True)
    platform = fields.Str(allow_none=True)
    release_date = fields.Str(data_key="releaseDate", allow_none=True)
    cover_image = fields.Str(data_key="coverImage", allow_none=True)
    description = fields.Str(allow_none=True)
    price = fields.Float(allow_none=True)


class WishlistItemSchema(Schema):
    """POST/DELETE /api/games/wishlist 요청 본문"""
    class Meta:
        unknown = EXCLUDE

    user_id = fields.Str(required=True, data_key="userId", validate=validate.Length(min=1))
    game_id = fields.Str(required=True, data_key="gameId", validate=validate.Length(min=1))
