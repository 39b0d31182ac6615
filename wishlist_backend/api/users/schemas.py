# wishlist_backend/api/users/schemas.py
from marshmallow import Schema, fields, EXCLUDE

from wishlist_backend.models.user import ProfileVisibility


class UserProfileResponseSchema(Schema):
    """
    GET /api/users/{user_id}
    사용자 문서를 응답할 때 사용하는 스키마. 자격 증명(credential)은
    필드로 정의하지 않으므로 어떤 계정 유형이든 응답에 포함되지 않습니다.
    """
    user_id = fields.Str(data_key="userId", dump_only=True)
    firstname = fields.Str()
    lastname = fields.Str()
    username = fields.Str()
    email = fields.Str()
    profile_picture = fields.Str(data_key="profilePicture")
    profile_visibility = fields.Enum(ProfileVisibility, by_value=True, data_key="profileVisibility")
    wishlist = fields.List(fields.Str())
    created_at = fields.DateTime(data_key="createdAt")


class ProfileUpdateSchema(Schema):
    """PUT /api/users/{user_id}/profile — 두 필드 모두 선택 사항입니다."""
    class Meta:
        unknown = EXCLUDE

    username = fields.Str(allow_none=True)
    profile_picture = fields.Str(data_key="profilePicture", allow_none=True)


class VisibilityUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    profile_visibility = fields.Enum(
        ProfileVisibility, by_value=True, required=True, data_key="profileVisibility",
        error_messages={"required": "profileVisibility is required."}
    )
