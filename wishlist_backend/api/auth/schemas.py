# wishlist_backend/api/auth/schemas.py
from marshmallow import Schema, fields, validate, pre_load, EXCLUDE

_non_empty = validate.Length(min=1)
SIGNUP_FIELDS = ("firstname", "lastname", "username", "email", "password")


class _FederatedSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    @pre_load
    def blank_email_to_none(self, data, **kwargs):
        # 빈 이메일은 누락으로 보고 서비스 계층의 "Email is required"로 처리합니다.
        if isinstance(data, dict) and data.get("email") == "":
            data = dict(data, email=None)
        return data


class SignupSchema(Schema):
    """로컬 회원가입 요청. 다섯 필드 모두 필수입니다."""
    class Meta:
        unknown = EXCLUDE

    firstname = fields.Str(required=True, validate=_non_empty)
    lastname = fields.Str(required=True, validate=_non_empty)
    username = fields.Str(required=True, validate=_non_empty)
    email = fields.Email(required=True)
    password = fields.Str(required=True, validate=_non_empty, load_only=True)


class LoginSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    username = fields.Str(required=True, validate=_non_empty)
    password = fields.Str(required=True, validate=_non_empty, load_only=True)


class GoogleSignupSchema(_FederatedSchema):
    """
    Google 가입 요청. 클라이언트가 프로필 필드를 나누어 보냅니다.
    idToken이 있으면 서버에서 검증한 클레임이 우선합니다.
    """
    email = fields.Email(allow_none=True)
    firstname = fields.Str(allow_none=True)
    lastname = fields.Str(allow_none=True)
    username = fields.Str(allow_none=True)
    picture = fields.Str(data_key="profilePicture", allow_none=True)
    id_token = fields.Str(data_key="idToken", allow_none=True, load_only=True)


class GoogleLoginSchema(_FederatedSchema):
    """Google 로그인 요청. 표시 이름(name)을 하나의 문자열로 받습니다."""
    email = fields.Email(allow_none=True)
    name = fields.Str(allow_none=True)
    picture = fields.Str(allow_none=True)
    id_token = fields.Str(data_key="idToken", allow_none=True, load_only=True)
