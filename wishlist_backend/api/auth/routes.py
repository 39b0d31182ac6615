# wishlist_backend/api/auth/routes.py

import logging
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required, get_jwt_identity, get_jwt
from marshmallow import ValidationError

from wishlist_backend.api.auth.schemas import (
    SIGNUP_FIELDS, SignupSchema, LoginSchema, GoogleSignupSchema, GoogleLoginSchema
)
from wishlist_backend.core.exceptions import ServiceError

auth_bp = Blueprint('auth_bp', __name__)


def _internal_error():
    return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "message": "Internal server error"}), 500


def _load_federated_fields(schema, reconciler) -> dict:
    """요청 본문을 검증하고, idToken이 있으면 검증된 Google 클레임으로 덮어씁니다."""
    data = schema.load(request.get_json(silent=True) or {})
    id_token = data.pop('id_token', None)
    if id_token:
        data.update(reconciler.federated_fields_from_token(id_token))
    return data


@auth_bp.route('/signup', methods=['POST'])
def signup():
    """로컬 계정 회원가입 엔드포인트입니다."""
    reconciler = current_app.services['auth']
    try:
        payload = request.get_json(silent=True) or {}
        data = SignupSchema().load(payload)
        result = reconciler.register_local(**data)
        return jsonify({
            "message": "User registered successfully",
            "token": result.token,
            "userId": result.user.user_id
        }), 201
    except ValidationError as err:
        # 누락되거나 비어 있는 필드가 없다면 형식 오류입니다.
        missing = isinstance(payload, dict) and any(not payload.get(name) for name in SIGNUP_FIELDS)
        message = "All fields are required" if missing else "Invalid request body"
        return jsonify({"error_code": "VALIDATION_ERROR", "message": message, "details": err.messages}), 400
    except ServiceError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"회원가입 중 예외 발생: {e}", exc_info=True)
        return _internal_error()


@auth_bp.route('/login', methods=['POST'])
def login():
    """사용자명/비밀번호 로그인 엔드포인트입니다."""
    reconciler = current_app.services['auth']
    try:
        data = LoginSchema().load(request.get_json(silent=True) or {})
        result = reconciler.authenticate_local(data['username'], data['password'])
        return jsonify({
            "message": "Login successful",
            "token": result.token,
            "userId": result.user.user_id
        }), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "message": "Username and password are required", "details": err.messages}), 400
    except ServiceError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"로그인 중 예외 발생: {e}", exc_info=True)
        return _internal_error()


@auth_bp.route('/google/signup', methods=['POST'])
def google_signup():
    """
    Google 가입 엔드포인트. 이미 같은 이메일의 계정이 있으면 그대로 토큰만 발급합니다.
    """
    reconciler = current_app.services['auth']
    try:
        data = _load_federated_fields(GoogleSignupSchema(), reconciler)
        result = reconciler.reconcile_federated(**data)
        return jsonify({
            "message": "User created with Google",
            "token": result.token,
            "userId": result.user.user_id
        }), 201
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "message": "Invalid request body", "details": err.messages}), 400
    except ServiceError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"Google 가입 중 예외 발생: {e}", exc_info=True)
        return _internal_error()


@auth_bp.route('/google/login', methods=['POST'])
def google_login():
    """Google 로그인 엔드포인트. 처음 보는 이메일이면 계정을 생성합니다."""
    reconciler = current_app.services['auth']
    try:
        data = _load_federated_fields(GoogleLoginSchema(), reconciler)
        result = reconciler.reconcile_federated(**data)
        return jsonify({
            "message": "Login Successful via Google",
            "token": result.token,
            "userId": result.user.user_id,
            "username": result.user.username
        }), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "message": "Invalid request body", "details": err.messages}), 400
    except ServiceError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"Google 로그인 중 예외 발생: {e}", exc_info=True)
        return _internal_error()


@auth_bp.route('/me', methods=['GET'])
@jwt_required()
def me():
    """Bearer 토큰에 담긴 사용자 정보를 돌려줍니다."""
    claims = get_jwt()
    return jsonify({"userId": get_jwt_identity(), "username": claims.get("username")}), 200
