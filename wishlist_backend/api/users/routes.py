# wishlist_backend/api/users/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from wishlist_backend.api.users.schemas import (
    UserProfileResponseSchema, ProfileUpdateSchema, VisibilityUpdateSchema
)
from wishlist_backend.core.exceptions import ServiceError

users_bp = Blueprint('users_bp', __name__)


@users_bp.route('/<string:user_id>', methods=['GET'])
def get_user_profile(user_id: str):
    """사용자 프로필을 조회합니다. 비밀번호 등 자격 증명은 포함하지 않습니다."""
    profile_service = current_app.services['profiles']
    try:
        user = profile_service.fetch_profile(user_id)
        return jsonify(UserProfileResponseSchema().dump(user)), 200
    except ServiceError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"사용자 프로필 조회 중 오류 발생 (user_id: {user_id}): {e}", exc_info=True)
        return jsonify({"error_code": "PROFILE_FETCH_FAILED", "message": "Failed to load user information"}), 500


@users_bp.route('/<string:user_id>/profile', methods=['PUT', 'PATCH'])
def update_user_profile(user_id: str):
    """
    사용자명과 프로필 이미지를 부분 업데이트합니다.
    """
    profile_service = current_app.services['profiles']
    try:
        data = ProfileUpdateSchema().load(request.get_json(silent=True) or {})
        user = profile_service.update_profile(
            user_id,
            username=data.get('username'),
            profile_picture=data.get('profile_picture')
        )
        return jsonify({
            "message": "Profile updated successfully",
            "profilePicture": user.profile_picture,
            "username": user.username
        }), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except ServiceError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"프로필 업데이트 중 오류 발생 (user_id: {user_id}): {e}", exc_info=True)
        return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "message": "Server Error"}), 500


@users_bp.route('/<string:user_id>/visibility', methods=['PUT', 'PATCH'])
def update_profile_visibility(user_id: str):
    profile_service = current_app.services['profiles']
    try:
        data = VisibilityUpdateSchema().load(request.get_json(silent=True) or {})
        user = profile_service.set_visibility(user_id, data['profile_visibility'])
        return jsonify(UserProfileResponseSchema().dump(user)), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except ServiceError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"공개 범위 변경 중 오류 발생 (user_id: {user_id}): {e}", exc_info=True)
        return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "message": "Failed to update profile visibility"}), 500
