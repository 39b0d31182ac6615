# wishlist_backend/api/users/services.py
import logging
from typing import Optional

from wishlist_backend.core.exceptions import (
    ServiceError, ConflictError, NotFoundError, InternalError
)
from wishlist_backend.models.user import User, ProfileVisibility
from wishlist_backend.services.user_store import UserStore

logger = logging.getLogger(__name__)

USER_NOT_FOUND_MESSAGE = "User not found"


class ProfileService:
    """프로필 조회 및 수정(사용자명, 프로필 이미지, 공개 범위)을 담당합니다."""

    def __init__(self, user_store: UserStore):
        self.user_store = user_store

    def fetch_profile(self, user_id: str) -> User:
        try:
            user = self.user_store.find_by_id(user_id)
        except Exception as e:
            logger.error(f"프로필 조회 실패 (user_id: {user_id}): {e}", exc_info=True)
            raise InternalError("Failed to load user information") from e
        if not user:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE, error_code="USER_NOT_FOUND")
        return user

    def update_profile(self, user_id: str, username: Optional[str] = None,
                       profile_picture: Optional[str] = None) -> User:
        """
        전달된 필드만 부분 업데이트합니다. 값이 비어 있는 필드는 무시합니다.
        사용자명이 다른 사용자와 겹치면 ConflictError를 발생시키고 아무것도 바꾸지 않습니다.
        """
        changes = {}
        if username:
            changes['username'] = username
        if profile_picture:
            changes['profile_picture'] = profile_picture

        try:
            if not changes:
                return self.fetch_profile(user_id)
            result = self.user_store.update_profile(user_id, changes)
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f"프로필 업데이트 실패 (user_id: {user_id}): {e}", exc_info=True)
            raise InternalError("Server Error") from e

        if result.duplicate:
            raise ConflictError("Username already exists")
        if not result.user:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE, error_code="USER_NOT_FOUND")

        logger.info(f"프로필 업데이트 완료 (user_id: {user_id}, fields: {sorted(changes)})")
        return result.user

    def set_visibility(self, user_id: str, visibility: ProfileVisibility) -> User:
        try:
            user = self.user_store.set_visibility(user_id, visibility)
        except Exception as e:
            logger.error(f"공개 범위 변경 실패 (user_id: {user_id}): {e}", exc_info=True)
            raise InternalError("Failed to update profile visibility") from e
        if not user:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE, error_code="USER_NOT_FOUND")
        return user
