# wishlist_backend/utils/datetime_utils.py
"""
문서 저장소와 주고받는 시간 값을 UTC timezone-aware datetime으로 통일하는 유틸리티.

Firestore는 timezone-naive datetime을 로컬 시간으로 해석할 수 있으므로
저장 전에 for_firestore, 읽은 후에 from_firestore를 거치도록 합니다.
"""

import logging
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)


class DateTimeUtils:

    @staticmethod
    def now() -> datetime:
        """현재 시간을 UTC timezone-aware datetime으로 반환"""
        return datetime.now(timezone.utc)

    @staticmethod
    def for_firestore(obj: Any) -> Any:
        """
        저장 전 변환. dict/list는 재귀적으로 처리하고,
        timezone-naive datetime은 UTC로 간주합니다.
        """
        if isinstance(obj, datetime):
            if obj.tzinfo is None:
                return obj.replace(tzinfo=timezone.utc)
            return obj.astimezone(timezone.utc)
        if isinstance(obj, dict):
            return {k: DateTimeUtils.for_firestore(v) for k, v in obj.items()}
        if isinstance(obj, list):
            return [DateTimeUtils.for_firestore(item) for item in obj]
        return obj

    @staticmethod
    def from_firestore(obj: Any) -> Any:
        """읽은 후 변환. Firestore timestamp 객체도 UTC datetime으로 바꿉니다."""
        try:
            if isinstance(obj, datetime):
                if obj.tzinfo is None:
                    return obj.replace(tzinfo=timezone.utc)
                return obj.astimezone(timezone.utc)
            if hasattr(obj, 'timestamp'):
                return datetime.fromtimestamp(obj.timestamp(), tz=timezone.utc)
            if isinstance(obj, dict):
                return {k: DateTimeUtils.from_firestore(v) for k, v in obj.items()}
            if isinstance(obj, list):
                return [DateTimeUtils.from_firestore(item) for item in obj]
            return obj
        except Exception as e:
            # 변환 실패 시 원본을 그대로 돌려줍니다
            logger.error(f"Firestore 읽기 변환 실패: {obj} ({type(obj)}) - {e}")
            return obj

