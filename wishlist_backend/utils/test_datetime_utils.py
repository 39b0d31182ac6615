# wishlist_backend/utils/test_datetime_utils.py
"""
시간 유틸리티 테스트

사용법: python -m pytest wishlist_backend/utils/test_datetime_utils.py -v
"""

from datetime import datetime, timedelta, timezone

from wishlist_backend.utils.datetime_utils import DateTimeUtils


def test_now_is_utc_aware():
    assert DateTimeUtils.now().tzinfo == timezone.utc


def test_for_firestore_normalizes_nested_values():
    kst = timezone(timedelta(hours=9))
    data = {
        'created_at': datetime(2024, 1, 15, 10, 30),
        'nested': {'seen_at': datetime(2024, 1, 15, 19, 30, tzinfo=kst)},
        'items': [datetime(2024, 1, 1)],
        'name': 'unchanged'
    }

    converted = DateTimeUtils.for_firestore(data)

    assert converted['created_at'].tzinfo == timezone.utc
    assert converted['nested']['seen_at'] == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    assert converted['items'][0].tzinfo == timezone.utc
    assert converted['name'] == 'unchanged'


def test_from_firestore_handles_timestamp_objects():
    class FakeTimestamp:
        def timestamp(self):
            return 0

    converted = DateTimeUtils.from_firestore({'created_at': FakeTimestamp(), 'count': 3})

    assert converted['created_at'] == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert converted['count'] == 3
