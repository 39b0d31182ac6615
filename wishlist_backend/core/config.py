# wishlist_backend/core/config.py

import os
from datetime import timedelta


class Config:
    """모든 환경 설정의 기반이 되는 공통 설정 클래스입니다."""
    # JWT 서명 키. TokenIssuer와 flask-jwt-extended가 같은 키를 공유합니다.
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    JWT_ALGORITHM = 'HS256'
    # 발급 토큰의 유효 기간은 7일로 고정입니다.
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=7)

    # Google ID 토큰 검증에 사용할 OAuth 클라이언트 ID. 비어 있으면 검증을 건너뜁니다.
    GOOGLE_CLIENT_ID = os.getenv('GOOGLE_CLIENT_ID')

    FIREBASE_CREDENTIALS_PATH = os.getenv('FIREBASE_CREDENTIALS_PATH')
    # 'firestore' 또는 'memory'
    DATA_BACKEND = os.getenv('DATA_BACKEND', 'firestore')


class DevelopmentConfig(Config):
    """개발 환경 설정. 코드 변경 시 자동 재시작, 상세 디버그 정보를 표시합니다."""
    DEBUG = True
    FIREBASE_CREDENTIALS_PATH = os.getenv('DEV_FIREBASE_CREDENTIALS_PATH', Config.FIREBASE_CREDENTIALS_PATH)


class TestingConfig(Config):
    """테스트 환경 설정. Firebase 없이 인메모리 저장소로 동작합니다."""
    TESTING = True
    DEBUG = False
    DATA_BACKEND = 'memory'
    JWT_SECRET_KEY = 'testing-secret-key-that-is-long-enough-for-hs256'
    GOOGLE_CLIENT_ID = None


class ProductionConfig(Config):
    """운영 환경 설정."""
    DEBUG = False
    REQUIRED_SETTINGS = ('JWT_SECRET_KEY',)


# FLASK_ENV 값에 따라 create_app에서 설정 클래스를 선택하는 데 사용합니다.
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
