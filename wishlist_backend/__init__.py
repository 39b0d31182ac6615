# wishlist_backend/__init__.py

# =====================================================================================
# 1. 환경 변수 로드 (가장 먼저 실행)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. 모듈 임포트
# =====================================================================================
import os
import logging
from typing import Optional
from flask import Flask, jsonify
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException
from flask_jwt_extended import JWTManager
import firebase_admin
from firebase_admin import credentials

from wishlist_backend.core.config import config_by_name
from wishlist_backend.core.exceptions import ServiceError
from wishlist_backend.core.security import PasswordHasher, TokenIssuer

from wishlist_backend.api.auth.routes import auth_bp
from wishlist_backend.api.users.routes import users_bp
from wishlist_backend.api.games.routes import games_bp

from wishlist_backend.api.auth.services import IdentityReconciler
from wishlist_backend.api.users.services import ProfileService
from wishlist_backend.api.games.services import GameService
from wishlist_backend.services.google_auth_service import GoogleAuthService
from wishlist_backend.services.user_store import FirestoreUserStore
from wishlist_backend.services.game_store import FirestoreGameStore
from wishlist_backend.services.memory_store import InMemoryUserStore, InMemoryGameStore


def _init_firebase(app: Flask):
    if firebase_admin._apps:
        return
    cred_path = app.config.get('FIREBASE_CREDENTIALS_PATH')
    if cred_path:
        if not os.path.exists(cred_path):
            raise FileNotFoundError(f"Firebase 인증 파일을 찾을 수 없습니다: {cred_path}")
        firebase_admin.initialize_app(credentials.Certificate(cred_path))
    else:
        # GOOGLE_APPLICATION_CREDENTIALS 등 기본 자격 증명을 사용합니다.
        firebase_admin.initialize_app()


def create_app(config_name: Optional[str] = None):
    """
    Flask 애플리케이션 팩토리 함수.
    """
    # =====================================================================================
    # 3. Flask 앱 생성 및 기본 설정
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')
    config_class = config_by_name[config_name]

    missing = [key for key in getattr(config_class, 'REQUIRED_SETTINGS', ()) if not getattr(config_class, key, None)]
    if missing:
        raise ValueError(f"필수 환경 변수가 설정되지 않았습니다: {', '.join(missing)}")

    app = Flask(__name__)
    app.config.from_object(config_class)

    if not app.debug and not app.testing:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    # =====================================================================================
    # 4. 확장 기능 및 저장소 초기화
    # =====================================================================================
    JWTManager(app)

    if app.config['DATA_BACKEND'] == 'memory':
        user_store = InMemoryUserStore()
        game_store = InMemoryGameStore()
    else:
        _init_firebase(app)
        user_store = FirestoreUserStore()
        game_store = FirestoreGameStore()
    user_store.init_app(app)
    game_store.init_app(app)

    # =====================================================================================
    # 5. 서비스 인스턴스 생성 및 'app.services'에 저장 (의존성 주입)
    # =====================================================================================
    token_issuer = TokenIssuer(
        secret_key=app.config['JWT_SECRET_KEY'],
        expires_delta=app.config['JWT_ACCESS_TOKEN_EXPIRES'],
        algorithm=app.config['JWT_ALGORITHM']
    )
    app.services = {
        'user_store': user_store,
        'game_store': game_store,
        'auth': IdentityReconciler(
            user_store=user_store,
            token_issuer=token_issuer,
            password_hasher=PasswordHasher(),
            google_auth=GoogleAuthService(client_id=app.config.get('GOOGLE_CLIENT_ID'))
        ),
        'profiles': ProfileService(user_store=user_store),
        'games': GameService(game_store=game_store, user_store=user_store),
    }

    # =====================================================================================
    # 6. 블루프린트 등록
    # =====================================================================================
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(users_bp, url_prefix='/api/users')
    app.register_blueprint(games_bp, url_prefix='/api/games')

    # =====================================================================================
    # 7. 전역 에러 핸들러 설정
    # =====================================================================================
    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        response = {"error_code": "VALIDATION_ERROR", "details": err.messages}
        return jsonify(response), 400

    @app.errorhandler(ServiceError)
    def handle_service_error(err):
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        if isinstance(err, HTTPException):
            return err
        # 다른 핸들러에서 처리되지 않은 모든 예외를 여기서 처리
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        response = {"error_code": "INTERNAL_SERVER_ERROR", "message": "Internal server error"}
        return jsonify(response), 500

    logging.info(f"Flask app created for '{config_name}' environment (backend: {app.config['DATA_BACKEND']}).")

    return app
