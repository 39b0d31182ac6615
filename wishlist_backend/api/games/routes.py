# wishlist_backend/api/games/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from wishlist_backend.api.games.schemas import GameSchema, WishlistItemSchema
from wishlist_backend.core.exceptions import ServiceError

logger = logging.getLogger(__name__)

games_bp = Blueprint('games_bp', __name__)


@games_bp.route('', methods=['GET'])
def get_all_games():
    """전체 게임 목록을 이름순으로 조회합니다."""
    game_service = current_app.services['games']
    try:
        games = game_service.list_games()
        return jsonify(GameSchema(many=True).dump(games)), 200
    except ServiceError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.error(f"게임 목록 조회 실패: {e}", exc_info=True)
        return jsonify({"error_code": "GAME_FETCH_FAILED", "message": "Error fetching games."}), 500


@games_bp.route('/search', methods=['GET'])
def search_games():
    """
    게임 이름으로 검색합니다.

    Query Parameters:
        - name (str, required): 검색어
    """
    game_service = current_app.services['games']
    try:
        games = game_service.search_games(request.args.get('name', ''))
        return jsonify(GameSchema(many=True).dump(games)), 200
    except ServiceError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.error(f"게임 검색 실패: {e}", exc_info=True)
        return jsonify({"error_code": "GAME_SEARCH_FAILED", "message": "Error searching games."}), 500


@games_bp.route('/<string:game_id>', methods=['GET'])
def get_game_details(game_id: str):
    game_service = current_app.services['games']
    try:
        game = game_service.get_game(game_id)
        return jsonify(GameSchema().dump(game)), 200
    except ServiceError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.error(f"게임 상세 조회 실패 ({game_id}): {e}", exc_info=True)
        return jsonify({"error_code": "GAME_FETCH_FAILED", "message": "Error fetching game details."}), 500


@games_bp.route('/wishlist', methods=['POST'])
def add_to_wishlist():
    game_service = current_app.services['games']
    try:
        data = WishlistItemSchema().load(request.get_json(silent=True) or {})
        game_service.add_to_wishlist(data['user_id'], data['game_id'])
        return jsonify({"message": "Game added to wishlist"}), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except ServiceError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.error(f"위시리스트 추가 실패: {e}", exc_info=True)
        return jsonify({"error_code": "WISHLIST_UPDATE_FAILED", "message": "Error adding game to wishlist"}), 500


@games_bp.route('/wishlist', methods=['DELETE'])
def remove_from_wishlist():
    game_service = current_app.services['games']
    try:
        data = WishlistItemSchema().load(request.get_json(silent=True) or {})
        game_service.remove_from_wishlist(data['user_id'], data['game_id'])
        return jsonify({"message": "Game removed from wishlist"}), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except ServiceError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.error(f"위시리스트 삭제 실패: {e}", exc_info=True)
        return jsonify({"error_code": "WISHLIST_UPDATE_FAILED", "message": "Error removing game from wishlist"}), 500


@games_bp.route('/wishlist/<string:user_id>', methods=['GET'])
def get_user_wishlist(user_id: str):
    """사용자의 위시리스트를 게임 정보와 함께 조회합니다."""
    game_service = current_app.services['games']
    try:
        games = game_service.get_wishlist(user_id)
        return jsonify(GameSchema(many=True).dump(games)), 200
    except ServiceError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.error(f"위시리스트 조회 실패 (user_id: {user_id}): {e}", exc_info=True)
        return jsonify({"error_code": "WISHLIST_FETCH_FAILED", "message": "Error fetching wishlist"}), 500
