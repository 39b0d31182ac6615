# conftest.py
import pytest

from wishlist_backend import create_app
from wishlist_backend.models.game import Game


@pytest.fixture
def app():
    """인메모리 저장소를 사용하는 testing 설정의 앱"""
    return create_app('testing')


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def user_store(app):
    return app.services['user_store']


@pytest.fixture
def game_store(app):
    store = app.services['game_store']
    store.add_game(Game(game_id="g-zelda", name="The Legend of Zelda: Breath of the Wild", genre="Adventure", platform="Switch", price=59.99))
    store.add_game(Game(game_id="g-hades", name="Hades", genre="Roguelike", platform="PC", price=24.99))
    store.add_game(Game(game_id="g-celeste", name="Celeste", genre="Platformer", platform="PC", price=19.99))
    return store


@pytest.fixture
def signup_payload():
    return {
        "firstname": "Ada",
        "lastname": "Lovelace",
        "username": "ada",
        "email": "ada@example.com",
        "password": "analytical-engine"
    }
