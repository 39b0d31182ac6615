# wishlist_backend/api/games/__init__.py
