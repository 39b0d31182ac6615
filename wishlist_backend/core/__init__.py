# wishlist_backend/core/__init__.py
