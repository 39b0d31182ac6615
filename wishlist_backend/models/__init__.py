# wishlist_backend/models/__init__.py
