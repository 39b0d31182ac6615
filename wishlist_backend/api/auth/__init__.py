# wishlist_backend/api/auth/__init__.py
