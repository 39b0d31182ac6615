# wishlist_backend/api/users/__init__.py
