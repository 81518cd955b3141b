"""
API Routers Package

Router Structure:
- auth.py: /api/auth/* endpoints (register, login, me, logout)
- books.py: /api/books/* endpoints (CRUD, progress, rating)

Each router is imported and registered in main.py.
"""

from app.routers.auth import router as auth_router
from app.routers.books import router as books_router

__all__ = [
    "auth_router",
    "books_router",
]
