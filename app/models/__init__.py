"""
SQLAlchemy Models Package

Model Relationships:
- User -> Book: One-to-Many (a reader owns many books, a book has one owner)

Import all models here to:
1. Make them available as: from app.models import Book, User
2. Ensure Alembic discovers them for migrations
"""

from app.models.user import User
from app.models.book import Book

__all__ = [
    "User",
    "Book",
]
