#!/usr/bin/env python3
"""
Database Seed Script

Creates a demo reader with a small shelf of books for local development.

USAGE:
    # Make sure you're in the project root with venv activated
    python scripts/seed_data.py

This script:
1. Connects to the database using app settings
2. Creates the tables if they don't exist
3. Registers the demo reader (or reuses it if already registered)
4. Adds books at different reading stages, then rates the finished ones

Everything goes through AuthService and BookService, so the seeded rows
obey the same validation and status rules as API writes.
"""

import logging
import sys
from datetime import date
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import SessionLocal, create_tables
from app.models import Book, User
from app.services.auth import AuthService
from app.services.books import BookService

logger = logging.getLogger("seed_data")

DEMO_USERNAME = "demo_reader"
DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demo123"

BOOKS = [
    {
        "title": "Dune",
        "author": "Frank Herbert",
        "no_of_pages": 412,
        "current_page": 0,
        "published_at": date(1965, 8, 1),
        "genre": "Science Fiction",
    },
    {
        "title": "The Hobbit",
        "author": "J.R.R. Tolkien",
        "no_of_pages": 310,
        "current_page": 145,
        "published_at": date(1937, 9, 21),
        "genre": "Fantasy",
        "start_date": date(2024, 3, 2),
        "notes": "Reading a chapter a night.",
    },
    {
        "title": "1984",
        "author": "George Orwell",
        "no_of_pages": 328,
        "current_page": 328,
        "published_at": date(1949, 6, 8),
        "genre": "Dystopian",
        "start_date": date(2024, 1, 5),
        "finish_date": date(2024, 1, 19),
        "rating": 5,
    },
    {
        "title": "Pride and Prejudice",
        "author": "Jane Austen",
        "no_of_pages": 432,
        "current_page": 432,
        "published_at": date(1813, 1, 28),
        "genre": "Classic Literature",
        "start_date": date(2023, 11, 1),
        "finish_date": date(2023, 12, 3),
    },
]

# Ratings given after the books were added
RATINGS = {"Pride and Prejudice": 4}


def get_or_create_reader(db: Session) -> User:
    """Register the demo reader, or return the existing row."""
    user = db.execute(select(User).where(User.email == DEMO_EMAIL)).scalar_one_or_none()
    if user is not None:
        print(f"Demo reader already exists (id={user.id}).")
        return user

    auth = AuthService(db, get_settings())
    user, _ = auth.register(DEMO_USERNAME, DEMO_EMAIL, DEMO_PASSWORD)
    print(f"Registered demo reader {user.email} (password: {DEMO_PASSWORD}).")
    return user


def clear_books(db: Session, user: User) -> None:
    """Remove the demo reader's existing books."""
    print("Clearing existing demo books...")
    books = BookService(db)
    for book in books.list_books(user.id):
        books.delete_book(user.id, book.id)


def create_books(db: Session, user: User) -> list[Book]:
    """Add the sample shelf and rate the finished books."""
    print("Creating books...")
    service = BookService(db)

    created = []
    for data in BOOKS:
        book = service.create_book(user.id, data)
        if book.title in RATINGS:
            book = service.update_rating(user.id, book.id, RATINGS[book.title])
        created.append(book)

    print(f"Created {len(created)} books.")
    return created


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, removes the demo reader's books first.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()
    db = SessionLocal()

    try:
        user = get_or_create_reader(db)
        if clear_existing:
            clear_books(db, user)
        books = create_books(db, user)

        settings = get_settings()
        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        for book in books:
            print(f"  - {book.title}: {book.status} ({book.progress}%)")
        print(f"\nYou can now access the API at http://localhost:{settings.port}")
        print(f"API documentation at http://localhost:{settings.port}/docs")

    except Exception as e:
        logger.error(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed_database()
