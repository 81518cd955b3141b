"""
Book Service

CRUD for a reader's books plus the progress and rating mutations.

Rules enforced here (not in the routers):
=========================================
1. Owner scoping: every lookup is filtered by user_id, and the owning user
   must exist. A book that belongs to someone else is reported exactly like
   a missing one (NotFoundError), so ids can't be probed.
2. Page invariant: 0 <= current_page <= no_of_pages, no_of_pages > 0.
   Violating writes are rejected before anything is changed.
3. Status is re-derived on every write that touches the page counters.
4. Dates are stored as calendar dates (time of day dropped).

Partial Updates
===============
update_book receives only the fields the client sent:
- absent field            -> stored value kept
- nullable field as null  -> cleared (cover_image, genre, notes, dates)
- required field as null  -> ValidationError
The progress and rating endpoints take a single required, non-null value.
"""

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any

from sqlalchemy import select

from app.models import Book, User
from app.services.base import BaseService
from app.services.exceptions import NotFoundError, ValidationError
from app.services.progress import derive_status
from app.utils.dates import to_calendar_date

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "author", "no_of_pages", "published_at")
OPTIONAL_TEXT_FIELDS = ("cover_image", "genre", "notes")
OPTIONAL_DATE_FIELDS = ("start_date", "finish_date")
MIN_RATING = 0
MAX_RATING = 5
# Largest value the INTEGER columns (page counters, ids) can hold
MAX_INTEGER = 2_147_483_647


# =============================================================================
# Field Validation Helpers
# =============================================================================
def _required_text(value: Any, name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{name} cannot be empty")
    return str(value).strip()


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _integer(value: Any, name: str) -> int:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{name} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer") from None
    if isinstance(value, float) and number != value:
        raise ValidationError(f"{name} must be an integer")
    return number


def _date(value: Any, name: str, required: bool = False) -> date | None:
    try:
        parsed = to_calendar_date(value)
    except ValueError:
        raise ValidationError(f"{name} must be a date (YYYY-MM-DD)") from None
    if required and parsed is None:
        raise ValidationError(f"{name} cannot be empty")
    return parsed


def check_pages(current_page: int, no_of_pages: int) -> None:
    """
    Enforce 0 <= current_page <= no_of_pages with 0 < no_of_pages <= MAX_INTEGER.

    Raises:
        ValidationError: If the counters are out of range
    """
    if no_of_pages <= 0:
        raise ValidationError("no_of_pages must be a positive integer")
    if no_of_pages > MAX_INTEGER:
        raise ValidationError(f"no_of_pages cannot be greater than {MAX_INTEGER}")
    if current_page < 0:
        raise ValidationError("current_page cannot be negative")
    if current_page > no_of_pages:
        raise ValidationError("current_page cannot be greater than no_of_pages")


def check_rating(rating: Any) -> int:
    """
    Validate a 0-5 star rating.

    Raises:
        ValidationError: If the rating is missing, not an integer or out of range
    """
    if rating is None:
        raise ValidationError("rating is required")
    value = _integer(rating, "rating")
    if value < MIN_RATING or value > MAX_RATING:
        raise ValidationError(f"rating must be between {MIN_RATING} and {MAX_RATING}")
    return value


# =============================================================================
# Service
# =============================================================================
class BookService(BaseService):
    """
    Book operations for one request, always on behalf of one user.

    Usage:
        service = BookService(db)
        book = service.create_book(user_id, {"title": "Dune", ...})
    """

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------
    def _ensure_owner(self, user_id: int) -> None:
        """The owning user must still exist before any book access."""
        with self.storage_errors("check the book owner"):
            owner = self.db.get(User, user_id)
        if owner is None:
            raise NotFoundError("User not found")

    def _get_owned_book(self, user_id: int, book_id: int) -> Book:
        self._ensure_owner(user_id)
        if not 0 < book_id <= MAX_INTEGER:
            raise NotFoundError("Book not found")
        with self.storage_errors("load a book"):
            stmt = select(Book).where(Book.id == book_id, Book.user_id == user_id)
            book = self.db.execute(stmt).scalar_one_or_none()
        if book is None:
            raise NotFoundError("Book not found")
        return book

    def _save(self, book: Book, action: str) -> Book:
        with self.storage_errors(action):
            self.db.commit()
            self.db.refresh(book)
        return book

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------
    def list_books(self, user_id: int) -> list[Book]:
        """All books owned by user_id, newest first."""
        self._ensure_owner(user_id)
        with self.storage_errors("list books"):
            stmt = (
                select(Book)
                .where(Book.user_id == user_id)
                .order_by(Book.created_at.desc(), Book.id.desc())
            )
            return list(self.db.execute(stmt).scalars().all())

    def get_book(self, user_id: int, book_id: int) -> Book:
        """
        Return one owned book.

        Raises:
            NotFoundError: Book absent or owned by another user
        """
        return self._get_owned_book(user_id, book_id)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------
    def create_book(self, user_id: int, fields: Mapping[str, Any]) -> Book:
        """
        Add a book to the user's shelf.

        Args:
            user_id: Owner
            fields: title, author, no_of_pages, published_at (required);
                current_page (default 0), cover_image, genre, notes,
                start_date, finish_date, rating (optional)

        Raises:
            ValidationError: Missing required field or invalid page counters
            NotFoundError: Owner doesn't exist
        """
        missing = [name for name in REQUIRED_FIELDS if fields.get(name) in (None, "")]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        no_of_pages = _integer(fields["no_of_pages"], "no_of_pages")
        current_page = _integer(fields.get("current_page", 0) or 0, "current_page")
        check_pages(current_page, no_of_pages)

        rating = fields.get("rating")
        if rating is not None:
            rating = check_rating(rating)

        book = Book(
            user_id=user_id,
            title=_required_text(fields["title"], "title"),
            author=_required_text(fields["author"], "author"),
            no_of_pages=no_of_pages,
            current_page=current_page,
            published_at=_date(fields["published_at"], "published_at", required=True),
            status=derive_status(current_page, no_of_pages).value,
            rating=rating,
        )
        for name in OPTIONAL_TEXT_FIELDS:
            setattr(book, name, _optional_text(fields.get(name)))
        for name in OPTIONAL_DATE_FIELDS:
            setattr(book, name, _date(fields.get(name), name))

        self._ensure_owner(user_id)
        with self.storage_errors("create a book"):
            self.db.add(book)
            self.db.commit()
            self.db.refresh(book)

        logger.info(f"Book {book.id} created for user {user_id}")
        return book

    def update_book(self, user_id: int, book_id: int, fields: Mapping[str, Any]) -> Book:
        """
        Edit an owned book with partial-update semantics.

        The page check uses the incoming no_of_pages/current_page, falling
        back to the stored values, and the status is re-derived from the
        final pair.

        Raises:
            NotFoundError: Book absent or owned by another user
            ValidationError: Required field cleared or invalid page counters
        """
        book = self._get_owned_book(user_id, book_id)

        changes: dict[str, Any] = {}
        for name in ("title", "author"):
            if name in fields:
                changes[name] = _required_text(fields[name], name)
        for name in ("no_of_pages", "current_page"):
            if name in fields:
                if fields[name] is None:
                    raise ValidationError(f"{name} cannot be empty")
                changes[name] = _integer(fields[name], name)
        if "published_at" in fields:
            changes["published_at"] = _date(fields["published_at"], "published_at", required=True)
        for name in OPTIONAL_TEXT_FIELDS:
            if name in fields:
                changes[name] = _optional_text(fields[name])
        for name in OPTIONAL_DATE_FIELDS:
            if name in fields:
                changes[name] = _date(fields[name], name)

        no_of_pages = changes.get("no_of_pages", book.no_of_pages)
        current_page = changes.get("current_page", book.current_page)
        check_pages(current_page, no_of_pages)
        changes["status"] = derive_status(current_page, no_of_pages).value

        for name, value in changes.items():
            setattr(book, name, value)
        self._save(book, "update a book")

        logger.info(f"Book {book.id} updated by user {user_id}")
        return book

    def update_progress(self, user_id: int, book_id: int, current_page: Any) -> Book:
        """
        Move the bookmark. Only current_page and status are written.

        Raises:
            NotFoundError: Book absent or owned by another user
            ValidationError: current_page missing or outside 0..no_of_pages
        """
        if current_page is None:
            raise ValidationError("current_page is required")
        page = _integer(current_page, "current_page")

        book = self._get_owned_book(user_id, book_id)
        check_pages(page, book.no_of_pages)

        book.current_page = page
        book.status = derive_status(page, book.no_of_pages).value
        self._save(book, "update reading progress")

        logger.info(f"Book {book.id} progress set to page {page} ({book.status})")
        return book

    def update_rating(self, user_id: int, book_id: int, rating: Any) -> Book:
        """
        Rate an owned book from 0 to 5 stars. Only rating is written.

        Raises:
            ValidationError: rating missing or outside 0..5
            NotFoundError: Book absent or owned by another user
        """
        value = check_rating(rating)

        book = self._get_owned_book(user_id, book_id)
        book.rating = value
        self._save(book, "update a rating")

        logger.info(f"Book {book.id} rated {value} by user {user_id}")
        return book

    def delete_book(self, user_id: int, book_id: int) -> None:
        """
        Remove an owned book.

        Raises:
            NotFoundError: Book absent or owned by another user
        """
        book = self._get_owned_book(user_id, book_id)
        with self.storage_errors("delete a book"):
            self.db.delete(book)
            self.db.commit()

        logger.info(f"Book {book_id} deleted by user {user_id}")
