"""
Book Model

A book on one reader's shelf, with reading progress and a personal rating.

Ownership
=========
Every book belongs to exactly one user (user_id). There is no ORM
relationship() to User: BookService checks the owner and filters every
query by user_id itself.
"""

from datetime import date, datetime

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.services.progress import ReadingStatus, calculate_progress


class Book(Base):
    """
    Book model representing a tracked book.

    Table: books

    Fields:
    - title, author: required
    - no_of_pages: total pages (> 0)
    - current_page: last page read (0 <= current_page <= no_of_pages)
    - published_at: publication date (date only)
    - status: derived from the page counters, stored on every write
    - rating: 0-5 stars, null until the reader rates the book

    Example:
        book = Book(
            user_id=1,
            title="Dune",
            author="Frank Herbert",
            no_of_pages=412,
            current_page=0,
            published_at=date(1965, 8, 1),
            status=ReadingStatus.WANT_TO_READ.value,
        )
    """

    __tablename__ = "books"
    __table_args__ = (
        CheckConstraint("no_of_pages > 0", name="ck_books_no_of_pages_positive"),
        CheckConstraint(
            "current_page >= 0 AND current_page <= no_of_pages",
            name="ck_books_current_page_range",
        ),
        CheckConstraint(
            "rating IS NULL OR (rating >= 0 AND rating <= 5)",
            name="ck_books_rating_range",
        ),
    )

    # -------------------------------------------------------------------------
    # Primary Key / Owner
    # -------------------------------------------------------------------------
    id: Mapped[int] = mapped_column(primary_key=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
        comment="Owner of the book"
    )

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        comment="Book title"
    )

    author: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Author name"
    )

    cover_image: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="URL of the cover image"
    )

    # Date (not DateTime) because we only care about the day, not time
    published_at: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="Date of publication"
    )

    genre: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )

    notes: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Reader's private notes"
    )

    # -------------------------------------------------------------------------
    # Reading Progress
    # -------------------------------------------------------------------------
    no_of_pages: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Total number of pages"
    )

    current_page: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
        comment="Last page read"
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ReadingStatus.WANT_TO_READ.value,
        comment="Want to Read / Reading / Read"
    )

    start_date: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
        comment="When the reader started the book"
    )

    finish_date: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
        comment="When the reader finished the book"
    )

    rating: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Personal rating, 0-5 stars"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------
    @property
    def progress(self) -> int:
        """Percentage read, exposed in every book response."""
        return calculate_progress(self.current_page, self.no_of_pages)

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', status='{self.status}')"
