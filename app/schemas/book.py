"""
Book Pydantic Schemas

Request and response shapes for the book endpoints.

Partial Updates
===============
BookUpdate declares every field optional. Routers pass
model_dump(exclude_unset=True) to BookService, which is how the service
tells "field absent" (keep stored value) apart from "field sent as null"
(clear it, or reject it for required fields).

Dates
=====
published_at, start_date and finish_date accept "YYYY-MM-DD" or a full
ISO-8601 datetime; the time of day is dropped. They are always returned as
"YYYY-MM-DD".
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.services.progress import ReadingStatus
from app.utils.dates import to_calendar_date


class BookDates(BaseModel):
    """Shared date parsing for book request schemas."""

    @field_validator("published_at", "start_date", "finish_date", mode="before", check_fields=False)
    @classmethod
    def normalize_dates(cls, v):
        """Truncate datetimes and ISO datetime strings to a calendar date."""
        return to_calendar_date(v)


class BookCreate(BookDates):
    """
    Schema for adding a book.

    Example request body:
    {
        "title": "Dune",
        "author": "Frank Herbert",
        "no_of_pages": 412,
        "published_at": "1965-08-01",
        "current_page": 0
    }
    """

    title: str = Field(..., max_length=500, examples=["Dune"])
    author: str = Field(..., max_length=255, examples=["Frank Herbert"])
    no_of_pages: int = Field(..., description="Total number of pages", examples=[412])
    published_at: date = Field(..., description="Publication date", examples=["1965-08-01"])
    current_page: int = Field(default=0, description="Last page read", examples=[0])
    cover_image: str | None = Field(default=None, description="Cover image URL")
    genre: str | None = Field(default=None, max_length=100, examples=["Science Fiction"])
    notes: str | None = Field(default=None)
    start_date: date | None = Field(default=None)
    finish_date: date | None = Field(default=None)
    rating: int | None = Field(default=None, description="0-5 stars")


class BookUpdate(BookDates):
    """
    Schema for editing a book.

    All fields are optional; see the module docstring for null handling.
    """

    title: str | None = Field(default=None, max_length=500)
    author: str | None = Field(default=None, max_length=255)
    no_of_pages: int | None = Field(default=None)
    published_at: date | None = Field(default=None)
    current_page: int | None = Field(default=None)
    cover_image: str | None = Field(default=None)
    genre: str | None = Field(default=None, max_length=100)
    notes: str | None = Field(default=None)
    start_date: date | None = Field(default=None)
    finish_date: date | None = Field(default=None)


class ProgressUpdate(BaseModel):
    """Body of PATCH /books/{id}/progress."""

    current_page: int | None = Field(..., description="New current page", examples=[206])


class RatingUpdate(BaseModel):
    """Body of PATCH /books/{id}/rating."""

    rating: int | None = Field(..., description="0-5 stars", examples=[4])


class BookResponse(BaseModel):
    """
    Schema for book responses.

    progress is computed from current_page / no_of_pages on the model.
    """

    id: int = Field(..., description="Unique identifier")
    user_id: int = Field(..., description="Owner of the book")
    title: str
    author: str
    cover_image: str | None = None
    no_of_pages: int
    current_page: int
    published_at: date
    genre: str | None = None
    notes: str | None = None
    start_date: date | None = None
    finish_date: date | None = None
    status: ReadingStatus
    rating: int | None = None
    progress: int = Field(..., description="Percentage read (0-100)")
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "user_id": 1,
                "title": "Dune",
                "author": "Frank Herbert",
                "cover_image": None,
                "no_of_pages": 412,
                "current_page": 206,
                "published_at": "1965-08-01",
                "genre": "Science Fiction",
                "notes": None,
                "start_date": "2024-01-10",
                "finish_date": None,
                "status": "Reading",
                "rating": None,
                "progress": 50,
                "created_at": "2024-01-15T10:30:00Z",
                "updated_at": "2024-01-15T10:30:00Z",
            }
        },
    )
