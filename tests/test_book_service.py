"""
Tests for BookService: ownership, page invariant, partial updates,
progress and rating.
"""

import logging
from datetime import date, datetime

import pytest
from sqlalchemy.exc import OperationalError

from app.models import Book, User
from app.services.books import BookService, check_pages, check_rating
from app.services.exceptions import InternalError, NotFoundError, ValidationError

DUNE = {
    "title": "Dune",
    "author": "Frank Herbert",
    "no_of_pages": 412,
    "published_at": "1965-08-01",
}


class TestCreateBook:
    def test_new_book_defaults(self, book_service: BookService, sample_user: User):
        book = book_service.create_book(sample_user.id, DUNE)

        assert book.id is not None
        assert book.user_id == sample_user.id
        assert book.current_page == 0
        assert book.status == "Want to Read"
        assert book.progress == 0
        assert book.rating is None
        assert book.published_at == date(1965, 8, 1)

    def test_status_derived_from_pages(self, book_service: BookService, sample_user: User):
        reading = book_service.create_book(sample_user.id, {**DUNE, "current_page": 206})
        finished = book_service.create_book(sample_user.id, {**DUNE, "current_page": 412})

        assert reading.status == "Reading"
        assert reading.progress == 50
        assert finished.status == "Read"
        assert finished.progress == 100

    def test_missing_required_fields(self, book_service: BookService, sample_user: User):
        with pytest.raises(ValidationError) as exc_info:
            book_service.create_book(sample_user.id, {"title": "Dune", "no_of_pages": 412})
        assert exc_info.value.message == "Missing required fields: author, published_at"

    def test_current_page_beyond_total_rejected(self, book_service: BookService, sample_user: User):
        with pytest.raises(ValidationError):
            book_service.create_book(sample_user.id, {**DUNE, "current_page": 413})

    @pytest.mark.parametrize("no_of_pages", [0, -1])
    def test_non_positive_pages_rejected(
        self, book_service: BookService, sample_user: User, no_of_pages
    ):
        with pytest.raises(ValidationError):
            book_service.create_book(sample_user.id, {**DUNE, "no_of_pages": no_of_pages})

    def test_datetimes_stored_as_dates(self, book_service: BookService, sample_user: User):
        book = book_service.create_book(
            sample_user.id,
            {
                **DUNE,
                "published_at": datetime(1965, 8, 1, 15, 30),
                "start_date": "2024-01-10T08:00:00Z",
            },
        )
        assert book.published_at == date(1965, 8, 1)
        assert book.start_date == date(2024, 1, 10)

    def test_blank_optional_text_stored_as_null(
        self, book_service: BookService, sample_user: User
    ):
        book = book_service.create_book(sample_user.id, {**DUNE, "genre": "  ", "notes": ""})
        assert book.genre is None
        assert book.notes is None

    def test_unknown_owner(self, book_service: BookService):
        with pytest.raises(NotFoundError) as exc_info:
            book_service.create_book(99999, DUNE)
        assert exc_info.value.message == "User not found"


class TestOwnership:
    def test_other_users_book_is_not_found(
        self, book_service: BookService, sample_book: Book, second_user: User
    ):
        with pytest.raises(NotFoundError) as exc_info:
            book_service.get_book(second_user.id, sample_book.id)
        assert exc_info.value.message == "Book not found"

    def test_other_user_cannot_delete(
        self, book_service: BookService, sample_book: Book, sample_user: User, second_user: User
    ):
        with pytest.raises(NotFoundError):
            book_service.delete_book(second_user.id, sample_book.id)

        assert book_service.get_book(sample_user.id, sample_book.id).id == sample_book.id

    def test_list_only_own_books(
        self, book_service: BookService, sample_book: Book, sample_user: User, second_user: User
    ):
        book_service.create_book(second_user.id, {**DUNE, "title": "Children of Dune"})

        titles = [book.title for book in book_service.list_books(sample_user.id)]
        assert titles == ["Dune"]

    def test_list_newest_first(self, book_service: BookService, sample_user: User):
        first = book_service.create_book(sample_user.id, {**DUNE, "title": "First"})
        second = book_service.create_book(sample_user.id, {**DUNE, "title": "Second"})

        ids = [book.id for book in book_service.list_books(sample_user.id)]
        assert ids == [second.id, first.id]


class TestUpdateBook:
    def test_absent_fields_keep_values(
        self, book_service: BookService, sample_book: Book, sample_user: User
    ):
        book = book_service.update_book(sample_user.id, sample_book.id, {"notes": "Spice!"})

        assert book.notes == "Spice!"
        assert book.title == "Dune"
        assert book.genre == "Science Fiction"

    def test_null_clears_optional_fields(
        self, book_service: BookService, sample_book: Book, sample_user: User
    ):
        book = book_service.update_book(sample_user.id, sample_book.id, {"genre": None})
        assert book.genre is None

    @pytest.mark.parametrize("field", ["title", "author", "no_of_pages", "published_at"])
    def test_null_rejected_for_required_fields(
        self, book_service: BookService, sample_book: Book, sample_user: User, field
    ):
        with pytest.raises(ValidationError):
            book_service.update_book(sample_user.id, sample_book.id, {field: None})

    def test_status_rederived_when_total_shrinks(
        self, book_service: BookService, sample_book: Book, sample_user: User
    ):
        book_service.update_progress(sample_user.id, sample_book.id, 200)

        book = book_service.update_book(sample_user.id, sample_book.id, {"no_of_pages": 200})
        assert book.status == "Read"
        assert book.progress == 100

    def test_total_below_current_page_rejected(
        self, book_service: BookService, sample_book: Book, sample_user: User
    ):
        book_service.update_progress(sample_user.id, sample_book.id, 206)

        with pytest.raises(ValidationError):
            book_service.update_book(sample_user.id, sample_book.id, {"no_of_pages": 100})

        book = book_service.get_book(sample_user.id, sample_book.id)
        assert book.no_of_pages == 412
        assert book.current_page == 206

    def test_missing_book(self, book_service: BookService, sample_user: User):
        with pytest.raises(NotFoundError):
            book_service.update_book(sample_user.id, 99999, {"title": "Nope"})


class TestProgressAndRating:
    def test_progress_moves_status(
        self, book_service: BookService, sample_book: Book, sample_user: User
    ):
        book = book_service.update_progress(sample_user.id, sample_book.id, 206)
        assert (book.status, book.progress) == ("Reading", 50)

        book = book_service.update_progress(sample_user.id, sample_book.id, 412)
        assert (book.status, book.progress) == ("Read", 100)

        book = book_service.update_progress(sample_user.id, sample_book.id, 0)
        assert (book.status, book.progress) == ("Want to Read", 0)

    @pytest.mark.parametrize("page", [-1, 413, None, 2**63])
    def test_invalid_progress_leaves_book_unchanged(
        self, book_service: BookService, sample_book: Book, sample_user: User, page
    ):
        book_service.update_progress(sample_user.id, sample_book.id, 100)

        with pytest.raises(ValidationError):
            book_service.update_progress(sample_user.id, sample_book.id, page)

        assert book_service.get_book(sample_user.id, sample_book.id).current_page == 100

    @pytest.mark.parametrize("rating", [0, 1, 2, 3, 4, 5])
    def test_ratings_zero_to_five_accepted(
        self, book_service: BookService, sample_book: Book, sample_user: User, rating
    ):
        book = book_service.update_rating(sample_user.id, sample_book.id, rating)
        assert book.rating == rating

    @pytest.mark.parametrize("rating", [-1, 6, None, 2.5, 2**63])
    def test_invalid_ratings_rejected(
        self, book_service: BookService, sample_book: Book, sample_user: User, rating
    ):
        with pytest.raises(ValidationError):
            book_service.update_rating(sample_user.id, sample_book.id, rating)

    def test_rating_does_not_touch_progress(
        self, book_service: BookService, sample_book: Book, sample_user: User
    ):
        book_service.update_progress(sample_user.id, sample_book.id, 100)

        book = book_service.update_rating(sample_user.id, sample_book.id, 4)
        assert book.current_page == 100
        assert book.status == "Reading"

    def test_delete_then_get(
        self, book_service: BookService, sample_book: Book, sample_user: User
    ):
        book_id = sample_book.id
        book_service.delete_book(sample_user.id, book_id)

        with pytest.raises(NotFoundError):
            book_service.get_book(sample_user.id, book_id)


class TestValidators:
    @pytest.mark.parametrize(
        "current_page,no_of_pages,message",
        [
            (0, 0, "no_of_pages must be a positive integer"),
            (-1, 10, "current_page cannot be negative"),
            (11, 10, "current_page cannot be greater than no_of_pages"),
            (0, 2**31, "no_of_pages cannot be greater than 2147483647"),
        ],
    )
    def test_check_pages(self, current_page, no_of_pages, message):
        with pytest.raises(ValidationError) as exc_info:
            check_pages(current_page, no_of_pages)
        assert exc_info.value.message == message

    def test_check_rating_returns_int(self):
        assert check_rating(3) == 3
        assert check_rating(4.0) == 4

    def test_bool_is_not_a_rating(self):
        with pytest.raises(ValidationError):
            check_rating(True)


class TestStorageErrors:
    """Database failures surface as InternalError with no driver detail."""

    def test_commit_failure_rolls_back_and_hides_detail(
        self, book_service: BookService, sample_book: Book, sample_user: User, monkeypatch, caplog
    ):
        rollbacks = []

        def failing_commit():
            raise OperationalError("UPDATE books", {}, Exception("connection reset by peer"))

        monkeypatch.setattr(book_service.db, "commit", failing_commit)
        monkeypatch.setattr(book_service.db, "rollback", lambda: rollbacks.append(True))

        with caplog.at_level(logging.ERROR, logger="app.services.base"):
            with pytest.raises(InternalError) as exc_info:
                book_service.update_rating(sample_user.id, sample_book.id, 4)

        assert exc_info.value.message == "An internal error occurred."
        assert exc_info.value.__cause__ is None
        assert rollbacks == [True]
        assert "Storage error while trying to update a rating" in caplog.text
