"""
Books Router

CRUD endpoints for the authenticated reader's books, plus dedicated
endpoints for reading progress and rating.

Every route requires a Bearer token. The paths match the web client's
contract (/books/addBook, /books/editBook/{id}) and must not change.

Business rules live in BookService; handlers only translate between
request/response schemas and service calls.
"""

from fastapi import APIRouter, status

from app.dependencies import Books, CurrentIdentity
from app.schemas.book import (
    BookCreate,
    BookResponse,
    BookUpdate,
    ProgressUpdate,
    RatingUpdate,
)
from app.schemas.user import MessageResponse

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        401: {"description": "Access token required"},
        403: {"description": "Invalid or expired token"},
        404: {"description": "Book not found"},
    },
)


@router.get(
    "",
    response_model=list[BookResponse],
    summary="List my books",
    description="All books owned by the current user, newest first, with progress.",
)
def list_books(identity: CurrentIdentity, books: Books) -> list[BookResponse]:
    return [BookResponse.model_validate(book) for book in books.list_books(identity.id)]


@router.post(
    "/addBook",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a book",
    description="""
    Add a book to the current user's shelf.

    - title, author, no_of_pages and published_at are required
    - current_page defaults to 0 and can't exceed no_of_pages
    - status is derived from the page counters
    """,
)
def add_book(
    payload: BookCreate,
    identity: CurrentIdentity,
    books: Books,
) -> BookResponse:
    book = books.create_book(identity.id, payload.model_dump(exclude_unset=True))
    return BookResponse.model_validate(book)


@router.get(
    "/editBook/{book_id}",
    response_model=BookResponse,
    summary="Get a book by ID",
)
def get_book(book_id: int, identity: CurrentIdentity, books: Books) -> BookResponse:
    return BookResponse.model_validate(books.get_book(identity.id, book_id))


@router.put(
    "/editBook/{book_id}",
    response_model=BookResponse,
    summary="Update a book",
    description="""
    Edit a book. Only the fields present in the body are changed.

    Sending `null` clears cover_image, genre, notes, start_date or
    finish_date; it is rejected for the required fields.
    """,
)
def update_book(
    book_id: int,
    payload: BookUpdate,
    identity: CurrentIdentity,
    books: Books,
) -> BookResponse:
    # model_dump(exclude_unset=True) returns only fields that were sent
    book = books.update_book(identity.id, book_id, payload.model_dump(exclude_unset=True))
    return BookResponse.model_validate(book)


@router.patch(
    "/{book_id}/progress",
    response_model=BookResponse,
    summary="Update reading progress",
)
def update_progress(
    book_id: int,
    payload: ProgressUpdate,
    identity: CurrentIdentity,
    books: Books,
) -> BookResponse:
    book = books.update_progress(identity.id, book_id, payload.current_page)
    return BookResponse.model_validate(book)


@router.patch(
    "/{book_id}/rating",
    response_model=BookResponse,
    summary="Rate a book (0-5)",
)
def update_rating(
    book_id: int,
    payload: RatingUpdate,
    identity: CurrentIdentity,
    books: Books,
) -> BookResponse:
    book = books.update_rating(identity.id, book_id, payload.rating)
    return BookResponse.model_validate(book)


@router.delete(
    "/{book_id}",
    response_model=MessageResponse,
    summary="Delete a book",
)
def delete_book(book_id: int, identity: CurrentIdentity, books: Books) -> MessageResponse:
    books.delete_book(identity.id, book_id)
    return MessageResponse(message="Book deleted successfully")
