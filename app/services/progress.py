"""
Reading Progress Rules

Pure functions shared by the Book model and BookService.

- derive_status: classifies a book as "Want to Read", "Reading" or "Read"
- calculate_progress: percentage of pages read, rounded half up

Neither touches the database; status is stored on the book and recomputed
by BookService on every write that changes current_page or no_of_pages.
"""

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum


class ReadingStatus(str, Enum):
    """
    Derived reading state of a book.

    Stored as its string value in books.status.
    """
    WANT_TO_READ = "Want to Read"
    READING = "Reading"
    READ = "Read"


def derive_status(current_page: int, total_pages: int) -> ReadingStatus:
    """
    Derive the reading status from the page counters.

    Example:
        >>> derive_status(0, 412).value
        'Want to Read'
        >>> derive_status(200, 412).value
        'Reading'
        >>> derive_status(412, 412).value
        'Read'
    """
    if current_page == 0:
        return ReadingStatus.WANT_TO_READ
    if current_page >= total_pages:
        return ReadingStatus.READ
    return ReadingStatus.READING


def calculate_progress(current_page: int, total_pages: int) -> int:
    """
    Percentage of the book read, as a whole number.

    Halves round up (1 of 8 pages is 13%, not 12%). A book without pages
    reports 0.

    Example:
        >>> calculate_progress(206, 412)
        50
        >>> calculate_progress(1, 8)
        13
    """
    if total_pages <= 0:
        return 0
    ratio = Decimal(current_page) * 100 / Decimal(total_pages)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
