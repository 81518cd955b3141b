"""
Service base class.

Holds the per-request database session and turns storage failures into
InternalError so routers never see raw SQLAlchemy exceptions.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.services.exceptions import InternalError

logger = logging.getLogger(__name__)


class BaseService:
    """Common plumbing for services bound to one request's Session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    @contextmanager
    def storage_errors(self, action: str) -> Iterator[None]:
        """
        Normalize storage failures raised inside the block.

        The session is rolled back, the full error is logged, and the caller
        gets an InternalError with no database detail in its message.
        """
        try:
            yield
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Storage error while trying to {action}")
            raise InternalError() from None
