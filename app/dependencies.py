"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

What lives here:
- DbSession: one SQLAlchemy session per request
- AppSettings: the cached Settings object
- Auth / Books: services built per request from the two above
- CurrentIdentity: the identity claim from a valid Bearer token

Token failures follow the API contract:
- no Authorization header (or not a Bearer token) -> 401
- invalid signature, malformed or expired token   -> 403
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.database import get_db
from app.schemas.user import TokenClaims
from app.services.auth import AuthService
from app.services.books import BookService
from app.services.exceptions import AuthError

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def get_books(db: Session = Depends(get_db)):
#
# You can write:
#   def get_books(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_settings)]


# =============================================================================
# Services
# =============================================================================
def get_auth_service(db: DbSession, settings: AppSettings) -> AuthService:
    """Build the AuthService for this request."""
    return AuthService(db, settings)


def get_book_service(db: DbSession) -> BookService:
    """Build the BookService for this request."""
    return BookService(db)


Auth = Annotated[AuthService, Depends(get_auth_service)]
Books = Annotated[BookService, Depends(get_book_service)]


# =============================================================================
# Bearer Token Authentication
# =============================================================================
# HTTPBearer extracts the token from "Authorization: Bearer <token>" and adds
# the "Authorize" button to Swagger UI. auto_error=False lets us return our
# own 401 instead of FastAPI's default 403 for a missing header.

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_identity(
    auth: Auth,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> TokenClaims:
    """
    Validate the Bearer token and return the identity it carries.

    The identity comes straight from the token claims; no database lookup is
    made here. Services that need the user row (e.g. /auth/me) load it and
    report NotFoundError if it's gone.

    Raises:
        AuthError: 401 if the token is missing
        InvalidTokenError: 403 if the token is invalid or expired
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("Access token required")

    return auth.verify_token(credentials.credentials)


CurrentIdentity = Annotated[TokenClaims, Depends(get_current_identity)]
