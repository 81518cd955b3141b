"""
Pydantic Schemas Package

This package contains Pydantic models for request/response validation.

WHY Separate Schemas from SQLAlchemy Models?
============================================
1. Security: hashed_password never leaves the server
2. Validation: Different rules for create vs update vs response
3. Decoupling: Database schema can evolve independently of API
4. Documentation: Schemas generate OpenAPI documentation

Schema Naming Convention:
- XxxRequest / XxxCreate: Request bodies
- XxxUpdate: Partial updates (all fields optional)
- XxxResponse: Fields returned in API responses
"""

from app.schemas.book import (
    BookCreate,
    BookResponse,
    BookUpdate,
    ProgressUpdate,
    RatingUpdate,
)
from app.schemas.user import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    RegisterRequest,
    TokenClaims,
    UserResponse,
)

__all__ = [
    # Book schemas
    "BookCreate",
    "BookUpdate",
    "BookResponse",
    "ProgressUpdate",
    "RatingUpdate",
    # User / auth schemas
    "RegisterRequest",
    "LoginRequest",
    "UserResponse",
    "AuthResponse",
    "ProfileResponse",
    "MessageResponse",
    "TokenClaims",
]
