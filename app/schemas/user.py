"""
User Pydantic Schemas

These schemas define the shape of data for authentication operations.

Schemas:
- RegisterRequest: Registration data (username, email, password)
- LoginRequest: Login data (email, password)
- UserResponse: Public user data (never exposes the password hash)
- AuthResponse: Register/login result (message + user + token)
- ProfileResponse: GET /auth/me result
- TokenClaims: Identity embedded in an access token

Business rules (email shape, password length, uniqueness) are enforced by
AuthService, so direct callers of the service get the same checks as HTTP
clients.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Schema for user registration."""

    username: str = Field(
        ...,
        max_length=50,
        description="Unique username",
        examples=["reader"],
    )

    email: str = Field(
        ...,
        max_length=255,
        description="User's email address",
        examples=["reader@example.com"],
    )

    password: str = Field(
        ...,
        max_length=128,
        description="Password (min 6 characters)",
        examples=["secret123"],
    )


class LoginRequest(BaseModel):
    """Schema for login with email and password."""

    email: str = Field(
        ...,
        description="Registered email address",
        examples=["reader@example.com"],
    )

    password: str = Field(
        ...,
        description="Account password",
        examples=["secret123"],
    )


class UserResponse(BaseModel):
    """
    Schema for user responses (what the API returns).

    SECURITY: Never includes the password hash.
    """

    id: int = Field(..., description="Unique user identifier", examples=[1])
    username: str = Field(..., description="Unique username")
    email: str = Field(..., description="User's email address")
    created_at: datetime = Field(..., description="When the user registered")
    updated_at: datetime = Field(..., description="When the user was last updated")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "username": "reader",
                "email": "reader@example.com",
                "created_at": "2024-01-15T10:30:00Z",
                "updated_at": "2024-01-15T10:30:00Z",
            }
        },
    )


class AuthResponse(BaseModel):
    """
    Schema returned by register and login.

    Usage of the token:
        Authorization: Bearer <token>
    """

    message: str = Field(..., description="Human-readable result")
    user: UserResponse = Field(..., description="The authenticated user")
    token: str = Field(..., description="Signed access token (valid 24h)")


class ProfileResponse(BaseModel):
    """Schema for GET /auth/me."""

    user: UserResponse


class MessageResponse(BaseModel):
    """Plain confirmation message (logout, delete)."""

    message: str = Field(..., examples=["Book deleted successfully"])


class TokenClaims(BaseModel):
    """
    Identity claim carried inside an access token.

    Produced by AuthService.verify_token and injected into protected routes
    by the CurrentIdentity dependency.
    """

    id: int
    username: str
    email: str
