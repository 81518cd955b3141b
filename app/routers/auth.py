"""
Authentication Router

Handles user authentication endpoints:
- Registration (username/email/password -> user + token)
- Login (email/password -> user + token)
- Get current user (from Bearer token)
- Logout

Security:
=========
- Passwords are hashed with bcrypt before storage
- Plain text passwords are never logged or stored
- Tokens are JWTs valid for 24 hours
- Logout does not revoke the token (no server-side blacklist); clients
  discard it and it expires on its own
"""

import logging

from fastapi import APIRouter, status

from app.dependencies import Auth, CurrentIdentity
from app.schemas.user import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    RegisterRequest,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={
        400: {"description": "Invalid input or username/email already exists"},
        401: {"description": "Invalid credentials or missing token"},
        403: {"description": "Invalid or expired token"},
    },
)


# -------------------------------------------------------------------------
# Registration Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="""
    Create a new account and receive an access token.

    **Requirements:**
    - username, email and password are all required
    - email must look like `local@domain.tld`
    - password must be at least 6 characters
    """,
)
def register(payload: RegisterRequest, auth: Auth) -> AuthResponse:
    """Register a new user and sign them in."""
    user, token = auth.register(payload.username, payload.email, payload.password)
    return AuthResponse(
        message="User registered successfully",
        user=UserResponse.model_validate(user),
        token=token,
    )


# -------------------------------------------------------------------------
# Login Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login with email and password",
    description="""
    Authenticate with email and password to receive an access token.

    **Usage:**
    Include the token in the Authorization header:
    ```
    Authorization: Bearer <token>
    ```
    """,
)
def login(payload: LoginRequest, auth: Auth) -> AuthResponse:
    """Authenticate user and return the user plus a token."""
    user, token = auth.login(payload.email, payload.password)
    return AuthResponse(
        message="Login successful",
        user=UserResponse.model_validate(user),
        token=token,
    )


# -------------------------------------------------------------------------
# Get Current User Endpoint
# -------------------------------------------------------------------------
@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get current user",
)
def get_me(identity: CurrentIdentity, auth: Auth) -> ProfileResponse:
    """Return the authenticated user's public profile."""
    user = auth.get_profile(identity.id)
    return ProfileResponse(user=UserResponse.model_validate(user))


# -------------------------------------------------------------------------
# Logout Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Logout user",
    description="""
    Acknowledge a logout.

    **Note:** The token remains valid until it expires (24h). There is no
    token blacklist yet.
    """,
)
def logout(identity: CurrentIdentity) -> MessageResponse:
    """Logout is a client-side operation; nothing is revoked server-side."""
    logger.info(f"User logged out: id={identity.id}")
    return MessageResponse(message="Logout successful")
