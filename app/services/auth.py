"""
Authentication Service

Registration, login, profile lookup and access-token verification.

Security:
=========
- Passwords are hashed with bcrypt before storage
- Plain text passwords are never logged or stored; logs identify users by id, not email
- Unknown email and wrong password fail with the same AuthError, so login
  responses can't be used to discover which emails are registered
- Tokens are stateless JWTs; there is no revocation list, so logout is
  client-side only and a token stays valid until it expires
"""

import logging
import re
from datetime import timedelta

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import Settings
from app.models.user import User
from app.schemas.user import TokenClaims
from app.services.base import BaseService
from app.services.exceptions import (
    AuthError,
    ConflictError,
    InvalidTokenError,
    NotFoundError,
    ValidationError,
)
from app.services.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6
INVALID_CREDENTIALS = "Invalid email or password"


class AuthService(BaseService):
    """
    Credential store operations for one request.

    Args:
        db: Database session for this request
        settings: Application settings (signing secret, token lifetime)
    """

    def __init__(self, db: Session, settings: Settings) -> None:
        super().__init__(db)
        self.settings = settings

    # -------------------------------------------------------------------------
    # Tokens
    # -------------------------------------------------------------------------
    def issue_token(self, user: User) -> str:
        """Sign a token embedding the user's id, username and email."""
        claims = {"id": user.id, "username": user.username, "email": user.email}
        return create_access_token(
            claims,
            self.settings.secret_key,
            expires_delta=timedelta(hours=self.settings.access_token_expire_hours),
        )

    def verify_token(self, token: str) -> TokenClaims:
        """
        Validate a token and return the identity it carries.

        Raises:
            InvalidTokenError: Bad signature, malformed token, missing
                claims, or expired
        """
        payload = decode_access_token(token, self.settings.secret_key)
        try:
            return TokenClaims.model_validate(payload)
        except PydanticValidationError:
            logger.warning("Token is missing identity claims")
            raise InvalidTokenError() from None

    # -------------------------------------------------------------------------
    # Registration / Login
    # -------------------------------------------------------------------------
    def register(self, username: str, email: str, password: str) -> tuple[User, str]:
        """
        Create a new user and sign them in.

        1. Validates presence, email shape and password length
        2. Rejects a username or email that is already taken
        3. Hashes the password with bcrypt
        4. Persists the user and issues a token

        Returns:
            (user, token)

        Raises:
            ValidationError: Missing field, bad email, short password
            ConflictError: Username or email already registered
        """
        username = (username or "").strip()
        email = (email or "").strip()
        password = password or ""

        if not username or not email or not password:
            raise ValidationError("Username, email and password are required")
        if not EMAIL_PATTERN.match(email):
            raise ValidationError("Please provide a valid email address")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )

        with self.storage_errors("check for an existing user"):
            stmt = select(User.id).where(
                or_(User.email == email, User.username == username)
            )
            existing = self.db.execute(stmt).first()
        if existing is not None:
            logger.info("Registration rejected: username or email already taken")
            raise ConflictError("Username or email already exists")

        user = User(
            username=username,
            email=email,
            hashed_password=hash_password(password),
        )

        with self.storage_errors("register a user"):
            self.db.add(user)
            try:
                self.db.commit()
            except IntegrityError:
                # Lost a race with a concurrent registration
                self.db.rollback()
                raise ConflictError("Username or email already exists") from None
            self.db.refresh(user)

        logger.info(f"New user registered: id={user.id}")
        return user, self.issue_token(user)

    def login(self, email: str, password: str) -> tuple[User, str]:
        """
        Authenticate with email and password.

        Returns:
            (user, token)

        Raises:
            ValidationError: Email or password missing
            AuthError: Unknown email or wrong password (same message)
        """
        email = (email or "").strip()
        if not email or not password:
            raise ValidationError("Email and password are required")

        with self.storage_errors("look up a user by email"):
            stmt = select(User).where(User.email == email)
            user = self.db.execute(stmt).scalar_one_or_none()

        if user is None:
            logger.warning("Login failed: no user with that email")
            raise AuthError(INVALID_CREDENTIALS)

        if not verify_password(password, user.hashed_password):
            logger.warning(f"Login failed: incorrect password for user id={user.id}")
            raise AuthError(INVALID_CREDENTIALS)

        logger.info(f"User logged in: id={user.id}")
        return user, self.issue_token(user)

    def get_profile(self, user_id: int) -> User:
        """
        Return the user's public profile.

        Raises:
            NotFoundError: The user no longer exists
        """
        with self.storage_errors("load a user profile"):
            user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user
