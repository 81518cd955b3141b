"""
Service Exceptions

Typed errors raised by the business services.

Services never build HTTP responses themselves. They raise one of these and
the exception handlers registered in app.main translate it into a status
code and a {"detail": ...} body:

    ValidationError     400  malformed or missing input
    ConflictError       400  username/email already registered
    AuthError           401  bad credentials, missing token
    InvalidTokenError   403  bad signature, malformed or expired token
    NotFoundError       404  resource absent or owned by someone else
    InternalError       500  storage failure (message withheld from client)
"""


class ServiceError(Exception):
    """Base class for all service-level errors."""

    status_code: int = 500
    default_message: str = "An internal error occurred."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = 400
    default_message = "Invalid input"


class ConflictError(ServiceError):
    status_code = 400
    default_message = "Username or email already exists"


class AuthError(ServiceError):
    status_code = 401
    default_message = "Invalid email or password"


class InvalidTokenError(AuthError):
    status_code = 403
    default_message = "Invalid or expired token"


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "Resource not found"


class InternalError(ServiceError):
    status_code = 500
