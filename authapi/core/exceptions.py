"""Authentication and user-management errors raised by the core and services.

Routes translate these into HTTP responses; nothing above the services needs to
know how storage reports its failures.
"""


class AuthError(Exception):
    """Base class for errors surfaced to the HTTP layer. `message` is safe to show callers."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DuplicateIdentityError(AuthError):
    """Username or email is already taken."""

    def __init__(self, message: str = "username or email already exists") -> None:
        super().__init__(message)


class NotFoundError(AuthError):
    """No user with the given username or id."""

    def __init__(self, message: str = "user not found") -> None:
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Password does not match the stored hash."""

    def __init__(self, message: str = "invalid username or password") -> None:
        super().__init__(message)


class InvalidTokenError(AuthError):
    """Token is malformed, expired, or signed with the wrong secret. Never says which."""

    def __init__(self, message: str = "invalid token") -> None:
        super().__init__(message)


class MissingCredentialsError(AuthError):
    """Authorization header is absent or does not use the Bearer scheme."""

    def __init__(self, message: str = "missing or invalid Authorization header") -> None:
        super().__init__(message)


class InternalError(AuthError):
    """Unexpected storage or signing failure. Details are logged, not returned."""

    def __init__(self, message: str = "internal server error", cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(message)
