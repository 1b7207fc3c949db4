"""Domain errors. Each carries the HTTP status it is rendered with."""


class AppError(Exception):
    """Base class for errors recovered at the request boundary."""

    status_code: int = 400
    default_message: str = "Bad request"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid input"


class ConflictError(AppError):
    status_code = 409
    default_message = "Username already taken"


class InvalidCredentialsError(AppError):
    """Bad login. The same message for unknown user and wrong password."""

    status_code = 401
    default_message = "Invalid credentials"


class TokenError(AppError):
    """Session verification failure."""

    status_code = 401
    default_message = "Access denied."


class MissingTokenError(TokenError):
    default_message = "Access denied. No token provided."


class InvalidTokenError(TokenError):
    default_message = "Access denied. Invalid token."


class ExpiredTokenError(TokenError):
    default_message = "Access denied. Token expired."


class UserNotFoundError(TokenError):
    default_message = "Access denied. User not found."


class NotFoundError(AppError):
    status_code = 404
    default_message = "Post not found"


class NotOwnerError(AppError):
    status_code = 403
    default_message = "Access denied. You can only access your own posts."


class WindowExpiredError(AppError):
    status_code = 403
    default_message = "Post can only be edited within 30 minutes of creation"
