class ServiceError(Exception):
    status_code = 400
    default_message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidInput(ServiceError):
    default_message = "Invalid input"


class RateLimited(ServiceError):
    status_code = 429
    default_message = "Too many codes requested, try again later"

    def __init__(self, message: str | None = None, retry_after_seconds: int = 0) -> None:
        super().__init__(message)
        self.retry_after_seconds = retry_after_seconds


class InvalidOrExpiredCode(ServiceError):
    default_message = "Invalid or expired code"


class AuthenticationError(ServiceError):
    status_code = 401
    default_message = "Authentication required"


class MissingToken(AuthenticationError):
    default_message = "Missing Authorization header"


class InvalidToken(AuthenticationError):
    default_message = "Invalid token"


class AccountNotFound(AuthenticationError):
    default_message = "User not found"


class NoMaxAvailable(ServiceError):
    status_code = 404
    default_message = "No PR records found for this movement"


class RecordNotFound(ServiceError):
    status_code = 404
    default_message = "Record not found"
