class RentalError(RuntimeError):
    """Base for every error the client reports to a user. `message` is display-ready."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RentalError):
    """Client-side precondition failed; no request was made.

    errors: optional per-field messages (form validation).
    """

    def __init__(self, message: str, errors: dict[str, str] | None = None):
        super().__init__(message)
        self.errors = errors or {}


class BookingStateError(ValidationError):
    pass


class AuthError(RentalError):
    pass


class NotFoundError(RentalError):
    pass


class NetworkError(RentalError):
    pass


class ServerError(RentalError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
