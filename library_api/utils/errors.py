class LibraryError(Exception):
    """Base class for errors a request handler turns into a response envelope."""

    status_code = 400
    message = "Request failed"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(LibraryError):
    """Malformed or missing input. ``errors`` maps field name -> list of messages."""

    status_code = 422
    message = "Validation error"

    def __init__(self, errors: dict, message=None):
        super().__init__(message)
        self.errors = errors


class NotFoundError(LibraryError):
    status_code = 404
    message = "Not found"


class ConflictError(LibraryError):
    """Business-rule violation (no copies left, already returned, ...)."""

    status_code = 400


class AuthenticationError(LibraryError):
    status_code = 401
    message = "Invalid credentials"
