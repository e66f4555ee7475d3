"""Contest domain errors.

Routers do not catch these; handlers registered in `app.main` turn them into
`{"success": false, "message": ...}` responses.
"""


class ContestError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ContestError):
    status_code = 404


class ConflictError(ContestError):
    status_code = 409


class ValidationError(ContestError):
    status_code = 400


class StorageFailure(ContestError):
    """Persistence failed; the request is rolled back and not retried."""
    status_code = 500


__all__ = [
    "ContestError",
    "NotFoundError",
    "ConflictError",
    "ValidationError",
    "StorageFailure",
]
