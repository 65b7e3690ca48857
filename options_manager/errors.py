"""Errors raised by the option persistence layer.

Each class carries the HTTP status the admin endpoint answers with when the
error reaches the route boundary.
"""


class PersistenceError(Exception):
    """Base error for option storage operations."""

    status_code = 500
    default_message = "Option storage operation failed."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def __str__(self):
        return self.message


class ValidationError(PersistenceError):
    """Bad input, rejected before any storage access."""

    status_code = 400
    default_message = "Validation failed."


class NotFoundOrForbidden(PersistenceError):
    """Requested option ids are missing or owned by another shop."""

    status_code = 404

    def __init__(self, ids, message=None):
        self.ids = list(ids)
        super().__init__(
            message
            or "Some options not found or don't belong to this shop: "
            + ", ".join(str(i) for i in self.ids)
        )


class StorageError(PersistenceError):
    """The database rejected a read or write."""

    status_code = 500
