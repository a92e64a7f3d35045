"""
Domain errors raised by the services and turned into JSON envelopes by
``app.errors``. Each kind carries the HTTP status and the ``code`` clients
switch on.
"""


class BookstoreError(Exception):
    status = 400
    code = "error"
    default_message = "Request failed"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class NotFound(BookstoreError):
    status = 404
    code = "not_found"
    default_message = "Not found"


class Conflict(BookstoreError):
    status = 409
    code = "conflict"
    default_message = "Already exists"


class InsufficientStock(BookstoreError):
    status = 409
    code = "insufficient_stock"
    default_message = "Insufficient stock"

    def __init__(self, message=None, titles=()):
        self.titles = list(titles)
        if message is None and self.titles:
            message = f"Insufficient stock for: {', '.join(self.titles)}"
        super().__init__(message)


class EmptyCart(BookstoreError):
    status = 400
    code = "empty_cart"
    default_message = "Cart is empty"


class Unauthorized(BookstoreError):
    status = 401
    code = "unauthorized"
    default_message = "Invalid email or password"


class Forbidden(BookstoreError):
    status = 403
    code = "forbidden"
    default_message = "Forbidden"


class ValidationError(BookstoreError):
    status = 400
    code = "validation_error"
    default_message = "Invalid request"


class PersistenceFailure(BookstoreError):
    status = 500
    code = "persistence_failure"
    default_message = "Could not save changes, please try again"


__all__ = [
    "BookstoreError",
    "NotFound",
    "Conflict",
    "InsufficientStock",
    "EmptyCart",
    "Unauthorized",
    "Forbidden",
    "ValidationError",
    "PersistenceFailure",
]
