"""
Errors raised by the authorization engine and its store.

Routes let these propagate; the handlers registered in ``app.main`` turn
them into HTTP responses.
"""


class AccessError(Exception):
    """Base class for authorization outcomes that abort a request."""
    status_code: int = 500
    default_detail: str = "Access error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthenticated(AccessError):
    """No acting user could be resolved for the request."""
    status_code = 401
    default_detail = "Not authenticated"


class NotFound(AccessError):
    """The referenced record, region, group or user does not exist."""
    status_code = 404
    default_detail = "Not found"


class Forbidden(AccessError):
    """The acting user is authenticated but lacks permission."""
    status_code = 403
    default_detail = "Not authorized"


class StoreUnavailable(AccessError):
    """A lookup against the data store failed (I/O or database error)."""
    status_code = 503
    default_detail = "Data store unavailable"
