"""Domain error taxonomy shared by the matching, project and messaging services.

Each error carries the HTTP status and a short machine-readable ``code`` so the
API layer can translate it without knowing the individual classes.
"""


class MarketplaceError(Exception):
    status_code = 500
    code = "error"

    def __init__(self, message: str = "", detail=None):
        super().__init__(message or self.code)
        self.message = message or self.code
        self.detail = detail or {}


class ValidationError(MarketplaceError):
    """Malformed input: missing fields, bad enum values, forbidden transitions."""

    status_code = 400
    code = "validation_error"


class NotFoundError(MarketplaceError):
    status_code = 404
    code = "not_found"


class AuthorizationError(MarketplaceError):
    """Caller is not a party to the record being mutated."""

    status_code = 403
    code = "forbidden"


class ConcurrencyConflict(MarketplaceError):
    """Optimistic-lock failure that survived every retry."""

    status_code = 409
    code = "conflict"
