"""
Error taxonomy for menu generation and pricing.

Absence of a segment, menu or product is not an error here; lookups return
`NotFound` (see `menu_service.core.results`). These exceptions cover the
failures that abort an operation.
"""

# SQLSTATE PostgreSQL reports when statement_timeout cancels a query
QUERY_CANCELED_PGCODE = "57014"


class MenuServiceError(Exception):
    """Base class for all service errors."""

    error_code = "menu_service_error"


class InvalidInputError(MenuServiceError):
    """Rejected input: negative price, malformed percentage, inconsistent item."""

    error_code = "invalid_input"


class PersistenceError(MenuServiceError):
    """Saving or deleting failed; the in-progress unit of work was rolled back."""

    error_code = "persistence_failure"


class UpstreamUnavailableError(MenuServiceError):
    """Demand metrics or promotion lookup failed."""

    error_code = "upstream_unavailable"


class DeadlineExceededError(MenuServiceError):
    """The request timeout elapsed, before a store call or while the database ran it."""

    error_code = "deadline_exceeded"


def is_statement_timeout(error: Exception) -> bool:
    """True when a DBAPI error wrapped by SQLAlchemy is a cancelled statement."""
    return getattr(getattr(error, "orig", None), "pgcode", None) == QUERY_CANCELED_PGCODE
