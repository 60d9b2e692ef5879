"""Domain-specific exceptions for the BI Dashboard API.

All exceptions inherit from DashboardError. Errors raised while talking to the
relational store are StoreError instances and are reported to API clients as a
500 error envelope.
"""


class DashboardError(Exception):
    """Base exception for all BI Dashboard errors."""

    pass


class StoreError(DashboardError):
    """Raised when the relational store cannot serve a request.

    This exception is raised when:
    - The connection pool has not been initialised
    - The store is unreachable at startup
    """

    pass


class DatabaseNotInitializedError(StoreError):
    """Raised when a session is requested before init_database() ran."""

    def __init__(self, message: str = "Database not initialized. Call init_database() first."):
        super().__init__(message)
