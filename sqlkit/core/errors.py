"""Library error types.

Driver errors are never wrapped by sqlkit; these types only cover conditions
the library detects itself.
"""

from __future__ import annotations


class SqlKitError(Exception):
    """Base class for errors raised by sqlkit itself."""


class BindingError(SqlKitError, LookupError):
    """Raised when a named placeholder has no value in the parameter map."""

    def __init__(self, name: str, sql: str):
        super().__init__(f"Missing value for named parameter ':{name}' in query: {sql}")
        self.name = name
        self.sql = sql


class ConnectionNotFoundError(SqlKitError, LookupError):
    """Raised when closing a connection name that has no registered pool."""

    def __init__(self, name: str):
        super().__init__(f"No connection pool registered under name {name!r}.")
        self.name = name
