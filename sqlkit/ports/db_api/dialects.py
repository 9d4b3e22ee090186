"""Concrete SQL dialect implementations for DB-API adapters."""

from __future__ import annotations


class Dialect:
    """Base dialect that defines positional placeholder behavior."""

    name: str = "generic"
    paramstyle: str = "qmark"

    def placeholder(self, position: int) -> str:
        """Return the placeholder for the 1-based `position` in current param style."""

        if self.paramstyle == "qmark":
            return "?"
        if self.paramstyle == "format":
            return "%s"
        if self.paramstyle == "numeric":
            return f"${position}"
        raise ValueError(f"Unsupported paramstyle: {self.paramstyle}")

    @property
    def escapes_percent(self) -> bool:
        """Whether literal `%` must be doubled when parameters are bound."""

        return self.paramstyle == "format"


class SQLiteDialect(Dialect):
    """SQLite dialect (`?` positional parameters, supports `RETURNING` since 3.35)."""

    name = "sqlite"
    paramstyle = "qmark"


class PostgresDialect(Dialect):
    """PostgreSQL dialect for psycopg (`%s` positional parameters)."""

    name = "postgres"
    paramstyle = "format"
