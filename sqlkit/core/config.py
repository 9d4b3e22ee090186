"""Connection configuration and environment defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5432
DEFAULT_MAX_SIZE = 10


@dataclass(frozen=True)
class ConnectionConfig:
    """Connection settings handed to a pool factory.

    Unset values are left out of the driver keyword arguments so the driver's
    own defaults apply. `extra` holds arbitrary driver options.
    """

    host: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None
    database: Optional[str] = None
    port: Optional[int] = None
    max_size: int = DEFAULT_MAX_SIZE
    extra: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ConnectionConfig:
        """Build config from `DB_HOST`, `DB_USER`, `DB_PASSWORD`, `DB_DATABASE`, `DB_PORT`."""

        env = os.environ if environ is None else environ
        return cls(
            host=env.get("DB_HOST") or DEFAULT_HOST,
            user=env.get("DB_USER"),
            password=env.get("DB_PASSWORD"),
            database=env.get("DB_DATABASE"),
            port=int(env.get("DB_PORT") or DEFAULT_PORT),
        )

    @classmethod
    def coerce(cls, value: ConnectionConfig | Mapping[str, Any]) -> ConnectionConfig:
        """Accept a config instance or a plain mapping of driver options.

        Mapping keys that are not config fields are collected into `extra`.
        """

        if isinstance(value, ConnectionConfig):
            return value
        if not isinstance(value, Mapping):
            raise TypeError(
                f"Connection config must be ConnectionConfig or a mapping, got {type(value)!r}."
            )
        known = {f.name for f in fields(cls)} - {"extra"}
        kwargs: Dict[str, Any] = {k: v for k, v in value.items() if k in known}
        extra = dict(value.get("extra") or {})
        extra.update({k: v for k, v in value.items() if k not in known and k != "extra"})
        return cls(**kwargs, extra=extra)

    def connect_kwargs(self) -> Dict[str, Any]:
        """Driver keyword arguments with unset values dropped."""

        kwargs: Dict[str, Any] = {
            "host": self.host,
            "user": self.user,
            "password": self.password,
            "database": self.database,
            "port": self.port,
        }
        kwargs = {k: v for k, v in kwargs.items() if v is not None}
        kwargs.update(self.extra)
        return kwargs

    def redacted(self) -> Dict[str, Any]:
        """Config as a dict safe to log: the password is masked."""

        data = self.connect_kwargs()
        if "password" in data:
            data["password"] = "***"
        data["max_size"] = self.max_size
        return data
