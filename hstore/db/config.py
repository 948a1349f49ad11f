from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class PostgresConfig:
    """Connection configuration.

    `database_url` should come from environment (e.g. DATABASE_URL).
    Do not log it.
    """

    database_url: str

    @classmethod
    def from_env(cls, var: str = "DATABASE_URL") -> PostgresConfig | None:
        """Read the URL from the environment. Returns None when unset."""
        database_url = os.getenv(var, "").strip()
        if not database_url:
            return None
        return cls(database_url=database_url)
