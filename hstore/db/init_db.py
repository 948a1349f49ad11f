#!/usr/bin/env python3
"""Enable the hstore extension.

Runs `CREATE EXTENSION IF NOT EXISTS hstore` against the database pointed
to by DATABASE_URL.

Usage:
  python -m hstore.db.init_db
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import create_engine, text

from hstore.db.config import PostgresConfig

logger = logging.getLogger(__name__)

CREATE_EXTENSION_SQL = "CREATE EXTENSION IF NOT EXISTS hstore"


def ensure_hstore_extension(engine: Any) -> None:
    """Create the hstore extension if the database does not have it yet."""
    with engine.begin() as conn:
        conn.execute(text(CREATE_EXTENSION_SQL))
    logger.info("hstore extension ready")


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    config = PostgresConfig.from_env()
    if config is None:
        raise SystemExit("DATABASE_URL is not set")

    # Do not log the URL (it may contain secrets).
    engine = create_engine(config.database_url, echo=False)
    try:
        ensure_hstore_extension(engine)
    finally:
        engine.dispose()

    print("✅ hstore extension enabled")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
