"""SQLAlchemy integration for hstore columns.

Notes
- We avoid logging connection URLs to prevent accidental secret leakage.
"""

from .config import PostgresConfig
from .types import HstoreType, MutableHstore

__all__ = ["HstoreType", "MutableHstore", "PostgresConfig"]
