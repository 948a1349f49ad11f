"""Typed PostgreSQL hstore column values."""

from hstore.codec import decode, encode
from hstore.column import ZERO_TIME, Hstore
from hstore.exceptions import HstoreError, HstoreScanError

__all__ = ["Hstore", "HstoreError", "HstoreScanError", "ZERO_TIME", "decode", "encode"]
