"""Typed wrapper around a PostgreSQL hstore value.

Every entry is stored as a string. The typed accessors only format on the
way in and parse on the way out; a value that does not parse comes back as
the zero value of the requested type.

Usage:
    attrs = Hstore.new()
    attrs.set_float("price", 0.345, 2)   # "0.34"
    attrs.append("tags", "btc", ",")
    attrs.get_as_slice("tags", ",")      # ["btc"]
"""

from __future__ import annotations

import logging
import math
import re
import sys
from datetime import datetime, timezone
from typing import Any, Callable, Iterator, Mapping, Optional, TextIO, Union

import pandas as pd
from sqlalchemy.ext.mutable import Mutable

from hstore.codec import decode, encode
from hstore.exceptions import HstoreScanError

logger = logging.getLogger(__name__)

# Returned by get_time() when there is nothing to parse.
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

DATA_TYPE = "hstore"


class Hstore(Mutable):
    """In-memory hstore column value with typed accessors and a memo cache.

    `None` data means the column was never initialized (SQL NULL); an empty
    dict means it is initialized with zero entries. Both count as empty.

    Not safe for concurrent mutation. Guard shared instances with a lock
    owned by the enclosing record.
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        self._data: Optional[dict[str, str]] = None
        self._cache: Optional[dict[str, Any]] = None
        if data is not None:
            self._data = {str(key): _stringify(val) for key, val in data.items()}

    @classmethod
    def new(cls) -> Hstore:
        """Initialized column with zero entries."""
        return cls({})

    # ------------------------------------------------------------------
    # Database hooks
    # ------------------------------------------------------------------

    @classmethod
    def scan(cls, value: Any) -> Hstore:
        """Build a column from a raw database value.

        Accepts hstore text, bytes, or a mapping already decoded by the
        driver. SQL NULL yields an uninitialized column. Invalid UTF-8 in
        bytes is replaced rather than raised.
        """
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, (bytes, bytearray, memoryview)):
            value = bytes(value).decode("utf-8", errors="replace")
        if isinstance(value, str):
            return cls(decode(value))
        if isinstance(value, Mapping):
            return cls({key: "" if val is None else val for key, val in value.items()})
        raise HstoreScanError(value)

    def __getstate__(self) -> dict[str, Any]:
        # _parents holds weakrefs and is rebuilt by the mapper on unpickle.
        return {"_data": self._data}

    def __setstate__(self, state: dict[str, Any]) -> None:
        self._data = state["_data"]
        self._cache = None

    def value(self) -> Optional[str]:
        """Wire representation, or None for an uninitialized column."""
        return encode(self._data)

    @staticmethod
    def data_type() -> str:
        return DATA_TYPE

    @classmethod
    def coerce(cls, key: str, value: Any) -> Any:
        """Convert plain values assigned to a mapped attribute."""
        if value is None or isinstance(value, cls):
            return value
        if isinstance(value, (str, bytes, bytearray, memoryview, Mapping)):
            return cls.scan(value)
        return super().coerce(key, value)

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------

    def len(self) -> int:
        return 0 if self._data is None else len(self._data)

    def is_empty(self) -> bool:
        """True when uninitialized or without entries. Clears the memo cache when true."""
        if self._data is None or len(self._data) == 0:
            self._cache = None
            return True
        return False

    def init_if_empty(self) -> Hstore:
        if self.is_empty():
            was_null = self._data is None
            self._data = {}
            if was_null:
                self.changed()
        return self

    def have(self, key: str) -> bool:
        """True when the key holds a non-empty string.

        A key stored with an empty value is reported the same as a missing key.
        """
        return self.get(key) != ""

    def get(self, key: str) -> str:
        if self._data is None:
            return ""
        return self._data.get(key, "")

    def get_float(self, key: str) -> float:
        s = self.get(key)
        if not s:
            return 0.0
        try:
            return float(s)
        except ValueError:
            return 0.0

    def get_int(self, key: str) -> int:
        try:
            return math.trunc(self.get_float(key))
        except (ValueError, OverflowError):
            return 0

    def get_time(self, key: str) -> datetime:
        """Parse a stored timestamp in any common textual format.

        Values without an offset are read as UTC, so every result is aware
        and can be ordered against ZERO_TIME, which is returned when the key
        is missing or the value does not parse.
        """
        s = self.get(key)
        if not s:
            return ZERO_TIME
        try:
            ts = pd.to_datetime(s, errors="coerce", utc=True)
        except (ValueError, TypeError, OverflowError):
            return ZERO_TIME
        if pd.isna(ts):
            return ZERO_TIME
        return ts.to_pydatetime()

    def get_as_slice(self, key: str, sep: str) -> Optional[list[str]]:
        """Split a stored value by `sep`. Missing key returns None."""
        s = self.get(key)
        if not s:
            return None
        return s.split(sep)

    def get_as_map(self, key: str, sep_item: str, sep_key_val: str) -> dict[str, str]:
        """a-->b,c-->d  ==>  {"a": "b", "c": "d"}

        Items without `sep_key_val` are dropped.
        """
        result: dict[str, str] = {}
        for item in self.get_as_slice(key, sep_item) or []:
            parts = item.split(sep_key_val, 1)
            if len(parts) == 2:
                result[parts[0]] = parts[1]
        return result

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def _store(self, key: str, s: str) -> None:
        if self._data is None:
            self._data = {}
        self._data[key] = s
        self.changed()

    def set(self, key: str, val: Any) -> None:
        self._store(key, _stringify(val))

    def set_int(self, key: str, val: int) -> None:
        self._store(key, str(int(val)))

    def set_float(self, key: str, val: float, decimals: int) -> None:
        """Store `val` with at most `decimals` fractional digits.

        Trailing zeros and a dangling decimal point are removed:
        100.00 ==> "100", 0.345 (1) ==> "0.3".
        Zeros are only trimmed after a decimal point (100 with 0 decimals stays
        "100") and a negative zero is stored as "0".
        """
        s = f"{val:.{max(decimals, 0)}f}"
        if "." in s:
            s = s.rstrip("0")  # 100.00 ==> 100.
            s = s.rstrip(".")  # 100. ==> 100
        if s in ("", "-0"):
            s = "0"
        self._store(key, s)

    def append(self, key: str, val: str, sep: str) -> None:
        """Append with separator: `a|b` + `c` ==> `a|b|c`."""
        s = self.get(key)
        if s:
            s += sep
        s += val
        self._store(key, s)

    def delete(self, key: str) -> None:
        if self._data is None or key not in self._data:
            return
        del self._data[key]
        self.changed()
        self.is_empty()

    def delete_by_regex(self, pattern: str) -> None:
        """Delete every key (not value) matching `pattern` anywhere in the key."""
        if self._data is None:
            return
        try:
            regex = re.compile(pattern)
        except re.error as exc:
            logger.debug("Invalid hstore key pattern %r: %s", pattern, exc)
            return
        for key in [k for k in self._data if regex.search(k)]:
            self.delete(key)

    def merge(self, other: Union[Hstore, Mapping[str, Any]]) -> Hstore:
        """Copy every entry of `other` into this column. `other` wins on conflicts."""
        for key, val in other.items():
            self.set(key, val)
        return self

    # ------------------------------------------------------------------
    # Memo cache
    # ------------------------------------------------------------------

    def save_to_cache(self, key: str, val: Any) -> None:
        if self._cache is None:
            self._cache = {}
        self._cache[key] = val

    def load_from_cache(self, key: str) -> Any:
        if self._cache is None:
            return None
        return self._cache.get(key)

    def cached(self, key: str, factory: Callable[[], Any]) -> Any:
        """Return the cached value for `key`, computing it with `factory` on a miss."""
        if self._cache is not None and key in self._cache:
            return self._cache[key]
        val = factory()
        self.save_to_cache(key, val)
        return val

    # ------------------------------------------------------------------
    # Mapping helpers
    # ------------------------------------------------------------------

    def keys(self) -> list[str]:
        return [] if self._data is None else list(self._data)

    def items(self) -> list[tuple[str, str]]:
        return [] if self._data is None else list(self._data.items())

    def to_dict(self) -> dict[str, str]:
        return {} if self._data is None else dict(self._data)

    def dump(self, file: Optional[TextIO] = None) -> None:
        """Print all entries, one per line, framed by dotted rules."""
        out = file or sys.stdout
        print("." * 80, file=out)
        for key, val in self.items():
            print("%25s ==> %s" % (key, val), file=out)
        print("." * 80, file=out)

    def __len__(self) -> int:
        return self.len()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.have(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __getitem__(self, key: str) -> str:
        return self.get(key)

    def __setitem__(self, key: str, val: Any) -> None:
        self.set(key, val)

    def __delitem__(self, key: str) -> None:
        self.delete(key)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Hstore):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data is not None and self._data == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"<Hstore({self._data!r})>"


def _stringify(val: Any) -> str:
    if val is None:
        return ""
    return str(val)
