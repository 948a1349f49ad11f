"""Text codec for the PostgreSQL hstore wire format.

    "a"=>"1", "b"=>"2"

Decoding is best-effort: pairs without `=>` are skipped, never raised.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, Mapping, Optional

logger = logging.getLogger(__name__)

PAIR_SEPARATOR = "=>"
ITEM_SEPARATOR = ", "

_UNESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


def _split_unquoted(text: str, sep: str, maxsplit: int = -1) -> Iterator[str]:
    """Split `text` on `sep`, ignoring separators inside double quotes.

    Backslash escapes inside quotes are copied through untouched.
    """

    buf: list[str] = []
    in_quotes = False
    splits = 0
    i = 0
    while i < len(text):
        ch = text[i]

        if in_quotes and ch == "\\" and i + 1 < len(text):
            buf.append(text[i : i + 2])
            i += 2
            continue

        if ch == '"':
            in_quotes = not in_quotes
            buf.append(ch)
            i += 1
            continue

        if not in_quotes and (maxsplit < 0 or splits < maxsplit) and text.startswith(sep, i):
            yield "".join(buf)
            buf = []
            splits += 1
            i += len(sep)
            continue

        buf.append(ch)
        i += 1

    yield "".join(buf)


def _unquote(token: str) -> str:
    token = token.strip()
    if len(token) >= 2 and token[0] == '"' and token[-1] == '"':
        return _UNESCAPE_RE.sub(r"\1", token[1:-1])
    return token.strip('"')


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def decode(wire: str) -> dict[str, str]:
    """Parse an hstore text value into a plain dict.

    A `NULL` value decodes to the empty string, which `Hstore.get` cannot
    tell apart from a missing key anyway.
    """

    result: dict[str, str] = {}
    for item in _split_unquoted(wire, ","):
        if not item.strip():
            continue

        parts = list(_split_unquoted(item, PAIR_SEPARATOR, maxsplit=1))
        if len(parts) != 2:
            logger.debug("Skipping malformed hstore pair: %r", item)
            continue

        raw_key, raw_val = parts
        key = _unquote(raw_key)
        if raw_val.strip().upper() == "NULL":
            result[key] = ""
        else:
            result[key] = _unquote(raw_val)

    return result


def encode(mapping: Optional[Mapping[str, str]]) -> Optional[str]:
    """Serialize a mapping to hstore text.

    Returns None for an uninitialized mapping (stored as SQL NULL) and an
    empty string for a mapping with no entries.
    """

    if mapping is None:
        return None

    return ITEM_SEPARATOR.join(
        f'"{_escape(str(key))}"{PAIR_SEPARATOR}"{_escape(str(val))}"' for key, val in mapping.items()
    )
