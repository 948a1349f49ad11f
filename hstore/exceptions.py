"""Exceptions raised by the hstore package.

Malformed domain data never raises; accessors degrade to zero values.
The only hard failure is handing the scanner a source it cannot read.
"""

from __future__ import annotations


class HstoreError(Exception):
    """Base exception for hstore errors."""


class HstoreScanError(HstoreError, TypeError):
    """Raised when a database value is neither text nor a byte sequence."""

    def __init__(self, value: object):
        super().__init__(f"cannot scan {type(value).__name__} into Hstore")
        self.value = value
