"""Shared test fixtures for pytest."""

from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from hstore import Hstore


@pytest.fixture
def empty_hstore() -> Hstore:
    """Initialized column with no entries."""
    return Hstore.new()


@pytest.fixture
def sample_hstore() -> Hstore:
    """Column holding a handful of typed values."""
    hs = Hstore.new()
    hs.set("aaa", "111")
    hs.set_int("bbb", 222)
    hs.set_float("ccc1", 0.345, 1)
    hs.set_float("ccc2", 0.345, 2)
    hs.set_float("ccc3", 0.345, 3)
    hs.set_float("ccc4", 12.0, 4)
    hs.set_float("ccc5", 0.0, 5)
    hs.set_float("ccc6", 100, 6)
    hs.set_float("ccc7", 100.00, 7)
    hs.set_int("k", 123456)
    hs.set_int("m", 12345678)
    return hs


@pytest.fixture
def mock_db_engine() -> Mock:
    """Mock SQLAlchemy engine for testing database helpers."""
    mock_engine = Mock()
    mock_conn = Mock()
    mock_engine.begin.return_value.__enter__ = Mock(return_value=mock_conn)
    mock_engine.begin.return_value.__exit__ = Mock(return_value=False)
    return mock_engine
