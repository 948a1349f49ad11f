"""SQLAlchemy column type for hstore.

Declare a column with `MutableHstore` so in-place edits are flushed:

    class Listing(Base):
        __tablename__ = "listings"

        id = Column(Integer, primary_key=True)
        attrs = Column(MutableHstore, nullable=True)
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from sqlalchemy.types import UserDefinedType

from hstore.column import DATA_TYPE, Hstore


class HstoreType(UserDefinedType):
    """PostgreSQL HSTORE column that binds and loads `Hstore` values.

    Bound values are sent as hstore text; results are accepted as text,
    bytes, or a dict when the driver has a native hstore adapter registered.
    """

    cache_ok = True
    type_name = DATA_TYPE

    def get_col_spec(self, **kw: Any) -> str:
        return self.type_name.upper()

    def bind_processor(self, dialect: Any) -> Callable[[Any], Optional[str]]:
        def process(value: Any) -> Optional[str]:
            if value is None:
                return None
            return Hstore.scan(value).value()

        return process

    def result_processor(self, dialect: Any, coltype: Any) -> Callable[[Any], Hstore]:
        def process(value: Any) -> Hstore:
            return Hstore.scan(value)

        return process

    @property
    def python_type(self) -> type:
        return Hstore


MutableHstore = Hstore.as_mutable(HstoreType)
