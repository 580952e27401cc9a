"""SQLAlchemy column type for vectors kept in ordinary tables."""
from __future__ import annotations

from typing import Any

from sqlalchemy import func
from sqlalchemy.sql.expression import type_coerce
from sqlalchemy.types import LargeBinary, TypeDecorator

from vecbridge.codec import deserialize_vector, serialize_vector


class Float32Vector(TypeDecorator):
    """Stores a vector as a float32 BLOB in the sqlite-vec layout.

    ``dimensions`` is informational; the DDL type is ``BLOB`` and lengths are
    not checked. Comparisons render sqlite-vec distance functions::

        select(Doc).order_by(Doc.embedding.l2_distance(query)).limit(5)
    """

    impl = LargeBinary
    cache_ok = True

    class comparator_factory(TypeDecorator.Comparator):
        def l2_distance(self, other: Any):
            return func.vec_distance_L2(self.expr, type_coerce(other, self.type))

        def cosine_distance(self, other: Any):
            return func.vec_distance_cosine(self.expr, type_coerce(other, self.type))

    def __init__(self, dimensions: int | None = None) -> None:
        super().__init__()
        self.dimensions = dimensions

    def process_bind_param(self, value: Any, dialect):
        if value is None or isinstance(value, (bytes, bytearray, memoryview)):
            return value
        return serialize_vector(value)

    def process_result_value(self, value: Any, dialect):
        if value is None:
            return None
        return deserialize_vector(value)

    def copy(self, **kw):
        return Float32Vector(self.dimensions)
