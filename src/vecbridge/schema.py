"""vec0 virtual table definitions and their DDL.

Columns are described with small fluent builders and frozen into a
:class:`VirtualTable` when the table is defined::

    items_vec = vec0_table("items_vec", {
        "id": vec_integer("id").primary_key(),
        "embedding": vec_float("embedding", 384).distance_metric("cosine"),
    })
    items_vec.create_sql()
    # CREATE VIRTUAL TABLE IF NOT EXISTS items_vec USING vec0(
    #     id integer primary key, embedding float[384] distance_metric=cosine)

Dimensions are not validated here: ``0``/``None`` drop the ``[N]`` annotation
and negative values are written as given, leaving the rejection to sqlite-vec
when the DDL runs.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from enum import Enum

from vecbridge.fragment import ColumnRef


class ColumnKind(str, Enum):
    FLOAT = "float"
    INT8 = "int8"
    BIT = "bit"
    INTEGER = "integer"
    TEXT = "text"
    BLOB = "blob"

    @property
    def is_vector(self) -> bool:
        return self in (ColumnKind.FLOAT, ColumnKind.INT8, ColumnKind.BIT)


class DistanceMetric(str, Enum):
    L2 = "L2"
    COSINE = "cosine"


@dataclass(frozen=True, slots=True)
class VecColumn:
    """One column of a vec0 table."""

    name: str
    kind: ColumnKind
    dimensions: int | None = None
    primary_key: bool = False
    distance_metric: DistanceMetric | None = None

    @property
    def is_vector(self) -> bool:
        return self.kind.is_vector

    def definition(self) -> str:
        kind = self.kind
        if kind in (ColumnKind.FLOAT, ColumnKind.INT8) and self.dimensions:
            text = f"{self.name} {kind.value}[{self.dimensions}]"
            if self.distance_metric is not None:
                text += f" distance_metric={self.distance_metric.value}"
            return text
        if kind is ColumnKind.BIT and self.dimensions:
            return f"{self.name} bit[{self.dimensions}]"
        if kind is ColumnKind.INTEGER:
            return f"{self.name} integer primary key" if self.primary_key else f"{self.name} integer"
        if kind in (ColumnKind.TEXT, ColumnKind.BLOB):
            return f"{self.name} {kind.value}"
        # Vector column without dimensions.
        return self.name


class VecColumnBuilder:
    """Mutable column description; ``build()`` freezes it."""

    def __init__(self, name: str, kind: ColumnKind | str, dimensions: int | None = None) -> None:
        self._name = name
        self._kind = ColumnKind(kind)
        self._dimensions = dimensions
        self._primary_key = False
        self._distance_metric: DistanceMetric | None = None

    @property
    def name(self) -> str:
        return self._name

    def primary_key(self) -> VecColumnBuilder:
        self._primary_key = True
        return self

    def distance_metric(self, metric: DistanceMetric | str) -> VecColumnBuilder:
        self._distance_metric = DistanceMetric(metric)
        return self

    def build(self) -> VecColumn:
        return VecColumn(
            name=self._name,
            kind=self._kind,
            dimensions=self._dimensions,
            primary_key=self._primary_key,
            distance_metric=self._distance_metric,
        )


def vec_float(name: str, dimensions: int) -> VecColumnBuilder:
    """float32 vector column, ``<name> float[N]``."""
    return VecColumnBuilder(name, ColumnKind.FLOAT, dimensions)


def vec_int8(name: str, dimensions: int) -> VecColumnBuilder:
    """int8 quantized vector column."""
    return VecColumnBuilder(name, ColumnKind.INT8, dimensions)


def vec_bit(name: str, dimensions: int) -> VecColumnBuilder:
    """Binary vector column; *dimensions* counts bits."""
    return VecColumnBuilder(name, ColumnKind.BIT, dimensions)


def vec_integer(name: str) -> VecColumnBuilder:
    return VecColumnBuilder(name, ColumnKind.INTEGER)


def vec_text(name: str) -> VecColumnBuilder:
    return VecColumnBuilder(name, ColumnKind.TEXT)


def vec_blob(name: str) -> VecColumnBuilder:
    return VecColumnBuilder(name, ColumnKind.BLOB)


def vector_type(dimensions: int) -> str:
    """Type string for a float vector column, e.g. ``float[384]``."""
    return f"float[{dimensions}]"


@dataclass(frozen=True, slots=True)
class VirtualTable:
    """A frozen vec0 table definition. Columns render in declaration order."""

    name: str
    columns: tuple[VecColumn, ...]

    @property
    def vector_columns(self) -> tuple[VecColumn, ...]:
        return tuple(c for c in self.columns if c.is_vector)

    def column(self, name: str) -> VecColumn:
        for col in self.columns:
            if col.name == name:
                return col
        raise KeyError(f"{self.name} has no column {name!r}")

    def ref(self, name: str) -> ColumnRef:
        """Column reference usable as a vector function operand."""
        return ColumnRef(self.column(name).name)

    def create_sql(self) -> str:
        defs = ", ".join(col.definition() for col in self.columns)
        return f"CREATE VIRTUAL TABLE IF NOT EXISTS {self.name} USING vec0({defs})"

    def drop_sql(self) -> str:
        return f"DROP TABLE IF EXISTS {self.name}"


def vec0_table(
    name: str,
    columns: Mapping[str, VecColumnBuilder] | Sequence[VecColumnBuilder],
) -> VirtualTable:
    """Freeze *columns* into a table definition.

    With a mapping, a builder created with an empty name takes its key.
    """
    if isinstance(columns, Mapping):
        built = []
        for key, builder in columns.items():
            col = builder.build()
            if not col.name:
                col = replace(col, name=key)
            built.append(col)
    else:
        built = [builder.build() for builder in columns]
    return VirtualTable(name=name, columns=tuple(built))


def shadow_vec0_table(
    table_name: str,
    vector_column: str,
    dimensions: int,
    id_column: str,
) -> VirtualTable:
    """vec0 table pairing an integer key with one float vector column.

    Used alongside a regular table whose primary key is stored in *id_column*.
    """
    return vec0_table(
        table_name,
        {
            id_column: vec_integer(id_column).primary_key(),
            vector_column: vec_float(vector_column, dimensions),
        },
    )
