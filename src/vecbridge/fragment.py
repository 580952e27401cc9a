"""Parameterized SQL fragments and the operand variants lowered into them.

A :class:`Fragment` is SQL text using ``?`` placeholders together with the
tuple of values to bind, in placeholder order. Fragments are immutable and are
what every builder in this package returns; DML helpers call the same shape a
``Statement``.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np
from sqlalchemy.dialects import sqlite
from sqlalchemy.sql.elements import ClauseElement

from vecbridge.codec import serialize_vector

_DIALECT = sqlite.dialect()
_PREPARER = _DIALECT.identifier_preparer


def quote_identifier(name: str) -> str:
    """Always-quoted SQLite identifier (embedded ``"`` doubled)."""
    return _PREPARER.quote_identifier(name)


@dataclass(frozen=True, slots=True)
class Fragment:
    sql: str
    params: tuple[Any, ...] = ()

    def __iter__(self) -> Iterator[Any]:
        # Allows ``cursor.execute(*fragment)``.
        yield self.sql
        yield self.params

    @classmethod
    def raw(cls, sql: str) -> Fragment:
        return cls(sql, ())

    @classmethod
    def param(cls, value: Any) -> Fragment:
        """A single ``?`` bound to *value*."""
        return cls("?", (value,))

    @classmethod
    def join(cls, parts: Iterable[Fragment], sep: str = ", ") -> Fragment:
        parts = list(parts)
        params: list[Any] = []
        for part in parts:
            params.extend(part.params)
        return cls(sep.join(p.sql for p in parts), tuple(params))

    @classmethod
    def from_clause(cls, clause: ClauseElement) -> Fragment:
        """Compile a SQLAlchemy clause with the SQLite dialect (qmark params).

        Expanding parameters (``IN`` lists) are rendered to one ``?`` per
        value. Bind processors of typed parameters are applied, so a bind
        typed as :class:`vecbridge.types.Float32Vector` arrives here already
        encoded.
        """
        compiled = clause.compile(dialect=_DIALECT)
        state = compiled.construct_expanded_state()
        params: list[Any] = []
        for name in state.positiontup or ():
            value = state.parameters[name]
            # expanded names (id_1_1, id_1_2, ...) only appear in state.processors
            processor = state.processors.get(name)
            if processor is None and name in compiled.binds:
                processor = compiled.binds[name].type.bind_processor(_DIALECT)
            params.append(processor(value) if processor is not None else value)
        return cls(state.statement, tuple(params))

    def wrap(self, prefix: str, suffix: str = "") -> Fragment:
        return Fragment(f"{prefix}{self.sql}{suffix}", self.params)


Statement = Fragment


class Operand(ABC):
    """One argument of a vector function: literal, column, or sub-expression."""

    __slots__ = ()

    @abstractmethod
    def render(self) -> Fragment:
        ...


@dataclass(frozen=True, slots=True)
class VectorLiteral(Operand):
    """A literal vector; always one bound parameter (the float32 blob)."""

    values: tuple[float, ...]

    @classmethod
    def of(cls, values: Sequence[float] | np.ndarray) -> VectorLiteral:
        return cls(tuple(float(v) for v in np.asarray(values, dtype=np.float64).ravel()))

    def render(self) -> Fragment:
        return Fragment.param(serialize_vector(self.values))


@dataclass(frozen=True, slots=True)
class ColumnRef(Operand):
    """A column identifier; renders quoted and binds nothing."""

    name: str
    table: str | None = None

    def render(self) -> Fragment:
        ident = quote_identifier(self.name)
        if self.table:
            ident = f"{quote_identifier(self.table)}.{ident}"
        return Fragment.raw(ident)


@dataclass(frozen=True, slots=True)
class Nested(Operand):
    """An already-rendered expression spliced in with its own parameters."""

    fragment: Fragment

    def render(self) -> Fragment:
        return self.fragment
