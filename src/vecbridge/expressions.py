"""SQL for sqlite-vec scalar functions and the vec0 KNN predicate.

Every vector argument is lowered through :func:`as_operand`:

* a sequence or numpy array becomes a :class:`VectorLiteral` -> one ``?``
  bound to the float32 blob;
* a :class:`ColumnRef`, :class:`VecColumn` or SQLAlchemy column becomes a
  quoted identifier with no parameters;
* a :class:`Fragment` or other SQLAlchemy clause is spliced in with its own
  parameters.

Parameters come back in the order their placeholders appear, so the result
can be bound positionally.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Union

import numpy as np
from sqlalchemy.sql.elements import ClauseElement, ColumnClause

from vecbridge.codec import serialize_vector
from vecbridge.fragment import ColumnRef, Fragment, Nested, Operand, VectorLiteral, quote_identifier
from vecbridge.logging import logger
from vecbridge.schema import VecColumn

VectorInput = Union[Operand, Fragment, VecColumn, ClauseElement, Sequence[float], np.ndarray]


def as_operand(value: Any) -> Operand:
    """Classify a caller value as one of the three operand variants."""
    if isinstance(value, Operand):
        return value
    if isinstance(value, Fragment):
        return Nested(value)
    if isinstance(value, VecColumn):
        return ColumnRef(value.name)
    if hasattr(value, "__clause_element__"):
        # ORM attributes (SQLModel / declarative) resolve to their Column.
        value = value.__clause_element__()
    if isinstance(value, ColumnClause):
        table = getattr(value, "table", None)
        return ColumnRef(value.name, table.name if table is not None else None)
    if isinstance(value, ClauseElement):
        return Nested(Fragment.from_clause(value))
    if isinstance(value, (str, bytes, bytearray)):
        raise TypeError(f"expected a vector, column or expression, got {type(value).__name__}")
    if isinstance(value, (np.ndarray, Sequence)):
        return VectorLiteral.of(value)
    raise TypeError(f"cannot use {type(value).__name__} as a vector operand")


def _call(function: str, *args: Operand | Fragment) -> Fragment:
    rendered = [a.render() if isinstance(a, Operand) else a for a in args]
    fragment = Fragment.join(rendered).wrap(f"{function}(", ")")
    logger.debug(f"Rendered {function} with {len(fragment.params)} parameter(s)")
    return fragment


def vector_to_sql(vector: Sequence[float] | np.ndarray) -> Fragment:
    """Bind a literal vector as a single float32 blob parameter."""
    return VectorLiteral.of(vector).render()


def vec_distance_l2(a: VectorInput, b: VectorInput) -> Fragment:
    return _call("vec_distance_L2", as_operand(a), as_operand(b))


def vec_distance_cosine(a: VectorInput, b: VectorInput) -> Fragment:
    return _call("vec_distance_cosine", as_operand(a), as_operand(b))


def vec_length(vector: VectorInput) -> Fragment:
    return _call("vec_length", as_operand(vector))


def vec_normalize(vector: VectorInput) -> Fragment:
    return _call("vec_normalize", as_operand(vector))


def vec_add(a: VectorInput, b: VectorInput) -> Fragment:
    return _call("vec_add", as_operand(a), as_operand(b))


def vec_sub(a: VectorInput, b: VectorInput) -> Fragment:
    return _call("vec_sub", as_operand(a), as_operand(b))


def vec_slice(vector: VectorInput, start: int, end: int) -> Fragment:
    """Elements ``[start, end)``; both bounds are bound after the vector's parameters."""
    return _call("vec_slice", as_operand(vector), Fragment.param(start), Fragment.param(end))


def vec_to_json(vector: VectorInput) -> Fragment:
    return _call("vec_to_json", as_operand(vector))


def vec_quantize_i8(vector: VectorInput) -> Fragment:
    return _call("vec_quantize_i8", as_operand(vector))


def vec_quantize_binary(vector: VectorInput) -> Fragment:
    return _call("vec_quantize_binary", as_operand(vector))


def vec_f32(json_array: str | Fragment | ClauseElement) -> Fragment:
    """Parse a JSON array (text bound as a parameter, or an expression) into a vector."""
    if isinstance(json_array, str):
        return _call("vec_f32", Fragment.param(json_array))
    if isinstance(json_array, Fragment):
        return _call("vec_f32", json_array)
    return _call("vec_f32", as_operand(json_array))


def _column_name(column: str | ColumnRef | VecColumn | Any) -> str:
    if isinstance(column, str):
        return column
    if hasattr(column, "__clause_element__"):
        column = column.__clause_element__()
    return column.name


def vector_match(
    column: str | ColumnRef | VecColumn | ColumnClause,
    query_vector: Sequence[float] | np.ndarray,
    k: int,
) -> Fragment:
    """vec0 KNN predicate: ``"<column>" MATCH ? AND k = ?``.

    Parameters are the query blob followed by *k*. Only the column's name is
    used, quoted, so a table-qualified column still renders unqualified.
    """
    name = quote_identifier(_column_name(column))
    fragment = Fragment(f"{name} MATCH ? AND k = ?", (serialize_vector(query_vector), k))
    logger.debug(f"Rendered KNN match on {name} with k={k}")
    return fragment


knn_where = vector_match
