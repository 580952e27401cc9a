"""INSERT / UPDATE / DELETE statements for vec0 tables.

A column is *present* when its name is a key of the values mapping; an explicit
``None`` is present and binds NULL. Columns always render in the table's
declaration order. Vector columns given a sequence are encoded as float32
blobs; anything else (including pre-encoded ``bytes``) is bound unchanged.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Union

import numpy as np

from vecbridge.codec import serialize_vector
from vecbridge.exceptions import NoRowsProvidedError, NoValuesProvidedError
from vecbridge.fragment import Fragment, Statement, quote_identifier
from vecbridge.logging import logger
from vecbridge.schema import VecColumn, VirtualTable

# A rowid, or a prebuilt condition such as ``Fragment("id = ?", (7,))``.
WhereCondition = Union[int, Fragment]


def _serialize_value(value: Any, column: VecColumn) -> Any:
    if value is None:
        return None
    if column.is_vector and isinstance(value, (np.ndarray, list, tuple)):
        return serialize_vector(value)
    return value


def _where_clause(where: WhereCondition) -> Fragment:
    if isinstance(where, Fragment):
        return where
    if isinstance(where, int) and not isinstance(where, bool):
        return Fragment("rowid = ?", (where,))
    raise TypeError(f"where must be a rowid or a Fragment, got {type(where).__name__}")


def insert_vec0(table: VirtualTable, values: Mapping[str, Any]) -> Statement:
    """``INSERT INTO "<table>" (<present columns>) VALUES (?, ...)``.

    Raises:
        NoValuesProvidedError: no column of *table* is present in *values*.
    """
    present = [col for col in table.columns if col.name in values]
    if not present:
        raise NoValuesProvidedError(f"insert into {table.name}: no values provided")

    column_list = ", ".join(quote_identifier(col.name) for col in present)
    placeholders = ", ".join("?" for _ in present)
    params = tuple(_serialize_value(values[col.name], col) for col in present)

    logger.debug(f"INSERT into {table.name}: {len(present)} column(s)")
    return Statement(
        f"INSERT INTO {quote_identifier(table.name)} ({column_list}) VALUES ({placeholders})",
        params,
    )


def insert_many_vec0(table: VirtualTable, rows: Sequence[Mapping[str, Any]]) -> Statement:
    """Multi-row INSERT.

    The column list comes from the first row alone; later rows are rendered
    against it and bind NULL for any of those columns they lack. Extra keys in
    later rows are ignored.

    Raises:
        NoRowsProvidedError: *rows* is empty.
        NoValuesProvidedError: the first row has no column of *table*.
    """
    if not rows:
        raise NoRowsProvidedError(f"insert into {table.name}: no rows provided")

    first = rows[0]
    present = [col for col in table.columns if col.name in first]
    if not present:
        raise NoValuesProvidedError(f"insert into {table.name}: no values provided")

    column_list = ", ".join(quote_identifier(col.name) for col in present)
    row_placeholder = "(" + ", ".join("?" for _ in present) + ")"
    params: list[Any] = []
    for row in rows:
        params.extend(_serialize_value(row.get(col.name), col) for col in present)

    logger.debug(f"INSERT into {table.name}: {len(rows)} row(s) x {len(present)} column(s)")
    return Statement(
        f"INSERT INTO {quote_identifier(table.name)} ({column_list}) "
        f"VALUES {', '.join(row_placeholder for _ in rows)}",
        tuple(params),
    )


def update_vec0(
    table: VirtualTable,
    values: Mapping[str, Any],
    where: WhereCondition,
) -> Statement:
    """``UPDATE "<table>" SET "<col>" = ?, ... WHERE <where>``.

    Raises:
        NoValuesProvidedError: no column of *table* is present in *values*.
    """
    assignments = [
        Fragment(f"{quote_identifier(col.name)} = ?", (_serialize_value(values[col.name], col),))
        for col in table.columns
        if col.name in values
    ]
    if not assignments:
        raise NoValuesProvidedError(f"update {table.name}: no values provided")

    set_clause = Fragment.join(assignments)
    where_clause = _where_clause(where)

    logger.debug(f"UPDATE {table.name}: {len(assignments)} column(s)")
    return Statement(
        f"UPDATE {quote_identifier(table.name)} SET {set_clause.sql} WHERE {where_clause.sql}",
        set_clause.params + where_clause.params,
    )


def delete_vec0(table: VirtualTable, where: WhereCondition) -> Statement:
    """``DELETE FROM "<table>" WHERE <where>``."""
    where_clause = _where_clause(where)
    logger.debug(f"DELETE from {table.name}")
    return Statement(
        f"DELETE FROM {quote_identifier(table.name)} WHERE {where_clause.sql}",
        where_clause.params,
    )
