"""Complete KNN queries against vec0 tables."""
from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from vecbridge.config import settings
from vecbridge.expressions import vector_match
from vecbridge.fragment import Statement, quote_identifier
from vecbridge.logging import logger
from vecbridge.schema import VirtualTable


def _table_name(table: str | VirtualTable) -> str:
    return table.name if isinstance(table, VirtualTable) else table


def build_vector_search_query(
    table: str | VirtualTable,
    vector_column: str,
    query_vector: Sequence[float] | np.ndarray,
    limit: int | None = None,
) -> Statement:
    """Nearest *limit* rows of a vec0 table, closest first.

    Result rows are ``(rowid, distance)``. *limit* defaults to
    ``settings.DEFAULT_K``.
    """
    k = limit if limit is not None else settings.DEFAULT_K
    match = vector_match(vector_column, query_vector, k)
    logger.debug(f"KNN search on {_table_name(table)} k={k}")
    return Statement(
        f"SELECT rowid, distance FROM {quote_identifier(_table_name(table))} "
        f"WHERE {match.sql} ORDER BY distance",
        match.params,
    )


def build_vector_search_with_join(
    vec_table: str | VirtualTable,
    data_table: str,
    vector_column: str,
    query_vector: Sequence[float] | np.ndarray,
    data_key: str = "id",
    limit: int | None = None,
) -> Statement:
    """KNN search on *vec_table* joined back to its relational *data_table*.

    Rows of *data_table* whose *data_key* equals a matched vec0 rowid are
    returned with every data column plus ``distance``, closest first.
    """
    k = limit if limit is not None else settings.DEFAULT_K
    match = vector_match(vector_column, query_vector, k)
    data = quote_identifier(data_table)
    logger.debug(f"KNN search on {_table_name(vec_table)} joined to {data_table} k={k}")
    return Statement(
        f"SELECT {data}.*, vec_results.distance FROM {data} "
        f"INNER JOIN (SELECT rowid, distance FROM {quote_identifier(_table_name(vec_table))} "
        f"WHERE {match.sql}) AS vec_results "
        f"ON {data}.{quote_identifier(data_key)} = vec_results.rowid "
        f"ORDER BY vec_results.distance",
        match.params,
    )
