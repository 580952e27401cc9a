"""INSERT / UPDATE / DELETE statement generation for vec0 tables."""
from __future__ import annotations

import pytest
from sqlalchemy import column

from vecbridge.codec import serialize_vector
from vecbridge.dml import delete_vec0, insert_many_vec0, insert_vec0, update_vec0
from vecbridge.exceptions import NoRowsProvidedError, NoValuesProvidedError, VecBridgeError
from vecbridge.fragment import Fragment

V1 = [1.0, 0.0, 0.0, 0.0]
V2 = [0.0, 1.0, 0.0, 0.0]


# ---------------------------------------------------------------
# insert_vec0
# ---------------------------------------------------------------


def test_insert_renders_present_columns(items_vec):
    stmt = insert_vec0(items_vec, {"id": 1, "embedding": V1})
    assert stmt.sql == 'INSERT INTO "items_vec" ("id", "embedding") VALUES (?, ?)'
    assert stmt.params == (1, serialize_vector(V1))


def test_insert_uses_declaration_order_not_mapping_order(items_vec):
    stmt = insert_vec0(items_vec, {"label": "a", "embedding": V1, "id": 7})
    assert stmt.sql == 'INSERT INTO "items_vec" ("id", "embedding", "label") VALUES (?, ?, ?)'
    assert stmt.params == (7, serialize_vector(V1), "a")


def test_insert_without_primary_key_lets_engine_assign_rowid(items_vec):
    stmt = insert_vec0(items_vec, {"embedding": V1})
    assert stmt.sql == 'INSERT INTO "items_vec" ("embedding") VALUES (?)'
    assert stmt.params == (serialize_vector(V1),)


def test_insert_explicit_none_binds_null(items_vec):
    stmt = insert_vec0(items_vec, {"embedding": V1, "label": None})
    assert stmt.sql == 'INSERT INTO "items_vec" ("embedding", "label") VALUES (?, ?)'
    assert stmt.params == (serialize_vector(V1), None)


def test_insert_passes_preencoded_blobs_through(items_vec):
    blob = serialize_vector(V2)
    assert insert_vec0(items_vec, {"embedding": blob}).params == (blob,)


def test_insert_ignores_unknown_keys(items_vec):
    stmt = insert_vec0(items_vec, {"id": 1, "bogus": 2})
    assert stmt.params == (1,)


@pytest.mark.parametrize("values", [{}, {"bogus": 1}])
def test_insert_with_no_values_fails(items_vec, values):
    with pytest.raises(NoValuesProvidedError) as exc_info:
        insert_vec0(items_vec, values)
    assert isinstance(exc_info.value, VecBridgeError)
    assert "items_vec" in exc_info.value.message


# ---------------------------------------------------------------
# insert_many_vec0
# ---------------------------------------------------------------


def test_insert_many_renders_one_tuple_per_row(items_vec):
    stmt = insert_many_vec0(
        items_vec,
        [{"id": 1, "embedding": V1}, {"id": 2, "embedding": V2}],
    )
    assert stmt.sql == 'INSERT INTO "items_vec" ("id", "embedding") VALUES (?, ?), (?, ?)'
    assert stmt.params == (1, serialize_vector(V1), 2, serialize_vector(V2))


def test_insert_many_first_row_governs_columns(items_vec):
    # The second row lacks "id": it binds NULL in that position.
    stmt = insert_many_vec0(items_vec, [{"id": 1, "embedding": V1}, {"embedding": V2}])
    assert stmt.sql == 'INSERT INTO "items_vec" ("id", "embedding") VALUES (?, ?), (?, ?)'
    assert stmt.params == (1, serialize_vector(V1), None, serialize_vector(V2))


def test_insert_many_ignores_columns_absent_from_first_row(items_vec):
    stmt = insert_many_vec0(items_vec, [{"embedding": V1}, {"embedding": V2, "label": "x"}])
    assert stmt.sql == 'INSERT INTO "items_vec" ("embedding") VALUES (?), (?)'
    assert stmt.params == (serialize_vector(V1), serialize_vector(V2))


def test_insert_many_with_no_rows_fails(items_vec):
    with pytest.raises(NoRowsProvidedError):
        insert_many_vec0(items_vec, [])


def test_insert_many_with_empty_first_row_fails(items_vec):
    with pytest.raises(NoValuesProvidedError):
        insert_many_vec0(items_vec, [{}, {"id": 1}])


# ---------------------------------------------------------------
# update_vec0 / delete_vec0
# ---------------------------------------------------------------


def test_update_by_rowid(items_vec):
    stmt = update_vec0(items_vec, {"label": "x", "embedding": V2}, 5)
    assert stmt.sql == 'UPDATE "items_vec" SET "embedding" = ?, "label" = ? WHERE rowid = ?'
    assert stmt.params == (serialize_vector(V2), "x", 5)


def test_update_with_condition_binds_set_values_first(items_vec):
    where = Fragment('"id" = ?', (9,))
    stmt = update_vec0(items_vec, {"embedding": V1}, where)
    assert stmt.sql == 'UPDATE "items_vec" SET "embedding" = ? WHERE "id" = ?'
    assert stmt.params == (serialize_vector(V1), 9)


def test_update_with_no_values_fails(items_vec):
    with pytest.raises(NoValuesProvidedError):
        update_vec0(items_vec, {}, 1)


def test_delete_by_rowid(items_vec):
    stmt = delete_vec0(items_vec, 3)
    assert stmt == Fragment('DELETE FROM "items_vec" WHERE rowid = ?', (3,))


def test_delete_with_condition(items_vec):
    stmt = delete_vec0(items_vec, Fragment('"label" = ?', ("stale",)))
    assert stmt.sql == 'DELETE FROM "items_vec" WHERE "label" = ?'
    assert stmt.params == ("stale",)


def test_delete_with_sqlalchemy_in_clause(items_vec):
    stmt = delete_vec0(items_vec, Fragment.from_clause(column("id").in_([1, 2])))
    assert stmt.sql == 'DELETE FROM "items_vec" WHERE id IN (?, ?)'
    assert stmt.params == (1, 2)


@pytest.mark.parametrize("where", [True, "rowid = 1", 1.5, None])
def test_where_must_be_rowid_or_fragment(items_vec, where):
    with pytest.raises(TypeError):
        delete_vec0(items_vec, where)


def test_statements_unpack_for_cursor_execute(items_vec):
    sql, params = delete_vec0(items_vec, 3)
    assert sql.startswith("DELETE FROM")
    assert params == (3,)
