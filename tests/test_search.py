"""Complete KNN search statements."""
from __future__ import annotations

from vecbridge.codec import serialize_vector
from vecbridge.config import settings
from vecbridge.schema import shadow_vec0_table
from vecbridge.search import build_vector_search_query, build_vector_search_with_join

Q = [1.0, 0.0, 0.0, 0.0]


def test_search_query():
    stmt = build_vector_search_query("items_vec", "embedding", Q, limit=5)
    assert stmt.sql == (
        'SELECT rowid, distance FROM "items_vec" '
        'WHERE "embedding" MATCH ? AND k = ? ORDER BY distance'
    )
    assert stmt.params == (serialize_vector(Q), 5)


def test_search_query_accepts_table_definition(items_vec):
    stmt = build_vector_search_query(items_vec, "embedding", Q, limit=2)
    assert 'FROM "items_vec"' in stmt.sql


def test_search_limit_defaults_to_setting(monkeypatch):
    monkeypatch.setattr(settings, "DEFAULT_K", 7)
    stmt = build_vector_search_query("items_vec", "embedding", Q)
    assert stmt.params[1] == 7


def test_search_with_join():
    documents_vec = shadow_vec0_table("documents_vec", "embedding", 4, "document_id")
    stmt = build_vector_search_with_join(documents_vec, "documents", "embedding", Q, limit=3)
    assert stmt.sql == (
        'SELECT "documents".*, vec_results.distance FROM "documents" '
        'INNER JOIN (SELECT rowid, distance FROM "documents_vec" '
        'WHERE "embedding" MATCH ? AND k = ?) AS vec_results '
        'ON "documents"."id" = vec_results.rowid '
        "ORDER BY vec_results.distance"
    )
    assert stmt.params == (serialize_vector(Q), 3)


def test_search_with_join_custom_key():
    stmt = build_vector_search_with_join("docs_vec", "docs", "embedding", Q, data_key="doc_pk")
    assert 'ON "docs"."doc_pk" = vec_results.rowid' in stmt.sql
