"""Shared fixtures.

vec_db    : in-memory sqlite3 connection with sqlite-vec loaded.
items_vec : vec0 table definition used across builder tests.
"""
import sqlite3

import pytest

from vecbridge.engine import load_extension
from vecbridge.exceptions import ExtensionLoadError
from vecbridge.schema import vec0_table, vec_float, vec_integer, vec_text


@pytest.fixture
def vec_db():
    conn = sqlite3.connect(":memory:")
    try:
        load_extension(conn)
    except ExtensionLoadError as exc:
        conn.close()
        pytest.skip(f"sqlite3 build cannot load extensions: {exc}")
    yield conn
    conn.close()


@pytest.fixture
def items_vec():
    return vec0_table(
        "items_vec",
        {
            "id": vec_integer("id").primary_key(),
            "embedding": vec_float("embedding", 4),
            "label": vec_text("label"),
        },
    )
