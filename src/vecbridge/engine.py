"""Connections with sqlite-vec loaded, and execution of built statements."""
from __future__ import annotations

import sqlite3
from typing import Any

import sqlite_vec
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine

from vecbridge.config import settings
from vecbridge.exceptions import ExtensionLoadError
from vecbridge.fragment import Fragment
from vecbridge.logging import logger
from vecbridge.schema import VirtualTable


def load_extension(dbapi_conn: sqlite3.Connection) -> None:
    """Load sqlite-vec into a raw sqlite3 connection.

    Raises:
        ExtensionLoadError: the interpreter's sqlite3 cannot load extensions,
            or loading failed.
    """
    try:
        dbapi_conn.enable_load_extension(True)
    except (AttributeError, sqlite3.OperationalError) as exc:
        raise ExtensionLoadError(f"could not load sqlite-vec: {exc}") from exc
    try:
        sqlite_vec.load(dbapi_conn)
    except sqlite3.OperationalError as exc:
        raise ExtensionLoadError(f"could not load sqlite-vec: {exc}") from exc
    finally:
        dbapi_conn.enable_load_extension(False)
    logger.debug("Loaded sqlite-vec extension")


def _load_on_connect(dbapi_conn, _):
    load_extension(dbapi_conn)


def create_vec_engine(url: str | None = None, **kwargs: Any) -> Engine:
    """SQLAlchemy engine whose connections have sqlite-vec loaded.

    Defaults come from ``settings.DATABASE_URL`` / ``ECHO_SQL`` /
    ``LOAD_EXTENSION``.
    """
    kwargs.setdefault("echo", settings.ECHO_SQL)
    engine = create_engine(url or settings.DATABASE_URL, **kwargs)
    if settings.LOAD_EXTENSION:
        event.listen(engine, "connect", _load_on_connect)
    logger.info(f"Created engine for {engine.url.render_as_string(hide_password=True)}")
    return engine


def execute(conn: sqlite3.Connection | Connection, statement: Fragment):
    """Run a built statement on a sqlite3 or SQLAlchemy connection."""
    if isinstance(conn, Connection):
        return conn.exec_driver_sql(statement.sql, statement.params)
    return conn.execute(statement.sql, statement.params)


def create_tables(conn: sqlite3.Connection | Connection, *tables: VirtualTable) -> None:
    for table in tables:
        execute(conn, Fragment.raw(table.create_sql()))
        logger.info(f"Ensured vec0 table {table.name}")


def drop_tables(conn: sqlite3.Connection | Connection, *tables: VirtualTable) -> None:
    for table in tables:
        execute(conn, Fragment.raw(table.drop_sql()))
        logger.info(f"Dropped vec0 table {table.name}")
