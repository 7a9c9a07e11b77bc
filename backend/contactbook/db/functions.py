# backend/contactbook/db/functions.py
"""
SQL helpers that need per-dialect rendering.

SQLite's built-in lower() and LIKE only fold A-Z, so on SQLite a Python
casefold() is registered on every new connection and `casefold(...)` renders
to it. Other backends get plain lower().
"""
from sqlalchemy import String
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement


class casefold(FunctionElement):
    type = String()
    name = "casefold"
    inherit_cache = True


@compiles(casefold)
def _casefold_default(element, compiler, **kw):
    return "lower(%s)" % compiler.process(element.clauses, **kw)


@compiles(casefold, "sqlite")
def _casefold_sqlite(element, compiler, **kw):
    return "casefold(%s)" % compiler.process(element.clauses, **kw)


def _py_casefold(value):
    return value.casefold() if value is not None else None


def register_sqlite_functions(dbapi_conn, connection_record=None) -> None:
    """`connect` event listener for SQLite engines."""
    dbapi_conn.create_function("casefold", 1, _py_casefold)
