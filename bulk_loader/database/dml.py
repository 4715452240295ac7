from typing import Any, Dict, Sequence

from sqlalchemy import text
from sqlalchemy.sql.elements import TextClause

PARAM_PREFIX = "p"


def param_names(count: int) -> list:
    """Bind parameter names for ``count`` positional values."""
    return [f"{PARAM_PREFIX}{i}" for i in range(count)]


def insert_sql(table: str, columns: Sequence[str], quote) -> str:
    """
    Build ``INSERT INTO <table> (<columns>) VALUES (:p0, ...)`` with one
    placeholder per column.

    Args:
        table: Target table name
        columns: Column names in insert order
        quote: Identifier quoting function of the target dialect

    Raises:
        ValueError: On an empty table name, no columns or an empty column name
    """
    if not table or not table.strip():
        raise ValueError("Table name cannot be empty")
    if not columns:
        raise ValueError("At least one column is required")
    for column in columns:
        if not column or not column.strip():
            raise ValueError(f"Invalid column name: {column!r}")

    collist = ", ".join(quote(c) for c in columns)
    placeholders = ", ".join(f":{name}" for name in param_names(len(columns)))
    return f"INSERT INTO {quote(table)} ({collist}) VALUES ({placeholders})"


def build_insert_statement(table: str, columns: Sequence[str], quote) -> TextClause:
    return text(insert_sql(table, columns, quote))


def bind_values(values: Sequence[Any]) -> Dict[str, Any]:
    """Map ordered values onto the statement's ``p0..pN-1`` parameters."""
    return dict(zip(param_names(len(values)), values))
