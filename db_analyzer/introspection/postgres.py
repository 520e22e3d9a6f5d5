"""PostgreSQL schema provider backed by ``information_schema``."""

from __future__ import annotations

from typing import Any, Final

import psycopg2
from psycopg2.extras import RealDictCursor

from ..shared.descriptors import ColumnDescriptor, TableDescriptor
from ..shared.errors import IntrospectionError

DEFAULT_SCHEMA: Final[str] = "public"

TABLES_QUERY: Final[str] = """
    SELECT table_name
    FROM information_schema.tables
    WHERE table_schema = %s
    AND table_type = 'BASE TABLE'
    ORDER BY table_name COLLATE "C"
"""

COLUMNS_QUERY: Final[str] = """
    SELECT column_name, udt_name, is_nullable, column_default
    FROM information_schema.columns
    WHERE table_schema = %s
    AND table_name = %s
    ORDER BY ordinal_position
"""


def source_type_from_udt(udt_name: str) -> str:
    """Translate a PostgreSQL ``udt_name`` into a mapping key.

    Array types are reported with a leading underscore (``_int4``) and are
    returned with the array marker instead (``int4[]``).
    """
    if udt_name.startswith("_") and len(udt_name) > 1:
        return f"{udt_name[1:]}[]"
    return udt_name


def column_from_row(row: dict[str, Any]) -> ColumnDescriptor:
    """Build a column descriptor from an ``information_schema.columns`` row."""
    default = row.get("column_default")
    return ColumnDescriptor(
        name=row["column_name"],
        source_type=source_type_from_udt(row["udt_name"]),
        nullable=row["is_nullable"] == "YES",
        default_expr=None if default is None else str(default),
    )


class PostgresSchemaProvider:
    """Reads table and column metadata from a PostgreSQL database.

    Use as a context manager so the connection is always closed::

        with PostgresSchemaProvider(settings.database_url) as provider:
            tables = provider.list_tables("public")
    """

    def __init__(self, dsn: str, connect_timeout: int = 10) -> None:
        self._dsn = dsn
        self._connect_timeout = connect_timeout
        self._conn: Any = None

    def connect(self) -> None:
        """Open the database connection.

        Raises:
            IntrospectionError: If the database cannot be reached.
        """
        if self._conn is not None:
            return
        try:
            self._conn = psycopg2.connect(self._dsn, connect_timeout=self._connect_timeout)
        except psycopg2.Error as e:
            raise IntrospectionError(f"Failed to connect to database: {e}") from e

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> PostgresSchemaProvider:
        self.connect()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def list_tables(self, schema: str = DEFAULT_SCHEMA) -> list[TableDescriptor]:
        """Return the base tables of ``schema`` ordered by name.

        Columns are listed in declaration order.

        Raises:
            IntrospectionError: If a metadata query fails.
        """
        self.connect()
        try:
            with self._conn.cursor(cursor_factory=RealDictCursor) as cursor:
                cursor.execute(TABLES_QUERY, (schema,))
                table_names = [row["table_name"] for row in cursor.fetchall()]

                tables: list[TableDescriptor] = []
                for table_name in table_names:
                    cursor.execute(COLUMNS_QUERY, (schema, table_name))
                    columns = tuple(column_from_row(row) for row in cursor.fetchall())
                    tables.append(TableDescriptor(name=table_name, columns=columns))
        except psycopg2.Error as e:
            raise IntrospectionError(f"Failed to read table metadata: {e}", schema) from e

        return tables
