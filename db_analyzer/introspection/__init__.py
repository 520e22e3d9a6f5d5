"""Schema providers reading live database metadata."""

from .postgres import (
    DEFAULT_SCHEMA,
    PostgresSchemaProvider,
    column_from_row,
    source_type_from_udt,
)

__all__ = [
    "DEFAULT_SCHEMA",
    "PostgresSchemaProvider",
    "column_from_row",
    "source_type_from_udt",
]
