"""Schema metadata handed over by the schema providers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ColumnDescriptor:
    """A single table column, as declared in the source schema."""

    name: str
    source_type: str
    nullable: bool
    default_expr: str | None = None


@dataclass(frozen=True, slots=True)
class TableDescriptor:
    """A table and its columns in declaration order."""

    name: str
    columns: tuple[ColumnDescriptor, ...] = ()
