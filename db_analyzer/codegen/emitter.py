"""Struct emission: one Rust struct declaration per table."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from ..shared.descriptors import ColumnDescriptor, TableDescriptor
from ..shared.naming import sanitize_field_name, to_field_name, to_struct_name
from .mapping import TypeMapping
from .types import resolve_type

_LINE_BREAK = re.compile(r"\r\n|[\r\n]")


class AttributeStyle(Enum):
    """Family of attributes emitted on generated structs."""

    SERDE = "serde"
    SQLX = "sqlx"

    @property
    def derive(self) -> str:
        if self is AttributeStyle.SQLX:
            return "#[derive(Debug, Serialize, Deserialize, sqlx::FromRow)]"
        return "#[derive(Debug, Serialize, Deserialize)]"

    @property
    def binding_key(self) -> str:
        """Attribute key binding the struct to its table."""
        return "table" if self is AttributeStyle.SQLX else "rename"

    @property
    def imports(self) -> tuple[str, ...]:
        crates = ("use sqlx;",) if self is AttributeStyle.SQLX else ()
        return crates + (
            "use serde::{Deserialize, Serialize};",
            "use chrono;",
            "use uuid;",
            "use serde_json;",
        )


@dataclass(frozen=True, slots=True)
class GeneratedField:
    """A struct field derived from one column."""

    original_name: str
    normalized_name: str
    identifier: str
    target_type: str
    doc_comment: str
    rename_attribute: str | None = None


@dataclass(frozen=True, slots=True)
class GeneratedStruct:
    """A struct declaration derived from one table."""

    table_name: str
    struct_name: str
    header_attributes: tuple[str, ...]
    fields: tuple[GeneratedField, ...]


@lru_cache(maxsize=256)
def _quote(value: str) -> str:
    """Quote a string for Rust literal embedding. Cached for performance."""
    return json.dumps(value, ensure_ascii=False)


def header_attributes(table_name: str, style: AttributeStyle) -> tuple[str, ...]:
    """Return the derive, naming-convention and table-binding attribute lines."""
    tag = style.value
    return (
        style.derive,
        f'#[{tag}(rename_all = "camelCase")]',
        f"#[{tag}({style.binding_key} = {_quote(table_name)})]",
    )


def _single_line(value: str) -> str:
    return _LINE_BREAK.sub(" ", value)


def doc_comment(column: ColumnDescriptor) -> str:
    """Describe the original column: name, type, nullability and default."""
    comment = f"/// {_single_line(column.name)} - {_single_line(column.source_type)}"
    if column.nullable:
        comment += ", nullable"
    if column.default_expr:
        comment += f", default: {_single_line(column.default_expr)}"
    return comment


def emit_field(
    column: ColumnDescriptor,
    mapping: TypeMapping,
    style: AttributeStyle = AttributeStyle.SERDE,
) -> GeneratedField:
    """Build the field for a column.

    A rename attribute is only emitted when the normalized name differs from
    the lowercased column name.
    """
    field_name = to_field_name(column.name)
    rename: str | None = None
    if field_name != column.name.lower():
        rename = f"#[{style.value}(rename = {_quote(column.name)})]"

    return GeneratedField(
        original_name=column.name,
        normalized_name=field_name,
        identifier=sanitize_field_name(field_name),
        target_type=resolve_type(column.source_type, column.nullable, mapping),
        doc_comment=doc_comment(column),
        rename_attribute=rename,
    )


def emit_struct(
    table: TableDescriptor,
    mapping: TypeMapping,
    style: AttributeStyle = AttributeStyle.SERDE,
) -> GeneratedStruct:
    """Build the struct declaration for a table.

    Fields keep the table's column order; a table without columns yields a
    struct with an empty body.

    Args:
        table: Table metadata from a schema provider.
        mapping: The type mapping of the current run.
        style: Attribute family to emit.

    Returns:
        The generated struct.
    """
    return GeneratedStruct(
        table_name=table.name,
        struct_name=to_struct_name(table.name, mapping.special_cases),
        header_attributes=header_attributes(table.name, style),
        fields=tuple(emit_field(column, mapping, style) for column in table.columns),
    )
