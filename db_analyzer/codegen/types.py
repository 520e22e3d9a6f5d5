"""Resolution of source column types to Rust field types."""

from __future__ import annotations

from typing import Final

from .mapping import TypeMapping

ARRAY_MARKER: Final[str] = "[]"
FALLBACK_RUST_TYPE: Final[str] = "String"


def resolve_type(source_type: str, nullable: bool, mapping: TypeMapping) -> str:
    """Resolve the Rust type for a column.

    Array types (``int4[]``) resolve their element type as non-nullable and
    become ``Vec<...>``; nullable columns are then wrapped in ``Option<...>``,
    so a nullable array is ``Option<Vec<T>>``. Types missing from the mapping
    fall back to the mapping's default entry, or ``String``.

    Args:
        source_type: Column type as reported by the schema provider.
        nullable: Whether the column accepts NULL.
        mapping: The type mapping of the current run.

    Returns:
        The Rust type string.
    """
    if source_type.endswith(ARRAY_MARKER):
        element = resolve_type(source_type[: -len(ARRAY_MARKER)], False, mapping)
        rust_type = f"Vec<{element}>"
    else:
        rust_type = mapping.type_map.get(source_type) or mapping.default or FALLBACK_RUST_TYPE

    return f"Option<{rust_type}>" if nullable else rust_type
