"""Rust type generator - emits Rust structs from relational schema metadata."""

from .emitter import (
    AttributeStyle,
    GeneratedField,
    GeneratedStruct,
    emit_field,
    emit_struct,
)
from .mapping import (
    DEFAULT_TYPE_MAP,
    MappingLoadResult,
    TypeMapping,
    default_type_mapping,
    load_type_mapping,
    save_type_mapping,
)
from .render import RenderContext, render_document
from .types import resolve_type
from .main import (
    generate_document,
    generate_structs,
)

__all__ = [
    "AttributeStyle",
    "GeneratedField",
    "GeneratedStruct",
    "emit_field",
    "emit_struct",
    "DEFAULT_TYPE_MAP",
    "MappingLoadResult",
    "TypeMapping",
    "default_type_mapping",
    "load_type_mapping",
    "save_type_mapping",
    "RenderContext",
    "render_document",
    "resolve_type",
    "generate_document",
    "generate_structs",
]
