"""Shared utilities for the schema analyzer."""

from .descriptors import (
    ColumnDescriptor,
    TableDescriptor,
)
from .schema_loader import (
    SchemaCache,
    load_schema,
    load_tables,
    parse_tables,
    collect_schema_paths,
)
from .naming import (
    to_field_name,
    to_struct_name,
    sanitize_field_name,
    RUST_KEYWORDS,
)
from .errors import (
    SchemaError,
    SchemaValidationError,
    IntrospectionError,
    ConfigurationError,
    MappingFormatError,
)
from .settings import (
    Settings,
    load_settings,
    database_name,
    resolve_output_path,
)

__all__ = [
    # Schema metadata
    "ColumnDescriptor",
    "TableDescriptor",
    # Schema loading
    "SchemaCache",
    "load_schema",
    "load_tables",
    "parse_tables",
    "collect_schema_paths",
    # Naming utilities
    "to_field_name",
    "to_struct_name",
    "sanitize_field_name",
    "RUST_KEYWORDS",
    # Errors
    "SchemaError",
    "SchemaValidationError",
    "IntrospectionError",
    "ConfigurationError",
    "MappingFormatError",
    # Settings
    "Settings",
    "load_settings",
    "database_name",
    "resolve_output_path",
]
