"""Custom exceptions for the schema analyzer."""

from __future__ import annotations


class SchemaError(Exception):
    """Base exception for schema-related errors."""

    def __init__(self, message: str, schema_path: str | None = None) -> None:
        self.schema_path = schema_path
        full_message = f"{message}" if not schema_path else f"[{schema_path}] {message}"
        super().__init__(full_message)


class SchemaValidationError(SchemaError):
    """Raised when schema metadata is missing a required value."""

    def __init__(
        self,
        message: str,
        schema_path: str | None = None,
        field: str | None = None,
    ) -> None:
        self.field = field
        if field:
            message = f"Field '{field}': {message}"
        super().__init__(message, schema_path)


class IntrospectionError(SchemaError):
    """Raised when the database cannot be connected to or queried."""

    def __init__(self, message: str, schema_name: str | None = None) -> None:
        self.schema_name = schema_name
        if schema_name:
            message = f"Schema '{schema_name}': {message}"
        super().__init__(message)


class ConfigurationError(SchemaError):
    """Raised when a required setting is missing or unusable."""

    def __init__(self, message: str, setting: str | None = None) -> None:
        self.setting = setting
        if setting:
            message = f"{setting}: {message}"
        super().__init__(message)


class MappingFormatError(SchemaError):
    """Raised when a type mapping document has the wrong shape."""

    def __init__(self, message: str, mapping_path: str | None = None) -> None:
        self.mapping_path = mapping_path
        super().__init__(message, mapping_path)
