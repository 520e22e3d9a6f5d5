"""Offline schema provider: table metadata described in YAML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Sequence

import yaml

from .descriptors import ColumnDescriptor, TableDescriptor
from .errors import SchemaError, SchemaValidationError


@dataclass(frozen=True, slots=True)
class CacheKey:
    """Immutable cache key for schema files."""

    path: Path
    mtime: float
    size: int

    @classmethod
    def from_path(cls, path: Path) -> CacheKey:
        """Create a cache key from a file path."""
        stat = path.stat()
        return cls(
            path=path.resolve(),
            mtime=stat.st_mtime,
            size=stat.st_size,
        )


class SchemaCache:
    """Cache of parsed table descriptors per schema file.

    Entries are invalidated automatically when the underlying file changes
    (based on mtime and size).
    """

    __slots__ = ("_cache", "_max_size")

    def __init__(self, max_size: int = 100) -> None:
        self._cache: dict[Path, tuple[CacheKey, tuple[TableDescriptor, ...]]] = {}
        self._max_size = max_size

    def get(self, path: Path) -> tuple[TableDescriptor, ...]:
        """Get the tables of a schema file, parsing it if necessary.

        Raises:
            SchemaError: If the schema is invalid.
        """
        resolved = path.resolve()
        current_key = CacheKey.from_path(resolved)

        cached = self._cache.get(resolved)
        if cached is not None and cached[0] == current_key:
            return cached[1]

        tables = tuple(parse_tables(load_schema(resolved), str(resolved)))

        if len(self._cache) >= self._max_size:
            oldest = next(iter(self._cache))
            del self._cache[oldest]

        self._cache[resolved] = (current_key, tables)
        return tables

    def invalidate(self, path: Path | None = None) -> None:
        """Invalidate cached schemas.

        Args:
            path: Specific path to invalidate, or None to clear all.
        """
        if path is None:
            self._cache.clear()
        else:
            self._cache.pop(path.resolve(), None)

    def __len__(self) -> int:
        return len(self._cache)


def load_schema(schema_path: Path) -> dict[str, Any]:
    """Load a schema document from a YAML file.

    Raises:
        SchemaError: If the file cannot be read or parsed.
    """
    try:
        content = schema_path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaError(f"Failed to read schema file: {e}", str(schema_path)) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SchemaError(f"Invalid YAML: {e}", str(schema_path)) from e

    if not isinstance(data, dict):
        raise SchemaError("Schema root must be a mapping", str(schema_path))

    return data


def _default_expr(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _parse_column(raw: Any, schema_path: str | None) -> ColumnDescriptor:
    if not isinstance(raw, dict):
        raise SchemaValidationError("column entry must be a mapping", schema_path)

    name = raw.get("name")
    if not name:
        raise SchemaValidationError("column is missing required 'name'", schema_path)

    source_type = raw.get("type")
    if not source_type or not isinstance(source_type, str):
        raise SchemaValidationError(
            "column is missing required 'type'",
            schema_path,
            field=str(name),
        )

    nullable = raw.get("nullable", True)
    if not isinstance(nullable, bool):
        raise SchemaValidationError(
            "'nullable' must be true or false",
            schema_path,
            field=str(name),
        )

    return ColumnDescriptor(
        name=str(name),
        source_type=source_type,
        nullable=nullable,
        default_expr=_default_expr(raw.get("default")),
    )


def parse_tables(schema: dict[str, Any], schema_path: str | None = None) -> list[TableDescriptor]:
    """Build table descriptors from a parsed schema document.

    Columns keep their declaration order.

    Raises:
        SchemaValidationError: If a table or column lacks a required value.
    """
    raw_tables = schema.get("tables")
    if not isinstance(raw_tables, list):
        raise SchemaValidationError("schema must provide a 'tables' list", schema_path)

    tables: list[TableDescriptor] = []
    for raw in raw_tables:
        if not isinstance(raw, dict) or not raw.get("name"):
            raise SchemaValidationError("table is missing required 'name'", schema_path)

        raw_columns = raw.get("columns") or []
        if not isinstance(raw_columns, list):
            raise SchemaValidationError(
                "'columns' must be a list",
                schema_path,
                field=str(raw["name"]),
            )

        tables.append(
            TableDescriptor(
                name=str(raw["name"]),
                columns=tuple(_parse_column(col, schema_path) for col in raw_columns),
            )
        )
    return tables


def collect_schema_paths(inputs: Sequence[Path]) -> list[Path]:
    """Collect all schema files from the given inputs.

    Args:
        inputs: Paths to schema files or directories.

    Returns:
        List of unique, resolved schema file paths.

    Raises:
        FileNotFoundError: If any input path doesn't exist.
    """

    def _iter_paths() -> Iterator[Path]:
        for raw in inputs:
            path = raw.resolve()
            if not path.exists():
                raise FileNotFoundError(f"Schema path '{raw}' does not exist")
            if path.is_dir():
                yield from sorted(
                    p
                    for p in path.iterdir()
                    if p.is_file() and p.suffix in (".yaml", ".yml")
                )
            else:
                yield path

    seen: dict[Path, None] = {}
    for path in _iter_paths():
        seen.setdefault(path, None)

    return list(seen.keys())


def load_tables(
    schema_paths: Sequence[Path],
    cache: SchemaCache | None = None,
) -> list[TableDescriptor]:
    """Load the tables of every schema file, ordered by table name.

    Raises:
        SchemaError: If a schema file is unreadable or malformed.
    """
    cache = cache if cache is not None else SchemaCache()
    tables: list[TableDescriptor] = []
    for schema_path in schema_paths:
        tables.extend(cache.get(schema_path))
    return sorted(tables, key=lambda table: table.name)
