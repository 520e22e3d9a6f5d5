"""Type mapping store: source column types to Rust types, plus struct name overrides."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Final, Mapping

from ..shared.errors import MappingFormatError

DEFAULT_TYPE_MAP: Final[dict[str, str]] = {
    "int2": "i16",
    "int4": "i32",
    "int8": "i64",
    "float4": "f32",
    "float8": "f64",
    "numeric": "f64",
    "bool": "bool",
    "varchar": "String",
    "char": "String",
    "text": "String",
    "uuid": "uuid::Uuid",
    "date": "chrono::NaiveDate",
    "timestamp": "chrono::NaiveDateTime",
    "timestamptz": "chrono::DateTime<chrono::Utc>",
    "json": "serde_json::Value",
    "jsonb": "serde_json::Value",
}

DEFAULT_ENTRY: Final[str] = "default"


@dataclass(frozen=True, slots=True)
class TypeMapping:
    """Read-only type mapping shared by every table of a run.

    ``special_cases`` keys are lowercased so table names match case-insensitively.
    """

    type_map: Mapping[str, str]
    default: str | None = None
    special_cases: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "type_map", MappingProxyType(dict(self.type_map)))
        object.__setattr__(
            self,
            "special_cases",
            MappingProxyType({k.lower(): v for k, v in self.special_cases.items()}),
        )

    @classmethod
    def from_dict(cls, data: Any, mapping_path: str | None = None) -> TypeMapping:
        """Build a mapping from the ``mappings.json`` document layout.

        The fallback type may be given as a top-level ``default`` key or as a
        ``default`` entry inside ``typeMap``.

        Raises:
            MappingFormatError: If the document does not have the expected shape.
        """
        if not isinstance(data, dict):
            raise MappingFormatError("mapping root must be an object", mapping_path)

        type_map = data.get("typeMap")
        if not _is_str_mapping(type_map):
            raise MappingFormatError(
                "'typeMap' must map type names to strings", mapping_path
            )

        special_cases = data.get("specialCases") or {}
        if not _is_str_mapping(special_cases):
            raise MappingFormatError(
                "'specialCases' must map table names to strings", mapping_path
            )

        default = data.get(DEFAULT_ENTRY, type_map.get(DEFAULT_ENTRY))
        if default is not None and not isinstance(default, str):
            raise MappingFormatError("'default' must be a string", mapping_path)

        return cls(type_map=type_map, default=default, special_cases=special_cases)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON document layout of this mapping."""
        data: dict[str, Any] = {
            "typeMap": dict(self.type_map),
            "specialCases": dict(self.special_cases),
        }
        if self.default is not None and self.type_map.get(DEFAULT_ENTRY) != self.default:
            data[DEFAULT_ENTRY] = self.default
        return data


@dataclass(frozen=True, slots=True)
class MappingLoadResult:
    """Outcome of reading a mapping file.

    ``defaulted`` is set when the built-in mapping was substituted; ``reason``
    says why.
    """

    mapping: TypeMapping
    defaulted: bool = False
    reason: str | None = None


def _is_str_mapping(value: Any) -> bool:
    return isinstance(value, dict) and all(
        isinstance(k, str) and isinstance(v, str) for k, v in value.items()
    )


def default_type_mapping() -> TypeMapping:
    """Return the built-in PostgreSQL to Rust mapping."""
    return TypeMapping(type_map=DEFAULT_TYPE_MAP)


def load_type_mapping(path: Path) -> MappingLoadResult:
    """Load a mapping file, substituting the built-in mapping if unusable.

    A missing, unreadable, unparsable or malformed file yields a defaulted
    result rather than an exception.
    """
    if not path.is_file():
        return MappingLoadResult(default_type_mapping(), True, f"{path} does not exist")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        return MappingLoadResult(default_type_mapping(), True, f"cannot read {path}: {e}")
    except json.JSONDecodeError as e:
        return MappingLoadResult(default_type_mapping(), True, f"invalid JSON in {path}: {e}")

    try:
        mapping = TypeMapping.from_dict(data, str(path))
    except MappingFormatError as e:
        return MappingLoadResult(default_type_mapping(), True, str(e))

    return MappingLoadResult(mapping)


def save_type_mapping(path: Path, mapping: TypeMapping) -> None:
    """Write a mapping to ``path`` as indented JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(mapping.to_dict(), indent=2) + "\n", encoding="utf-8")
