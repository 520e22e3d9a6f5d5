"""
Rust type generator - emits Rust structs from relational schema metadata.

Tables come either from a live PostgreSQL database (``DATABASE_URL``) or from
YAML schema files. Every run regenerates the whole output file.
"""

from __future__ import annotations

import argparse
import json
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from pathlib import Path
from typing import Sequence

from ..introspection import DEFAULT_SCHEMA, PostgresSchemaProvider
from ..shared import (
    SchemaCache,
    SchemaError,
    TableDescriptor,
    collect_schema_paths,
    load_settings,
    load_tables,
    resolve_output_path,
)
from ..shared.settings import DEFAULT_DB_NAME, DEFAULT_MAPPINGS_FILE
from .emitter import AttributeStyle, GeneratedStruct, emit_struct
from .mapping import (
    TypeMapping,
    default_type_mapping,
    load_type_mapping,
    save_type_mapping,
)
from .render import RenderContext, render_document


def load_or_create_type_mapping(path: Path) -> TypeMapping:
    """Load the mapping file, writing the built-in mapping when it is unusable.

    A failed write is reported and the run continues with the in-memory default.
    """
    result = load_type_mapping(path)
    if not result.defaulted:
        return result.mapping

    print(f"Creating default {path.name} file ({result.reason})...")
    try:
        save_type_mapping(path, result.mapping)
    except OSError as e:
        print(f"  Could not write {path}: {e}")
    else:
        print(f"  Created default mapping file at {path}")
    return result.mapping


def generate_structs(
    tables: Sequence[TableDescriptor],
    mapping: TypeMapping,
    style: AttributeStyle = AttributeStyle.SERDE,
    parallel: bool = False,
    max_workers: int | None = None,
) -> list[GeneratedStruct]:
    """Emit one struct per table, in table order.

    Args:
        tables: Tables from a schema provider.
        mapping: The type mapping of the current run.
        style: Attribute family to emit.
        parallel: Whether to process tables in a thread pool.
        max_workers: Maximum number of parallel workers.

    Returns:
        Structs in the same order as ``tables``.
    """
    emit = partial(emit_struct, mapping=mapping, style=style)

    if parallel and len(tables) > 1:
        # Executor.map yields results in submission order.
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(emit, tables))

    return [emit(table) for table in tables]


def generate_document(
    tables: Sequence[TableDescriptor],
    mapping: TypeMapping,
    style: AttributeStyle = AttributeStyle.SERDE,
    parallel: bool = False,
    max_workers: int | None = None,
    ctx: RenderContext | None = None,
) -> str:
    """Generate the complete Rust source document for ``tables``."""
    structs = generate_structs(
        tables, mapping, style, parallel=parallel, max_workers=max_workers
    )
    return render_document(structs, style, ctx)


def write_document(text: str, output_path: Path) -> None:
    """Write the generated document, creating parent directories."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")


def _read_tables(args: argparse.Namespace) -> tuple[list[TableDescriptor], str]:
    """Fetch tables from the selected provider, with the database name."""
    if args.paths:
        schema_paths = collect_schema_paths(args.paths)
        if not schema_paths:
            raise SystemExit("No schema files found")
        tables = load_tables(schema_paths, SchemaCache())
        print(f"Loaded {len(tables)} table(s) from {len(schema_paths)} schema file(s)")
        return tables, DEFAULT_DB_NAME

    settings = load_settings(args.env_file)
    with PostgresSchemaProvider(settings.database_url) as provider:
        print("Connected to PostgreSQL database")
        tables = provider.list_tables(args.schema)
    return tables, settings.database_name


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate Rust types from a PostgreSQL database or YAML schema files",
    )
    parser.add_argument(
        "paths",
        type=Path,
        nargs="*",
        help="Schema file(s) or directories; introspects DATABASE_URL when omitted",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Full output path for the generated file",
    )
    parser.add_argument(
        "-d",
        "--dir",
        type=Path,
        default=None,
        help="Output directory (default: current directory)",
    )
    parser.add_argument(
        "-n",
        "--name",
        default=None,
        help="Output filename (default: <database>_types.rs)",
    )
    parser.add_argument(
        "-s",
        "--sqlx",
        action="store_true",
        help="Use SQLx attributes instead of Serde",
    )
    parser.add_argument(
        "--schema",
        default=DEFAULT_SCHEMA,
        help=f"Database schema to introspect (default: {DEFAULT_SCHEMA})",
    )
    parser.add_argument(
        "--mappings",
        type=Path,
        default=Path(DEFAULT_MAPPINGS_FILE),
        help=f"Type mapping file (default: ./{DEFAULT_MAPPINGS_FILE})",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to a .env file (default: search from the current directory)",
    )
    parser.add_argument(
        "--no-parallel",
        action="store_true",
        help="Disable parallel processing",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Maximum number of parallel workers",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    style = AttributeStyle.SQLX if args.sqlx else AttributeStyle.SERDE

    try:
        tables, db_name = _read_tables(args)
        mapping = load_or_create_type_mapping(args.mappings)

        document = generate_document(
            tables,
            mapping,
            style,
            parallel=not args.no_parallel,
            max_workers=args.workers,
        )

        output_path = resolve_output_path(args.output, args.dir, args.name, db_name)
        write_document(document, output_path)

        print(
            f"Rust types for {len(tables)} table(s) generated and saved to {output_path}"
        )
    except (SchemaError, OSError) as e:
        raise SystemExit(f"Error: {e}") from e


def mappings_main(argv: list[str] | None = None) -> None:
    """Write (or print) the built-in type mapping file."""
    parser = argparse.ArgumentParser(
        description="Write the built-in type mapping file",
    )
    parser.add_argument(
        "path",
        type=Path,
        nargs="?",
        default=Path(DEFAULT_MAPPINGS_FILE),
        help=f"Destination file (default: ./{DEFAULT_MAPPINGS_FILE})",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing mapping file",
    )
    parser.add_argument(
        "--print",
        dest="print_only",
        action="store_true",
        help="Print the mapping that would be used instead of writing it",
    )
    args = parser.parse_args(argv)

    if args.print_only:
        mapping = load_type_mapping(args.path).mapping
        print(json.dumps(mapping.to_dict(), indent=2))
        return

    if args.path.exists() and not args.force:
        raise SystemExit(f"Error: {args.path} already exists (use --force to overwrite)")

    try:
        save_type_mapping(args.path, default_type_mapping())
    except OSError as e:
        raise SystemExit(f"Error: {e}") from e
    print(f"Wrote default mapping file to {args.path}")


if __name__ == "__main__":
    main()
