#!/usr/bin/env python3
"""
Command line interface for db-analyzer.

Usage:
    python -m db_analyzer <command> [options]

Commands:
    generate    Generate Rust types from the database or YAML schema files
    mappings    Write the default type mapping file

Examples:
    python -m db_analyzer generate
    python -m db_analyzer generate --sqlx --dir src/models
    python -m db_analyzer generate schemas/ --output src/db_types.rs
    python -m db_analyzer mappings --force
"""

from __future__ import annotations

import sys


def cmd_generate(args: list[str]) -> int:
    """Generate Rust types."""
    from db_analyzer.codegen import main as codegen
    try:
        codegen.main(args)
        return 0
    except SystemExit as e:
        if isinstance(e.code, str):
            print(e.code, file=sys.stderr)
        return e.code if isinstance(e.code, int) else 1


def cmd_mappings(args: list[str]) -> int:
    """Write the default type mapping file."""
    from db_analyzer.codegen import main as codegen
    try:
        codegen.mappings_main(args)
        return 0
    except SystemExit as e:
        if isinstance(e.code, str):
            print(e.code, file=sys.stderr)
        return e.code if isinstance(e.code, int) else 1


COMMANDS = {
    "generate": (cmd_generate, "Generate Rust types from the database or YAML schemas"),
    "mappings": (cmd_mappings, "Write the default type mapping file"),
}


def main() -> int:
    if len(sys.argv) < 2 or sys.argv[1] in ("-h", "--help"):
        print(__doc__)
        print("Available commands:")
        for name, (_, desc) in COMMANDS.items():
            print(f"  {name:12} {desc}")
        print("\nUse '<command> --help' for command-specific options.")
        return 0

    command = sys.argv[1]
    args = sys.argv[2:]

    if command not in COMMANDS:
        print(f"Unknown command: {command}")
        print(f"Available commands: {', '.join(COMMANDS.keys())}")
        return 1

    handler, _ = COMMANDS[command]
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
