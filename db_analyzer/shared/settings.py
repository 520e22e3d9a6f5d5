"""Runtime settings read from the environment and ``.env`` files."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final
from urllib.parse import urlparse

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigurationError

DATABASE_URL_VAR: Final[str] = "DATABASE_URL"
DEFAULT_DB_NAME: Final[str] = "db"
DEFAULT_MAPPINGS_FILE: Final[str] = "mappings.json"


@dataclass(frozen=True, slots=True)
class Settings:
    """Connection settings for database introspection."""

    database_url: str

    @property
    def database_name(self) -> str:
        return database_name(self.database_url)


def load_settings(env_file: Path | None = None) -> Settings:
    """Load settings, reading ``.env`` into the process environment first.

    Without ``env_file`` the nearest ``.env`` from the current directory up
    is used, if any.

    Variables already set in the environment take precedence over the file.

    Raises:
        ConfigurationError: If ``DATABASE_URL`` is not set.
    """
    load_dotenv(dotenv_path=env_file or find_dotenv(usecwd=True), override=False)

    database_url = os.environ.get(DATABASE_URL_VAR)
    if not database_url:
        raise ConfigurationError("environment variable is not set", DATABASE_URL_VAR)

    return Settings(database_url=database_url)


def database_name(url: str) -> str:
    """Extract the database name from a connection URL.

    Examples:
        >>> database_name("postgres://user:pw@localhost:5432/shop?sslmode=disable")
        'shop'
        >>> database_name("not a url")
        'db'
    """
    try:
        parsed = urlparse(url)
    except ValueError:
        return DEFAULT_DB_NAME
    if not parsed.scheme:
        return DEFAULT_DB_NAME
    name = parsed.path.lstrip("/").split("/")[0]
    return name or DEFAULT_DB_NAME


def resolve_output_path(
    output: Path | None,
    directory: Path | None,
    name: str | None,
    db_name: str = DEFAULT_DB_NAME,
) -> Path:
    """Work out where the generated file goes.

    An explicit ``output`` wins; otherwise ``name`` (or ``<db_name>_types.rs``)
    inside ``directory`` (or the current directory).
    """
    if output is not None:
        return output
    base = directory if directory is not None else Path.cwd()
    return base / (name or f"{db_name}_types.rs")
