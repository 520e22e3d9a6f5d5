"""Naming utilities for turning schema identifiers into Rust identifiers."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Mapping

RUST_KEYWORDS: frozenset[str] = frozenset({
    "as",
    "async",
    "await",
    "break",
    "const",
    "continue",
    "crate",
    "dyn",
    "else",
    "enum",
    "extern",
    "false",
    "fn",
    "for",
    "if",
    "impl",
    "in",
    "let",
    "loop",
    "match",
    "mod",
    "move",
    "mut",
    "pub",
    "ref",
    "return",
    "self",
    "Self",
    "static",
    "struct",
    "super",
    "trait",
    "true",
    "type",
    "union",
    "unsafe",
    "use",
    "where",
    "while",
})

# Order matters: lower/digit-before-upper first, then acronym-before-word.
_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]{2,})(?=[A-Z][a-z])")
# Struct names only: a lone capital before a word, so "AUser" splits as A|User.
_CAPITAL_BOUNDARY = re.compile(r"([A-Z])(?=[A-Z][a-z])")
_INVALID_FIELD_CHARS = re.compile(r"[^a-z0-9_]")
_TOKEN_SEPARATOR = re.compile(r"[^A-Za-z0-9]+")


def _mark_word_boundaries(value: str) -> str:
    value = _CAMEL_BOUNDARY.sub(r"\1_\2", value)
    return _ACRONYM_BOUNDARY.sub(r"\1_", value)


def _is_acronym(word: str) -> bool:
    return len(word) > 1 and word.upper() == word


@lru_cache(maxsize=1024)
def to_field_name(raw: str) -> str:
    """Convert a column name to a snake_case Rust field name.

    Uses caching for repeated calls with the same input.

    Examples:
        >>> to_field_name("userId")
        'user_id'
        >>> to_field_name("user.id")
        'user_id'
        >>> to_field_name("XMLHttpRequest")
        'xml_http_request'
    """
    value = _mark_word_boundaries(raw).lower()
    return _INVALID_FIELD_CHARS.sub("_", value)


@lru_cache(maxsize=1024)
def _pascal_case(raw: str) -> str:
    tokens = [token for token in _TOKEN_SEPARATOR.split(raw) if token]
    # An all-caps multi-word name is shouting case, not a run of acronyms.
    keep_acronyms = not (len(tokens) > 1 and raw.upper() == raw)

    parts: list[str] = []
    for token in tokens:
        if keep_acronyms and _is_acronym(token):
            parts.append(token)
            continue
        words = _CAPITAL_BOUNDARY.sub(r"\1_", _mark_word_boundaries(token))
        for word in words.split("_"):
            if not word:
                continue
            if keep_acronyms and _is_acronym(word):
                parts.append(word)
            else:
                parts.append(word[0].upper() + word[1:].lower())
    return "".join(parts)


def to_struct_name(raw: str, special_cases: Mapping[str, str] | None = None) -> str:
    """Convert a table name to a PascalCase Rust struct name.

    A table listed in ``special_cases`` (keyed by lowercased table name) gets
    its configured struct name verbatim.

    Examples:
        >>> to_struct_name("user_profiles")
        'UserProfiles'
        >>> to_struct_name("USER_PROFILES")
        'UserProfiles'
        >>> to_struct_name("api_keys", {"api_keys": "ApiKey"})
        'ApiKey'
    """
    if special_cases:
        override = special_cases.get(raw.lower())
        if override is not None:
            return override
    return _pascal_case(raw)


@lru_cache(maxsize=1024)
def sanitize_field_name(value: str) -> str:
    """Escape a field name that collides with a Rust keyword.

    Uses caching for repeated calls with the same input.
    """
    if value in RUST_KEYWORDS:
        return f"r#{value}"
    return value
