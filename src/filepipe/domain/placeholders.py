"""Placeholder tokens and their substitution.

A placeholder is a literal, case-sensitive token inside a command template.
Detection is plain substring search, and substitution replaces every
occurrence. New placeholders only need a new enum member.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from pathlib import Path


class Placeholder(StrEnum):
    """Supported placeholder tokens."""

    IN = "%in"
    OUT = "%out"


def detect_placeholders(template: str) -> frozenset[Placeholder]:
    """Return the set of placeholders that occur anywhere in *template*."""
    return frozenset(p for p in Placeholder if p.value in template)


def substitute(template: str, paths: Mapping[Placeholder, Path | str]) -> str:
    """Replace all occurrences of each placeholder in *paths* with its path.

    Placeholders absent from *paths* are left untouched. ``%out`` is
    replaced before ``%in``; neither token is a prefix of the other, so
    the order only matters for paths that themselves contain a token.
    """
    result = template
    for placeholder in sorted(paths, key=len, reverse=True):
        result = result.replace(placeholder.value, str(paths[placeholder]))
    return result
