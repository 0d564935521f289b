"""Project name validation and display-title helpers."""

from __future__ import annotations

import re

__all__ = ["NAME_PATTERN", "derive_title", "is_valid_name"]


NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def is_valid_name(value: str) -> bool:
    """Return ``True`` when ``value`` is usable as a directory and package name."""

    if not isinstance(value, str):
        return False
    return bool(NAME_PATTERN.fullmatch(value))


def derive_title(name: str) -> str:
    """Return the human readable title for ``name``.

    The first character is upper-cased and every hyphen becomes a space; the
    remainder is otherwise kept verbatim, so ``"my-app"`` becomes ``"My app"``.
    """

    if not name:
        return ""
    return name[0].upper() + name[1:].replace("-", " ")
