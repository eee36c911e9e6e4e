"""Slug normalisation for human-readable labels."""

from __future__ import annotations

import re

from unidecode import unidecode

_TAGS = re.compile(r"<[^>]*>")
_ENTITIES = re.compile(r"&[a-z0-9#]+;")
_INVALID = re.compile(r"[^a-z0-9\s._-]")
_SEPARATORS = re.compile(r"[\s._-]+")
_NORMALIZED = re.compile(r"[a-z0-9_]*")


def normalize(label: str) -> str:
    """Convert a label into a snake_case slug token.

    Markup is dropped and non-ASCII letters are transliterated. Characters
    that are not valid in a slug are removed, then runs of whitespace, dots,
    underscores and hyphens collapse into a single separator.

    Example:
        >>> normalize("  Don't <b>Stop</b> & Café ")
        'dont_stop_cafe'
    """
    text = _TAGS.sub("", label)
    text = unidecode(text).lower()
    text = _ENTITIES.sub("", text)
    text = _INVALID.sub("", text)
    slug = _SEPARATORS.sub("-", text).strip("-")
    return slug.replace("-", "_")


def is_normalized(value: str) -> bool:
    """Return True when ``value`` is already a fixed point of ``normalize``."""
    return bool(_NORMALIZED.fullmatch(value)) and normalize(value) == value
