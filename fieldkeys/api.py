"""Module-level key operations backed by one process-wide registry."""

from __future__ import annotations

import threading
from typing import Optional, Union

from .hashing import hash_label
from .normalize import normalize as normalize_label
from .registry import KeyPrefix, KeyRegistry

__all__ = [
    "default_registry",
    "generate",
    "hash",
    "normalize",
    "validate",
]

_default: Optional[KeyRegistry] = None
_default_lock = threading.Lock()


def default_registry() -> KeyRegistry:
    """Return the registry shared by the module-level functions."""
    global _default
    with _default_lock:
        if _default is None:
            _default = KeyRegistry()
        return _default


def generate(prefix: Union[str, KeyPrefix], label: str) -> str:
    """Generate a unique key in the process-wide registry."""
    return default_registry().generate(prefix, label)


def hash(label: str) -> str:  # noqa: A001
    """Return the 8-character FNV-1a digest of ``label``."""
    return hash_label(label)


def normalize(label: str) -> str:
    """Convert a label into a snake_case slug token."""
    return normalize_label(label)


def validate(key: str) -> str:
    """Validate ``key`` against the process-wide registry without claiming it."""
    return default_registry().validate(key)
