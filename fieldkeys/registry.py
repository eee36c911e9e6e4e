"""In-process registry that issues unique, deterministic keys."""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import FrozenSet, Set, Union

from .errors import DuplicateKeyError, InvalidPrefixError
from .hashing import hash_label
from .normalize import normalize as normalize_label

logger = logging.getLogger(__name__)

CATEGORY_WORDS = ("field", "group", "layout")


class KeyPrefix(str, Enum):
    """Conventional key categories."""

    FIELD = "field"
    GROUP = "group"
    LAYOUT = "layout"


class KeyRegistry:
    """Issue ``<prefix>_<hash>`` keys and reject duplicates.

    Keys issued by one registry are unique for its lifetime. The issued set
    only grows; there is no way to release a key.

    Example:
        >>> registry = KeyRegistry()
        >>> registry.generate("field", "Background Color")
        'field_ac01b156'
        >>> "field_ac01b156" in registry
        True
    """

    def __init__(self) -> None:
        self._issued: Set[str] = set()
        self._lock = threading.Lock()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._issued

    def __len__(self) -> int:
        with self._lock:
            return len(self._issued)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(issued={len(self)})"

    @staticmethod
    def normalize(label: str) -> str:
        """Convert a label into a snake_case slug token."""
        return normalize_label(label)

    @staticmethod
    def hash(label: str) -> str:
        """Return the 8-character FNV-1a digest of ``label``."""
        return hash_label(label)

    def issued(self) -> FrozenSet[str]:
        """Return a snapshot of every key issued so far."""
        with self._lock:
            return frozenset(self._issued)

    def generate(self, prefix: Union[str, KeyPrefix], label: str) -> str:
        """Compose, validate and claim a key for ``label``.

        Raises:
            DuplicateKeyError: The key was already issued by this registry.
            InvalidPrefixError: The key contains field, group and layout.
        """
        if isinstance(prefix, KeyPrefix):
            prefix = prefix.value
        candidate = f"{prefix}_{self.hash(label)}"
        with self._lock:
            self._check(candidate)
            self._issued.add(candidate)
        logger.debug("Issued key %s for label %r", candidate, label)
        return candidate

    def validate(self, key: str) -> str:
        """Check ``key`` against the uniqueness and prefix rules.

        The key is returned unchanged and is not claimed.
        """
        with self._lock:
            self._check(key)
        return key

    def _check(self, key: str) -> None:
        # Caller holds the lock.
        if key in self._issued:
            logger.warning("Rejected duplicate key %s", key)
            raise DuplicateKeyError(key)
        if all(word in key for word in CATEGORY_WORDS):
            logger.warning("Rejected key %s mixing field, group and layout", key)
            raise InvalidPrefixError(key)
