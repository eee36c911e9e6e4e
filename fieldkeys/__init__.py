"""fieldkeys package exports."""

from .api import default_registry, generate, hash, normalize, validate
from .errors import DuplicateKeyError, InvalidPrefixError, KeyValidationError
from .hashing import fnv1a_32, hash_label
from .manifest import (
    KeyRequest,
    ManifestEntry,
    ManifestError,
    ManifestReport,
    generate_keys,
    load_manifest,
    parse_manifest,
)
from .normalize import is_normalized
from .registry import KeyPrefix, KeyRegistry

__all__ = [
    "KeyRegistry",
    "KeyPrefix",
    "KeyValidationError",
    "DuplicateKeyError",
    "InvalidPrefixError",
    "fnv1a_32",
    "hash_label",
    "is_normalized",
    "default_registry",
    "generate",
    "hash",
    "normalize",
    "validate",
    "KeyRequest",
    "ManifestEntry",
    "ManifestError",
    "ManifestReport",
    "generate_keys",
    "load_manifest",
    "parse_manifest",
]
