"""Stable deterministic digests for registry keys."""

from __future__ import annotations

FNV1A_32_OFFSET_BASIS = 0x811C9DC5
FNV1A_32_PRIME = 0x01000193
DIGEST_LENGTH = 8


def fnv1a_32(data: bytes) -> int:
    """Return the 32-bit FNV-1a hash of ``data``."""
    value = FNV1A_32_OFFSET_BASIS
    for byte in data:
        value ^= byte
        value = (value * FNV1A_32_PRIME) & 0xFFFFFFFF
    return value


def hash_label(label: str) -> str:
    """Hash a label into an 8-character lowercase hex digest.

    Lone surrogates are encoded as their three UTF-8 style bytes so every
    ``str`` hashes.

    Example:
        >>> hash_label("Background Color")
        'ac01b156'
    """
    data = label.encode("utf-8", errors="surrogatepass")
    return f"{fnv1a_32(data):0{DIGEST_LENGTH}x}"
