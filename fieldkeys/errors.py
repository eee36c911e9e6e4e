"""Key validation error taxonomy.

Example:
    >>> from fieldkeys.errors import DuplicateKeyError
    >>> err = DuplicateKeyError("field_ac01b156")
    >>> err.rule
    'uniqueness'
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any


@dataclass
class KeyValidationError(ValueError):
    """Base error for rejected registry keys.

    Attributes:
        error_code: Stable error identifier.
        rule: One of uniqueness/prefix_exclusivity.
        key: The offending key string.
        description: Human-readable error description.
        remediation_hint: What a caller can change to get a valid key.

    Example:
        >>> err = KeyValidationError(
        ...     error_code="KEY_000",
        ...     rule="uniqueness",
        ...     key="field_00000000",
        ...     description="Rejected",
        ...     remediation_hint="Pick another label.",
        ... )
        >>> err.error_code
        'KEY_000'
    """

    error_code: str
    rule: str
    key: str
    description: str
    remediation_hint: str

    def __post_init__(self) -> None:
        super().__init__(self.description)

    def to_dict(self) -> dict[str, Any]:
        """Return serializable error details.

        Example:
            >>> DuplicateKeyError("group_1").to_dict()["error_code"]
            'KEY_001'
        """
        return {
            "error_code": self.error_code,
            "rule": self.rule,
            "key": self.key,
            "description": self.description,
            "remediation_hint": self.remediation_hint,
        }

    def to_payload(self) -> str:
        """Serialize the error as deterministic JSON."""
        return json.dumps(self.to_dict(), sort_keys=True, indent=2)


class DuplicateKeyError(KeyValidationError):
    """Raised when a key has already been issued by the registry."""

    def __init__(self, key: str):
        super().__init__(
            error_code="KEY_001",
            rule="uniqueness",
            key=key,
            description=f"The key [{key}] is not unique.",
            remediation_hint="Use a different label or prefix for this key.",
        )


class InvalidPrefixError(KeyValidationError):
    """Raised when a key mixes the field, group and layout categories."""

    def __init__(self, key: str):
        super().__init__(
            error_code="KEY_002",
            rule="prefix_exclusivity",
            key=key,
            description=(
                f"The key [{key}] is invalid: the key prefix must be either "
                "field, group or layout."
            ),
            remediation_hint="Compose the key from exactly one of field, group or layout.",
        )
