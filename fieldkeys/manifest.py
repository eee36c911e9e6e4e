"""Batch key generation from JSON manifests."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import KeyValidationError
from .registry import KeyRegistry

logger = logging.getLogger(__name__)


class ManifestError(RuntimeError):
    """Manifest could not be read or parsed, with a machine-readable code."""

    def __init__(self, code: str, message: str, *, path: str | None = None):
        super().__init__(message)
        self.code = code
        self.path = path


class KeyRequest(BaseModel):
    """One ``prefix``/``label`` pair to generate a key for."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    prefix: str
    label: str

    @field_validator("prefix")
    @classmethod
    def _validate_prefix(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Key prefix must be non-empty.")
        return value


@dataclass(frozen=True)
class ManifestEntry:
    """Outcome for one manifest request."""

    prefix: str
    label: str
    key: str | None = None
    error: KeyValidationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "prefix": self.prefix,
            "label": self.label,
            "key": self.key,
        }
        if self.error is not None:
            payload["error"] = self.error.to_dict()
        return payload


@dataclass(frozen=True)
class ManifestReport:
    """Ordered outcomes of a manifest run."""

    entries: tuple[ManifestEntry, ...]

    @property
    def ok(self) -> bool:
        return all(entry.ok for entry in self.entries)

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(entry.key for entry in self.entries if entry.key is not None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "entries": [entry.to_dict() for entry in self.entries],
        }


def parse_manifest(payload: Any, *, path: str | None = None) -> list[KeyRequest]:
    """Validate a decoded manifest into key requests.

    Accepts either a list of ``{"prefix", "label"}`` objects or an object
    holding such a list under ``entries``.
    """
    if isinstance(payload, Mapping):
        if "entries" not in payload:
            raise ManifestError("MAN002", "Manifest object must contain 'entries'.", path=path)
        payload = payload["entries"]
    if not isinstance(payload, list):
        raise ManifestError("MAN002", "Manifest entries must be a JSON array.", path=path)

    requests: list[KeyRequest] = []
    for index, item in enumerate(payload):
        try:
            requests.append(KeyRequest.model_validate(item))
        except ValidationError as exc:
            raise ManifestError(
                "MAN003",
                f"Invalid manifest entry at index {index}: {exc.errors()[0]['msg']}",
                path=path,
            ) from exc
    return requests


def load_manifest(path: str | Path) -> list[KeyRequest]:
    """Read and validate a manifest file."""
    manifest_path = Path(path)
    try:
        payload = json.loads(manifest_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ManifestError("MAN001", f"Manifest not found: {manifest_path}", path=str(path)) from exc
    except json.JSONDecodeError as exc:
        raise ManifestError(
            "MAN001", f"Manifest is not valid JSON: {exc.msg}", path=str(path)
        ) from exc
    return parse_manifest(payload, path=str(path))


def generate_keys(
    requests: Iterable[KeyRequest],
    *,
    registry: KeyRegistry | None = None,
) -> ManifestReport:
    """Generate a key per request, recording failures instead of stopping."""
    registry = registry if registry is not None else KeyRegistry()
    entries: list[ManifestEntry] = []
    for request in requests:
        try:
            key = registry.generate(request.prefix, request.label)
        except KeyValidationError as exc:
            entries.append(ManifestEntry(prefix=request.prefix, label=request.label, error=exc))
            continue
        entries.append(ManifestEntry(prefix=request.prefix, label=request.label, key=key))

    report = ManifestReport(entries=tuple(entries))
    failed = sum(1 for entry in report.entries if not entry.ok)
    logger.info("Generated %d keys, %d rejected", len(report.keys), failed)
    return report
