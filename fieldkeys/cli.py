"""fieldkeys command line interface."""

from __future__ import annotations

import argparse
import json
import logging
from typing import Any

from .errors import KeyValidationError
from .hashing import hash_label
from .manifest import ManifestError, generate_keys, load_manifest
from .normalize import normalize
from .registry import KeyRegistry


def _print_output(payload: dict[str, Any], *, as_json: bool) -> None:
    if as_json:
        print(json.dumps(payload, sort_keys=True))
        return

    if "result" in payload:
        print(payload["result"])
    for key in payload.get("keys", []):
        print(key)
    for entry in payload.get("entries", []):
        if "error" in entry:
            print(f"{entry['prefix']} {entry['label']!r}: {entry['error']['description']}")
        else:
            print(f"{entry['key']}  {entry['label']}")

    errors = payload.get("errors")
    if isinstance(errors, list) and errors:
        print("errors:")
        for item in errors:
            code = item.get("code", "<unknown>")
            message = item.get("message", "")
            path = item.get("path")
            if path:
                print(f"  - {code} ({path}): {message}")
            else:
                print(f"  - {code}: {message}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fieldkeys")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    hash_parser = subparsers.add_parser("hash", help="Print the FNV-1a digest of a label")
    hash_parser.add_argument("label")
    hash_parser.add_argument("--json", action="store_true", help="Emit JSON output")

    normalize_parser = subparsers.add_parser("normalize", help="Print the slug of a label")
    normalize_parser.add_argument("label")
    normalize_parser.add_argument("--json", action="store_true", help="Emit JSON output")

    validate_parser = subparsers.add_parser("validate", help="Check a key against the naming rules")
    validate_parser.add_argument("key")
    validate_parser.add_argument("--json", action="store_true", help="Emit JSON output")

    generate_parser = subparsers.add_parser("generate", help="Generate keys for labels")
    generate_parser.add_argument("prefix", help="Key category, usually field, group or layout")
    generate_parser.add_argument("labels", nargs="+", metavar="label")
    generate_parser.add_argument("--json", action="store_true", help="Emit JSON output")

    manifest_parser = subparsers.add_parser("manifest", help="Generate keys from a JSON manifest")
    manifest_parser.add_argument("--file", required=True, help="Path to manifest JSON file")
    manifest_parser.add_argument("--json", action="store_true", help="Emit JSON output")

    return parser


def _run(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    as_json = bool(args.json)

    if args.command == "hash":
        _print_output({"ok": True, "result": hash_label(args.label)}, as_json=as_json)
        return 0

    if args.command == "normalize":
        _print_output({"ok": True, "result": normalize(args.label)}, as_json=as_json)
        return 0

    if args.command == "validate":
        key = KeyRegistry().validate(args.key)
        _print_output({"ok": True, "result": key}, as_json=as_json)
        return 0

    if args.command == "generate":
        registry = KeyRegistry()
        keys = [registry.generate(args.prefix, label) for label in args.labels]
        _print_output({"ok": True, "keys": keys}, as_json=as_json)
        return 0

    if args.command == "manifest":
        report = generate_keys(load_manifest(args.file))
        _print_output(report.to_dict(), as_json=as_json)
        return 0 if report.ok else 1

    parser.error(f"unsupported command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )
    as_json = bool(getattr(args, "json", False))
    try:
        return _run(parser, args)
    except KeyValidationError as exc:
        payload = {
            "ok": False,
            "errors": [{"code": exc.error_code, "message": str(exc), "key": exc.key}],
        }
        _print_output(payload, as_json=as_json)
        return 2
    except ManifestError as exc:
        payload = {
            "ok": False,
            "errors": [{"code": exc.code, "message": str(exc), "path": exc.path}],
        }
        _print_output(payload, as_json=as_json)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
