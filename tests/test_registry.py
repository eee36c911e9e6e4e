from __future__ import annotations

import threading

import pytest

from fieldkeys.errors import DuplicateKeyError, InvalidPrefixError, KeyValidationError
from fieldkeys.registry import KeyPrefix, KeyRegistry


def test_generate_composes_prefix_and_hash():
    registry = KeyRegistry()
    assert registry.generate("field", "Background Color") == "field_ac01b156"
    assert registry.generate(KeyPrefix.GROUP, "Background Color") == "group_ac01b156"
    assert len(registry) == 2


def test_generate_twice_raises_duplicate():
    registry = KeyRegistry()
    key = registry.generate("field", "Background Color")

    with pytest.raises(DuplicateKeyError) as excinfo:
        registry.generate("field", "Background Color")

    assert excinfo.value.key == key
    assert excinfo.value.error_code == "KEY_001"
    assert registry.issued() == frozenset({key})


def test_registries_are_isolated():
    first = KeyRegistry()
    second = KeyRegistry()
    first.generate("layout", "Hero")
    assert second.generate("layout", "Hero") == next(iter(first.issued()))


def test_validate_does_not_claim_key():
    registry = KeyRegistry()
    expected = "field_ac01b156"

    assert registry.validate(expected) == expected
    assert expected not in registry
    assert registry.generate("field", "Background Color") == expected


def test_validate_rejects_issued_key():
    registry = KeyRegistry()
    key = registry.generate("group", "Page Settings")
    with pytest.raises(DuplicateKeyError):
        registry.validate(key)


def test_validate_rejects_keys_mixing_all_categories():
    registry = KeyRegistry()
    with pytest.raises(InvalidPrefixError) as excinfo:
        registry.validate("field_group_layout_abc")
    assert excinfo.value.rule == "prefix_exclusivity"
    assert excinfo.value.key == "field_group_layout_abc"


def test_validate_accepts_keys_with_two_category_words():
    registry = KeyRegistry()
    assert registry.validate("field_group_abc") == "field_group_abc"
    assert registry.validate("grouplayout_1") == "grouplayout_1"


def test_generate_with_mixed_prefix_fails_and_does_not_claim():
    registry = KeyRegistry()
    with pytest.raises(InvalidPrefixError):
        registry.generate("field_group_layout", "Anything")
    assert len(registry) == 0


def test_uniqueness_is_checked_before_prefix_rule():
    registry = KeyRegistry()
    registry._issued.add("fieldgrouplayout_x")
    with pytest.raises(DuplicateKeyError):
        registry.validate("fieldgrouplayout_x")


def test_errors_share_catchable_base():
    registry = KeyRegistry()
    registry.generate("field", "Title")
    with pytest.raises(KeyValidationError):
        registry.generate("field", "Title")
    with pytest.raises(ValueError):
        registry.validate("field_group_layout")


def test_empty_label_is_allowed():
    registry = KeyRegistry()
    assert KeyRegistry.normalize("???") == ""
    assert registry.generate("field", "???") == f"field_{KeyRegistry.hash('???')}"
    assert registry.generate("field", "") == "field_811c9dc5"


def test_static_helpers_need_no_instance():
    assert KeyRegistry.hash("Background Color") == "ac01b156"
    assert KeyRegistry.normalize("Background Color") == "background_color"


def test_issued_snapshot_is_immutable_copy():
    registry = KeyRegistry()
    snapshot = registry.issued()
    registry.generate("field", "A")
    assert snapshot == frozenset()
    assert "field_c40bf6cc" in registry.issued()


def test_concurrent_generate_issues_key_once():
    registry = KeyRegistry()
    barrier = threading.Barrier(8)
    results: list[str] = []
    failures: list[Exception] = []
    guard = threading.Lock()

    def worker() -> None:
        barrier.wait()
        try:
            key = registry.generate("field", "Shared Label")
        except DuplicateKeyError as exc:
            with guard:
                failures.append(exc)
            return
        with guard:
            results.append(key)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 1
    assert len(failures) == 7
    assert len(registry) == 1


def test_generate_accepts_label_with_lone_surrogate():
    registry = KeyRegistry()
    key = registry.generate("field", "\ud800")
    assert key == f"field_{KeyRegistry.hash(chr(0xD800))}"
    with pytest.raises(DuplicateKeyError):
        registry.generate("field", "\ud800")
