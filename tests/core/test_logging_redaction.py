"""Tests for log payload redaction."""

from core.logging import generate_correlation_id, redact


class TestRedact:
    def test_top_level_keys(self) -> None:
        assert redact({"password": "hunter2", "name": "Ann"}) == {"password": "[REDACTED]", "name": "Ann"}

    def test_case_insensitive(self) -> None:
        assert redact({"Authorization": "Bearer x"}) == {"Authorization": "[REDACTED]"}

    def test_nested_payloads(self) -> None:
        event = {"event": "validation_failed", "body": {"items": [{"token": "t"}]}}
        assert redact(event) == {"event": "validation_failed", "body": {"items": [{"token": "[REDACTED]"}]}}

    def test_scalars_untouched(self) -> None:
        assert redact("password") == "password"


def test_correlation_ids_are_short_and_distinct() -> None:
    first, second = generate_correlation_id(), generate_correlation_id()
    assert len(first) == 8
    assert first != second
