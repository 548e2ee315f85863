"""Unit tests for RuleLogFilter.

Tests verify automatic identity/role tag derivation and context injection.
"""

from __future__ import annotations

import logging

import pytest

from reelrules.helpers.logging_helper import (
    RuleLogFilter,
    clear_log_context,
    sanitize_exception_message,
    set_log_context,
)


def _make_record(name: str) -> logging.LogRecord:
    """Create a minimal LogRecord with given logger name."""
    return logging.LogRecord(
        name=name,
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg="Test message",
        args=(),
        exc_info=None,
    )


class TestRuleLogFilterIdentityRole:
    """Tests for identity and role tag derivation from logger names."""

    @pytest.fixture
    def log_filter(self) -> RuleLogFilter:
        return RuleLogFilter()

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("name", "identity", "role"),
        [
            ("reelrules.services.domain.selection_svc", "[Selection]", "[Service]"),
            ("reelrules.workflows.rules.parse_rule_wf", "[Parse Rule]", "[Workflow]"),
            ("reelrules.components.rules.field_registry_comp", "[Field Registry]", "[Component]"),
            ("reelrules.helpers.logging_helper", "[Logging]", "[Helper]"),
            ("reelrules.interfaces.api.web.rules_if", "[Rules]", "[Interface]"),
            ("reelrules.interfaces.cli.commands.preview_cli", "[Preview]", "[CLI]"),
        ],
    )
    def test_suffix_roles(self, log_filter: RuleLogFilter, name: str, identity: str, role: str) -> None:
        record = _make_record(name)
        log_filter.filter(record)

        assert record.rule_identity_tag == identity
        assert record.rule_role_tag == role

    @pytest.mark.unit
    def test_unknown_suffix_uses_logger_name(self, log_filter: RuleLogFilter) -> None:
        record = _make_record("uvicorn.error")
        log_filter.filter(record)

        assert record.rule_identity_tag == "uvicorn.error"
        assert record.rule_role_tag == ""

    @pytest.mark.unit
    def test_bare_suffix_is_not_a_role(self, log_filter: RuleLogFilter) -> None:
        """A module named just '_svc' has no identity to derive."""
        record = _make_record("pkg._svc")
        log_filter.filter(record)

        assert record.rule_role_tag == ""

    @pytest.mark.unit
    def test_never_suppresses(self, log_filter: RuleLogFilter) -> None:
        assert log_filter.filter(_make_record("")) is True


class TestRuleLogFilterContext:
    """Tests for per-request context injection."""

    @pytest.fixture(autouse=True)
    def _clean_context(self):
        clear_log_context()
        yield
        clear_log_context()

    @pytest.mark.unit
    def test_no_context_empty_string(self) -> None:
        record = _make_record("reelrules.app")
        RuleLogFilter().filter(record)
        assert record.context_str == ""

    @pytest.mark.unit
    def test_context_rendered_in_order(self) -> None:
        set_log_context(kind="channel")
        set_log_context(op="preview")
        record = _make_record("reelrules.app")
        RuleLogFilter().filter(record)
        assert record.context_str == "[kind=channel op=preview] "

    @pytest.mark.unit
    def test_clear_context(self) -> None:
        set_log_context(kind="media")
        clear_log_context()
        record = _make_record("reelrules.app")
        RuleLogFilter().filter(record)
        assert record.context_str == ""


class TestSanitizeExceptionMessage:
    @pytest.mark.unit
    def test_returns_safe_message(self, caplog) -> None:
        err = RuntimeError("/secret/path/pools.json: permission denied")
        with caplog.at_level(logging.ERROR):
            message = sanitize_exception_message(err, "Failed to preview rule")

        assert message == "Failed to preview rule"
        assert "/secret/path" in caplog.text
