"""Unit tests for TagpivotLogFilter.

Tests verify automatic identity/role tag derivation and context injection.
"""

from __future__ import annotations

import logging

import pytest

from tagpivot.helpers.logging_helper import (
    TagpivotLogFilter,
    clear_log_context,
    configure_logging,
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


class TestTagpivotLogFilterIdentityRole:
    """Tests for identity and role tag derivation from logger names."""

    @pytest.fixture
    def log_filter(self) -> TagpivotLogFilter:
        return TagpivotLogFilter()

    @pytest.mark.unit
    def test_service_suffix(self, log_filter: TagpivotLogFilter) -> None:
        """_svc suffix should produce [Identity] [Service] tags."""
        record = _make_record("tagpivot.services.event_store_svc")
        log_filter.filter(record)

        assert record.tagpivot_identity_tag == "[Event Store]"
        assert record.tagpivot_role_tag == "[Service] "

    @pytest.mark.unit
    def test_workflow_suffix(self, log_filter: TagpivotLogFilter) -> None:
        record = _make_record("tagpivot.workflows.analytics.polarization_state_wf")
        log_filter.filter(record)

        assert record.tagpivot_identity_tag == "[Polarization State]"
        assert record.tagpivot_role_tag == "[Workflow] "

    @pytest.mark.unit
    def test_component_suffix(self, log_filter: TagpivotLogFilter) -> None:
        record = _make_record("tagpivot.components.analytics.bridges_comp")
        log_filter.filter(record)

        assert record.tagpivot_identity_tag == "[Bridges]"
        assert record.tagpivot_role_tag == "[Component] "

    @pytest.mark.unit
    def test_sql_suffix(self, log_filter: TagpivotLogFilter) -> None:
        record = _make_record("tagpivot.persistence.database.kv_store_sql")
        log_filter.filter(record)

        assert record.tagpivot_identity_tag == "[Kv Store]"
        assert record.tagpivot_role_tag == "[SQL] "

    @pytest.mark.unit
    def test_unknown_suffix_keeps_full_name(self, log_filter: TagpivotLogFilter) -> None:
        """Modules without a role suffix fall back to the logger name."""
        record = _make_record("tagpivot.persistence.db")
        log_filter.filter(record)

        assert record.tagpivot_identity_tag == "tagpivot.persistence.db"
        assert record.tagpivot_role_tag == ""

    @pytest.mark.unit
    def test_third_party_logger_untouched(self, log_filter: TagpivotLogFilter) -> None:
        record = _make_record("urllib3.connectionpool")
        log_filter.filter(record)

        assert record.tagpivot_identity_tag == "urllib3.connectionpool"
        assert record.tagpivot_role_tag == ""

    @pytest.mark.unit
    def test_bare_suffix_has_no_identity(self, log_filter: TagpivotLogFilter) -> None:
        record = _make_record("tagpivot._svc")
        log_filter.filter(record)

        assert record.tagpivot_identity_tag == "tagpivot._svc"
        assert record.tagpivot_role_tag == ""

    @pytest.mark.unit
    def test_filter_never_suppresses(self, log_filter: TagpivotLogFilter) -> None:
        assert log_filter.filter(_make_record("")) is True


class TestTagpivotLogFilterContext:
    """Tests for thread-local context injection."""

    @pytest.mark.unit
    def test_no_context_is_empty(self) -> None:
        clear_log_context()
        record = _make_record("tagpivot.services.event_store_svc")
        TagpivotLogFilter().filter(record)

        assert record.context_str == ""

    @pytest.mark.unit
    def test_context_rendered_in_insertion_order(self) -> None:
        set_log_context(cmd="record")
        set_log_context(day="2026-03-15")
        record = _make_record("tagpivot.services.event_store_svc")
        TagpivotLogFilter().filter(record)

        assert record.context_str == "[cmd=record day=2026-03-15] "

    @pytest.mark.unit
    def test_clear_context(self) -> None:
        set_log_context(cmd="field")
        clear_log_context()
        record = _make_record("tagpivot.services.event_store_svc")
        TagpivotLogFilter().filter(record)

        assert record.context_str == ""


class TestConfigureLogging:
    @pytest.mark.unit
    def test_installs_filtered_handlers(self, tmp_path) -> None:
        log_file = tmp_path / "logs" / "tagpivot.log"
        configure_logging("debug", str(log_file))
        try:
            root = logging.getLogger()
            assert root.level == logging.DEBUG
            assert len(root.handlers) == 2
            for handler in root.handlers:
                assert any(isinstance(f, TagpivotLogFilter) for f in handler.filters)

            logging.getLogger("tagpivot.services.event_store_svc").info("[event_store] hello")
            for handler in root.handlers:
                handler.flush()
            text = log_file.read_text(encoding="utf-8")
            assert "[Event Store] [Service] [event_store] hello" in text
        finally:
            for handler in logging.getLogger().handlers:
                handler.close()
            logging.basicConfig(level=logging.WARNING, force=True)

    @pytest.mark.unit
    def test_unknown_level_falls_back_to_info(self) -> None:
        configure_logging("chatty")
        try:
            assert logging.getLogger().level == logging.INFO
        finally:
            logging.basicConfig(level=logging.WARNING, force=True)
