"""Tests for the structlog-backed AuditLogger."""

import json

from safe_wallet.core import audit_log
from safe_wallet.core.audit_log import (
    AuditLogger,
    EventSeverity,
    EventType,
    get_audit_logger,
    log_wallet_event,
)


def _read_events(logger: AuditLogger):
    return [json.loads(line) for line in logger.log_file.read_text().splitlines() if line]


class TestAuditLogger:

    def test_creates_log_dir(self, tmp_path):
        logger = AuditLogger(log_dir=tmp_path / "sub" / "logs")
        try:
            assert (tmp_path / "sub" / "logs").is_dir()
            assert logger.log_file.parent == tmp_path / "sub" / "logs"
        finally:
            logger.close()

    def test_log_event_writes_json_line(self, tmp_path):
        logger = AuditLogger(log_dir=tmp_path)
        try:
            event_id = logger.log_event(
                event_type=EventType.GROUP_ADDED,
                severity=EventSeverity.INFO,
                message="group added: Personal",
                details={"group_id": "grp-1"},
            )
            events = _read_events(logger)
        finally:
            logger.close()

        assert len(events) == 1
        event = events[0]
        assert event["event_id"] == event_id
        assert event["event_type"] == "group.added"
        assert event["severity"] == "info"
        assert event["details"] == {"group_id": "grp-1"}
        assert "hostname" in event["user_context"]
        assert event["level"] == "info"

    def test_log_wallet_event_prefixes_message(self, tmp_path):
        logger = AuditLogger(log_dir=tmp_path)
        try:
            logger.log_wallet_event(EventType.WALLET_SAVED, "saved")
            events = _read_events(logger)
        finally:
            logger.close()

        assert events[0]["message"] == "Wallet: saved"
        assert events[0]["severity"] == "info"


class TestSingleton:

    def test_get_audit_logger_is_cached(self):
        assert get_audit_logger() is get_audit_logger()

    def test_singleton_redirected_to_temp_dir(self, tmp_path):
        assert get_audit_logger().log_dir == tmp_path / "audit_logs"

    def test_module_level_helper(self):
        log_wallet_event(
            EventType.WALLET_UNLOCK_FAILED,
            EventSeverity.ALERT,
            "unlock failed",
        )
        events = _read_events(audit_log.get_audit_logger())
        assert events[-1]["event_type"] == "wallet.unlock.failed"
        assert events[-1]["severity"] == "alert"
