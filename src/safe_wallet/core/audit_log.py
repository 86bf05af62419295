# Safe Wallet - Audit Logging
#
# Append-only audit trail of wallet operations (unlock, save, tree mutations).
# Events carry IDs and names only. Field values, passwords and key material
# are never written to the audit log.

import logging
import os
import socket
import sys
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional
from uuid import uuid4

import structlog

from .. import config


class EventType(str, Enum):
    """Types of wallet events that can be logged."""

    # Wallet lifecycle
    WALLET_CREATED = "wallet.created"
    WALLET_LOADED = "wallet.loaded"
    WALLET_SAVED = "wallet.saved"
    WALLET_UNLOCK_FAILED = "wallet.unlock.failed"
    WALLET_ERROR = "wallet.error"

    # Tree mutations
    GROUP_ADDED = "group.added"
    GROUP_UPDATED = "group.updated"
    GROUP_DELETED = "group.deleted"
    ENTRY_ADDED = "entry.added"
    ENTRY_UPDATED = "entry.updated"
    ENTRY_DELETED = "entry.deleted"


class EventSeverity(str, Enum):
    """
    Severity levels for wallet events.

    - INFO: Normal activity (logged only)
    - ALERT: Something the user should know about (failed unlock)
    - CRITICAL: Operation failed and data may be at risk
    """
    INFO = "info"
    ALERT = "alert"
    CRITICAL = "critical"


class AuditLogger:
    """
    Append-only audit logger for wallet events.

    Features:
    - Structured JSON logging (structlog)
    - Automatic timestamp and event ID
    - OS user / host context capture
    - One log file per day
    """

    def __init__(self, log_dir: Optional[Path] = None):
        """
        Initialize audit logger.

        Args:
            log_dir: Directory for audit logs (default: SAFE_WALLET_AUDIT_DIR)
        """
        self.log_dir = Path(log_dir) if log_dir else config.AUDIT_LOG_DIR
        self.log_dir.mkdir(parents=True, exist_ok=True)

        structlog.configure(
            processors=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.add_logger_name,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer()
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        self._setup_file_handler()

        self.logger = structlog.get_logger("safe_wallet.audit")

    def _setup_file_handler(self):
        """Attach a file handler for today's log to the audit logger."""
        today = datetime.now().strftime("%Y-%m-%d")
        self.log_file = self.log_dir / f"audit_{today}.log"

        file_handler = logging.FileHandler(self.log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.INFO)
        formatter = logging.Formatter('%(message)s')  # structlog handles formatting
        file_handler.setFormatter(formatter)

        audit_logger = logging.getLogger("safe_wallet.audit")
        audit_logger.addHandler(file_handler)
        audit_logger.setLevel(logging.INFO)
        self._file_handler = file_handler

    def close(self):
        """Detach and close the file handler."""
        logging.getLogger("safe_wallet.audit").removeHandler(self._file_handler)
        self._file_handler.close()

    def log_event(
        self,
        event_type: EventType,
        severity: EventSeverity,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        user_context: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Log a wallet event (append-only).

        Args:
            event_type: Type of event (from EventType enum)
            severity: Severity level (from EventSeverity enum)
            message: Human-readable event description
            details: Additional event details (IDs, names; never secrets)
            user_context: User context (defaults to OS user and hostname)

        Returns:
            str: Event ID (UUID) for reference
        """
        event_id = str(uuid4())

        event_data = {
            "event_id": event_id,
            "event_type": event_type.value,
            "severity": severity.value,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "details": details or {},
            "user_context": user_context or self._get_default_user_context(),
        }

        self.logger.info(
            "wallet_event",
            **event_data
        )

        return event_id

    def log_wallet_event(
        self,
        event_type: EventType,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Log an informational wallet event.

        Args:
            event_type: Type of wallet event
            message: Event description
            details: Additional details (never log field values or passwords!)

        Returns:
            str: Event ID
        """
        return self.log_event(
            event_type=event_type,
            severity=EventSeverity.INFO,
            message=f"Wallet: {message}",
            details=details
        )

    def _get_default_user_context(self) -> Dict[str, Any]:
        """Get default user context (OS user, hostname, etc.)."""
        return {
            "os_user": os.getenv("USERNAME") or os.getenv("USER"),
            "hostname": socket.gethostname(),
            "platform": sys.platform,
        }


# Global logger instance
_audit_logger: Optional[AuditLogger] = None


def get_audit_logger() -> AuditLogger:
    """Get global audit logger (singleton pattern)."""
    global _audit_logger
    if _audit_logger is None:
        _audit_logger = AuditLogger()
    return _audit_logger


def log_wallet_event(
    event_type: EventType,
    severity: EventSeverity,
    message: str,
    **kwargs
) -> str:
    """
    Convenience function for logging wallet events.

    Usage:
        log_wallet_event(
            EventType.WALLET_UNLOCK_FAILED,
            EventSeverity.ALERT,
            "Unlock failed",
            details={"wallet_path": "wallet.dat"}
        )
    """
    return get_audit_logger().log_event(event_type, severity, message, **kwargs)
