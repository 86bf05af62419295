# Core Module - Shared Utilities
#
# Core module provides functionality shared by the wallet layer and the CLI:
# - Audit logging

from .audit_log import (
    AuditLogger,
    EventSeverity,
    EventType,
    get_audit_logger,
    log_wallet_event,
)

__all__ = [
    # Audit Logging
    "AuditLogger",
    "EventType",
    "EventSeverity",
    "get_audit_logger",
    "log_wallet_event",
]
