"""
Audit Logger

DESIGN DECISION: Every ledger operation is logged.
This provides:
1. Traceability of what the user added, deleted or reset
2. Debugging capability when saves or loads fail
3. A record of rejected input

The audit logger:
- Writes structured JSON lines through structlog
- Never raises: a logging failure must not break a ledger operation
- Supports correlation IDs to trace the events of one user action
- Keeps the most recent events in memory for display
"""

from collections import deque
from typing import Any, Optional
from uuid import UUID, uuid4

import structlog

from debt_tracker.models.audit import AuditEvent, AuditEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Logs every event to the structured local log and keeps a bounded
    in-memory history of recent events.
    """

    def __init__(self, history_size: int = 200):
        """
        Initialize audit logger.

        Args:
            history_size: How many recent events to keep in memory.
        """
        self._logger = structlog.get_logger("debt_tracker.audit")
        self._history: deque[AuditEvent] = deque(maxlen=history_size)

    @property
    def recent_events(self) -> list[AuditEvent]:
        """Most recent events, newest first."""
        return list(reversed(self._history))

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if the event was written to the local log.
        """
        self._history.append(event)
        log_dict = event.to_log_dict()

        try:
            if event.severity.value == "error":
                self._logger.error("audit_event", **log_dict)
            elif event.severity.value == "warning":
                self._logger.warning("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            # Never let logging break the operation being logged
            return False
        return True

    def log_record_added(
        self,
        entity_type: str,
        record_id: int,
        amount: float,
        correlation_id: UUID,
        category: Optional[str] = None,
    ) -> None:
        self.log(AuditEventBuilder.record_added(
            entity_type=entity_type,
            record_id=record_id,
            amount=amount,
            correlation_id=correlation_id,
            category=category,
        ))

    def log_record_rejected(
        self,
        entity_type: str,
        reason: str,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.record_rejected(
            entity_type=entity_type,
            reason=reason,
            correlation_id=correlation_id,
        ))

    def log_record_deleted(
        self,
        entity_type: str,
        record_id: int,
        found: bool,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.record_deleted(
            entity_type=entity_type,
            record_id=record_id,
            found=found,
            correlation_id=correlation_id,
        ))

    def log_value_updated(
        self,
        field: str,
        old_value: float,
        new_value: float,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.value_updated(
            field=field,
            old_value=old_value,
            new_value=new_value,
            correlation_id=correlation_id,
        ))

    def log_value_rejected(
        self,
        field: str,
        value: Any,
        reason: str,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.value_rejected(
            field=field,
            value=value,
            reason=reason,
            correlation_id=correlation_id,
        ))

    def log_month_reset(
        self,
        expenses_cleared: int,
        payments_cleared: int,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.month_reset(
            expenses_cleared=expenses_cleared,
            payments_cleared=payments_cleared,
            correlation_id=correlation_id,
        ))

    def log_ledger_cleared(self, correlation_id: UUID) -> None:
        self.log(AuditEventBuilder.ledger_cleared(correlation_id=correlation_id))

    def log_ledger_loaded(
        self,
        expense_count: int,
        payment_count: int,
        warning: Optional[str] = None,
    ) -> None:
        self.log(AuditEventBuilder.ledger_loaded(
            expense_count=expense_count,
            payment_count=payment_count,
            warning=warning,
        ))

    def log_save_failed(self, operation: str, correlation_id: UUID) -> None:
        self.log(AuditEventBuilder.save_failed(
            operation=operation,
            correlation_id=correlation_id,
        ))

    def log_snapshot_exported(self, size_bytes: int, correlation_id: UUID) -> None:
        self.log(AuditEventBuilder.snapshot_exported(
            size_bytes=size_bytes,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., adding an expense).
    """
    return uuid4()
