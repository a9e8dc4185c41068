"""
Audit Models for the Debt & Expense Tracker

Every operation on the ledger is logged for audit purposes.
This provides:
1. Traceability of every add, delete and reset
2. Debugging information when a save or load goes wrong
3. A record of rejected input, which never reaches the ledger itself

DESIGN DECISION: Audit events are write-once. They are emitted to the
structured log and never edited.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Every ledger operation has its own event type.
    """
    # Expenses
    EXPENSE_ADDED = "expense_added"
    EXPENSE_REJECTED = "expense_rejected"
    EXPENSE_DELETED = "expense_deleted"

    # Debt payments
    PAYMENT_ADDED = "payment_added"
    PAYMENT_REJECTED = "payment_rejected"
    PAYMENT_DELETED = "payment_deleted"

    # Scalars
    SALARY_UPDATED = "salary_updated"
    INITIAL_DEBT_UPDATED = "initial_debt_updated"
    VALUE_REJECTED = "value_rejected"

    # Bulk operations
    MONTH_RESET = "month_reset"
    LEDGER_CLEARED = "ledger_cleared"

    # Persistence
    LEDGER_LOADED = "ledger_loaded"
    LOAD_FELL_BACK_TO_DEFAULTS = "load_fell_back_to_defaults"
    SAVE_FAILED = "save_failed"
    SNAPSHOT_EXPORTED = "snapshot_exported"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every ledger operation creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - which record is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity ('expense', 'payment', 'ledger')"
    )
    entity_id: Optional[int] = Field(
        default=None,
        description="Record id the event relates to"
    )

    # Correlation - ties the events of one user action together
    correlation_id: Optional[UUID] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.record_added("expense", 17, 500.0, correlation_id)
        event = AuditEventBuilder.save_failed("add_expense", correlation_id)
    """

    @staticmethod
    def record_added(
        entity_type: str,
        record_id: int,
        amount: float,
        correlation_id: Optional[UUID] = None,
        category: Optional[str] = None,
    ) -> AuditEvent:
        event_type = (
            AuditEventType.EXPENSE_ADDED
            if entity_type == "expense"
            else AuditEventType.PAYMENT_ADDED
        )
        details: dict[str, Any] = {"amount": amount}
        if category is not None:
            details["category"] = category
        return AuditEvent(
            event_type=event_type,
            entity_type=entity_type,
            entity_id=record_id,
            correlation_id=correlation_id,
            description=f"{entity_type.capitalize()} added: {amount:,.2f}",
            details=details,
        )

    @staticmethod
    def record_rejected(
        entity_type: str,
        reason: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        event_type = (
            AuditEventType.EXPENSE_REJECTED
            if entity_type == "expense"
            else AuditEventType.PAYMENT_REJECTED
        )
        return AuditEvent(
            event_type=event_type,
            severity=AuditSeverity.WARNING,
            entity_type=entity_type,
            correlation_id=correlation_id,
            description=f"{entity_type.capitalize()} rejected: {reason}",
            details={"reason": reason},
        )

    @staticmethod
    def record_deleted(
        entity_type: str,
        record_id: int,
        found: bool,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        event_type = (
            AuditEventType.EXPENSE_DELETED
            if entity_type == "expense"
            else AuditEventType.PAYMENT_DELETED
        )
        return AuditEvent(
            event_type=event_type,
            entity_type=entity_type,
            entity_id=record_id,
            correlation_id=correlation_id,
            description=(
                f"{entity_type.capitalize()} {record_id} deleted"
                if found
                else f"{entity_type.capitalize()} {record_id} not found, nothing deleted"
            ),
            details={"found": found},
        )

    @staticmethod
    def value_updated(
        field: str,
        old_value: float,
        new_value: float,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        event_type = (
            AuditEventType.SALARY_UPDATED
            if field == "salary"
            else AuditEventType.INITIAL_DEBT_UPDATED
        )
        return AuditEvent(
            event_type=event_type,
            entity_type="ledger",
            correlation_id=correlation_id,
            description=f"{field} changed from {old_value:,.2f} to {new_value:,.2f}",
            details={"field": field, "old": old_value, "new": new_value},
        )

    @staticmethod
    def value_rejected(
        field: str,
        value: Any,
        reason: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALUE_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="ledger",
            correlation_id=correlation_id,
            description=f"Rejected new {field}: {reason}",
            details={"field": field, "value": repr(value)},
        )

    @staticmethod
    def month_reset(
        expenses_cleared: int,
        payments_cleared: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MONTH_RESET,
            entity_type="ledger",
            correlation_id=correlation_id,
            description=(
                f"Month reset: {expenses_cleared} expenses and "
                f"{payments_cleared} payments cleared"
            ),
            details={
                "expenses_cleared": expenses_cleared,
                "payments_cleared": payments_cleared,
            },
        )

    @staticmethod
    def ledger_cleared(
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_CLEARED,
            entity_type="ledger",
            correlation_id=correlation_id,
            description="All data cleared, defaults restored",
        )

    @staticmethod
    def ledger_loaded(
        expense_count: int,
        payment_count: int,
        warning: Optional[str] = None,
    ) -> AuditEvent:
        if warning:
            return AuditEvent(
                event_type=AuditEventType.LOAD_FELL_BACK_TO_DEFAULTS,
                severity=AuditSeverity.WARNING,
                entity_type="ledger",
                description="Saved data unusable, using default values",
                error_message=warning,
            )
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            entity_type="ledger",
            description=f"Ledger loaded with {expense_count} expenses and {payment_count} payments",
            details={
                "expense_count": expense_count,
                "payment_count": payment_count,
            },
        )

    @staticmethod
    def save_failed(
        operation: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="ledger",
            correlation_id=correlation_id,
            description=f"Changes from {operation} were applied but could not be saved",
            details={"operation": operation},
        )

    @staticmethod
    def snapshot_exported(
        size_bytes: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SNAPSHOT_EXPORTED,
            entity_type="ledger",
            correlation_id=correlation_id,
            description=f"Snapshot exported ({size_bytes} bytes)",
            details={"size_bytes": size_bytes},
        )
