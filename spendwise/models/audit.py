"""
Audit Models for Spendwise

Every significant change to the user's data is recorded as an audit event.
This provides:
1. Traceability of what changed the stored collections
2. Debugging information when an AI call or a write goes wrong
3. A consistent shape for the structured log

DESIGN DECISION: Audit events are emitted, never edited.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.
    """
    # Receipts
    RECEIPT_PROCESSED = "receipt_processed"
    RECEIPT_FAILED = "receipt_failed"

    # Expenses
    EXPENSE_ADDED = "expense_added"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_REMOVED = "expense_removed"
    EXPENSE_SPLIT = "expense_split"
    SPLIT_REJECTED = "split_rejected"

    # Recurring expenses
    RECURRING_MATERIALIZED = "recurring_materialized"

    # Budgets & notifications
    BUDGETS_UPDATED = "budgets_updated"
    NOTIFICATIONS_REFRESHED = "notifications_refreshed"

    # AI assistance
    AI_RESPONSE_GENERATED = "ai_response_generated"

    # Export
    DATA_EXPORTED = "data_exported"

    # System events
    SYSTEM_ERROR = "system_error"
    EXTERNAL_SERVICE_ERROR = "external_service_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
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

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'receipt', 'budget')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., one receipt upload)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

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
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(expense_id, name, price)
        event = AuditEventBuilder.receipt_processed(3, correlation_id)
    """

    @staticmethod
    def receipt_processed(
        item_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECEIPT_PROCESSED,
            entity_type="receipt",
            correlation_id=correlation_id,
            description=f"Receipt processed: {item_count} items extracted",
            details={"item_count": item_count},
            is_user_action=True,
        )

    @staticmethod
    def receipt_failed(
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECEIPT_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="receipt",
            correlation_id=correlation_id,
            description="Receipt could not be processed",
            error_message=error_message,
            is_user_action=True,
        )

    @staticmethod
    def expense_added(
        expense_id: str,
        name: str,
        price: str,
        source: str = "manual",
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense added: {name} - {price}",
            details={"name": name, "price": price, "source": source},
            is_user_action=source == "manual",
        )

    @staticmethod
    def expense_updated(expense_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_UPDATED,
            entity_type="expense",
            entity_id=expense_id,
            description="Expense updated",
            is_user_action=True,
        )

    @staticmethod
    def expense_removed(expense_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_REMOVED,
            entity_type="expense",
            entity_id=expense_id,
            description="Expense removed",
            is_user_action=True,
        )

    @staticmethod
    def expense_split(
        expense_id: str,
        split_group_id: str,
        part_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_SPLIT,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense split into {part_count} parts",
            details={"split_group_id": split_group_id, "part_count": part_count},
            is_user_action=True,
        )

    @staticmethod
    def split_rejected(expense_id: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SPLIT_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            entity_id=expense_id,
            description="Split rejected",
            error_message=reason,
            is_user_action=True,
        )

    @staticmethod
    def recurring_materialized(count: int, definitions: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECURRING_MATERIALIZED,
            entity_type="recurring_expense",
            description=f"Generated {count} due expenses from {definitions} recurring definitions",
            details={"generated": count, "definitions": definitions},
        )

    @staticmethod
    def budgets_updated(categories: list[str], source: str = "manual") -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGETS_UPDATED,
            entity_type="budget",
            description=f"Budgets updated for {len(categories)} categories",
            details={"categories": categories, "source": source},
            is_user_action=source == "manual",
        )

    @staticmethod
    def notifications_refreshed(total: int, unread: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NOTIFICATIONS_REFRESHED,
            severity=AuditSeverity.DEBUG,
            entity_type="notification",
            description=f"Notifications refreshed: {unread} unread of {total}",
            details={"total": total, "unread": unread},
        )

    @staticmethod
    def ai_response_generated(feature: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.AI_RESPONSE_GENERATED,
            entity_type="ai",
            description=f"AI response generated: {feature}",
            details={"feature": feature},
            is_user_action=True,
        )

    @staticmethod
    def data_exported(fmt: str, record_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_EXPORTED,
            entity_type="export",
            description=f"Exported {record_count} expenses as {fmt}",
            details={"format": fmt, "record_count": record_count},
            is_user_action=True,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )

    @staticmethod
    def external_service_error(
        service: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXTERNAL_SERVICE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"External service error: {service}",
            error_message=error_message,
            details={
                "service": service,
            },
            correlation_id=correlation_id,
        )
