"""
Audit Logger

DESIGN DECISION: Every significant change to stored data is logged.
This provides:
1. Traceability of what the tracker did on the user's behalf
2. Debugging capability for AI and storage failures
3. A single structured log format for the whole package

The audit logger:
- Writes to the local structured log only; there is no remote sink
- Never raises, so a logging problem cannot break a user action
- Supports correlation IDs to trace related events
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from spendwise.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


def configure_logging(level: int = logging.INFO) -> None:
    """Configure stdlib logging and structlog for JSON output."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    logging.getLogger().setLevel(level)

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


configure_logging()


def get_logger(name: Optional[str] = None):
    """Return a structlog logger bound to the given module name."""
    return structlog.get_logger(name)


class AuditLogger:
    """
    Central audit logging service.

    Events are rendered through structlog at a level matching their severity.
    """

    def __init__(self):
        self._logger = structlog.get_logger("spendwise.audit")

    def log(self, event: AuditEvent) -> AuditEvent:
        """
        Log an audit event.

        Returns the event so callers can chain or inspect it.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception as e:
            # Logging must never take down a user action
            print(f"audit logging failed: {e}", file=sys.stderr)

        return event

    def log_expense_added(self, expense_id: str, name: str, price: str, source: str = "manual") -> None:
        self.log(AuditEventBuilder.expense_added(expense_id, name, price, source))

    def log_expense_updated(self, expense_id: str) -> None:
        self.log(AuditEventBuilder.expense_updated(expense_id))

    def log_expense_removed(self, expense_id: str) -> None:
        self.log(AuditEventBuilder.expense_removed(expense_id))

    def log_expense_split(self, expense_id: str, split_group_id: str, part_count: int) -> None:
        """Log a successful split."""
        self.log(AuditEventBuilder.expense_split(expense_id, split_group_id, part_count))

    def log_split_rejected(self, expense_id: str, reason: str) -> None:
        self.log(AuditEventBuilder.split_rejected(expense_id, reason))

    def log_receipt_processed(self, item_count: int, correlation_id: UUID) -> None:
        """Log a receipt that produced expenses."""
        self.log(AuditEventBuilder.receipt_processed(item_count, correlation_id))

    def log_receipt_failed(self, error_message: str, correlation_id: UUID) -> None:
        """Log a receipt that could not be turned into expenses."""
        self.log(AuditEventBuilder.receipt_failed(error_message, correlation_id))

    def log_recurring_materialized(self, count: int, definitions: int) -> None:
        self.log(AuditEventBuilder.recurring_materialized(count, definitions))

    def log_budgets_updated(self, categories: list[str], source: str = "manual") -> None:
        self.log(AuditEventBuilder.budgets_updated(categories, source))

    def log_notifications_refreshed(self, total: int, unread: int) -> None:
        self.log(AuditEventBuilder.notifications_refreshed(total, unread))

    def log_ai_response(self, feature: str) -> None:
        self.log(AuditEventBuilder.ai_response_generated(feature))

    def log_data_exported(self, fmt: str, record_count: int) -> None:
        self.log(AuditEventBuilder.data_exported(fmt, record_count))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))

    def log_external_service_error(
        self,
        service: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log external service error."""
        self.log(AuditEventBuilder.external_service_error(
            service=service,
            error_message=error_message,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., a receipt upload).
    Pass it through all subsequent operations.
    """
    return uuid4()
