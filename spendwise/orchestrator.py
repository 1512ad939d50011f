"""
Main Orchestrator for Spendwise

This module ties together all the components and defines the
end-to-end flows for:
1. Receipt upload (image -> prepare -> extract -> store)
2. Manual entry (form -> validate -> store)
3. Daily recurring check (definitions -> due expenses -> store)
4. Notification refresh (expenses + budgets -> merged notifications)
5. AI insights, budget suggestions and coaching

DESIGN DECISION: The orchestrator enforces the boundaries:
- AI output is validated before anything is stored
- Every write goes through a repository
- Every step is audited

Expected failures come back as (success, message, ...) tuples for the UI.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID

from spendwise.audit import AuditLogger, create_correlation_id, get_logger
from spendwise.config import AppSettings, get_settings
from spendwise.models import (
    Expense,
    ExpenseDraft,
    Notification,
    SavingsGoal,
    ValidationResult,
)
from spendwise.notifications import refresh_notifications
from spendwise.recurring import DueExpenses, generate_due_expenses
from spendwise.reports import recent_expenses
from spendwise.repositories import (
    BudgetRepository,
    CategoryRepository,
    ExpenseRepository,
    NotificationRepository,
    PreferencesRepository,
    RecurringExpenseRepository,
    SavingsGoalRepository,
)
from spendwise.services.ai import (
    AIServiceError,
    GeminiExpenseService,
    InsufficientDataError,
)
from spendwise.services.export import ExportFile, export_expenses
from spendwise.services.image import CropBox, ImageError, prepare_receipt_image
from spendwise.services.storage import JSONFileStore, KeyValueStore
from spendwise.validation import ExpenseFormValidator


logger = get_logger(__name__)

AI_NOT_CONFIGURED = "AI features are not configured. Set GEMINI_API_KEY to enable them."
NO_ITEMS_EXTRACTED = "No items could be extracted from the receipt. Please try a different image."


def _require_ai(ai_service: Optional[GeminiExpenseService]) -> GeminiExpenseService:
    if ai_service is None:
        raise AIServiceError(AI_NOT_CONFIGURED)
    return ai_service


class ReceiptUploadFlow:
    """
    Orchestrates the receipt upload flow.

    Flow:
    1. Prepare -> validate, orient, crop and downscale the image
    2. Extract -> ask the AI service for line items
    3. Store -> every item becomes an expense dated today

    Nothing is stored unless at least one item was extracted.
    """

    def __init__(
        self,
        expenses: ExpenseRepository,
        categories: CategoryRepository,
        ai_service: Optional[GeminiExpenseService] = None,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[AppSettings] = None,
    ):
        self._expenses = expenses
        self._categories = categories
        self._ai_service = ai_service
        self._audit_logger = audit_logger
        self._settings = settings or get_settings().app

    async def process_receipt(
        self,
        image_bytes: bytes,
        crop_box: Optional[CropBox] = None,
        today: Optional[date] = None,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[bool, str, list[Expense], list[str]]:
        """
        Turn a receipt image into stored expenses.

        Args:
            image_bytes: Raw upload or camera capture; the format is
                detected from the bytes
            crop_box: Optional (left, top, right, bottom) selection
            today: Date assigned to the new expenses

        Returns:
            (success, message_for_user, added_expenses, quality_hints)
            quality_hints are empty when the image was rejected.
        """
        correlation_id = correlation_id or create_correlation_id()
        today = today or date.today()

        try:
            prepared = prepare_receipt_image(image_bytes, crop_box, self._settings)
        except ImageError as e:
            self._log_failure(str(e), correlation_id)
            return False, str(e), [], []

        hints = prepared.quality_hints
        try:
            items = await _require_ai(self._ai_service).extract_expenses_from_receipt(
                prepared.data,
                prepared.mime_type,
                self._categories.list_all(),
            )
        except AIServiceError as e:
            if self._audit_logger:
                self._audit_logger.log_external_service_error(
                    service="gemini",
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            self._log_failure(str(e), correlation_id)
            return False, str(e), [], hints

        if not items:
            self._log_failure(NO_ITEMS_EXTRACTED, correlation_id)
            return False, NO_ITEMS_EXTRACTED, [], hints

        drafts = [
            ExpenseDraft(name=item.name, category=item.category, price=item.price, date=today)
            for item in items
        ]
        added = self._expenses.add_batch(drafts, source="receipt")

        if self._audit_logger:
            self._audit_logger.log_receipt_processed(len(added), correlation_id)

        noun = "expense" if len(added) == 1 else "expenses"
        return True, f"Added {len(added)} {noun} from the receipt.", added, hints

    def _log_failure(self, message: str, correlation_id: UUID) -> None:
        logger.warning("receipt_upload_failed", error=message, correlation_id=str(correlation_id))
        if self._audit_logger:
            self._audit_logger.log_receipt_failed(message, correlation_id)


class ExpenseEntryFlow:
    """Manual expense entry, optionally creating a new category."""

    def __init__(self, expenses: ExpenseRepository, categories: CategoryRepository):
        self._expenses = expenses
        self._categories = categories

    def add_manual(
        self,
        name: str,
        price: Any,
        day: Optional[date],
        category: str,
        new_category: Optional[str] = None,
        today: Optional[date] = None,
    ) -> tuple[ValidationResult, Optional[Expense]]:
        """
        Validate the form and store the expense.

        Args:
            category: Selected category; ignored when new_category is given
            new_category: Name typed into the "add new category" box

        Returns:
            (validation_result, stored_expense or None when blocked)
        """
        validator = ExpenseFormValidator(self._categories.list_all())
        result = validator.validate_expense(name, price, day, new_category, today=today)
        if result.has_errors:
            return result, None

        if new_category is not None:
            category = new_category.strip()
            self._categories.add(category)

        expense = self._expenses.add(
            ExpenseDraft(name=name, category=category, price=price, date=day),
            source="manual",
        )
        return result, expense


class RecurringCheckFlow:
    """
    Once-a-day materialization of recurring expenses.

    The advanced watermarks and the check date are persisted together with
    the new expenses, so a second run on the same day (or a restart) never
    inserts duplicates.
    """

    def __init__(
        self,
        expenses: ExpenseRepository,
        recurring: RecurringExpenseRepository,
        preferences: PreferencesRepository,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._expenses = expenses
        self._recurring = recurring
        self._preferences = preferences
        self._audit_logger = audit_logger

    def run_daily_check(self, today: Optional[date] = None, force: bool = False) -> DueExpenses:
        """
        Insert every recurring occurrence due on or before today.

        Args:
            today: Day to project up to
            force: Run even if the check already ran today (after a
                definition was added or edited)

        Returns:
            The projection result; empty when the check already ran today
        """
        today = today or date.today()
        last_check = self._preferences.get_last_recurring_check()
        if last_check == today and not force:
            return DueExpenses()

        definitions = self._recurring.list_all()
        result = generate_due_expenses(definitions, last_check or date.min, today)

        if result.due_expenses:
            self._expenses.add_batch(result.due_expenses, source="recurring")
            self._recurring.replace_all(result.updated_recurring_expenses)
            if self._audit_logger:
                self._audit_logger.log_recurring_materialized(result.count, len(definitions))

        self._preferences.set_last_recurring_check(today)
        logger.info("recurring_check_completed", day=today.isoformat(), added=result.count)
        return result


class NotificationFlow:
    """Recomputes and persists notifications."""

    def __init__(
        self,
        notifications: NotificationRepository,
        expenses: ExpenseRepository,
        budgets: BudgetRepository,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[AppSettings] = None,
    ):
        self._notifications = notifications
        self._expenses = expenses
        self._budgets = budgets
        self._audit_logger = audit_logger
        self._settings = settings or get_settings().app

    def refresh(self, now: Optional[datetime] = None) -> list[Notification]:
        """Merge this cycle's notifications into the stored list and persist it."""
        merged = refresh_notifications(
            self._notifications.list_all(),
            self._expenses.list_all(),
            self._budgets.get_all(),
            now or datetime.now(),
            warning_percent=Decimal(str(self._settings.budget_warning_percent)),
            reminder_after_days=self._settings.reminder_after_days,
        )
        self._notifications.save_all(merged)

        if self._audit_logger:
            unread = sum(1 for n in merged if not n.read)
            self._audit_logger.log_notifications_refreshed(len(merged), unread)
        return merged

    def mark_all_read(self) -> list[Notification]:
        return self._notifications.mark_all_read()

    def clear(self) -> None:
        self._notifications.clear()


class InsightsFlow:
    """AI insights, budget suggestions and savings coaching."""

    def __init__(
        self,
        expenses: ExpenseRepository,
        budgets: BudgetRepository,
        categories: CategoryRepository,
        preferences: PreferencesRepository,
        ai_service: Optional[GeminiExpenseService] = None,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[AppSettings] = None,
    ):
        self._expenses = expenses
        self._budgets = budgets
        self._categories = categories
        self._preferences = preferences
        self._ai_service = ai_service
        self._audit_logger = audit_logger
        self._settings = settings or get_settings().app

    async def insights(self, expenses: list[Expense]) -> str:
        """
        Summary of the given (usually filtered) expenses.

        Raises:
            AIServiceError: If the AI service is unavailable or fails
        """
        text = await _require_ai(self._ai_service).generate_insights(
            expenses, self._preferences.get_currency()
        )
        if self._audit_logger:
            self._audit_logger.log_ai_response("insights")
        return text

    async def suggest_budgets(self, today: Optional[date] = None) -> dict[str, Decimal]:
        """
        Ask for budgets based on recent spending and apply them.

        Returns:
            The suggested limits that were applied

        Raises:
            InsufficientDataError: Too few recent expenses
            AIServiceError: If the AI service is unavailable or fails
        """
        today = today or date.today()
        lookback = self._settings.budget_suggestion_lookback_days
        minimum = self._settings.budget_suggestion_min_expenses

        recent = recent_expenses(self._expenses.list_all(), today, days=lookback)
        if len(recent) < minimum:
            raise InsufficientDataError(
                f"You need at least {minimum} expenses in the last {lookback} days "
                "for an accurate suggestion."
            )

        suggestions = await _require_ai(self._ai_service).generate_budget_suggestions(
            recent,
            self._categories.list_all(),
            self._preferences.get_currency(),
        )
        if suggestions:
            self._budgets.set_all(suggestions, source="ai")
        if self._audit_logger:
            self._audit_logger.log_ai_response("budget_suggestions")
        return suggestions

    async def coach(self, goal: SavingsGoal) -> str:
        """
        Coaching note for one goal.

        Raises:
            AIServiceError: If the AI service is unavailable or fails
        """
        text = await _require_ai(self._ai_service).generate_coaching_message(
            goal,
            self._expenses.list_all(),
            self._budgets.get_all(),
            self._preferences.get_currency(),
        )
        if self._audit_logger:
            self._audit_logger.log_ai_response("coaching")
        return text


class ExportFlow:
    """Export with an audit trail."""

    def __init__(self, audit_logger: Optional[AuditLogger] = None):
        self._audit_logger = audit_logger

    def export(self, expenses: list[Expense], fmt: str) -> ExportFile:
        """
        Raises:
            ExportError: Nothing to export or unknown format
        """
        export_file = export_expenses(expenses, fmt)
        if self._audit_logger:
            self._audit_logger.log_data_exported(fmt, len(expenses))
        return export_file


@dataclass
class AppComponents:
    """Everything the UI needs, wired to one store."""

    store: KeyValueStore
    audit_logger: AuditLogger
    expenses: ExpenseRepository
    budgets: BudgetRepository
    categories: CategoryRepository
    recurring: RecurringExpenseRepository
    goals: SavingsGoalRepository
    notifications: NotificationRepository
    preferences: PreferencesRepository
    receipt_flow: ReceiptUploadFlow
    entry_flow: ExpenseEntryFlow
    recurring_flow: RecurringCheckFlow
    notification_flow: NotificationFlow
    insights_flow: InsightsFlow
    export_flow: ExportFlow
    ai_service: Optional[GeminiExpenseService] = None


def create_app_components(
    store: Optional[KeyValueStore] = None,
    ai_service: Optional[GeminiExpenseService] = None,
    use_ai: bool = True,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        store: Key-value store; defaults to the JSON file from settings
        ai_service: Preconfigured AI service (tests pass a fake)
        use_ai: Whether to build the Gemini service when none is given.
                Without a configured key the app runs with AI disabled.
    """
    app_settings = get_settings().app
    store = store if store is not None else JSONFileStore()
    audit_logger = AuditLogger()

    if ai_service is None and use_ai:
        try:
            ai_service = GeminiExpenseService()
        except Exception as e:
            logger.warning("ai_not_configured", error=str(e))
            ai_service = None

    expenses = ExpenseRepository(store, audit_logger)
    budgets = BudgetRepository(store, audit_logger)
    categories = CategoryRepository(store)
    recurring = RecurringExpenseRepository(store, audit_logger)
    goals = SavingsGoalRepository(store, audit_logger)
    notifications = NotificationRepository(store, audit_logger)
    preferences = PreferencesRepository(store)

    return AppComponents(
        store=store,
        audit_logger=audit_logger,
        expenses=expenses,
        budgets=budgets,
        categories=categories,
        recurring=recurring,
        goals=goals,
        notifications=notifications,
        preferences=preferences,
        receipt_flow=ReceiptUploadFlow(
            expenses, categories, ai_service, audit_logger, app_settings
        ),
        entry_flow=ExpenseEntryFlow(expenses, categories),
        recurring_flow=RecurringCheckFlow(expenses, recurring, preferences, audit_logger),
        notification_flow=NotificationFlow(
            notifications, expenses, budgets, audit_logger, app_settings
        ),
        insights_flow=InsightsFlow(
            expenses, budgets, categories, preferences, ai_service, audit_logger, app_settings
        ),
        export_flow=ExportFlow(audit_logger),
        ai_service=ai_service,
    )
