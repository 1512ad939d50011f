"""Display preferences and app bookkeeping flags."""

from datetime import date
from typing import Optional

from pydantic import ValidationError

from spendwise.config import get_settings
from spendwise.models import Accent, Currency, DashboardWidgets, Theme, get_currency
from spendwise.services.storage import KeyValueStore, StorageKeys


class PreferencesRepository:
    """
    Single-value settings, each under its own key.

    Unreadable values fall back to their defaults rather than failing,
    since none of them guard any data.
    """

    def __init__(self, store: KeyValueStore):
        self._store = store

    # Theme ---------------------------------------------------------------

    def get_theme(self) -> Theme:
        try:
            return Theme(self._store.get(StorageKeys.THEME, Theme.DARK.value))
        except ValueError:
            return Theme.DARK

    def set_theme(self, theme: Theme) -> None:
        self._store.set(StorageKeys.THEME, Theme(theme).value)

    def get_accent(self) -> Accent:
        try:
            return Accent(self._store.get(StorageKeys.ACCENT, Accent.CYAN.value))
        except ValueError:
            return Accent.CYAN

    def set_accent(self, accent: Accent) -> None:
        self._store.set(StorageKeys.ACCENT, Accent(accent).value)

    # Currency ------------------------------------------------------------

    def get_currency(self) -> Currency:
        code = self._store.get(StorageKeys.CURRENCY, get_settings().app.default_currency)
        return get_currency(str(code))

    def set_currency(self, code: str) -> Currency:
        currency = get_currency(code)
        self._store.set(StorageKeys.CURRENCY, currency.code)
        return currency

    # Dashboard -----------------------------------------------------------

    def get_widgets(self) -> DashboardWidgets:
        raw = self._store.get(StorageKeys.DASHBOARD_WIDGETS, {})
        try:
            return DashboardWidgets.model_validate(raw)
        except ValidationError:
            return DashboardWidgets()

    def set_widgets(self, widgets: DashboardWidgets) -> None:
        self._store.set(StorageKeys.DASHBOARD_WIDGETS, widgets.model_dump())

    def toggle_widget(self, widget: str) -> DashboardWidgets:
        widgets = self.get_widgets()
        if widget not in DashboardWidgets.model_fields:
            raise KeyError(f"Unknown dashboard widget: {widget}")
        updated = widgets.model_copy(update={widget: not getattr(widgets, widget)})
        self.set_widgets(updated)
        return updated

    # Bookkeeping ---------------------------------------------------------

    def is_onboarding_complete(self) -> bool:
        return bool(self._store.get(StorageKeys.ONBOARDING_COMPLETE, False))

    def complete_onboarding(self) -> None:
        self._store.set(StorageKeys.ONBOARDING_COMPLETE, True)

    def get_last_recurring_check(self) -> Optional[date]:
        raw = self._store.get(StorageKeys.LAST_RECURRING_CHECK)
        if not raw:
            return None
        try:
            return date.fromisoformat(str(raw)[:10])
        except ValueError:
            return None

    def set_last_recurring_check(self, day: date) -> None:
        self._store.set(StorageKeys.LAST_RECURRING_CHECK, day.isoformat())
