"""Persisted notification list."""

from spendwise.models import Notification
from spendwise.repositories.base import CollectionRepository
from spendwise.services.storage import StorageKeys


class NotificationRepository(CollectionRepository[Notification]):

    model = Notification
    key = StorageKeys.NOTIFICATIONS

    def unread_count(self) -> int:
        return sum(1 for n in self.list_all() if not n.read)

    def mark_all_read(self) -> list[Notification]:
        notifications = [n.model_copy(update={"read": True}) for n in self.list_all()]
        self.save_all(notifications)
        return notifications

    def clear(self) -> None:
        self.save_all([])
