"""
Collection repository base.

Each repository owns exactly one storage key and persists a whole list of
models under it. Reads validate the stored JSON back into models; writes
replace the list verbatim.
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from spendwise.audit import AuditLogger
from spendwise.services.storage import KeyValueStore, NotFoundError, StorageError


ModelT = TypeVar("ModelT", bound=BaseModel)


class CollectionRepository(Generic[ModelT]):
    """A list of id-bearing models stored under one key."""

    model: type[ModelT]
    key: str

    def __init__(self, store: KeyValueStore, audit_logger: Optional[AuditLogger] = None):
        self._store = store
        self._audit = audit_logger

    def list_all(self) -> list[ModelT]:
        raw = self._store.get(self.key, [])
        if not isinstance(raw, list):
            raise StorageError(f"Expected a list under '{self.key}'")
        try:
            return [self.model.model_validate(item) for item in raw]
        except ValidationError as e:
            raise StorageError(f"Stored data under '{self.key}' is malformed: {e}") from e

    def save_all(self, items: list[ModelT]) -> None:
        self._store.set(self.key, [item.model_dump(mode="json") for item in items])

    def get(self, item_id: str) -> Optional[ModelT]:
        for item in self.list_all():
            if item.id == item_id:
                return item
        return None

    def _replace(self, updated: ModelT) -> None:
        items = self.list_all()
        for index, item in enumerate(items):
            if item.id == updated.id:
                items[index] = updated
                self.save_all(items)
                return
        raise NotFoundError(f"No {self.model.__name__} with id {updated.id}")

    def _delete(self, item_id: str) -> bool:
        items = self.list_all()
        remaining = [item for item in items if item.id != item_id]
        if len(remaining) == len(items):
            return False
        self.save_all(remaining)
        return True
