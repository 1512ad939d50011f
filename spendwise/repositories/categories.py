"""User-extensible category vocabulary."""

from spendwise.models import DEFAULT_CATEGORIES
from spendwise.services.storage import DuplicateError, KeyValueStore, StorageKeys


class CategoryRepository:
    """Category names, seeded with the defaults on first use."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    def list_all(self) -> list[str]:
        return self._store.get(StorageKeys.CATEGORIES, list(DEFAULT_CATEGORIES))

    def exists(self, name: str) -> bool:
        return name.strip() in self.list_all()

    def add(self, name: str) -> list[str]:
        """
        Append a new category.

        Raises:
            ValueError: If the name is blank
            DuplicateError: If the category already exists
        """
        trimmed = name.strip()
        if not trimmed:
            raise ValueError("New category name is required.")
        categories = self.list_all()
        if trimmed in categories:
            raise DuplicateError("This category already exists.")
        categories.append(trimmed)
        self._store.set(StorageKeys.CATEGORIES, categories)
        return categories
