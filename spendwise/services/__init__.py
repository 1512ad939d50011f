"""Services package."""

from spendwise.services.ai import (
    AIServiceError,
    GeminiExpenseService,
    InsufficientDataError,
)
from spendwise.services.export import (
    ExportError,
    ExportFile,
    export_expenses,
)
from spendwise.services.image import (
    ImageError,
    PreparedImage,
    prepare_receipt_image,
)
from spendwise.services.storage import (
    DuplicateError,
    InMemoryStore,
    JSONFileStore,
    KeyValueStore,
    NotFoundError,
    StorageError,
    StorageKeys,
)

__all__ = [
    # AI services
    "AIServiceError",
    "GeminiExpenseService",
    "InsufficientDataError",
    # Export
    "ExportError",
    "ExportFile",
    "export_expenses",
    # Image services
    "ImageError",
    "PreparedImage",
    "prepare_receipt_image",
    # Storage services
    "DuplicateError",
    "InMemoryStore",
    "JSONFileStore",
    "KeyValueStore",
    "NotFoundError",
    "StorageError",
    "StorageKeys",
]
