"""Export services package."""

from spendwise.services.export.exporter import (
    EXPORT_FORMATS,
    ExportError,
    ExportFile,
    export_expenses,
    to_csv,
    to_json,
)

__all__ = [
    "EXPORT_FORMATS",
    "ExportError",
    "ExportFile",
    "export_expenses",
    "to_csv",
    "to_json",
]
