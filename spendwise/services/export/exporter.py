"""
Expense Export

Serializes a list of expenses into a downloadable CSV or JSON document.

CSV layout: the header row is the field names of the first record; every
value is written as its JSON literal (strings quoted, numbers bare) so that
commas and quotes inside names survive; rows are separated by CRLF.
A field missing from a later record is written as an empty cell.
"""

import json
from typing import Any

from pydantic import BaseModel, Field

from spendwise.audit import get_logger
from spendwise.models import Expense


logger = get_logger(__name__)


class ExportError(Exception):
    """Nothing to export or an unsupported format."""
    pass


class ExportFile(BaseModel):
    """A generated export ready for download."""

    filename: str
    mime_type: str
    content: str = Field(..., description="UTF-8 text of the file")


EXPORT_FORMATS = {
    "csv": ("expenses.csv", "text/csv;charset=utf-8"),
    "json": ("expenses.json", "application/json;charset=utf-8"),
}


def _plain(value: Any) -> Any:
    # 12.0 -> 12, as any JSON consumer would write it
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _records(expenses: list[Expense]) -> list[dict[str, Any]]:
    return [
        {key: _plain(value) for key, value in e.model_dump(mode="json", exclude_none=True).items()}
        for e in expenses
    ]


def to_csv(records: list[dict[str, Any]]) -> str:
    headers = list(records[0].keys())
    rows = [",".join(headers)]
    for record in records:
        rows.append(",".join(
            json.dumps(record[field], ensure_ascii=False) if field in record else ""
            for field in headers
        ))
    return "\r\n".join(rows)


def to_json(records: list[dict[str, Any]]) -> str:
    return json.dumps(records, indent=2, ensure_ascii=False)


def export_expenses(expenses: list[Expense], fmt: str) -> ExportFile:
    """
    Build an export file for the given expenses.

    Raises:
        ExportError: If there are no expenses or fmt is not csv/json
    """
    fmt = fmt.lower()
    if fmt not in EXPORT_FORMATS:
        raise ExportError(f"Unsupported export format: {fmt}")
    if not expenses:
        raise ExportError("There is no data to export for the selected period.")

    records = _records(expenses)
    content = to_csv(records) if fmt == "csv" else to_json(records)
    filename, mime_type = EXPORT_FORMATS[fmt]

    logger.info("expenses_exported", format=fmt, record_count=len(records))
    return ExportFile(filename=filename, mime_type=mime_type, content=content)
