"""JSON codec for the persisted registry blob.

Layout: a single array of ``{id, name, type, date, data}`` objects where
``date`` is an ISO-8601 string and ``data`` is the list of raw rows.
"""

import json
from datetime import datetime, timezone
from typing import Any

from lossreport.logging.logger import Log
from lossreport.registry.exceptions import RegistryDecodeError
from lossreport.registry.models import FileKind, FileRecord, Row


def encode_registry(files: list[FileRecord] | tuple[FileRecord, ...]) -> bytes:
    """Serialize FileRecords into the persisted JSON layout."""
    payload = [
        {
            "id": record.id,
            "name": record.name,
            "type": record.kind.value,
            "date": record.uploaded_at.isoformat(),
            "data": [dict(row) for row in record.rows],
        }
        for record in files
    ]
    return json.dumps(payload, ensure_ascii=False).encode("utf-8")


def decode_registry(blob: bytes) -> list[FileRecord]:
    """Rebuild FileRecords from a persisted blob.

    Malformed entries are skipped with a warning; the rest of the registry
    still loads.

    Raises:
        RegistryDecodeError: if the blob is not a JSON array.
    """
    try:
        parsed = json.loads(blob.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise RegistryDecodeError(f"Registry blob is not valid JSON: {exc}") from exc
    if not isinstance(parsed, list):
        raise RegistryDecodeError("Registry blob must be a JSON array")

    records: list[FileRecord] = []
    for index, item in enumerate(parsed):
        try:
            records.append(_build_record(item, index))
        except RegistryDecodeError as exc:
            Log.warning(f"Skipping persisted file: {exc}")
    return records


def _build_record(raw: Any, index: int) -> FileRecord:
    if not isinstance(raw, dict):
        raise RegistryDecodeError(f"Entry at index {index} must be an object")
    file_id = raw.get("id")
    if not file_id or not isinstance(file_id, str):
        raise RegistryDecodeError(f"Entry at index {index}: 'id' must be a non-empty string")
    name = raw.get("name")
    if not isinstance(name, str):
        raise RegistryDecodeError(f"Entry at index {index}: 'name' must be a string")
    return FileRecord(
        id=file_id,
        name=name,
        kind=FileKind.from_value(raw.get("type")),
        uploaded_at=_parse_date(raw.get("date"), index),
        rows=_build_rows(raw.get("data"), index),
    )


def _parse_date(raw: Any, index: int) -> datetime:
    if not isinstance(raw, str):
        raise RegistryDecodeError(f"Entry at index {index}: 'date' must be an ISO-8601 string")
    try:
        value = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError as exc:
        raise RegistryDecodeError(f"Entry at index {index}: invalid date {raw!r}") from exc
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _build_rows(raw: Any, index: int) -> tuple[Row, ...]:
    if not isinstance(raw, list):
        raise RegistryDecodeError(f"Entry at index {index}: 'data' must be a list")
    rows: list[Row] = []
    for row in raw:
        if not isinstance(row, dict):
            raise RegistryDecodeError(f"Entry at index {index}: every row must be an object")
        rows.append({str(key): _cell(value) for key, value in row.items()})
    return tuple(rows)


def _cell(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)
