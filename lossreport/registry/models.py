from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum

Row = dict[str, str | None]


class FileKind(str, Enum):
    """Category of an uploaded export, decides which metrics it feeds."""

    ANALYSIS = "analysis"
    DEVIATION_REPORT = "deviation_report"
    DISTRIBUTED_VOLUME = "distributed_volume"
    CONSUMED_VOLUME = "consumed_volume"
    NEGATIVE_LOSS = "negative_loss"
    GENERIC = "generic"

    @classmethod
    def from_value(cls, value: object) -> "FileKind":
        """Resolve a persisted value, falling back to GENERIC for unknown kinds."""
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.GENERIC


@dataclass(frozen=True)
class FileRecord:
    """One ingested file. Never patched in place; edits build a new record."""

    id: str
    name: str
    kind: FileKind
    uploaded_at: datetime
    rows: tuple[Row, ...] = field(default_factory=tuple)

    @property
    def columns(self) -> list[str]:
        """Column names discovered from the first row."""
        if not self.rows:
            return []
        return list(self.rows[0].keys())

    @property
    def period_key(self) -> str:
        """Upload month as ``YYYY-MM``; rows carry no date of their own."""
        return f"{self.uploaded_at:%Y-%m}"

    def with_name(self, name: str) -> "FileRecord":
        return replace(self, name=name)

    def with_rows(self, rows: list[Row] | tuple[Row, ...]) -> "FileRecord":
        return replace(self, rows=tuple(dict(row) for row in rows))
