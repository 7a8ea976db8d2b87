import pandas as pd

from lossreport.export.base import BaseExporter
from lossreport.export.exceptions import ExportError
from lossreport.registry.models import FileRecord


class CsvExporter(BaseExporter):
    """Writes the record's rows as CSV in discovered column order."""

    extension = "csv"
    content_type = "text/csv"

    def __init__(self, encoding: str = "utf-8-sig") -> None:
        self._encoding = encoding

    def render(self, record: FileRecord) -> bytes:
        try:
            df = pd.DataFrame(list(record.rows), columns=record.columns)
            text = df.to_csv(index=False, na_rep="")
            return text.encode(self._encoding)
        except ExportError:
            raise
        except Exception as exc:
            raise ExportError(f"CSV export failed: {exc}") from exc
