from abc import ABC, abstractmethod
from pathlib import PurePath

from lossreport.export.models import ExportPayload
from lossreport.registry.models import FileRecord


class BaseExporter(ABC):
    """Contract for all export serialization adapters."""

    extension: str = ""
    content_type: str = "application/octet-stream"

    @abstractmethod
    def render(self, record: FileRecord) -> bytes:
        """Serialize every row of *record* (not just the visible page).

        Raises:
            ExportError: if the serialization library fails.
        """

    def export(self, record: FileRecord) -> ExportPayload:
        return ExportPayload(
            filename=f"{PurePath(record.name).stem or 'export'}.{self.extension}",
            content_type=self.content_type,
            content=self.render(record),
        )
