from lossreport.config.settings import Settings
from lossreport.export.factory import ExporterFactory
from lossreport.export.models import ExportPayload
from lossreport.logging.logger import Log
from lossreport.registry.models import FileRecord


class ExportService:
    """Exports the currently selected file; no selection means no export."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def export(self, record: FileRecord | None, fmt: str) -> ExportPayload | None:
        if record is None:
            Log.debug("Export skipped: no file selected")
            return None
        exporter = ExporterFactory.create(fmt, self._settings)
        payload = exporter.export(record)
        Log.info(
            f"Exported '{record.name}'",
            format=fmt.lower(),
            rows=len(record.rows),
            size=len(payload.content),
        )
        return payload
