import uuid
from datetime import datetime, timezone

from lossreport.config.settings import Settings
from lossreport.ingestion.base import BaseTableParser
from lossreport.ingestion.exceptions import IngestionError, TableParseError
from lossreport.ingestion.factory import TableParserFactory
from lossreport.ingestion.kinds import detect_kind
from lossreport.logging.logger import Log
from lossreport.registry.models import FileKind, FileRecord
from lossreport.registry.registry import FileRegistry


class Ingestor:
    """Turns an uploaded file into a FileRecord and registers it.

    Pipeline: parse -> build record -> add to registry (persists).
    A failed parse leaves the registry exactly as it was.
    """

    def __init__(
        self,
        registry: FileRegistry,
        settings: Settings,
        parser: BaseTableParser | None = None,
    ) -> None:
        self._registry = registry
        self._settings = settings
        self._parser = parser

    def ingest(
        self,
        name: str,
        raw: bytes,
        kind: FileKind | None = None,
        uploaded_at: datetime | None = None,
    ) -> FileRecord:
        """Parse *raw* and append the resulting record to the registry.

        Raises:
            IngestionError: if the upload cannot be parsed.
        """
        Log.info(f"Ingesting '{name}'", size=len(raw))
        try:
            parser = self._parser or TableParserFactory.create(name, self._settings)
            rows = parser.parse(raw)
        except (TableParseError, ValueError) as exc:
            Log.error(f"Ingestion of '{name}' failed: {exc}")
            raise IngestionError(f"Cannot ingest '{name}': {exc}") from exc

        record = FileRecord(
            id=uuid.uuid4().hex,
            name=name,
            kind=kind or detect_kind(name),
            uploaded_at=uploaded_at or datetime.now(timezone.utc),
            rows=tuple(rows),
        )
        return self._registry.add(record)
