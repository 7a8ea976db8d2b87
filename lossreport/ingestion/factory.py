from lossreport.config.settings import Settings
from lossreport.ingestion.base import BaseTableParser
from lossreport.ingestion.csv_adapter import CsvTableParser


class TableParserFactory:
    """Creates the parser for an uploaded file based on its extension."""

    ADAPTERS: dict[str, type[CsvTableParser]] = {
        ".csv": CsvTableParser,
        ".txt": CsvTableParser,
    }

    @classmethod
    def create(cls, filename: str, settings: Settings) -> BaseTableParser:
        suffix = filename[filename.rfind("."):].lower() if "." in filename else ""
        adapter_cls = cls.ADAPTERS.get(suffix)
        if adapter_cls is None:
            raise ValueError(
                f"Unsupported upload type '{suffix or filename}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls(encoding=settings.csv_encoding)
