from lossreport.config.settings import Settings
from lossreport.export.base import BaseExporter
from lossreport.export.csv_exporter import CsvExporter
from lossreport.export.pdf_exporter import PdfExporter


class ExporterFactory:
    """Creates the exporter for a requested format."""

    FORMATS = ("csv", "pdf")

    @classmethod
    def create(cls, fmt: str, settings: Settings) -> BaseExporter:
        fmt = fmt.lower()
        if fmt == "csv":
            return CsvExporter(encoding=settings.export_csv_encoding)
        if fmt == "pdf":
            return PdfExporter()
        raise ValueError(f"Unknown export format '{fmt}'. Choose from: {list(cls.FORMATS)}")
