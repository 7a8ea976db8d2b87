"""PDF table export rendered with reportlab's platypus layout engine."""

import io
from collections.abc import Callable
from datetime import datetime
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import LongTable, Paragraph, SimpleDocTemplate, Spacer, TableStyle

from lossreport.export.base import BaseExporter
from lossreport.export.exceptions import ExportError
from lossreport.registry.models import FileRecord
from lossreport.table.engine import display_value

HEADER_BACKGROUND = colors.Color(44 / 255, 62 / 255, 80 / 255)

HEADER_STYLE = TableStyle(
    [
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_BACKGROUND),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.whitesmoke]),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ]
)


class PdfExporter(BaseExporter):
    """Title, generation date and a paginated table with a repeated header."""

    extension = "pdf"
    content_type = "application/pdf"

    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        self._clock = clock

    def render(self, record: FileRecord) -> bytes:
        try:
            return self._build(record)
        except ExportError:
            raise
        except Exception as exc:
            raise ExportError(f"PDF export failed: {exc}") from exc

    def _build(self, record: FileRecord) -> bytes:
        styles = getSampleStyleSheet()
        columns = record.columns
        data = [columns] + [
            [display_value(row, column) for column in columns] for row in record.rows
        ]

        buf = io.BytesIO()
        doc = SimpleDocTemplate(
            buf,
            pagesize=landscape(A4),
            leftMargin=10 * mm,
            rightMargin=10 * mm,
            topMargin=12 * mm,
            bottomMargin=12 * mm,
            title=record.name,
        )
        story = [
            Paragraph(escape(record.name), styles["Title"]),
            Paragraph(f"Gerado em {self._clock():%d/%m/%Y %H:%M}", styles["Normal"]),
            Spacer(1, 6 * mm),
        ]
        if columns:
            table = LongTable(data, repeatRows=1)
            table.setStyle(HEADER_STYLE)
            story.append(table)
        doc.build(story)
        return buf.getvalue()
