from lossreport.registry.models import FileKind, FileRecord, Row
from lossreport.registry.registry import FileRegistry

__all__ = ["FileKind", "FileRecord", "FileRegistry", "Row"]
