class ExportError(Exception):
    """Raised when a serialization library fails to render an export."""
