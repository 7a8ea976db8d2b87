class IngestionError(Exception):
    """Raised when an uploaded file cannot be turned into a FileRecord."""


class TableParseError(IngestionError):
    """Raised when the raw upload is not a readable table."""
