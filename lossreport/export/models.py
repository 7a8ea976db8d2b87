from dataclasses import dataclass


@dataclass(frozen=True)
class ExportPayload:
    """Serialized export ready to be handed to a download."""

    filename: str
    content_type: str
    content: bytes
