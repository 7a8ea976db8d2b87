from lossreport.registry.storage.base import BaseBlobStore


class MemoryBlobStore(BaseBlobStore):
    """Keeps the blob in process memory. Useful for tests and one-off runs."""

    def __init__(self, initial: bytes | None = None) -> None:
        self._data = initial

    def load(self) -> bytes | None:
        return self._data

    def save(self, data: bytes) -> None:
        self._data = bytes(data)
