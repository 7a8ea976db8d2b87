import os
from pathlib import Path

from lossreport.registry.storage.base import BaseBlobStore
from lossreport.registry.storage.exceptions import StorageError


class FileBlobStore(BaseBlobStore):
    """Stores the blob in a single file, replaced atomically on save."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> bytes | None:
        if not self._path.exists():
            return None
        try:
            return self._path.read_bytes()
        except OSError as exc:
            raise StorageError(f"Cannot read registry file {self._path}: {exc}") from exc

    def save(self, data: bytes) -> None:
        tmp_path = self._path.with_name(f"{self._path.name}.tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(data)
            os.replace(tmp_path, self._path)
        except OSError as exc:
            raise StorageError(f"Cannot write registry file {self._path}: {exc}") from exc
