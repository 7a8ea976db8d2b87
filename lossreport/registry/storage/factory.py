from pathlib import Path

from lossreport.config.settings import Settings
from lossreport.registry.storage.base import BaseBlobStore
from lossreport.registry.storage.file_store import FileBlobStore
from lossreport.registry.storage.memory_store import MemoryBlobStore
from lossreport.registry.storage.postgres_store import PostgresBlobStore


class BlobStoreFactory:
    """Creates the blob store backing the file registry."""

    BACKENDS = ("file", "memory", "postgres")

    @classmethod
    def create(cls, settings: Settings) -> BaseBlobStore:
        backend = settings.storage_backend.lower()
        if backend == "file":
            return FileBlobStore(Path(settings.registry_path))
        if backend == "memory":
            return MemoryBlobStore()
        if backend == "postgres":
            return PostgresBlobStore(settings.registry_key)
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
