from abc import ABC, abstractmethod


class BaseBlobStore(ABC):
    """Contract for the key-value medium that holds the registry blob."""

    @abstractmethod
    def load(self) -> bytes | None:
        """Return the stored blob, or None when nothing was saved yet."""

    @abstractmethod
    def save(self, data: bytes) -> None:
        """Replace the stored blob with *data*.

        Raises:
            StorageError: if the medium rejects the write.
        """
