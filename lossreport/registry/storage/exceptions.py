class StorageError(Exception):
    """Raised when the blob store cannot read or write the registry."""
