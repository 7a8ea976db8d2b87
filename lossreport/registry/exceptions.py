class RegistryError(Exception):
    """Base exception for all file registry errors."""


class FileRecordNotFoundError(RegistryError):
    """Raised when no file with the given id is registered."""


class ColumnEditError(RegistryError):
    """Raised when a column rename/add/remove cannot be applied."""


class RegistryDecodeError(RegistryError):
    """Raised when the persisted registry blob cannot be decoded."""
