from abc import ABC, abstractmethod


class BaseCollator(ABC):
    """Contract for locale-aware text ordering used by the table sort."""

    @abstractmethod
    def sort_key(self, text: str) -> bytes | str:
        """Return a key such that key ordering equals the locale's text ordering."""
