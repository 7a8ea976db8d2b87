from abc import ABC, abstractmethod


class BaseAuthenticator(ABC):
    """Contract for the external credential check."""

    @abstractmethod
    def authenticate(self, email: str, password: str) -> bool:
        """Return True when the credentials are accepted."""
