from abc import ABC, abstractmethod

from lossreport.registry.models import Row


class BaseTableParser(ABC):
    """Contract for all upload parsing adapters."""

    @abstractmethod
    def parse(self, raw: bytes) -> list[Row]:
        """Parse raw upload bytes into rows of raw string cells.

        Args:
            raw: File content as uploaded.

        Returns:
            One dict per data row, keyed by header name in header order.

        Raises:
            TableParseError: if the content is not a table or has no data rows.
        """
