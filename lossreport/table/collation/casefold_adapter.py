import unicodedata

from lossreport.table.collation.base import BaseCollator


class CasefoldCollator(BaseCollator):
    """Accent- and case-insensitive ordering without locale data."""

    def sort_key(self, text: str) -> str:
        decomposed = unicodedata.normalize("NFD", text)
        base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
        return base.casefold()
