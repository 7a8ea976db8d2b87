import icu  # type: ignore[import-untyped]

from lossreport.table.collation.base import BaseCollator


class IcuCollator(BaseCollator):
    """Orders text with an ICU collator, so "Água" sorts next to "Agua"."""

    def __init__(self, locale: str = "pt_BR") -> None:
        self._collator: icu.Collator = icu.Collator.createInstance(icu.Locale(locale))

    def sort_key(self, text: str) -> bytes:
        return bytes(self._collator.getSortKey(text))
