from lossreport.config.settings import Settings
from lossreport.table.collation.base import BaseCollator
from lossreport.table.collation.casefold_adapter import CasefoldCollator


class CollatorFactory:
    """Creates the collator configured for text sorting."""

    ENGINES = ("icu", "casefold")

    @classmethod
    def create(cls, settings: Settings) -> BaseCollator:
        engine = settings.sort_collation.lower()
        if engine == "icu":
            from lossreport.table.collation.icu_adapter import IcuCollator

            return IcuCollator(settings.sort_locale)
        if engine == "casefold":
            return CasefoldCollator()
        raise ValueError(
            f"Unknown sort collation '{engine}'. Choose from: {list(cls.ENGINES)}"
        )
