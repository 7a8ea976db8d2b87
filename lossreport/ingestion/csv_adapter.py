import io

import pandas as pd

from lossreport.ingestion.base import BaseTableParser
from lossreport.ingestion.exceptions import TableParseError
from lossreport.registry.models import Row


class CsvTableParser(BaseTableParser):
    """Parses CSV uploads with pandas, keeping every cell as its raw string.

    The delimiter is sniffed, so both comma and semicolon exports load.
    """

    def __init__(self, encoding: str = "utf-8-sig") -> None:
        self._encoding = encoding

    def parse(self, raw: bytes) -> list[Row]:
        try:
            df = pd.read_csv(
                io.BytesIO(raw),
                sep=None,
                engine="python",
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                encoding=self._encoding,
            )
        except TableParseError:
            raise
        except Exception as exc:
            raise TableParseError(f"CSV parsing failed: {exc}") from exc

        df.columns = [str(col).strip() for col in df.columns]
        if df.empty:
            raise TableParseError("CSV has a header but no data rows")
        # ragged rows come back with NaN in the missing trailing fields
        return [
            {col: (None if pd.isna(value) else str(value)) for col, value in record.items()}
            for record in df.to_dict(orient="records")
        ]
