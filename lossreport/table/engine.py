"""Sort, filter and paginate one file's rows.

Pipeline, in this order: sort -> text filter -> loss-range filter -> page.
Filtering after sorting keeps the sort order; paging always comes last.
"""

import math
from collections.abc import Sequence

from lossreport.numbers.normalizer import is_numeric, parse_number
from lossreport.registry.models import Row
from lossreport.table.collation.base import BaseCollator
from lossreport.table.models import (
    UNRESTRICTED_LOSS_RANGE,
    QueryResult,
    QueryState,
    SortDirection,
    SortSpec,
    VisibleRow,
)

PLACEHOLDER = "-"
LOSS_COLUMN = "Perda"

_Indexed = tuple[int, Row]


def display_value(row: Row, column: str) -> str:
    """Cell text for presentation; missing values render as "-"."""
    value = row.get(column)
    if value is None:
        return PLACEHOLDER
    return str(value)


def _is_blank(value: object) -> bool:
    return value is None or str(value).strip() in ("", PLACEHOLDER)


def total_pages(count: int, page_size: int) -> int:
    return max(1, math.ceil(count / page_size))


def clamp_page(page: int, pages: int) -> int:
    """Bring a requested page into [1, pages]; callers use this before querying."""
    return max(1, min(page, pages))


class TableEngine:
    """Pure query pipeline over the rows of one FileRecord."""

    def __init__(self, collator: BaseCollator) -> None:
        self._collator = collator

    def query(self, rows: Sequence[Row], state: QueryState) -> QueryResult:
        indexed: list[_Indexed] = list(enumerate(rows))
        if state.sort is not None:
            indexed = self._sort(indexed, state.sort)
        if state.search_term:
            indexed = self._filter_text(indexed, state.search_term)
        if tuple(state.loss_range) != UNRESTRICTED_LOSS_RANGE:
            indexed = self._filter_loss_range(indexed, state.loss_range)

        start = (state.page - 1) * state.page_size
        end = state.page * state.page_size
        page_rows = indexed[start:end] if state.page >= 1 else []
        return QueryResult(
            rows=tuple(VisibleRow(row_id=i, values=row) for i, row in page_rows),
            columns=tuple(rows[0].keys()) if rows else (),
            total_count=len(indexed),
            total_pages=total_pages(len(indexed), state.page_size),
            page=state.page,
            page_size=state.page_size,
        )

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _sort(self, indexed: list[_Indexed], spec: SortSpec) -> list[_Indexed]:
        """Stable sort on one column; missing or blank cells always go last.

        A column whose present cells are all numbers compares numerically,
        anything else compares by collation key.
        """
        present = [item for item in indexed if not _is_blank(item[1].get(spec.column))]
        missing = [item for item in indexed if _is_blank(item[1].get(spec.column))]
        numeric = all(is_numeric(row[spec.column]) for _, row in present)

        def key(item: _Indexed) -> float | bytes | str:
            value = item[1][spec.column]
            if numeric:
                return parse_number(value)
            return self._collator.sort_key(str(value))

        # sorted() keeps equal keys in input order even with reverse=True
        ordered = sorted(present, key=key, reverse=spec.direction == SortDirection.DESC)
        return ordered + missing

    @staticmethod
    def _filter_text(indexed: list[_Indexed], term: str) -> list[_Indexed]:
        needle = term.casefold()
        return [
            item
            for item in indexed
            if any(
                value is not None and needle in str(value).casefold()
                for value in item[1].values()
            )
        ]

    @staticmethod
    def _filter_loss_range(
        indexed: list[_Indexed], loss_range: tuple[float, float]
    ) -> list[_Indexed]:
        minimum, maximum = loss_range
        return [
            item
            for item in indexed
            if minimum <= parse_number(item[1].get(LOSS_COLUMN)) <= maximum
        ]
