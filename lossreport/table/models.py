from dataclasses import dataclass, field, replace
from enum import Enum

from lossreport.registry.models import Row

UNRESTRICTED_LOSS_RANGE: tuple[float, float] = (0.0, 100.0)
DEFAULT_PAGE_SIZE = 50


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortSpec:
    column: str
    direction: SortDirection = SortDirection.ASC


@dataclass(frozen=True)
class QueryState:
    """View state for one file's detail table.

    Row ids in ``selected_row_ids`` are indexes into the file's original row
    sequence, so a selection survives re-sorting, filtering and paging.
    """

    search_term: str = ""
    loss_range: tuple[float, float] = UNRESTRICTED_LOSS_RANGE
    sort: SortSpec | None = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    selected_row_ids: frozenset[int] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("Page size must be at least 1")
        minimum, maximum = self.loss_range
        if minimum > maximum:
            raise ValueError(f"Invalid loss range: {minimum} > {maximum}")

    def with_search(self, term: str) -> "QueryState":
        return replace(self, search_term=term, page=1)

    def with_loss_range(self, minimum: float, maximum: float) -> "QueryState":
        return replace(self, loss_range=(minimum, maximum), page=1)

    def with_page(self, page: int) -> "QueryState":
        return replace(self, page=page)

    def with_page_size(self, page_size: int) -> "QueryState":
        return replace(self, page_size=page_size, page=1)

    def with_selection(self, row_ids: frozenset[int] | set[int]) -> "QueryState":
        return replace(self, selected_row_ids=frozenset(row_ids))


@dataclass(frozen=True)
class VisibleRow:
    row_id: int
    values: Row


@dataclass(frozen=True)
class QueryResult:
    """One page of filtered, sorted rows."""

    rows: tuple[VisibleRow, ...]
    columns: tuple[str, ...]
    total_count: int
    total_pages: int
    page: int
    page_size: int

    @property
    def visible_ids(self) -> frozenset[int]:
        return frozenset(row.row_id for row in self.rows)
