from lossreport.table.engine import TableEngine, clamp_page, display_value
from lossreport.table.models import QueryResult, QueryState, SortDirection, SortSpec
from lossreport.table.selection import toggle_row, toggle_select_all, toggle_sort

__all__ = [
    "QueryResult",
    "QueryState",
    "SortDirection",
    "SortSpec",
    "TableEngine",
    "clamp_page",
    "display_value",
    "toggle_row",
    "toggle_select_all",
    "toggle_sort",
]
