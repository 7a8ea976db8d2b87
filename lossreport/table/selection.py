"""Sort toggling and row selection on top of QueryState."""

from dataclasses import replace

from lossreport.table.models import QueryResult, QueryState, SortDirection, SortSpec


def toggle_sort(state: QueryState, column: str) -> QueryState:
    """Same column flips the direction; a different column starts ascending."""
    current = state.sort
    if current is not None and current.column == column:
        direction = (
            SortDirection.DESC if current.direction == SortDirection.ASC else SortDirection.ASC
        )
    else:
        direction = SortDirection.ASC
    return replace(state, sort=SortSpec(column=column, direction=direction))


def toggle_row(state: QueryState, row_id: int) -> QueryState:
    return state.with_selection(state.selected_row_ids ^ {row_id})


def toggle_select_all(state: QueryState, result: QueryResult) -> QueryState:
    """Clear when every visible row is selected, otherwise select exactly the visible rows."""
    visible = result.visible_ids
    if visible and visible <= state.selected_row_ids:
        return state.with_selection(frozenset())
    return state.with_selection(visible)


def is_all_visible_selected(state: QueryState, result: QueryResult) -> bool:
    visible = result.visible_ids
    return bool(visible) and visible <= state.selected_row_ids
