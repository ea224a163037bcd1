"""Vertical merging of identical adjacent cells.

A cell whose full text equals the cell directly above it (in a column that
allows merging) is marked as a continuation. The table renderer blanks such
cells and leaves the divider above them open, so a run of identical values
reads as one tall cell. Only strictly adjacent rows merge, and empty cells
never do.
"""

from collections.abc import Iterable

from .cells import Cell


def mark_merges(
    rows: list[list[Cell]], columns: Iterable[int] | None = None
) -> list[list[Cell]]:
    """Return rows with continuation cells marked as merged.

    Args:
        rows: Table body, in display order
        columns: Indexes of columns that may merge; None means every column

    Returns:
        New rows; cells keep their text, only the merge flag changes
    """
    allowed = None if columns is None else set(columns)
    previous: dict[int, str] = {}
    marked = []

    for row in rows:
        new_row = []
        for index, cell in enumerate(row):
            mergeable = allowed is None or index in allowed
            merged = (
                mergeable
                and cell.text != ""
                and previous.get(index) == cell.text
            )
            new_row.append(Cell(cell.text, merged=merged))
            previous[index] = cell.text
        marked.append(new_row)

    return marked
