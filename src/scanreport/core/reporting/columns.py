"""Column layout for fixed-width tables.

Widths are measured over every row before anything is drawn, so all rows
of a table are cut and padded against the same widths.
"""

from dataclasses import dataclass
from enum import Enum

from rich.cells import cell_len

from .cells import Cell


class Align(str, Enum):
    LEFT = "left"
    CENTER = "center"


@dataclass(frozen=True)
class Column:
    """Static description of one table column.

    Attributes:
        header: Caption shown (upper-cased) in the header row
        align: Alignment of body text
        capped: Free-text column whose width is bounded by the table cap
        min_width: Minimum content width
    """

    header: str
    align: Align = Align.LEFT
    capped: bool = False
    min_width: int = 0

    @property
    def caption(self) -> str:
        return self.header.upper()


def natural_width(rows: list[list[Cell]], index: int) -> int:
    """Widest physical line in one column across all rows, in terminal cells."""
    widest = 0
    for row in rows:
        if index < len(row):
            widest = max(widest, *(cell_len(line) for line in row[index].lines()))
    return widest


def plan_widths(columns: list[Column], rows: list[list[Cell]], cap: int) -> list[int]:
    """Compute the content width of every column.

    Each width is the larger of the caption and the widest content line.
    Capped columns never grow past ``cap`` (or the caption, if longer);
    other columns always fit their content.

    Args:
        columns: Column descriptions, in display order
        rows: Every row that will be rendered
        cap: Maximum content width for capped columns

    Returns:
        Content width per column, excluding padding
    """
    widths = []
    for index, column in enumerate(columns):
        content = natural_width(rows, index)
        if column.capped:
            content = min(content, max(cap, 0))
        widths.append(max(cell_len(column.caption), content, column.min_width))
    return widths


def pad(text: str, width: int, align: Align = Align.LEFT) -> str:
    """Pad text to width; centred text puts the odd space on the right."""
    gap = max(width - cell_len(text), 0)
    if align == Align.CENTER:
        left = gap // 2
        return " " * left + text + " " * (gap - left)
    return text + " " * gap
