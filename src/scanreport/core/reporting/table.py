"""Bordered fixed-width table rendering.

Tables are drawn with ``+`` intersections, ``-`` rules and ``|`` bars,
one space of padding on each side of every cell, a centred header, and a
divider between every pair of body rows. A divider segment above a merged
cell is left blank so the merged cells read as one.

Example output::

    +---------+------------------+
    | LIBRARY | VULNERABILITY ID |
    +---------+------------------+
    | foo     | CVE-2020-0001    |
    +---------+------------------+
"""

from scanreport.core.config import TableConfig

from .cells import Cell, fit_lines
from .columns import Align, Column, pad, plan_widths
from .merge import mark_merges


class TableRenderer:
    """Render rows of cells as a bordered text table.

    Args:
        columns: Column descriptions, in display order
        config: Formatting constants (width cap, ellipsis)
        merge_columns: Indexes of columns whose identical adjacent cells merge;
            None merges every column, an empty list disables merging
    """

    def __init__(
        self,
        columns: list[Column],
        config: TableConfig,
        merge_columns: list[int] | None = None,
    ):
        self.columns = columns
        self.config = config
        self.merge_columns = merge_columns

    def render(self, rows: list[list[Cell]]) -> str:
        """Render the table, or an empty string when there are no rows."""
        if not rows:
            return ""

        rows = mark_merges(rows, self.merge_columns)
        widths = plan_widths(self.columns, rows, self.config.max_column_width)

        rule = self._divider(widths)
        lines = [
            rule,
            self._line([c.caption for c in self.columns], widths, header=True),
            rule,
        ]
        for index, row in enumerate(rows):
            if index > 0:
                lines.append(self._divider(widths, [cell.merged for cell in row]))
            lines.extend(self._row_lines(row, widths))
        lines.append(rule)

        return "\n".join(lines) + "\n"

    def _row_lines(self, row: list[Cell], widths: list[int]) -> list[str]:
        cells = [fit_lines(cell, width, self.config.ellipsis) for cell, width in zip(row, widths)]
        height = max(len(lines) for lines in cells)

        physical = []
        for y in range(height):
            texts = []
            for cell, lines in zip(row, cells):
                if cell.merged or y >= len(lines):
                    texts.append("")
                else:
                    texts.append(lines[y])
            physical.append(self._line(texts, widths))
        return physical

    def _line(self, texts: list[str], widths: list[int], header: bool = False) -> str:
        parts = []
        for text, width, column in zip(texts, widths, self.columns):
            align = Align.CENTER if header else column.align
            parts.append(f" {pad(text, width, align)} ")
        return "|" + "|".join(parts) + "|"

    def _divider(self, widths: list[int], merged: list[bool] | None = None) -> str:
        merged = merged or [False] * len(widths)
        segments = [(" " if open_ else "-") * (width + 2) for width, open_ in zip(widths, merged)]
        return "+" + "+".join(segments) + "+"
