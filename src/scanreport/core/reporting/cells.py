"""Cell content and line shaping for table output.

A cell holds the full text of one table slot. Text may span several
physical lines (a title plus its reference link, for example); lines wider
than their column are cut with an ellipsis as a last resort.
"""

from dataclasses import dataclass

from rich.cells import cell_len, set_cell_size


@dataclass(frozen=True)
class Cell:
    """One table slot.

    Attributes:
        text: Full cell text, physical lines separated by newlines
        merged: True when the cell continues the identical cell above it
    """

    text: str
    merged: bool = False

    def lines(self) -> list[str]:
        return self.text.split("\n")


def truncate(text: str, width: int, ellipsis: str = "...") -> str:
    """Cut text to at most width terminal cells, marking the cut with ellipsis.

    Args:
        text: Single physical line
        width: Maximum display width of the result; wide characters count twice
        ellipsis: Marker appended when text is cut

    Returns:
        text unchanged if it fits, otherwise its leading ``width - len(ellipsis)``
        cells followed by the ellipsis
    """
    width = max(width, 0)
    if cell_len(text) <= width:
        return text
    if width <= cell_len(ellipsis):
        return set_cell_size(text, width)
    return set_cell_size(text, width - cell_len(ellipsis)) + ellipsis


def shorten_words(text: str, limit: int, ellipsis: str = "...") -> str:
    """Keep the first ``limit`` space-separated words of long text.

    Text with fewer than ``limit`` words is returned unchanged.
    """
    words = text.split(" ")
    if limit <= 0 or len(words) < limit:
        return text
    return " ".join(words[:limit]) + ellipsis


def format_link(url: str, prefix: str = "-->") -> str:
    """Render a reference link as an indicator followed by the scheme-less URL."""
    return prefix + url.removeprefix("https://")


def with_link(text: str, url: str, prefix: str = "-->") -> str:
    """Append a reference link as an extra physical line when url is set."""
    if not url:
        return text
    return f"{text}\n{format_link(url, prefix)}"


def fit_lines(cell: Cell, width: int, ellipsis: str = "...") -> list[str]:
    """Physical lines of a cell, each cut to the column width."""
    return [truncate(line, width, ellipsis) for line in cell.lines()]
