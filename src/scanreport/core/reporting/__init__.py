"""Table output for scan reports.

Renders scan results as fixed-width tables with merged group cells and
reference links, followed by a vulnerability origin graph.

Provides:
- TableWriter: Table format writer
- write: Format-name dispatch to a registered writer
- register_writer: Register another output format
- ReportError, UnsupportedFormatError, ReportWriteError
"""

from .writer import (
    ReportError,
    ReportWriteError,
    TableWriter,
    UnsupportedFormatError,
    count_severities,
    register_writer,
    write,
)

__all__ = [
    "ReportError",
    "ReportWriteError",
    "TableWriter",
    "UnsupportedFormatError",
    "count_severities",
    "register_writer",
    "write",
]
