"""Table report writer and format registry.

Turns a Report into text: one vulnerability table and one misconfiguration
table per result (when it has findings of that kind), followed by a single
origin graph section. The full text is built in memory and handed to the
output sink in one write.

Provides:
- TableWriter: Renders reports in the "table" format
- write: Select a writer by format name and write a report
- register_writer: Plug in another output format
- count_severities: Per-severity totals for a list of vulnerabilities
- ReportError, UnsupportedFormatError, ReportWriteError
"""

import io
from collections.abc import Callable
from typing import Protocol

import structlog

from scanreport.core.config import TableConfig, load_config
from scanreport.core.models import (
    DetectedMisconfiguration,
    DetectedVulnerability,
    Finding,
    RenderOptions,
    Report,
    Severity,
)

from .cells import Cell, shorten_words, with_link
from .columns import Align, Column
from .graph import render_origin_graph
from .table import TableRenderer

logger = structlog.get_logger()


class ReportError(Exception):
    """Base error for report writing."""


class UnsupportedFormatError(ReportError):
    """Raised when no writer is registered for the requested format."""


class ReportWriteError(ReportError):
    """Raised when the output sink rejects the report text."""


class Writer(Protocol):
    """Protocol for report writers."""

    def write(self, report: Report) -> None:
        ...


def count_severities(vulns: list[DetectedVulnerability]) -> dict[str, int]:
    """Count vulnerabilities per severity, every level present, highest first."""
    counts = {severity.value: 0 for severity in Severity}
    for vuln in vulns:
        counts[vuln.severity.value] += 1
    return counts


class TableWriter:
    """Render reports as fixed-width tables plus an origin graph.

    Args:
        output: Text or binary sink with a write() method
        include_non_failures: Show passing checks and a STATUS column
        light: Omit the TITLE column from vulnerability tables
        config: Formatting constants; loaded from the environment if omitted
    """

    def __init__(
        self,
        output,
        include_non_failures: bool = False,
        light: bool = False,
        config: TableConfig | None = None,
    ):
        self.output = output
        self.include_non_failures = include_non_failures
        self.light = light
        self.config = config or load_config()

    def write(self, report: Report) -> None:
        """Render the report and write it to the sink.

        Raises:
            ReportWriteError: If the sink rejects the write
        """
        text = self.render(report)
        if not text:
            return

        try:
            if isinstance(self.output, (io.RawIOBase, io.BufferedIOBase)):
                self.output.write(text.encode("utf-8"))
            else:
                self.output.write(text)
        except (OSError, ValueError) as e:
            logger.error(
                "report_write_failed",
                error=str(e),
                size=len(text),
                severities=count_severities(
                    [v for r in report.results for v in r.vulnerabilities]
                ),
            )
            raise ReportWriteError(f"Failed to write table report: {e}") from e

    def render(self, report: Report) -> str:
        """Render the whole report to text without touching the sink."""
        parts = []
        for result in report.results:
            if result.vulnerabilities:
                parts.append(self.render_vulnerabilities(result.vulnerabilities))

            misconfs = self._visible_misconfigurations(result.misconfigurations)
            if misconfs:
                parts.append(self.render_misconfigurations(misconfs))

        parts.append(render_origin_graph(report.results, self.config))
        return "".join(parts)

    def render_vulnerabilities(self, vulns: list[DetectedVulnerability]) -> str:
        columns = [
            Column("Library"),
            Column("Vulnerability ID"),
            Column("Severity"),
            Column("Installed Version"),
            Column("Fixed Version"),
        ]
        if not self.light:
            columns.append(Column("Title", capped=True))

        renderer = TableRenderer(columns, self.config)
        return renderer.render([self.build_row(v) for v in vulns])

    def render_misconfigurations(self, misconfs: list[DetectedMisconfiguration]) -> str:
        columns = [
            Column("Type"),
            Column("Misconf ID", align=Align.CENTER),
            Column("Check", capped=True),
            Column("Severity", align=Align.CENTER),
        ]
        if self.include_non_failures:
            columns.append(Column("Status", align=Align.CENTER))
        columns.append(
            Column("Message", capped=True, min_width=self.config.message_min_width)
        )

        # Only the TYPE column groups misconfigurations.
        renderer = TableRenderer(columns, self.config, merge_columns=[0])
        return renderer.render([self.build_row(m) for m in misconfs])

    def build_row(self, finding: Finding) -> list[Cell]:
        """Build the table row for a vulnerability or misconfiguration."""
        builders: dict[str, Callable[[Finding], list[Cell]]] = {
            "vulnerability": self._vulnerability_row,
            "misconfiguration": self._misconfiguration_row,
        }
        return builders[finding.kind](finding)

    def _vulnerability_row(self, vuln: DetectedVulnerability) -> list[Cell]:
        row = [
            Cell(vuln.library),
            Cell(vuln.vulnerability_id),
            Cell(vuln.severity.value),
            Cell(vuln.installed_version),
            Cell(vuln.fixed_version),
        ]
        if not self.light:
            title = shorten_words(
                vuln.title or vuln.description,
                self.config.title_word_limit,
                self.config.ellipsis,
            )
            row.append(Cell(with_link(title, vuln.primary_url, self.config.link_prefix)))
        return row

    def _misconfiguration_row(self, misconf: DetectedMisconfiguration) -> list[Cell]:
        row = [
            Cell(misconf.type),
            Cell(misconf.id),
            Cell(misconf.title),
            Cell(misconf.severity.value),
        ]
        if self.include_non_failures:
            row.append(Cell(misconf.status.value))

        # Passing checks carry no reference link.
        url = misconf.primary_url if misconf.failed else ""
        row.append(Cell(with_link(misconf.message, url, self.config.link_prefix)))
        return row

    def _visible_misconfigurations(
        self, misconfs: list[DetectedMisconfiguration]
    ) -> list[DetectedMisconfiguration]:
        if self.include_non_failures:
            return list(misconfs)
        return [m for m in misconfs if m.failed]


WriterFactory = Callable[[RenderOptions], Writer]

_WRITERS: dict[str, WriterFactory] = {
    "table": lambda options: TableWriter(
        options.output,
        include_non_failures=options.include_non_failures,
        light=options.light,
    ),
}


def register_writer(name: str, factory: WriterFactory) -> None:
    """Register a writer factory under a format name."""
    _WRITERS[name] = factory


def write(report: Report, options: RenderOptions) -> None:
    """Write a report in the format named by the options.

    Args:
        report: Scan results to render
        options: Format name, output sink and display switches

    Raises:
        UnsupportedFormatError: If no writer is registered for options.format
        ReportWriteError: If the sink rejects the write
    """
    factory = _WRITERS.get(options.format)
    if factory is None:
        known = ", ".join(sorted(_WRITERS))
        raise UnsupportedFormatError(
            f"Unknown report format '{options.format}' (available: {known})"
        )

    factory(options).write(report)
