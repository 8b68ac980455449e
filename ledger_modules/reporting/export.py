"""
Report serializers (``ledger_modules.reporting.export``).

Responsibility
--------------
Render a ``ReportDocument`` to bytes: comma-delimited text (CSV) or a
paginated US Letter document (PDF, drawn with fpdf2 core fonts).  Choosing
where the bytes go is the caller's business; ``suggested_filename`` offers
a name.

Architecture position
---------------------
**Modules layer** -- pure rendering.  No database, no clock.

Layout (PDF, points, origin top-left)
-------------------------------------
* Page 612 x 792, 50 pt margins on every side.
* Title 18 pt bold, subtitle 11 pt, divider rule.
* Header row 9 pt bold: "Account" over a label column taking half the
  usable width; value headers right-aligned 4 pt inside their columns.
* Section titles 11 pt bold; rows 10 pt.  Normal rows are indented 10 pt;
  total rows are bold, unindented and followed by a rule.
* A new page starts whenever the next row (18 pt) or section header
  (30 pt) would cross the bottom margin.
"""

from __future__ import annotations

import csv
import io
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from fpdf import FPDF

from ledger_kernel.db.types import round_money, to_decimal
from ledger_kernel.logging_config import get_logger

from ledger_modules.reporting.config import ReportingConfig
from ledger_modules.reporting.models import ReportDocument, ReportRow

logger = get_logger("modules.reporting.export")


class ExportFormat(str, Enum):
    """Output formats for generate()."""

    CSV = "csv"
    PDF = "pdf"

    @property
    def extension(self) -> str:
        return self.value

    @property
    def content_type(self) -> str:
        return _CONTENT_TYPES[self]


_CONTENT_TYPES = {
    ExportFormat.CSV: "text/csv",
    ExportFormat.PDF: "application/pdf",
}


def format_currency(
    value: Decimal | None,
    config: ReportingConfig | None = None,
) -> str:
    """
    Format an amount as currency text: ``$1,234.56`` / ``-$1,234.56``.

    Rounds half-up to the configured precision.  None renders as "".
    """
    if value is None:
        return ""
    config = config or ReportingConfig()
    rounded = round_money(to_decimal(value), config.display_precision, ROUND_HALF_UP)
    text = f"{config.currency_symbol}{abs(rounded):,.{config.display_precision}f}"
    return f"-{text}" if rounded < 0 else text


CSV_FIELD_SEPARATOR = ","
CSV_ROW_SEPARATOR = "\n"
_CSV_SPECIALS = (CSV_FIELD_SEPARATOR, '"', "\r", "\n")


def _row_fields(row: ReportRow, config: ReportingConfig) -> list[str]:
    return [row.label] + [format_currency(v, config) for v in row.values]


# =========================================================================
# Delimited text
# =========================================================================


def render_csv(report: ReportDocument, config: ReportingConfig | None = None) -> str:
    """
    Render a report as comma-separated text.

    Layout: title, subtitle, blank line, header row; then for each section
    a blank line, the section title, and its rows.  Rows are joined by
    ``\\n`` with no trailing newline.
    """
    config = config or ReportingConfig()
    lines = [
        escape_csv_field(report.title),
        escape_csv_field(report.subtitle),
        "",
        _join(["Account", *report.column_headers]),
    ]
    for section in report.sections:
        lines.append("")
        lines.append(escape_csv_field(section.title))
        for row in section.rows:
            lines.append(_join(_row_fields(row, config)))
    return CSV_ROW_SEPARATOR.join(lines)


def escape_csv_field(value: str) -> str:
    """Quote a field containing a separator, quote, CR or LF; double inner quotes."""
    if any(ch in value for ch in _CSV_SPECIALS):
        return '"' + value.replace('"', '""') + '"'
    return value


def _join(fields: list[str]) -> str:
    return CSV_FIELD_SEPARATOR.join(escape_csv_field(f) for f in fields)


def parse_csv(text: str) -> list[list[str]]:
    """Read rendered CSV back into rows of fields.  Blank lines become []."""
    return list(csv.reader(io.StringIO(text)))


# =========================================================================
# Paginated document
# =========================================================================

PAGE_WIDTH = 612
PAGE_HEIGHT = 792
MARGIN = 50
USABLE_WIDTH = PAGE_WIDTH - 2 * MARGIN
LABEL_WIDTH_RATIO = 0.5
VALUE_INSET = 4
ROW_INDENT = 10
ROW_THRESHOLD = 18
SECTION_THRESHOLD = 30
RULE_GRAY = 178  # 0.7 gray
FONT_FAMILY = "Helvetica"


def _latin1(text: str) -> str:
    """Core PDF fonts only cover Latin-1; anything else becomes '?'."""
    return text.encode("latin-1", "replace").decode("latin-1")


class _ReportCanvas:
    """Cursor-based drawing on an FPDF page, top-down."""

    def __init__(self, report: ReportDocument):
        self.pdf = FPDF(orientation="P", unit="pt", format="letter")
        self.pdf.set_margins(MARGIN, MARGIN, MARGIN)
        self.pdf.set_auto_page_break(False)
        self.pdf.set_title(_latin1(report.title))
        self.pdf.set_creator("ledger_modules.reporting")
        try:
            created = datetime.fromisoformat(report.metadata.generated_at)
        except ValueError:
            created = None
        if created is not None:
            self.pdf.creation_date = created
        self.cursor = 0.0

        column_count = max(len(report.column_headers), 1)
        self.label_width = USABLE_WIDTH * LABEL_WIDTH_RATIO
        self.value_width = (USABLE_WIDTH - self.label_width) / column_count
        self.begin_page()

    def begin_page(self) -> None:
        self.pdf.add_page()
        self.cursor = MARGIN

    def ensure_room(self, needed: float) -> None:
        if self.cursor + needed > PAGE_HEIGHT - MARGIN:
            self.begin_page()

    def _font(self, size: float, bold: bool) -> None:
        self.pdf.set_font(FONT_FAMILY, "B" if bold else "", size)

    def text_left(self, text: str, x: float, size: float, bold: bool = False) -> None:
        self._font(size, bold)
        self.pdf.text(x, self.cursor + size, _latin1(text))

    def text_right(self, text: str, right_edge: float, size: float, bold: bool = False) -> None:
        self._font(size, bold)
        text = _latin1(text)
        width = self.pdf.get_string_width(text)
        self.pdf.text(right_edge - width, self.cursor + size, text)

    def rule(self, y: float) -> None:
        self.pdf.set_draw_color(RULE_GRAY)
        self.pdf.set_line_width(0.5)
        self.pdf.line(MARGIN, y, PAGE_WIDTH - MARGIN, y)

    def column_right_edge(self, index: int) -> float:
        return MARGIN + self.label_width + (index + 1) * self.value_width - VALUE_INSET


def build_pdf(report: ReportDocument, config: ReportingConfig | None = None) -> FPDF:
    """Lay out a report on as many pages as it needs."""
    config = config or ReportingConfig()
    canvas = _ReportCanvas(report)

    canvas.text_left(report.title, MARGIN, 18, bold=True)
    canvas.cursor += 24
    canvas.text_left(report.subtitle, MARGIN, 11)
    canvas.cursor += 20
    canvas.rule(canvas.cursor)
    canvas.cursor += 16

    canvas.text_left("Account", MARGIN, 9, bold=True)
    for i, header in enumerate(report.column_headers):
        canvas.text_right(header, canvas.column_right_edge(i), 9, bold=True)
    canvas.cursor += 16
    canvas.rule(canvas.cursor)
    canvas.cursor += 8

    for section in report.sections:
        canvas.ensure_room(SECTION_THRESHOLD)
        if section.title:
            canvas.text_left(section.title, MARGIN, 11, bold=True)
            canvas.cursor += 18

        for row in section.rows:
            canvas.ensure_room(ROW_THRESHOLD)
            indent = 0 if row.is_total else ROW_INDENT
            canvas.text_left(row.label, MARGIN + indent, 10, bold=row.is_total)
            for i, value in enumerate(row.values):
                if value is None:
                    continue
                canvas.text_right(
                    format_currency(value, config),
                    canvas.column_right_edge(i),
                    10,
                    bold=row.is_total,
                )
            canvas.cursor += 16
            if row.is_total:
                canvas.rule(canvas.cursor - 4)
                canvas.cursor += 4

        canvas.cursor += 8

    return canvas.pdf


def render_pdf(report: ReportDocument, config: ReportingConfig | None = None) -> bytes:
    """Render a report as PDF bytes."""
    return bytes(build_pdf(report, config).output())


# =========================================================================
# Entry points
# =========================================================================


def generate(
    report: ReportDocument,
    export_format: ExportFormat,
    config: ReportingConfig | None = None,
) -> bytes:
    """Serialize a report in the requested format."""
    export_format = ExportFormat(export_format)
    if export_format == ExportFormat.CSV:
        data = render_csv(report, config).encode("utf-8")
    else:
        data = render_pdf(report, config)

    logger.info(
        "report_exported",
        extra={
            "report_type": report.report_type.value,
            "format": export_format.value,
            "size_bytes": len(data),
        },
    )
    return data


def suggested_filename(report: ReportDocument, export_format: ExportFormat) -> str:
    """``"<company> - <title>.<ext>"`` with path separators replaced."""
    stem = f"{report.metadata.company_name} - {report.title}".replace("/", "-")
    return f"{stem}.{ExportFormat(export_format).extension}"
