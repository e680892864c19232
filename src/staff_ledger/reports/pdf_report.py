"""Staff report PDF.

The layout is computed first as a plain plan (pages of draw operations, in
millimetres from the top-left corner of an A4 page) and then painted with
reportlab. Keeping the plan separate makes pagination testable without
parsing PDF output.
"""

from __future__ import annotations

import io
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence, Union

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from ..core.constants import REPORT_DESCRIPTION_MAX, REPORT_FLIGHT_MAX, REPORT_PASSENGER_MAX
from ..income.model import IncomeEntry
from ..tickets.model import TicketEntry

PAGE_WIDTH_MM = 210
PAGE_HEIGHT_MM = 297

TOP_MM = 20
ROW_MM = 7
PAGE_BREAK_MM = 270
TICKET_SECTION_BREAK_MM = 200
LEFT_MM = 15
RIGHT_MM = 195

DARK_BLUE = (0, 0, 139)
GREY = (60, 60, 60)
FOOTER_GREY = (128, 128, 128)
BLACK = (0, 0, 0)

INCOME_COLUMNS = ((15, "Date"), (50, "Type"), (90, "Description"), (160, "Amount (QR)"))
TICKET_COLUMNS = ((15, "Date"), (40, "Passenger"), (80, "PNR"), (110, "Flight"), (145, "Route"))


@dataclass(frozen=True)
class TextOp:
    x: float
    y: float
    text: str
    size: int = 11
    color: tuple = BLACK
    bold: bool = False
    centered: bool = False


@dataclass(frozen=True)
class LineOp:
    x1: float
    y1: float
    x2: float
    y2: float


Op = Union[TextOp, LineOp]


@dataclass
class ReportData:
    staff_name: str
    period: str
    income_entries: Sequence[IncomeEntry]
    ticket_entries: Sequence[TicketEntry]
    total_income: int
    total_otp: int
    total_tickets: int
    generated_on: date = field(default_factory=date.today)
    company_name: str = "AMIN TOUCH"
    company_tagline: str = "TRADING CONTRACTING & HOSPITALITY SERVICES"


def report_file_name(staff_name: str, on: Optional[date] = None) -> str:
    on = on or date.today()
    safe_name = re.sub(r"\s+", "_", staff_name.strip())
    return f"{safe_name}_Report_{on.isoformat()}.pdf"


def truncate(text: Optional[str], limit: int) -> str:
    return (text or "")[:limit]


class _Layout:
    def __init__(self):
        self.pages: list[list[Op]] = [[]]
        self.y: float = 0

    @property
    def ops(self) -> list[Op]:
        return self.pages[-1]

    def text(self, x, text, **kw) -> None:
        self.ops.append(TextOp(x=x, y=self.y, text=text, **kw))

    def new_page(self) -> None:
        self.pages.append([])
        self.y = TOP_MM

    def table_header(self, columns) -> None:
        for x, title in columns:
            self.text(x, title, size=9, bold=True)
        self.y += ROW_MM
        self.ops.append(LineOp(LEFT_MM, self.y - 2, RIGHT_MM, self.y - 2))

    def table(self, title: str, columns, rows: Sequence[Sequence[str]]) -> None:
        self.text(LEFT_MM, title, size=14, color=DARK_BLUE)
        self.y += 10
        self.table_header(columns)
        for row in rows:
            if self.y > PAGE_BREAK_MM:
                self.new_page()
                self.table_header(columns)
            for (x, _), cell in zip(columns, row):
                self.text(x, cell, size=9)
            self.y += ROW_MM


def layout_report(data: ReportData) -> list[list[Op]]:
    lay = _Layout()

    lay.y = 20
    lay.text(50, data.company_name, size=20, color=DARK_BLUE, bold=True)
    lay.y = 27
    lay.text(50, data.company_tagline, size=10, color=GREY)

    lay.y = 50
    lay.text(LEFT_MM, "STAFF REPORT", size=16, bold=True)
    for y, line in (
        (60, f"Staff Name: {data.staff_name}"),
        (67, f"Period: {data.period}"),
        (74, f"Generated: {data.generated_on.isoformat()}"),
    ):
        lay.y = y
        lay.text(LEFT_MM, line)

    lay.y = 90
    lay.text(LEFT_MM, "Summary", size=14, color=DARK_BLUE)
    for y, line in (
        (100, f"Total Income: QR {data.total_income:.2f}"),
        (107, f"Total OTP: QR {data.total_otp:.2f}"),
        (114, f"Total Tickets: {data.total_tickets}"),
    ):
        lay.y = y
        lay.text(LEFT_MM, line)

    lay.y = 130

    if data.income_entries:
        rows = [
            (e.date, e.type.value, truncate(e.description, REPORT_DESCRIPTION_MAX), f"{e.amount:.2f}")
            for e in data.income_entries
        ]
        lay.table("Income Entries", INCOME_COLUMNS, rows)
        lay.y += 10

    if data.ticket_entries:
        if lay.y > TICKET_SECTION_BREAK_MM:
            lay.new_page()
        rows = [
            (
                t.issue_date,
                truncate(t.passenger_name, REPORT_PASSENGER_MAX),
                t.pnr,
                truncate(t.flight_name, REPORT_FLIGHT_MAX),
                t.route,
            )
            for t in data.ticket_entries
        ]
        lay.table("Ticket Entries", TICKET_COLUMNS, rows)

    total = len(lay.pages)
    for i, ops in enumerate(lay.pages, start=1):
        ops.append(
            TextOp(PAGE_WIDTH_MM / 2, PAGE_HEIGHT_MM - 10, f"Page {i} of {total}", size=8, color=FOOTER_GREY, centered=True)
        )
        ops.append(
            TextOp(
                PAGE_WIDTH_MM / 2,
                PAGE_HEIGHT_MM - 5,
                f"© {data.generated_on.year} {data.company_name}. All rights reserved.",
                size=8,
                color=FOOTER_GREY,
                centered=True,
            )
        )
    return lay.pages


def render_pdf(pages: Sequence[Sequence[Op]], *, title: str = "Staff Report") -> bytes:
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    c.setTitle(title)
    _, height = A4

    for ops in pages:
        for op in ops:
            if isinstance(op, LineOp):
                c.setStrokeColorRGB(*[v / 255 for v in BLACK])
                c.line(op.x1 * mm, height - op.y1 * mm, op.x2 * mm, height - op.y2 * mm)
                continue
            c.setFont("Helvetica-Bold" if op.bold else "Helvetica", op.size)
            c.setFillColorRGB(*[v / 255 for v in op.color])
            if op.centered:
                c.drawCentredString(op.x * mm, height - op.y * mm, op.text)
            else:
                c.drawString(op.x * mm, height - op.y * mm, op.text)
        c.showPage()

    c.save()
    return buffer.getvalue()


def build_report_pdf(data: ReportData) -> tuple[str, bytes]:
    """Return (file name, PDF bytes)."""

    pages = layout_report(data)
    return report_file_name(data.staff_name, data.generated_on), render_pdf(pages, title=f"{data.staff_name} report")
