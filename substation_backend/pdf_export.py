# substation_backend/pdf_export.py
from dataclasses import dataclass
from datetime import date, datetime, timezone
from io import BytesIO
from typing import List, Optional, Tuple

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen.canvas import Canvas

from substation_backend.report import ReportSection, format_timestamp

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 20 * mm
LINE_HEIGHT = 6 * mm
FIRST_LINE_Y = 30 * mm
BREAK_ALLOWANCE = 15 * mm
FOOTER_ALLOWANCE = 20 * mm
TEXT_WIDTH = PAGE_WIDTH - 2 * MARGIN

TITLE_SIZE = 18
HEADING_SIZE = 14
BODY_SIZE = 10
FOOTER_SIZE = 8

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_ITALIC = "Helvetica-Oblique"

# The printed report uses shorter labels than the Markdown one
PDF_LABELS = {
    "Substation Number": "Station Number",
    "Equipment Location": "Location",
}


class ReportExportError(Exception):
    pass


@dataclass
class PlacedLine:
    text: str
    # Offset from the top edge of the page
    y: float
    font: str
    size: int


class ReportLayout:
    """
    Top-down text layout with page breaks decided only from the current
    vertical offset; a line never moves once placed.
    """

    def __init__(self):
        self.pages: List[List[PlacedLine]] = [[]]
        self.y = FIRST_LINE_Y

    def check_page_break(self, required_space: float = BREAK_ALLOWANCE) -> None:
        if self.y + required_space > PAGE_HEIGHT - MARGIN:
            self.pages.append([])
            self.y = MARGIN

    def add_text(self, text: str, size: int = BODY_SIZE, bold: bool = False) -> None:
        font = FONT_BOLD if bold else FONT
        lines = simpleSplit(text, font, size, TEXT_WIDTH) or [""]
        for line in lines:
            self.check_page_break()
            self.pages[-1].append(PlacedLine(line, self.y, font, size))
            self.y += LINE_HEIGHT

    def add_spacing(self, space: float = 10 * mm) -> None:
        self.y += space
        self.check_page_break()

    def add_footer(self, text: str) -> None:
        self.check_page_break(FOOTER_ALLOWANCE)
        self.pages[-1].append(PlacedLine(text, self.y, FONT_ITALIC, FOOTER_SIZE))


def layout_report(
    sections: List[ReportSection],
    station_number: str,
    generated_at: datetime,
) -> List[List[PlacedLine]]:
    layout = ReportLayout()

    layout.add_text("ELECTRICAL SUBSTATION MAINTENANCE REPORT", TITLE_SIZE, bold=True)
    layout.add_text(f"Station #{station_number}", HEADING_SIZE, bold=True)
    layout.add_spacing(15 * mm)

    for section in sections:
        layout.add_text(section.title.upper(), HEADING_SIZE, bold=True)
        layout.add_spacing(8 * mm)
        for entry in section.entries:
            if isinstance(entry, tuple):
                label, value = entry
                layout.add_text(f"{PDF_LABELS.get(label, label)}: {value}")
            else:
                layout.add_text(entry)
        layout.add_spacing()

    layout.add_footer(f"Report generated: {format_timestamp(generated_at)}")
    return layout.pages


def report_filename(station_number: str, on_date: Optional[date] = None) -> str:
    on_date = on_date or datetime.now(timezone.utc).date()
    return f"maintenance-report-{station_number}-{on_date.isoformat()}.pdf"


def render_pages(pages: List[List[PlacedLine]]) -> bytes:
    buffer = BytesIO()
    canvas = Canvas(buffer, pagesize=A4)
    total_pages = len(pages)

    for number, lines in enumerate(pages, start=1):
        for line in lines:
            canvas.setFont(line.font, line.size)
            canvas.drawString(MARGIN, PAGE_HEIGHT - line.y, line.text)

        # Page numbers go on after layout so the total is known
        canvas.setFont(FONT, FOOTER_SIZE)
        canvas.drawString(PAGE_WIDTH - MARGIN - 30 * mm, 10 * mm, f"Page {number} of {total_pages}")
        canvas.showPage()

    canvas.save()
    return buffer.getvalue()


def export_pdf(
    sections: List[ReportSection],
    station_number: str,
    generated_at: Optional[datetime] = None,
) -> Tuple[str, bytes]:
    """Lay the report out on A4 pages and return (filename, pdf bytes)"""
    generated_at = generated_at or datetime.now()
    try:
        pages = layout_report(sections, station_number, generated_at)
        content = render_pages(pages)
    except Exception as e:
        print(f"PDF generation failed for station {station_number}: {str(e)}")
        raise ReportExportError(str(e)) from e
    return report_filename(station_number), content
