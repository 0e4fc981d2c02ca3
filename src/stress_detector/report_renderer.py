"""PDF report for a single stress analysis.

Layout is planned first (`layout`) in millimetres measured from the top of an
A4 page, then drawn with reportlab (`render`). Keeping the plan separate means
pagination can be checked without reading PDF bytes back.
"""
import io
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Sequence

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from stress_detector.response_contract import AnalysisResult

REPORT_TITLE = "Stress Analysis Report"

PAGE_WIDTH_MM = 210
PAGE_HEIGHT_MM = 297
MARGIN_X = 14
CONTENT_WIDTH = 182
LINE_HEIGHT = 5

TITLE_Y = 20
TIMESTAMP_Y = 28
FIRST_SECTION_Y = 40
PAGE_TOP_Y = 20
# A section title is never started below this line
SECTION_BREAK_Y = 260
# Last baseline available for body text
PAGE_BOTTOM_Y = 282

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
TITLE_SIZE = 22
HEADING_SIZE = 14
SUMMARY_SIZE = 12
BODY_SIZE = 11


@dataclass(frozen=True)
class DrawOp:
    kind: str  # "text" or "rule"
    x: float
    y: float
    text: str = ""
    font: str = FONT
    size: float = BODY_SIZE
    gray: float = 0.0
    centered: bool = False
    x_end: float = 0.0


@dataclass
class ReportPage:
    ops: List[DrawOp] = field(default_factory=list)

    def headings(self) -> List[str]:
        return [op.text for op in self.ops if op.kind == "text" and op.font == FONT_BOLD and op.size == HEADING_SIZE]


def _split_wide_row(row: str, size: float) -> List[str]:
    # simpleSplit keeps an over-long token whole; break it by characters
    limit = CONTENT_WIDTH * mm
    chunks = []
    current = ""
    for char in row:
        if current and stringWidth(current + char, FONT, size) > limit:
            chunks.append(current)
            current = char
        else:
            current += char
    chunks.append(current)
    return chunks


def wrap_text(text: str, size: float = BODY_SIZE) -> List[str]:
    """Wrap `text` to the report's content width."""
    rows = []
    for row in simpleSplit(text, FONT, size, CONTENT_WIDTH * mm):
        if stringWidth(row, FONT, size) > CONTENT_WIDTH * mm:
            rows.extend(_split_wide_row(row, size))
        else:
            rows.append(row)
    return rows or [""]


class _LayoutBuilder:
    def __init__(self):
        self.pages: List[ReportPage] = [ReportPage()]
        self.y = FIRST_SECTION_Y

    @property
    def page(self) -> ReportPage:
        return self.pages[-1]

    def new_page(self):
        self.pages.append(ReportPage())
        self.y = PAGE_TOP_Y

    def header(self, generated_on: str):
        self.page.ops.append(DrawOp("text", PAGE_WIDTH_MM / 2, TITLE_Y, REPORT_TITLE, FONT_BOLD, TITLE_SIZE, centered=True))
        self.page.ops.append(DrawOp("text", PAGE_WIDTH_MM / 2, TIMESTAMP_Y, f"Generated on: {generated_on}", FONT, BODY_SIZE, gray=0.4, centered=True))

    def section(self, title: str):
        if self.y > SECTION_BREAK_Y:
            self.new_page()
        self.page.ops.append(DrawOp("text", MARGIN_X, self.y, title, FONT_BOLD, HEADING_SIZE))
        self.page.ops.append(DrawOp("rule", MARGIN_X, self.y + 1.5, x_end=MARGIN_X + CONTENT_WIDTH))
        self.y += 8

    def line(self, text: str, x: float = MARGIN_X, size: float = BODY_SIZE, gray: float = 0.2):
        # body text flows onto the next page; the section title is not repeated
        if self.y > PAGE_BOTTOM_Y:
            self.new_page()
        self.page.ops.append(DrawOp("text", x, self.y, text, FONT, size, gray=gray))

    def paragraph(self, text: str):
        for row in wrap_text(text):
            self.line(row)
            self.y += LINE_HEIGHT
        self.y += 10

    def items(self, entries: Sequence[str]):
        for entry in entries:
            for row in wrap_text(entry):
                self.line(row)
                self.y += LINE_HEIGHT
        self.y += 5

    def columns(self, left: str, right: str):
        self.line(left, x=20, size=SUMMARY_SIZE, gray=0.0)
        self.page.ops.append(DrawOp("text", 120, self.y, right, FONT, SUMMARY_SIZE))
        self.y += 10


def _format_timestamp(generated_at: Optional[datetime]) -> str:
    return (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")


def layout(original_text: str, result: AnalysisResult, generated_at: Optional[datetime] = None) -> List[ReportPage]:
    """Plan every page of the report. Pure: no reportlab canvas involved."""
    builder = _LayoutBuilder()
    builder.header(_format_timestamp(generated_at))

    builder.section("Your Input Text")
    builder.paragraph(original_text)

    builder.y += 5
    builder.section("Analysis Summary")
    builder.columns(f"Stress Level: {result.level.value}", f"Confidence: {result.confidence}%")

    reasoning = result.reasoning
    builder.section("Detailed Reasoning")
    builder.items([
        f"- Negative Word Score: {reasoning.negative_word_score}/100",
        f"- Emotional Tone: {reasoning.emotional_tone} (-100 to 100)",
        f"- Cognitive Overload Index: {reasoning.cognitive_overload_index}/100",
    ])

    builder.section("Explanation")
    builder.paragraph(result.explanation)

    if result.suggestions:
        builder.section("AI-Powered Suggestions")
        builder.items([f"• {s}" for s in result.suggestions])

    return builder.pages


def _draw(pdf: canvas.Canvas, op: DrawOp):
    page_height = PAGE_HEIGHT_MM * mm
    y = page_height - op.y * mm
    if op.kind == "rule":
        pdf.setLineWidth(0.5 * mm)
        pdf.line(op.x * mm, y, op.x_end * mm, y)
        return
    pdf.setFont(op.font, op.size)
    pdf.setFillGray(op.gray)
    if op.centered:
        pdf.drawCentredString(op.x * mm, y, op.text)
    else:
        pdf.drawString(op.x * mm, y, op.text)


def render(original_text: str, result: AnalysisResult, generated_at: Optional[datetime] = None) -> bytes:
    """
    Render the report as PDF bytes.

    The canvas runs in reportlab's invariant mode, so the same inputs and
    `generated_at` give byte-identical output.
    """
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4, invariant=1)
    pdf.setTitle(REPORT_TITLE)
    for page in layout(original_text, result, generated_at):
        for op in page.ops:
            _draw(pdf, op)
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()
