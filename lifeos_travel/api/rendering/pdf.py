# lifeos_travel/api/rendering/pdf.py
"""
Itinerary PDF export.

Layout and drawing are split: ``layout_itinerary_pdf`` turns an itinerary
into an ordered list of draw instructions (A4, millimetres, origin at the
top-left like the page is read), and ``render_pdf`` replays them on a
reportlab canvas. Page breaks are only ever inserted between blocks, so a
stop entry never straddles two pages.
"""

from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from lifeos_travel.api.models import Itinerary, Stop
from lifeos_travel.api.rendering.common import (
    ContentOrder,
    format_date_range,
    format_day_label,
    theme_color,
    time_display,
)
from lifeos_travel.api.scheduling import day_sections

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]

PAGE_WIDTH = 210.0
PAGE_HEIGHT = 297.0
MARGIN = 20.0
CONTENT_WIDTH = PAGE_WIDTH - MARGIN * 2
HEADER_HEIGHT = 45.0

NAME_BUDGET = 40
ADDRESS_BUDGET = 60
NOTES_BUDGET = 80

WHITE: Color = (255, 255, 255)
INK: Color = (30, 41, 59)
SLATE: Color = (100, 116, 139)
MUTED: Color = (130, 130, 130)
NOTE_GREY: Color = (100, 100, 100)
FOOTER_GREY: Color = (150, 150, 150)

_WHITESPACE = re.compile(r"\s+")

FONTS = {
    "normal": "Helvetica",
    "bold": "Helvetica-Bold",
    "italic": "Helvetica-Oblique",
}


@dataclass(frozen=True)
class DrawText:
    x: float
    y: float  # baseline, mm from the top edge
    text: str
    size: float = 10
    style: str = "normal"
    color: Color = INK
    align: str = "left"  # left | right | center
    kind: str = ""  # "day_header" / "stop" mark content blocks
    ref: Optional[str] = None


@dataclass(frozen=True)
class DrawRect:
    x: float
    y: float
    width: float
    height: float
    fill: Optional[Color] = None
    stroke: Optional[Color] = None
    radius: float = 0


@dataclass(frozen=True)
class PageBreak:
    pass


Instruction = Union[DrawText, DrawRect, PageBreak]


def truncate(text: str, budget: int) -> str:
    """Shorten ``text`` to ``budget`` characters ending in an ellipsis."""
    if len(text) <= budget:
        return text
    return text[: budget - 3] + "..."


def fit_width(text: str, font: str, size: float, width_mm: float) -> str:
    """Cut ``text`` with an ellipsis until it fits ``width_mm`` in the given font."""
    if stringWidth(text, font, size) <= width_mm * mm:
        return text
    budget = len(text)
    while budget > 3 and stringWidth(truncate(text, budget), font, size) > width_mm * mm:
        budget -= 1
    return truncate(text, budget)


def _single_line(text: Optional[str]) -> str:
    return " ".join((text or "").split())


def _tint(color: Color, amount: float = 0.9) -> Color:
    """Blend ``color`` towards white."""
    return tuple(int(round(c + (255 - c) * amount)) for c in color)


def _row_height(stop: Stop) -> float:
    if _single_line(stop.notes):
        return 20
    if _single_line(stop.address):
        return 16
    return 12


class _PageWriter:
    """Accumulates instructions per page and tracks the vertical cursor."""

    def __init__(self):
        self.pages: List[List[Instruction]] = [[]]
        self.y = MARGIN

    def add(self, instruction: Instruction) -> None:
        self.pages[-1].append(instruction)

    def ensure(self, needed: float) -> bool:
        """Start a new page if ``needed`` mm do not fit; True when it did."""
        if self.y + needed > PAGE_HEIGHT - MARGIN:
            self.pages.append([])
            self.y = MARGIN
            return True
        return False


def layout_itinerary_pdf(itinerary: Itinerary) -> List[Instruction]:
    """Draw instructions for ``itinerary`` in reading order.

    Reads the stops but never modifies them; truncation only affects the
    drawn strings.
    """
    sections = day_sections(itinerary.stops)
    color = theme_color(itinerary)
    writer = _PageWriter()

    # Header band
    writer.add(DrawRect(0, 0, PAGE_WIDTH, HEADER_HEIGHT, fill=color))
    title = fit_width(itinerary.name, FONTS["bold"], 24, CONTENT_WIDTH)
    writer.add(DrawText(MARGIN, 20, title, 24, "bold", WHITE, kind="title"))
    writer.add(DrawText(MARGIN, 30, format_date_range(itinerary.start_date, itinerary.end_date),
                        12, "normal", WHITE))
    total_days = sum(1 for s in sections if not s.is_unscheduled)
    writer.add(DrawText(MARGIN, 38, f"{total_days} Days | {len(itinerary.stops)} Stops",
                        12, "normal", WHITE))
    writer.y = HEADER_HEIGHT + 10

    if itinerary.notes and itinerary.notes.strip():
        lines = simpleSplit(itinerary.notes, FONTS["italic"], 10, CONTENT_WIDTH * mm)
        for line in lines:
            writer.ensure(5)
            writer.add(DrawText(MARGIN, writer.y, line, 10, "italic", NOTE_GREY))
            writer.y += 5
        writer.y += 10

    for section in sections:
        # Keep a day header together with its first stop
        first_row = _row_height(section.stops[0]) + 4 if section.stops else 0
        writer.ensure(16 + first_row)

        writer.add(DrawRect(MARGIN, writer.y, CONTENT_WIDTH, 12,
                            fill=_tint(color), stroke=color, radius=2))
        writer.add(DrawText(MARGIN + 4, writer.y + 8, format_day_label(section), 12, "bold",
                            color, kind="day_header", ref=section.date_key))
        count = len(section.stops)
        writer.add(DrawText(PAGE_WIDTH - MARGIN - 4, writer.y + 8,
                            f"{count} stop{'' if count == 1 else 's'}",
                            10, "normal", (120, 120, 120), align="right"))
        writer.y += 16

        for index, stop in enumerate(section.stops, 1):
            row = _row_height(stop)
            writer.ensure(row + 4)
            _layout_stop(writer, stop, index, color)
            writer.y += row + 2

        writer.y += 8

    return _paginate(writer.pages)


def _layout_stop(writer: _PageWriter, stop: Stop, index: int, color: Color) -> None:
    y = writer.y
    writer.add(DrawText(MARGIN + 2, y + 4, str(index), 9, "bold", color))
    writer.add(DrawText(MARGIN + 10, y + 4, truncate(stop.name, NAME_BUDGET), 10, "bold",
                        INK, kind="stop", ref=stop.id))

    when = time_display(stop)
    if when:
        writer.add(DrawText(PAGE_WIDTH - MARGIN, y + 4, when, 8, "normal", SLATE, align="right"))

    address = _single_line(stop.address)
    if address:
        writer.add(DrawText(MARGIN + 10, y + 9, truncate(address, ADDRESS_BUDGET), 8,
                            "normal", MUTED))

    notes = _single_line(stop.notes)
    if notes:
        note_y = y + 14 if address else y + 9
        writer.add(DrawText(MARGIN + 10, note_y, truncate(notes, NOTES_BUDGET), 8,
                            "italic", NOTE_GREY))


def _paginate(pages: List[List[Instruction]]) -> List[Instruction]:
    """Add footers and join pages with explicit page breaks."""
    instructions: List[Instruction] = []
    total = len(pages)
    for number, page in enumerate(pages, 1):
        if number > 1:
            instructions.append(PageBreak())
        instructions.extend(page)
        instructions.append(DrawText(PAGE_WIDTH / 2, PAGE_HEIGHT - 10, f"Page {number} of {total}",
                                     8, "normal", FOOTER_GREY, align="center"))
        instructions.append(DrawText(MARGIN, PAGE_HEIGHT - 10, "Created with LIFEOS",
                                     8, "normal", FOOTER_GREY))
    return instructions


def pdf_content_order(instructions: List[Instruction]) -> ContentOrder:
    """(date key, stop ids) sequence as laid out in the document."""
    order: ContentOrder = []
    for item in instructions:
        if isinstance(item, DrawText) and item.kind == "day_header":
            order.append((item.ref, []))
        elif isinstance(item, DrawText) and item.kind == "stop" and order:
            order[-1][1].append(item.ref)
    return order


def page_count(instructions: List[Instruction]) -> int:
    return 1 + sum(1 for item in instructions if isinstance(item, PageBreak))


def _rgb(c: canvas.Canvas, color: Color, stroke: bool = False) -> None:
    r, g, b = (v / 255.0 for v in color)
    if stroke:
        c.setStrokeColorRGB(r, g, b)
    else:
        c.setFillColorRGB(r, g, b)


def render_pdf(instructions: List[Instruction], title: str = "Itinerary") -> bytes:
    """Replay draw instructions on a reportlab canvas and return the PDF bytes."""
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    c.setTitle(title)

    for item in instructions:
        if isinstance(item, PageBreak):
            c.showPage()
        elif isinstance(item, DrawRect):
            x, width, height = item.x * mm, item.width * mm, item.height * mm
            y = (PAGE_HEIGHT - item.y - item.height) * mm
            if item.fill:
                _rgb(c, item.fill)
            if item.stroke:
                _rgb(c, item.stroke, stroke=True)
            if item.radius:
                c.roundRect(x, y, width, height, item.radius * mm,
                            stroke=int(bool(item.stroke)), fill=int(bool(item.fill)))
            else:
                c.rect(x, y, width, height, stroke=int(bool(item.stroke)), fill=int(bool(item.fill)))
        elif isinstance(item, DrawText):
            c.setFont(FONTS.get(item.style, FONTS["normal"]), item.size)
            _rgb(c, item.color)
            x, y = item.x * mm, (PAGE_HEIGHT - item.y) * mm
            if item.align == "right":
                c.drawRightString(x, y, item.text)
            elif item.align == "center":
                c.drawCentredString(x, y, item.text)
            else:
                c.drawString(x, y, item.text)

    c.showPage()
    c.save()
    return buffer.getvalue()


def pdf_filename(itinerary: Itinerary) -> str:
    stem = _WHITESPACE.sub("_", itinerary.name.strip()) or "trip"
    return f"{stem}_itinerary.pdf"


def export_itinerary_pdf(itinerary: Itinerary) -> Tuple[bytes, str]:
    """Lay out and render ``itinerary``; returns (pdf bytes, download filename)."""
    instructions = layout_itinerary_pdf(itinerary)
    pdf_bytes = render_pdf(instructions, title=itinerary.name)
    logger.info(f"Exported PDF for itinerary {itinerary.id}: "
                f"{page_count(instructions)} pages, {len(pdf_bytes)} bytes")
    return pdf_bytes, pdf_filename(itinerary)


__all__ = [
    "DrawText",
    "DrawRect",
    "PageBreak",
    "Instruction",
    "NAME_BUDGET",
    "ADDRESS_BUDGET",
    "NOTES_BUDGET",
    "truncate",
    "fit_width",
    "layout_itinerary_pdf",
    "pdf_content_order",
    "page_count",
    "render_pdf",
    "pdf_filename",
    "export_itinerary_pdf",
]
