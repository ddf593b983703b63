"""PDF export of the chat history."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from equiphelper.ui.messages import Message

logger = logging.getLogger(__name__)

TITLE = "equipHelper Chat History"
FONT = "Helvetica"
TITLE_FONT_SIZE = 20
BODY_FONT_SIZE = 12

# Positions in millimetres from the top-left corner
MARGIN_X = 10
TITLE_Y = 10
FIRST_LINE_Y = 20
LINE_HEIGHT = 10
WRAP_WIDTH = 180
PAGE_BREAK_Y = 280
NEW_PAGE_Y = 10

USER_COLOR = (0, 102, 204)
AI_COLOR = (255, 165, 0)

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class PlacedLine:
    text: str
    color: RGB
    y: int


def _printable(text: str) -> str:
    # The standard PDF fonts only carry the cp1252 repertoire
    return text.encode("cp1252", "ignore").decode("cp1252")


def _text_width(text: str) -> float:
    return stringWidth(text, FONT, BODY_FONT_SIZE)


def _break_long_line(line: str, max_width: float) -> List[str]:
    # A token without spaces wider than the column is cut by character
    pieces: List[str] = []
    current = ""
    for char in line:
        if current and _text_width(current + char) > max_width:
            pieces.append(current)
            current = char
        else:
            current += char
    pieces.append(current)
    return pieces


def wrap_text(text: str) -> List[str]:
    max_width = WRAP_WIDTH * mm
    lines: List[str] = []
    for line in simpleSplit(_printable(text), FONT, BODY_FONT_SIZE, max_width):
        if _text_width(line) > max_width:
            lines.extend(_break_long_line(line, max_width))
        else:
            lines.append(line)
    return lines or [""]


def layout_pages(messages: Sequence[Message]) -> List[List[PlacedLine]]:
    """Place every wrapped line, starting a new page once the cursor passes the page height."""
    pages: List[List[PlacedLine]] = [[]]
    y = FIRST_LINE_Y
    for message in messages:
        sender = "User" if message.type == "user" else "equipHelper"
        color = USER_COLOR if message.type == "user" else AI_COLOR
        for line in wrap_text(f"{sender}: {message.text}"):
            if y > PAGE_BREAK_Y:
                pages.append([])
                y = NEW_PAGE_Y
            pages[-1].append(PlacedLine(text=line, color=color, y=y))
            y += LINE_HEIGHT
    return pages


def export_to_pdf(messages: Sequence[Message], path: Path | str) -> Path:
    path = Path(path)
    _, page_height = A4
    pdf = canvas.Canvas(str(path), pagesize=A4)
    pdf.setTitle(TITLE)

    pdf.setFont(FONT, TITLE_FONT_SIZE)
    pdf.drawString(MARGIN_X * mm, page_height - TITLE_Y * mm, TITLE)

    pages = layout_pages(messages)
    for index, page in enumerate(pages):
        if index:
            pdf.showPage()
        pdf.setFont(FONT, BODY_FONT_SIZE)
        for line in page:
            pdf.setFillColorRGB(*(channel / 255 for channel in line.color))
            pdf.drawString(MARGIN_X * mm, page_height - line.y * mm, line.text)
    pdf.save()
    logger.info("Exported %s messages to %s (%s pages)", len(messages), path, len(pages))
    return path
