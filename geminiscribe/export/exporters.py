"""Pure transformations of transcript text into downloadable artifacts."""

import re
import html
import logging
from typing import List, Optional
from urllib.parse import quote

from fpdf import FPDF

logger = logging.getLogger(__name__)

# PDF layout, millimetres on A4 portrait
PAGE_FORMAT = "A4"
MARGIN_X = 10
TOP_Y = 20
BOTTOM_GAP = 20
CONTENT_WIDTH = 180
TITLE_FONT_SIZE = 16
BODY_FONT_SIZE = 12
TITLE_GAP = 10
LINE_STEP = 7

DOC_MIME_TYPE = "application/vnd.ms-word"

DOC_HEADER = (
    "<html xmlns:o='urn:schemas-microsoft-com:office:office' "
    "xmlns:w='urn:schemas-microsoft-com:office:word' "
    "xmlns='http://www.w3.org/TR/REC-html40'>"
    "<head><meta charset='utf-8'><title>Export HTML to Word Document with JavaScript</title></head><body>"
)
DOC_FOOTER = "</body></html>"

# Core PDF fonts are Latin-1 only; fold common typography before replacing the rest.
_TYPOGRAPHY = str.maketrans({
    "‘": "'", "’": "'", "“": '"', "”": '"',
    "–": "-", "—": "-", "…": "...", "\u00a0": " ",
})


def export_filename(file_name: str, extension: str) -> str:
    """``speech.mp3`` -> ``speech_transcript.<extension>``."""
    return re.sub(r"\.[^/.]+$", "", file_name) + f"_transcript.{extension}"


def render_txt(text: str) -> bytes:
    return text.encode("utf-8")


def render_pdf(text: str, file_name: str, font_path: Optional[str] = None) -> bytes:
    """Lay the transcript out on A4 pages under a "Transcription: <file>" title.

    Args:
        text: Transcript text
        file_name: Source media file name, used in the title
        font_path: Optional TTF font for text outside Latin-1

    Returns:
        The PDF document
    """
    pdf = build_pdf(text, file_name, font_path)
    return bytes(pdf.output())


def build_pdf(text: str, file_name: str, font_path: Optional[str] = None) -> FPDF:
    pdf = FPDF(orientation="P", unit="mm", format=PAGE_FORMAT)
    pdf.set_auto_page_break(False)

    if font_path:
        pdf.add_font("Transcript", fname=font_path)
        family = "Transcript"
        prepare = _identity
    else:
        family = "Helvetica"
        prepare = _to_latin1

    pdf.add_page()
    page_height = pdf.h

    y = TOP_Y
    pdf.set_font(family, size=TITLE_FONT_SIZE)
    pdf.text(MARGIN_X, y, prepare("Transcription: " + file_name))
    y += TITLE_GAP

    pdf.set_font(family, size=BODY_FONT_SIZE)
    lines = wrap_text(pdf, prepare(text), CONTENT_WIDTH)
    for line in lines:
        if y > page_height - BOTTOM_GAP:
            pdf.add_page()
            y = TOP_Y
        if line:
            pdf.text(MARGIN_X, y, line)
        y += LINE_STEP

    logger.debug(f"Built PDF for {file_name}: {len(lines)} lines on {pdf.pages_count} pages")
    return pdf


def wrap_text(pdf: FPDF, text: str, width: float) -> List[str]:
    """Greedy word wrap using the current font; paragraph breaks are kept as empty lines."""
    lines = []
    for paragraph in text.split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue

        current = ""
        for word in words:
            candidate = f"{current} {word}" if current else word
            if pdf.get_string_width(candidate) <= width:
                current = candidate
                continue
            if current:
                lines.append(current)
            # Break words that are wider than the whole line
            while pdf.get_string_width(word) > width and len(word) > 1:
                cut = len(word) - 1
                while cut > 1 and pdf.get_string_width(word[:cut]) > width:
                    cut -= 1
                lines.append(word[:cut])
                word = word[cut:]
            current = word
        lines.append(current)
    return lines


def render_doc_html(text: str) -> str:
    """Wrap the transcript in HTML that Word opens as a document."""
    body = html.escape(text, quote=False).replace("\r\n", "\n").replace("\n", "<br>")
    return DOC_HEADER + body + DOC_FOOTER


def doc_data_uri(text: str) -> str:
    # Same escaping as JavaScript's encodeURIComponent
    return f"data:{DOC_MIME_TYPE};charset=utf-8," + quote(render_doc_html(text), safe="-_.!~*'()")


def _identity(text: str) -> str:
    return text


def _to_latin1(text: str) -> str:
    return text.translate(_TYPOGRAPHY).encode("latin-1", "replace").decode("latin-1")
