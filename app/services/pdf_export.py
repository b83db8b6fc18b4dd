import asyncio
import io
import logging
import os
import re
import textwrap
from functools import lru_cache
from pathlib import Path
from uuid import uuid4

from reportlab.lib.pagesizes import letter
from reportlab.lib.pagesizes import portrait
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import inch
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.platypus import Preformatted
from reportlab.platypus import SimpleDocTemplate

from app.core.config import settings
from app.core.exceptions import ExportFailure
from app.core.exceptions import NothingToExport
from app.models.letter_models import ExportedDocument

# Configure module logger
logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
FILENAME_PREFIX = "resignation-letter-"
# SimpleDocTemplate frames pad each side by 6pt.
FRAME_PADDING = 12

# Monospace TrueType fonts tried in order when settings.pdf_font_path is unset.
UNICODE_FONT_CANDIDATES = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu-sans-mono-fonts/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    "/System/Library/Fonts/Supplemental/Courier New.ttf",
    "C:/Windows/Fonts/cour.ttf",
)


@lru_cache(maxsize=None)
def _register_ttf(path: str) -> str:
    name = f"Letter-{Path(path).stem}"
    pdfmetrics.registerFont(TTFont(name, path))
    logger.info("Registered PDF font %s from %s", name, path)
    return name


def letter_font() -> str:
    """Return the name of the font used for the letter body.

    A TrueType font (``settings.pdf_font_path``, then the first installed
    entry of ``UNICODE_FONT_CANDIDATES``) is embedded when one exists;
    otherwise the standard ``settings.pdf_font_name`` is used.
    """
    paths = [settings.pdf_font_path] if settings.pdf_font_path else []
    paths.extend(UNICODE_FONT_CANDIDATES)
    for path in paths:
        if os.path.isfile(path):
            return _register_ttf(path)
    if settings.pdf_font_path:
        logger.warning("PDF font %s not found, using %s", settings.pdf_font_path, settings.pdf_font_name)
    return settings.pdf_font_name


def unsupported_characters(text: str, font_name: str) -> list[str]:
    """Characters of *text* that *font_name* has no glyph for, in code point order.

    Standard PDF fonts are written with WinAnsi (cp1252) encoding; anything
    outside it would be drawn as a box.
    """
    font = pdfmetrics.getFont(font_name)
    covered = font.face.charToGlyph if isinstance(font, TTFont) else None
    missing = set()
    for char in set(text) - {"\n"}:
        if covered is not None:
            if ord(char) not in covered:
                missing.add(char)
            continue
        try:
            char.encode("cp1252")
        except UnicodeEncodeError:
            missing.add(char)
    return sorted(missing)


def slugify_name(full_name: str, fallback: str | None = None) -> str:
    """Lowercase *full_name* with whitespace runs collapsed to single hyphens."""
    slug = re.sub(r"\s+", "-", full_name.strip()).lower()
    return slug or (fallback if fallback is not None else settings.pdf_fallback_slug)


def export_filename(full_name: str) -> str:
    return f"{FILENAME_PREFIX}{slugify_name(full_name)}.pdf"


def wrap_letter_text(text: str, width: int) -> str:
    """Hard-wrap lines longer than *width* characters.

    Blank lines and the indentation of short lines are kept as they are, so
    the page shows the letter exactly as it was generated.
    """
    wrapped: list[str] = []
    for line in text.expandtabs(4).splitlines():
        if len(line) <= width:
            wrapped.append(line)
            continue
        wrapped.extend(textwrap.wrap(line, width=width, break_on_hyphens=False) or [""])
    return "\n".join(wrapped)


def _render_pdf(text: str, full_name: str) -> bytes:
    rid = str(uuid4())
    margin = settings.pdf_margin_inches * inch
    bio = io.BytesIO()
    doc = SimpleDocTemplate(
        bio,
        pagesize=portrait(letter),
        leftMargin=margin,
        rightMargin=margin,
        topMargin=margin,
        bottomMargin=margin,
        title="Resignation Letter",
        author=full_name.strip(),
    )
    font_name = letter_font()
    style = ParagraphStyle(
        "LetterBody",
        fontName=font_name,
        fontSize=settings.pdf_font_size,
        leading=settings.pdf_font_size * 1.4,
    )
    char_width = stringWidth("M", font_name, settings.pdf_font_size)
    columns = max(int((doc.width - FRAME_PADDING) // char_width), 1)
    body = wrap_letter_text(text, columns)

    missing = unsupported_characters(body, font_name)
    if missing:
        logger.error("[%s] Font %s cannot draw %d character(s) of the letter", rid, font_name, len(missing))
        raise ExportFailure(f"Font {font_name} cannot render: {' '.join(missing)}")

    logger.info("[%s] Rendering letter PDF (%d chars, %d columns)", rid, len(text), columns)
    doc.build([Preformatted(body, style)])
    size = bio.tell()
    logger.info("[%s] PDF ready (%d bytes)", rid, size)
    return bio.getvalue()


async def export_letter(text: str, full_name: str) -> ExportedDocument:
    """Render the generated *text* into a letter-size PDF named after *full_name*.

    Raises:
        NothingToExport: no letter has been generated yet.
        ExportFailure: rendering failed, or the letter holds characters the
            font has no glyph for; no partial document is returned.
    """
    if not text:
        raise NothingToExport()

    try:
        # run sync reportlab work in a thread
        content = await asyncio.to_thread(_render_pdf, text, full_name)
    except ExportFailure:
        raise
    except Exception as err:
        logger.exception("PDF rendering failed")
        raise ExportFailure(f"PDF rendering failed: {err}") from err

    return ExportedDocument(filename=export_filename(full_name), content=content, media_type=PDF_MEDIA_TYPE)
