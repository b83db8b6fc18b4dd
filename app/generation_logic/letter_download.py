"""Handles streaming a rendered letter PDF back to the client as an attachment."""

import logging
from urllib.parse import quote

from fastapi.responses import StreamingResponse

from app.models.letter_models import ExportedDocument

__all__ = [
    "_stream_letter_pdf",
    "content_disposition",
]

logger = logging.getLogger(__name__)


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII filename plus the RFC 5987 UTF-8 form."""
    ascii_name = filename.encode("ascii", "ignore").decode("ascii").replace('"', "") or "resignation-letter.pdf"
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"


def _stream_letter_pdf(document: ExportedDocument, request_id: str) -> StreamingResponse:
    """Wrap an exported *document* in a download response."""
    logger.info("[%s] Returning %s (%d bytes)", request_id, document.filename, len(document.content))
    return StreamingResponse(
        iter([document.content]),
        media_type=document.media_type,
        headers={"Content-Disposition": content_disposition(document.filename)},
    )
