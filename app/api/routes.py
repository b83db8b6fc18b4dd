import logging
from uuid import uuid4

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from app.generation_logic.letter_download import _stream_letter_pdf
from app.generation_logic.letter_session import LetterSession
from app.models.letter_models import ExportLetterPayload
from app.models.letter_models import GeneratedLetter
from app.models.letter_models import GenerateLetterPayload
from app.models.letter_models import SessionState
from app.services.pdf_export import export_letter

# Configure module logger
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.post("/letters", response_model=GeneratedLetter, tags=["Letters"])
async def generate_letter(payload: GenerateLetterPayload) -> GeneratedLetter:
    """Generates a resignation letter for the submitted details.

    Runs the same workflow as the web form in a throwaway session: validation,
    prompt construction and a single call to the generation endpoint.

    Raises:
        MissingCredential, MissingRequiredField: 400, no upstream call is made.
        TransportFailure, RequestRejected, EmptyResponse: 502.
    """
    request_id = str(uuid4())
    logger.info("[%s] /api/letters called", request_id)

    session = LetterSession(SessionState(request=payload.request))
    session.set_credential(payload.credential)
    outcome = await session.generate()
    if outcome.error is not None:
        raise outcome.error

    logger.info("[%s] Letter generated (%d chars)", request_id, len(outcome.text or ""))
    return GeneratedLetter(letter=outcome.text or "")


@router.post("/letters/pdf", tags=["Letters"])
async def export_letter_pdf(payload: ExportLetterPayload) -> StreamingResponse:
    """Renders letter text to a letter-size PDF attachment.

    Raises:
        NothingToExport: 400 when the letter text is empty.
        ExportFailure: 500 when rendering fails.
    """
    request_id = str(uuid4())
    logger.info("[%s] /api/letters/pdf called", request_id)

    document = await export_letter(payload.letter, payload.full_name)
    return _stream_letter_pdf(document, request_id)
