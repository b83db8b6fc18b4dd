"""Server-rendered form page and its form-post endpoints."""

import logging
import pathlib
from uuid import uuid4

from fastapi import APIRouter
from fastapi import Form
from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.responses import Response
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from app.core.config import settings
from app.generation_logic.letter_download import _stream_letter_pdf
from app.generation_logic.letter_session import LetterSession
from app.generation_logic.sessions import session_store
from app.models.letter_models import ResultState

# Configure module logger
logger = logging.getLogger(__name__)

TEMPLATES_DIR = pathlib.Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["Pages"])


def _resolve_session(request: Request) -> tuple[str, LetterSession]:
    return session_store.get_or_create(request.cookies.get(settings.session_cookie_name))


def _with_session_cookie(response: Response, session_id: str) -> Response:
    response.set_cookie(settings.session_cookie_name, session_id, httponly=True, samesite="lax")
    return response


def _render_page(request: Request, session_id: str, session: LetterSession) -> Response:
    state = session.state
    response = templates.TemplateResponse(
        request,
        "index.html",
        {
            "form": state.request,
            # Only whether a key is held is exposed; the key itself never reaches the page.
            "has_credential": bool(state.credential),
            "error": state.error,
            "result": session.result_view(),
            "ResultState": ResultState,
            "notifications": session.drain_notifications(),
        },
    )
    return _with_session_cookie(response, session_id)


@router.get("/", response_class=HTMLResponse)
async def index(request: Request) -> Response:
    session_id, session = _resolve_session(request)
    return _render_page(request, session_id, session)


@router.post("/generate", response_class=HTMLResponse)
async def generate_from_form(
    request: Request,
    full_name: str = Form(default=""),
    job_title: str = Form(default=""),
    company_name: str = Form(default=""),
    last_working_day: str = Form(default=""),
    reason_for_resignation: str = Form(default=""),
    additional_message: str = Form(default=""),
    api_key: str = Form(default=""),
) -> Response:
    """Store the submitted form in the session, run one generation attempt and re-render."""
    session_id, session = _resolve_session(request)
    fields = {
        "full_name": full_name,
        "job_title": job_title,
        "company_name": company_name,
        "last_working_day": last_working_day,
        "reason_for_resignation": reason_for_resignation,
        "additional_message": additional_message,
    }
    try:
        session.update_request(**fields)
    except ValidationError:
        logger.warning("Unreadable last working day %r, treating it as unset", last_working_day)
        fields["last_working_day"] = None
        session.update_request(**fields)
    session.set_credential(api_key)

    await session.generate()
    return _render_page(request, session_id, session)


@router.post("/export", response_class=HTMLResponse)
async def export_from_session(request: Request) -> Response:
    """Download the session's letter as PDF, or re-render the page explaining why not."""
    session_id, session = _resolve_session(request)
    document = await session.export()
    if document is None:
        return _render_page(request, session_id, session)

    # A download does not re-render the page, so its success toast would surface late.
    session.drain_notifications()
    response = _stream_letter_pdf(document, str(uuid4()))
    return _with_session_cookie(response, session_id)
