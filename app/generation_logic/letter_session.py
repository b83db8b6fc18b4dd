"""The per-session controller driving validate → prompt → generate → render → export."""

import logging
import time
from typing import Any

from app.core.exceptions import ExportFailure
from app.core.exceptions import GenerationError
from app.core.exceptions import LetterError
from app.core.exceptions import NothingToExport
from app.models.letter_models import ExportedDocument
from app.models.letter_models import GenerationOutcome
from app.models.letter_models import Notification
from app.models.letter_models import ResignationRequest
from app.models.letter_models import ResultView
from app.models.letter_models import SessionState
from app.services.llm import generate_text
from app.services.pdf_export import export_letter
from app.services.prompt_builder import build_prompt
from app.services.renderer import render_result
from app.services.validator import validate_request

__all__ = ["LetterSession", "GENERATED_NOTIFICATION", "DOWNLOADED_NOTIFICATION"]

logger = logging.getLogger(__name__)

GENERATED_NOTIFICATION = Notification(
    kind="success",
    title="Letter Generated",
    description="Your resignation letter has been generated successfully!",
)
DOWNLOADED_NOTIFICATION = Notification(
    kind="success",
    title="PDF Downloaded",
    description="Your resignation letter has been downloaded successfully!",
)


class LetterSession:
    """Sole owner of one session's ``SessionState``.

    Every workflow error is caught here and turned into a notification; the
    generation errors additionally set the retained banner message. Nothing
    is retried: each attempt is a fresh call from the user.
    """

    def __init__(self, state: SessionState | None = None):
        self.state = state or SessionState()
        self.last_seen = time.time()

    def touch(self) -> None:
        self.last_seen = time.time()

    # --- form state -----------------------------------------------------

    def update_request(self, **fields: Any) -> ResignationRequest:
        """Apply field changes from the form and re-validate the record's types."""
        data = self.state.request.model_dump()
        data.update(fields)
        self.state.request = ResignationRequest.model_validate(data)
        return self.state.request

    def set_credential(self, credential: str | None) -> None:
        """Store a newly typed credential; a blank value keeps the one already held."""
        if credential and credential.strip():
            self.state.credential = credential.strip()

    # --- notifications --------------------------------------------------

    def notify(self, notification: Notification) -> None:
        self.state.notifications.append(notification)

    def drain_notifications(self) -> list[Notification]:
        pending = self.state.notifications
        self.state.notifications = []
        return pending

    def _report(self, err: LetterError, retain: bool) -> None:
        if retain:
            self.state.error = err.message
        self.notify(Notification.from_error(err))

    # --- workflow -------------------------------------------------------

    def result_view(self) -> ResultView:
        return render_result(self.state)

    async def generate(self) -> GenerationOutcome:
        """Run one generation attempt and leave the state in EMPTY or POPULATED."""
        check = validate_request(self.state.request, self.state.credential)
        if not check.passed:
            # Earlier letters stay visible when the form is incomplete.
            self._report(check.error, retain=True)
            return GenerationOutcome(error=check.error)

        self.state.is_loading = True
        self.state.error = ""
        try:
            prompt = build_prompt(self.state.request)
            text = await generate_text(prompt, self.state.credential)
        except GenerationError as err:
            logger.warning("Letter generation failed: %s", err.kind)
            self.state.letter = ""
            self._report(err, retain=True)
            return GenerationOutcome(error=err)
        finally:
            self.state.is_loading = False

        self.state.letter = text
        self.notify(GENERATED_NOTIFICATION)
        logger.info("Letter generated (%d chars)", len(text))
        return GenerationOutcome(text=text)

    async def export(self) -> ExportedDocument | None:
        """Render the current letter to PDF, or return None after notifying why not."""
        self.state.is_exporting = True
        try:
            document = await export_letter(self.state.letter, self.state.request.full_name)
        except (NothingToExport, ExportFailure) as err:
            logger.warning("Letter export failed: %s", err.kind)
            self._report(err, retain=False)
            return None
        finally:
            self.state.is_exporting = False

        self.notify(DOWNLOADED_NOTIFICATION)
        return document
