"""Pre-flight checks run before any call to the generation endpoint."""

import logging

from app.core.exceptions import MissingCredential
from app.core.exceptions import MissingRequiredField
from app.models.letter_models import ResignationRequest
from app.models.letter_models import ValidationResult

logger = logging.getLogger(__name__)

REQUIRED_TEXT_FIELDS: tuple[str, ...] = ("full_name", "job_title", "company_name")


def missing_required_fields(request: ResignationRequest) -> list[str]:
    """Return the names of required fields that are empty, in form order."""
    missing = [name for name in REQUIRED_TEXT_FIELDS if not getattr(request, name).strip()]
    if request.last_working_day is None:
        missing.append("last_working_day")
    return missing


def validate_request(request: ResignationRequest, credential: str | None) -> ValidationResult:
    """Check that a letter can be generated for *request* with *credential*.

    The credential is checked first. Optional fields never block generation.
    """
    if not credential or not credential.strip():
        err = MissingCredential()
        logger.info("Validation failed: no API key supplied")
        return ValidationResult(passed=False, reason=err.message, error=err)

    missing = missing_required_fields(request)
    if missing:
        err = MissingRequiredField(missing)
        logger.info("Validation failed: missing fields %s", ", ".join(missing))
        return ValidationResult(passed=False, reason=err.message, error=err)

    return ValidationResult(passed=True)
