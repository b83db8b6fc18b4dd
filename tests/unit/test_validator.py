from datetime import date

import pytest

from app.core.exceptions import MissingCredential, MissingRequiredField
from app.models.letter_models import ResignationRequest
from app.services.validator import missing_required_fields, validate_request


def test_valid_request_passes(resignation_request):
    result = validate_request(resignation_request, "key-123")
    assert result.passed is True
    assert result.error is None


@pytest.mark.parametrize("credential", ["", "   ", None, "\t\n"])
def test_blank_credential_fails_first(credential):
    # Even an empty form reports the missing key before the missing fields
    result = validate_request(ResignationRequest(), credential)
    assert result.passed is False
    assert isinstance(result.error, MissingCredential)
    assert result.reason == "Please enter your Google Gemini API key"


@pytest.mark.parametrize(
    "field, value",
    [
        ("full_name", ""),
        ("job_title", ""),
        ("company_name", "   "),
        ("last_working_day", None),
    ],
)
def test_each_required_field_blocks(resignation_request, field, value):
    incomplete = resignation_request.model_copy(update={field: value})
    result = validate_request(incomplete, "key-123")
    assert result.passed is False
    assert isinstance(result.error, MissingRequiredField)
    assert result.error.missing_fields == [field]
    assert result.reason == "Please fill in all required fields"


def test_optional_fields_never_block(resignation_request):
    req = resignation_request.model_copy(update={"reason_for_resignation": "", "additional_message": ""})
    assert validate_request(req, "key").passed is True


def test_missing_fields_are_listed_in_form_order():
    req = ResignationRequest(job_title="Engineer", last_working_day=date(2025, 1, 2))
    assert missing_required_fields(req) == ["full_name", "company_name"]
    assert missing_required_fields(ResignationRequest()) == [
        "full_name",
        "job_title",
        "company_name",
        "last_working_day",
    ]
