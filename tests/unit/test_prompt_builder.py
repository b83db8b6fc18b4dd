from datetime import date

import pytest

from app.models.letter_models import ResignationRequest
from app.services.prompt_builder import build_prompt, format_long_date

EXPECTED_PROMPT = """Generate a professional resignation letter with the following details:

Full Name: Alex Chen
Job Title: Engineer
Company Name: Acme Corp
Last Working Day: June 30, 2025

Please create a formal, professional resignation letter that:
1. Follows proper business letter format
2. Is polite and professional in tone
3. Clearly states the resignation and last working day
4. Expresses gratitude for opportunities
5. Offers to help with transition
6. Is approximately 200-300 words

Format the letter properly with date, recipient, body paragraphs, and signature block."""


def test_prompt_without_optional_fields(resignation_request):
    assert build_prompt(resignation_request) == EXPECTED_PROMPT


def test_prompt_is_deterministic(resignation_request):
    copy = ResignationRequest(**resignation_request.model_dump())
    assert build_prompt(resignation_request) == build_prompt(copy)


@pytest.mark.parametrize(
    "reason, message",
    [("", ""), ("New opportunity", ""), ("", "Thanks for everything"), ("Relocating", "Happy to help")],
)
def test_optional_lines_present_iff_non_empty(resignation_request, reason, message):
    req = resignation_request.model_copy(update={"reason_for_resignation": reason, "additional_message": message})
    prompt = build_prompt(req)

    assert ("Reason for Resignation:" in prompt) == bool(reason)
    assert ("Additional Message:" in prompt) == bool(message)
    if reason:
        assert f"Reason for Resignation: {reason}\n" in prompt
    if message:
        assert f"Additional Message: {message}\n" in prompt
    # Absent fields leave no stray blank lines behind
    assert "\n\n\n" not in prompt


def test_optional_lines_follow_last_working_day(resignation_request):
    req = resignation_request.model_copy(update={"reason_for_resignation": "Relocating", "additional_message": "Thanks"})
    prompt = build_prompt(req)
    assert (
        "Last Working Day: June 30, 2025\nReason for Resignation: Relocating\nAdditional Message: Thanks\n\nPlease create"
        in prompt
    )


def test_whitespace_only_optional_field_is_omitted(resignation_request):
    req = resignation_request.model_copy(update={"reason_for_resignation": "   "})
    assert build_prompt(req) == EXPECTED_PROMPT


def test_long_date_is_zero_padded():
    assert format_long_date(date(2025, 6, 5)) == "June 05, 2025"
    assert format_long_date(date(2024, 12, 31)) == "December 31, 2024"


def test_prompt_requires_date(resignation_request):
    with pytest.raises(ValueError):
        build_prompt(resignation_request.model_copy(update={"last_working_day": None}))
