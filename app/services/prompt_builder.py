import logging
import pathlib
from datetime import date

import jinja2

from app.models.letter_models import ResignationRequest

# Configure module logger
logger = logging.getLogger(__name__)

PROMPT_DIR = pathlib.Path(__file__).parent / "prompt_templates"
PROMPT_TEMPLATE = "resignation_letter.jinja2"

# Fixed English names so the prompt does not depend on the process locale.
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# trim_blocks/lstrip_blocks make a skipped {% if %} line vanish instead of leaving a blank line.
env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(PROMPT_DIR),
    undefined=jinja2.StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
    autoescape=False,
)


def format_long_date(value: date) -> str:
    """Render *value* as e.g. ``June 05, 2025``."""
    return f"{MONTH_NAMES[value.month - 1]} {value.day:02d}, {value.year}"


def build_prompt(request: ResignationRequest) -> str:
    """Render the generation instruction for a validated *request*.

    The output depends only on the request, so identical requests always
    produce byte-identical prompts. Reason and additional message lines are
    left out entirely when those fields are blank.
    """
    if request.last_working_day is None:
        raise ValueError("last_working_day must be set before building a prompt")

    template = env.get_template(PROMPT_TEMPLATE)
    prompt = template.render(
        full_name=request.full_name,
        job_title=request.job_title,
        company_name=request.company_name,
        last_working_day=format_long_date(request.last_working_day),
        reason_for_resignation=request.reason_for_resignation if request.reason_for_resignation.strip() else "",
        additional_message=request.additional_message if request.additional_message.strip() else "",
    )
    logger.debug("Built prompt (%d chars)", len(prompt))
    return prompt
