from datetime import date
from enum import Enum
from typing import Literal

from pydantic import BaseModel
from pydantic import Field
from pydantic import field_validator
from pydantic.alias_generators import to_camel

from app.core.exceptions import LetterError


class ResignationRequest(BaseModel):
    """The details a user enters to have a resignation letter drafted.

    Accepts both snake_case and the camelCase names used by browser clients
    (``fullName``, ``lastWorkingDay``...).
    """

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    full_name: str = ""
    job_title: str = ""
    company_name: str = ""
    last_working_day: date | None = None
    reason_for_resignation: str = ""
    additional_message: str = ""

    @field_validator("last_working_day", mode="before")  # type: ignore
    @classmethod
    def blank_date_is_unset(cls, v: object) -> object:
        """An empty date input from an HTML form means the date is not picked yet."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator(
        "full_name",
        "job_title",
        "company_name",
        "reason_for_resignation",
        "additional_message",
        mode="before",
    )  # type: ignore
    @classmethod
    def none_is_blank(cls, v: object) -> object:
        return "" if v is None else v


class Notification(BaseModel):
    """A short toast shown to the user after an action."""

    kind: Literal["success", "destructive"]
    title: str
    description: str

    @classmethod
    def from_error(cls, err: LetterError) -> "Notification":
        return cls(kind="destructive", title=err.title, description=err.description)


class SessionState(BaseModel):
    """Everything one browser session holds between requests.

    Nothing in here is ever persisted; the credential is excluded from repr
    and serialisation so it cannot leak through logs or debug dumps.
    """

    request: ResignationRequest = Field(default_factory=ResignationRequest)
    credential: str = Field(default="", repr=False, exclude=True)
    letter: str = ""
    is_loading: bool = False
    is_exporting: bool = False
    error: str = ""
    notifications: list[Notification] = Field(default_factory=list)


class ValidationResult(BaseModel):
    model_config = {"arbitrary_types_allowed": True}

    passed: bool
    reason: str = ""
    error: LetterError | None = None


class GenerationOutcome(BaseModel):
    """Either the generated letter text or the error that prevented it."""

    model_config = {"arbitrary_types_allowed": True}

    text: str | None = None
    error: LetterError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None


class ResultState(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    POPULATED = "populated"


class ResultView(BaseModel):
    """What the result pane shows for a given session state."""

    state: ResultState
    text: str = ""
    title: str = ""
    message: str = ""


class ExportedDocument(BaseModel):
    filename: str
    content: bytes
    media_type: str = "application/pdf"


# --- JSON API payloads ------------------------------------------------------


class GenerateLetterPayload(BaseModel):
    request: ResignationRequest
    credential: str = Field(default="", repr=False)


class GeneratedLetter(BaseModel):
    letter: str


class ExportLetterPayload(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    letter: str = ""
    full_name: str = ""
