"""Core custom exceptions for the application.

Every error the letter workflow can surface derives from ``LetterError`` and
knows how it is presented: a toast title and description, the message kept in
the inline error banner, and the HTTP status used by the JSON API.
"""


class LetterError(Exception):
    """Base exception for the letter generation and export workflow."""

    kind: str = "LetterError"
    title: str = "Something Went Wrong"
    status_code: int = 500

    def __init__(self, message: str, description: str | None = None):
        super().__init__(message)
        self.message = message
        self.description = description or message

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind, "title": self.title, "description": self.description}


# --- Validation -------------------------------------------------------------


class MissingCredential(LetterError):
    """The Gemini API key is empty or whitespace-only."""

    kind = "MissingCredential"
    title = "API Key Required"
    status_code = 400

    def __init__(self) -> None:
        super().__init__(
            "Please enter your Google Gemini API key",
            "Please enter your Google Gemini API key to generate the letter.",
        )


class MissingRequiredField(LetterError):
    """One or more of the required form fields is empty."""

    kind = "MissingRequiredField"
    title = "Missing Information"
    status_code = 400

    def __init__(self, missing_fields: list[str]) -> None:
        super().__init__(
            "Please fill in all required fields",
            "Please fill in all required fields to generate the letter.",
        )
        self.missing_fields = missing_fields


# --- Generation -------------------------------------------------------------


class GenerationError(LetterError):
    """Base exception for failures of the outbound generation call."""

    title = "Generation Failed"
    status_code = 502


class TransportFailure(GenerationError):
    """The request to the generation endpoint could not be completed."""

    kind = "TransportFailure"


class RequestRejected(GenerationError):
    """The generation endpoint answered with a non-success status."""

    kind = "RequestRejected"

    def __init__(self, upstream_status: int) -> None:
        super().__init__(f"API request failed: {upstream_status}")
        self.upstream_status = upstream_status


class EmptyResponse(GenerationError):
    """The generation endpoint answered successfully but without candidate text."""

    kind = "EmptyResponse"

    def __init__(self) -> None:
        super().__init__("No content generated")


# --- Export -----------------------------------------------------------------


class NothingToExport(LetterError):
    """Export was requested before any letter was generated."""

    kind = "NothingToExport"
    title = "No Letter to Download"
    status_code = 400

    def __init__(self) -> None:
        super().__init__("Please generate a letter first before downloading.")


class ExportFailure(LetterError):
    """PDF rendering failed; no document is returned."""

    kind = "ExportFailure"
    title = "Download Failed"
    status_code = 500

    def __init__(self, message: str = "PDF rendering failed") -> None:
        super().__init__(message, "There was an error downloading your letter. Please try again.")
