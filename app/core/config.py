"""Application configuration settings.

This module defines the application-wide settings using Pydantic's BaseSettings.
It allows for loading configurations from environment variables and .env files,
providing type validation and default values.

The Gemini credential is deliberately absent: it is supplied by the user for
each session and only ever lives in that session's memory.
"""

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings

# Default list of CORS allowed origins
DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:8000",
    "https://localhost:3000",
    "https://localhost:8000",
    "http://0.0.0.0:8000",  # Local development with 0.0.0.0 host
]


class Settings(BaseSettings):
    """Manages application settings, loading them from environment variables or an .env file.

    Attributes:
        gemini_api_base: Base URL of the Gemini REST API (without trailing slash).
        model_id: Identifier of the Gemini model used for generateContent.
        LLM_CONNECT_TIMEOUT: Generation client connect timeout in seconds.
        LLM_READ_TIMEOUT: Generation client read timeout in seconds, None for unbounded.
        cors_allowed_origins: List of allowed origins for CORS.
        session_ttl: Idle seconds after which an in-memory session is evicted.
        session_cookie_name: Name of the cookie carrying the browser session id.
        session_max_entries: Most sessions held at once; the least recently used goes first.
        pdf_margin_inches: Page margin of exported letters, in inches.
        pdf_font_path: TrueType font file embedded for the letter body.
        pdf_font_name: Standard PDF font used when no TrueType font is found.
        pdf_font_size: Font size in points for the letter body.
        pdf_fallback_slug: Filename slug used when the full name is empty.
        log_level: Level of the application loggers.
    """

    gemini_api_base: str = Field(default="https://generativelanguage.googleapis.com/v1beta")
    model_id: str = Field(default="gemini-pro")

    LLM_CONNECT_TIMEOUT: float = Field(default=10.0, description="Generation client connect timeout in seconds.")
    LLM_READ_TIMEOUT: float | None = Field(default=None, description="Generation client read timeout in seconds.")

    cors_allowed_origins: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CORS_ORIGINS),  # Use a copy of the default list
    )

    session_ttl: int = Field(default=3600)
    session_cookie_name: str = Field(default="letter_session")
    session_max_entries: int = Field(default=1000)

    pdf_margin_inches: float = Field(default=1.0)
    pdf_font_path: str | None = Field(default=None)
    pdf_font_name: str = Field(default="Courier")
    pdf_font_size: int = Field(default=10)
    pdf_fallback_slug: str = Field(default="document")

    log_level: str = Field(default="DEBUG")

    model_config = {
        "env_file": ".env",
        "protected_namespaces": ("settings_",),
        "env_prefix": "",  # No prefix for environment variables
        "extra": "ignore",  # Ignore extra fields
    }

    @field_validator("cors_allowed_origins", mode="before")  # type: ignore
    @classmethod
    def assemble_cors_origins(cls, v: str | list[str] | None) -> list[str]:
        """Assembles the list of CORS allowed origins.

        If 'v' is a string, it splits it by commas. If 'v' is already a list,
        it's used directly. Otherwise, returns the default list of origins.

        Args:
            v: The value from the environment or direct assignment.

        Returns:
            A list of strings representing allowed CORS origins.
        """
        if isinstance(v, str) and v:
            return [origin.strip() for origin in v.split(",")]
        elif isinstance(v, list):
            return v
        # Return the default if env var is empty or not a string/list
        return list(DEFAULT_CORS_ORIGINS)


settings = Settings()
