"""Generation logic package.

This package groups the workflow that turns a filled-in resignation form into
a letter (validation, prompt, generation call, rendering, export) and the
in-memory store holding one such workflow per browser session.
Keeping them here allows `app/api/` to stay minimal and focused on HTTP
routing while core business logic lives in composable modules.
"""

from .letter_session import LetterSession  # noqa: F401
from .sessions import SessionStore  # noqa: F401
from .sessions import session_store  # noqa: F401
