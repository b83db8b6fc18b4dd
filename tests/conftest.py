import logging
from datetime import date

import httpx
import pytest

import app.services.llm as llm_module
from app.core.logging import setup_logging
from app.models.letter_models import ResignationRequest


@pytest.fixture
def letter_text() -> str:
    return "Dear Acme Corp,\n\n    I am writing to resign.\n\nSincerely,\nAlex Chen"


@pytest.fixture
def resignation_request() -> ResignationRequest:
    return ResignationRequest(
        full_name="Alex Chen",
        job_title="Engineer",
        company_name="Acme Corp",
        last_working_day=date(2025, 6, 30),
    )


# Fixture factory replacing the Gemini HTTP client with an in-process mock transport.
# Returns the list of requests the mock received.
@pytest.fixture
def mock_gemini(monkeypatch, letter_text):
    def _install(status_code: int = 200, body=None, raw: bytes | None = None, exc: Exception | None = None):
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if exc is not None:
                raise exc
            if raw is not None:
                return httpx.Response(status_code, content=raw)
            if body is None:
                return httpx.Response(
                    status_code,
                    json={"candidates": [{"content": {"parts": [{"text": letter_text}], "role": "model"}}]},
                )
            return httpx.Response(status_code, json=body)

        monkeypatch.setattr(llm_module, "client", httpx.AsyncClient(transport=httpx.MockTransport(handler)))
        return calls

    return _install


# The "app" and "httpx" loggers do not propagate to root, so caplog is attached to them directly.
@pytest.fixture
def app_logs(caplog):
    setup_logging()
    caplog.set_level(logging.DEBUG, logger="app")
    watched = [logging.getLogger(name) for name in ("app", "httpx")]
    for watched_logger in watched:
        watched_logger.addHandler(caplog.handler)
    yield caplog
    for watched_logger in watched:
        watched_logger.removeHandler(caplog.handler)
