import json

import httpx
import pytest

from app.core.config import settings
from app.core.exceptions import EmptyResponse, RequestRejected, TransportFailure
from app.services.llm import build_payload, extract_candidate_text, generate_text, generation_url


@pytest.mark.asyncio
async def test_generate_text_success(mock_gemini, letter_text):
    calls = mock_gemini()

    result = await generate_text("prompt text", "secret-key")

    assert result == letter_text
    assert len(calls) == 1
    sent = calls[0]
    assert sent.method == "POST"
    assert sent.url.params["key"] == "secret-key"
    assert sent.url.path.endswith(f"/models/{settings.model_id}:generateContent")
    assert json.loads(sent.content) == {"contents": [{"parts": [{"text": "prompt text"}]}]}


@pytest.mark.asyncio
async def test_text_is_returned_verbatim(mock_gemini):
    text = "  Dear Team,\n\n\tIndented line  \n"
    mock_gemini(body={"candidates": [{"content": {"parts": [{"text": text}]}}]})
    assert await generate_text("p", "k") == text


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [400, 403, 429, 500, 503])
async def test_non_success_status_is_rejected(mock_gemini, status_code):
    calls = mock_gemini(status_code=status_code, body={"error": {"message": "nope"}})

    with pytest.raises(RequestRejected) as exc:
        await generate_text("p", "k")

    assert exc.value.upstream_status == status_code
    assert str(status_code) in exc.value.message
    assert exc.value.message == f"API request failed: {status_code}"
    # Single attempt, no retry
    assert len(calls) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {},
        {"candidates": []},
        {"candidates": [{}]},
        {"candidates": [{"content": {"parts": []}}]},
        {"candidates": [{"content": {"parts": [{"text": ""}]}}]},
        {"candidates": [{"finishReason": "SAFETY"}]},
        [],
    ],
)
async def test_missing_candidate_text_is_empty_response(mock_gemini, body):
    mock_gemini(body=body)
    with pytest.raises(EmptyResponse) as exc:
        await generate_text("p", "k")
    assert exc.value.message == "No content generated"


@pytest.mark.asyncio
async def test_malformed_body_is_empty_response(mock_gemini):
    mock_gemini(raw=b"<html>not json</html>")
    with pytest.raises(EmptyResponse):
        await generate_text("p", "k")


@pytest.mark.asyncio
async def test_network_error_is_transport_failure(mock_gemini):
    calls = mock_gemini(exc=httpx.ConnectError("connection refused"))

    with pytest.raises(TransportFailure) as exc:
        await generate_text("p", "k")

    assert isinstance(exc.value.__cause__, httpx.ConnectError)
    assert "ConnectError" in exc.value.message
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_credential_is_not_logged(mock_gemini, app_logs):
    mock_gemini(status_code=500, body={})

    with pytest.raises(RequestRejected):
        await generate_text("p", "very-secret-key")

    assert "Generation endpoint returned status 500" in app_logs.text
    assert "very-secret-key" not in app_logs.text


def test_payload_and_url_shape(monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_base", "https://example.test/v1beta")
    monkeypatch.setattr(settings, "model_id", "gemini-test")
    assert generation_url() == "https://example.test/v1beta/models/gemini-test:generateContent"
    assert build_payload("hi") == {"contents": [{"parts": [{"text": "hi"}]}]}


def test_extract_candidate_text_takes_first_candidate():
    body = {
        "candidates": [
            {"content": {"parts": [{"text": "first"}, {"text": "second part"}]}},
            {"content": {"parts": [{"text": "other candidate"}]}},
        ]
    }
    assert extract_candidate_text(body) == "first"
    assert extract_candidate_text(None) is None
