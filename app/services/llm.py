import logging
from typing import Any
from uuid import uuid4

import httpx

from app.core.config import settings
from app.core.exceptions import EmptyResponse
from app.core.exceptions import RequestRejected
from app.core.exceptions import TransportFailure

# Configure module logger
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------
# Gemini REST client (async), one attempt per call
# ---------------------------------------------------------------
# Connect timeout is the transport default; reads are unbounded unless configured.
timeout_config = httpx.Timeout(
    settings.LLM_CONNECT_TIMEOUT,
    read=settings.LLM_READ_TIMEOUT,
)

client = httpx.AsyncClient(
    timeout=timeout_config,
    headers={"Content-Type": "application/json"},
)


def generation_url() -> str:
    return f"{settings.gemini_api_base}/models/{settings.model_id}:generateContent"


def build_payload(prompt: str) -> dict[str, Any]:
    """Wrap *prompt* in the contents/parts/text envelope expected by generateContent."""
    return {"contents": [{"parts": [{"text": prompt}]}]}


def extract_candidate_text(body: Any) -> str | None:
    """Return ``candidates[0].content.parts[0].text`` or None when the body lacks it."""
    if not isinstance(body, dict):
        return None
    candidates = body.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None
    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    text = parts[0].get("text")
    if not isinstance(text, str) or not text:
        return None
    return text


async def generate_text(prompt: str, credential: str) -> str:
    """Send *prompt* to the generation endpoint and return the first candidate's text.

    The credential travels as the ``key`` query parameter and is never logged.
    Exactly one request is made; failures are not retried.

    Raises:
        TransportFailure: the request could not be completed.
        RequestRejected: the endpoint answered with a non-success status.
        EmptyResponse: the answer was successful but carried no candidate text.
    """
    request_id = str(uuid4())
    logger.info("[%s] Calling generateContent with model: %s", request_id, settings.model_id)

    try:
        rsp = await client.post(
            generation_url(),
            params={"key": credential},
            json=build_payload(prompt),
        )
    except httpx.HTTPError as e:
        # str(e) is not logged: some transport errors embed the request URL.
        logger.error("[%s] Generation request failed: %s", request_id, type(e).__name__)
        raise TransportFailure(f"Could not reach the generation service ({type(e).__name__})") from e

    if not rsp.is_success:
        logger.error("[%s] Generation endpoint returned status %d", request_id, rsp.status_code)
        raise RequestRejected(rsp.status_code)

    try:
        body = rsp.json()
    except ValueError as e:  # JSONDecodeError or an undecodable body
        logger.error("[%s] Generation response is not valid JSON (%d bytes)", request_id, len(rsp.content))
        raise EmptyResponse() from e

    text = extract_candidate_text(body)
    if text is None:
        logger.error("[%s] No candidate text in generation response: %s", request_id, str(body)[:200])
        raise EmptyResponse()

    logger.debug("[%s] Generation response received, length: %d chars", request_id, len(text))
    return text
