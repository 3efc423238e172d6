"""Typed Gemini response envelope and best-effort JSON recovery."""
import json
import logging
from typing import Optional

from pydantic import BaseModel, ValidationError

from vision_analyzer.constants import (
    ESCAPED_QUOTE,
    FENCE,
    JSON_FENCE,
    MSG_INVALID_JSON_RESPONSE,
    MSG_NO_CANDIDATE_TEXT,
    MSG_NO_STRUCTURED_DATA,
)
from vision_analyzer.errors import ParsingError
from vision_analyzer.models import JSONObject, JSONValue

logger = logging.getLogger(__name__)


# ── provider envelope ─────────────────────────────────────────────────────────


class Part(BaseModel):
    text: Optional[str] = None


class Content(BaseModel):
    parts: list[Part] = []


class Candidate(BaseModel):
    content: Optional[Content] = None


class GeminiResponse(BaseModel):
    candidates: list[Candidate] = []


class ErrorDetail(BaseModel):
    message: str


class ErrorEnvelope(BaseModel):
    error: ErrorDetail


def parse_json_body(body: bytes) -> JSONValue:
    try:
        return json.loads(body)
    except (RecursionError, ValueError) as exc:
        raise ParsingError(MSG_INVALID_JSON_RESPONSE) from exc


def error_message(payload: JSONValue) -> Optional[str]:
    """Return `error.message` when the payload carries one, else None."""
    try:
        return ErrorEnvelope.model_validate(payload).error.message
    except ValidationError:
        return None


def extract_text(payload: JSONValue) -> str:
    """Text of the first part of the first candidate. Raises ParsingError."""
    try:
        envelope = GeminiResponse.model_validate(payload)
    except ValidationError as exc:
        raise ParsingError(MSG_NO_CANDIDATE_TEXT) from exc
    match envelope.candidates:
        case [Candidate(content=Content(parts=[Part(text=str() as text), *_])), *_] if text:
            return text
        case _:
            raise ParsingError(MSG_NO_CANDIDATE_TEXT)


# ── structured extraction ─────────────────────────────────────────────────────


def _strip_fences(text: str) -> str:
    cleaned = text.strip().replace(ESCAPED_QUOTE, '"')
    match cleaned:
        case s if s.startswith(JSON_FENCE):
            cleaned = s[len(JSON_FENCE):]
        case s if s.startswith(FENCE):
            cleaned = s[len(FENCE):]
        case _:
            pass
    if cleaned.endswith(FENCE):
        cleaned = cleaned[: -len(FENCE)]
    return cleaned.strip()


def try_extract_structured(text: str) -> Optional[JSONObject]:
    """Recover a JSON object from (possibly fenced) model output.

    Returns None when the text is not a JSON object. Never raises.
    """
    try:
        value = json.loads(_strip_fences(text))
    except (RecursionError, ValueError):
        logger.debug(MSG_NO_STRUCTURED_DATA)
        return None
    match value:
        case dict():
            return value
        case _:
            logger.debug(MSG_NO_STRUCTURED_DATA)
            return None
