"""GeminiImageAnalyzer — Google Gemini vision backend over a pluggable Transport."""
import base64
import json
import logging
import time
from typing import Optional
from urllib.parse import urlencode

from vision_analyzer.constants import (
    GEMINI_ANALYZER_NAME,
    GEMINI_ENDPOINT,
    GEMINI_KEY_PARAM,
    JSON_CONTENT_TYPE,
    MSG_ANALYSIS_API_ERROR,
    MSG_ANALYSIS_DONE,
    MSG_ANALYSIS_START,
    MSG_UNKNOWN_API_ERROR,
)
from vision_analyzer.errors import ApiError, InvalidImageDataError, NetworkError, ParsingError
from vision_analyzer.loader import LoadedImage, load_image
from vision_analyzer.models import (
    DEFAULT_CONFIGURATION,
    AnalysisConfiguration,
    AnalysisMetadata,
    AnalysisResult,
    ImageInput,
    JSONObject,
)
from vision_analyzer.parser import error_message, extract_text, parse_json_body, try_extract_structured
from vision_analyzer.transport.client import Transport, TransportResponse
from vision_analyzer.transport.httpx_transport import HttpxTransport
from vision_analyzer.vision.client import ImageAnalyzer

logger = logging.getLogger(__name__)


# ── pure helpers (module-level so tests can import them directly) ──────────────


def build_generation_config(configuration: AnalysisConfiguration) -> Optional[JSONObject]:
    """Provider generation settings, or None when neither is set."""
    settings: JSONObject = {}
    match configuration.temperature:
        case None:
            pass
        case temperature:
            settings["temperature"] = temperature
    match configuration.max_tokens:
        case None:
            pass
        case max_tokens:
            settings["maxOutputTokens"] = max_tokens
    return settings or None


def build_request_body(image: LoadedImage, configuration: AnalysisConfiguration) -> JSONObject:
    body: JSONObject = {
        "contents": [
            {
                "role": "user",
                "parts": [
                    {"text": configuration.prompt},
                    {
                        "inline_data": {
                            "mime_type": image.mime_type,
                            "data": base64.standard_b64encode(image.data).decode(),
                        }
                    },
                ],
            }
        ]
    }
    match build_generation_config(configuration):
        case None:
            pass
        case generation_config:
            body["generationConfig"] = generation_config
    return body


def _error_message_or_default(body: bytes) -> str:
    try:
        payload = parse_json_body(body)
    except ParsingError:
        return MSG_UNKNOWN_API_ERROR
    match error_message(payload):
        case None:
            return MSG_UNKNOWN_API_ERROR
        case message:
            return message


class GeminiImageAnalyzer(ImageAnalyzer):
    """Holds no per-call state; one instance serves concurrent analyze() calls."""

    def __init__(
        self,
        api_key: str,
        transport: Optional[Transport] = None,
        endpoint: str = GEMINI_ENDPOINT,
    ) -> None:
        self._api_key = api_key
        self._transport = transport or HttpxTransport()
        self._endpoint = endpoint

    @property
    def name(self) -> str:
        return GEMINI_ANALYZER_NAME

    @classmethod
    def thumbnail_analyzer(cls, api_key: str, transport: Optional[Transport] = None) -> "GeminiImageAnalyzer":
        """Analyzer meant for THUMBNAIL_CONFIGURATION."""
        return cls(api_key, transport)

    @classmethod
    def detailed_analyzer(cls, api_key: str, transport: Optional[Transport] = None) -> "GeminiImageAnalyzer":
        """Analyzer meant for DETAILED_CONFIGURATION."""
        return cls(api_key, transport)

    def _request_url(self) -> str:
        return f"{self._endpoint}?{urlencode({GEMINI_KEY_PARAM: self._api_key})}"

    async def analyze(
        self,
        image: ImageInput,
        configuration: AnalysisConfiguration = DEFAULT_CONFIGURATION,
    ) -> AnalysisResult:
        started = time.monotonic()
        loaded = await load_image(image, self._transport)
        match len(loaded.data):
            case 0:
                raise InvalidImageDataError()
            case size:
                logger.debug(MSG_ANALYSIS_START, loaded.mime_type, size, self.name)

        response = await self._send(build_request_body(loaded, configuration))
        text = self._read_text(response)
        parsed = try_extract_structured(text)

        elapsed = time.monotonic() - started
        logger.info(MSG_ANALYSIS_DONE, self.name, elapsed)
        return AnalysisResult(
            raw_response=text,
            parsed_data=parsed,
            metadata=AnalysisMetadata(
                mime_type=loaded.mime_type,
                image_size_bytes=len(loaded.data),
                analyzer_name=self.name,
                processing_time_seconds=elapsed,
            ),
        )

    async def _send(self, body: JSONObject) -> TransportResponse:
        try:
            return await self._transport.send(
                "POST",
                self._request_url(),
                {"Content-Type": JSON_CONTENT_TYPE},
                json.dumps(body).encode(),
            )
        except Exception as exc:
            raise NetworkError(exc) from exc

    def _read_text(self, response: TransportResponse) -> str:
        match response.ok:
            case False:
                message = _error_message_or_default(response.body)
                logger.warning(MSG_ANALYSIS_API_ERROR, self.name, response.status_code, message)
                raise ApiError(response.status_code, message)
            case True:
                pass

        payload = parse_json_body(response.body)
        # An error embedded in a 2xx body is always reported as 200.
        match error_message(payload):
            case str() as message:
                logger.warning(MSG_ANALYSIS_API_ERROR, self.name, 200, message)
                raise ApiError(200, message)
            case None:
                return extract_text(payload)
