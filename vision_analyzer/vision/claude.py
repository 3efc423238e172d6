"""ClaudeImageAnalyzer — Anthropic Claude vision backend."""
import base64
import logging
import time
from typing import Optional

import anthropic
from anthropic import AsyncAnthropic

from vision_analyzer.constants import (
    CLAUDE_ANALYZER_NAME,
    CLAUDE_DEFAULT_MAX_TOKENS,
    CLAUDE_VISION_MODEL,
    MSG_ANALYSIS_API_ERROR,
    MSG_ANALYSIS_DONE,
    MSG_ANALYSIS_START,
    MSG_NO_CONTENT_TEXT,
)
from vision_analyzer.errors import ApiError, AuthError, InvalidImageDataError, NetworkError, ParsingError
from vision_analyzer.loader import load_image
from vision_analyzer.models import (
    DEFAULT_CONFIGURATION,
    AnalysisConfiguration,
    AnalysisMetadata,
    AnalysisResult,
    ImageInput,
)
from vision_analyzer.parser import try_extract_structured
from vision_analyzer.transport.client import Transport
from vision_analyzer.transport.httpx_transport import HttpxTransport
from vision_analyzer.vision.client import ImageAnalyzer

logger = logging.getLogger(__name__)


class ClaudeImageAnalyzer(ImageAnalyzer):

    def __init__(
        self,
        api_key: str,
        transport: Optional[Transport] = None,
        model: str = CLAUDE_VISION_MODEL,
    ) -> None:
        self._api_key = api_key
        self._transport = transport or HttpxTransport()
        self._model = model

    @property
    def name(self) -> str:
        return CLAUDE_ANALYZER_NAME

    async def analyze(
        self,
        image: ImageInput,
        configuration: AnalysisConfiguration = DEFAULT_CONFIGURATION,
    ) -> AnalysisResult:
        started = time.monotonic()
        loaded = await load_image(image, self._transport)
        if not loaded.data:
            raise InvalidImageDataError()
        logger.debug(MSG_ANALYSIS_START, loaded.mime_type, len(loaded.data), self.name)

        extra = (
            {"temperature": configuration.temperature}
            if configuration.temperature is not None
            else {}
        )
        messages = [
            {
                "role": "user",
                "content": [
                    {
                        "type": "image",
                        "source": {
                            "type": "base64",
                            "media_type": loaded.mime_type,
                            "data": base64.standard_b64encode(loaded.data).decode(),
                        },
                    },
                    {"type": "text", "text": configuration.prompt},
                ],
            }
        ]
        try:
            async with AsyncAnthropic(api_key=self._api_key) as client:
                message = await client.messages.create(
                    model=self._model,
                    max_tokens=configuration.max_tokens or CLAUDE_DEFAULT_MAX_TOKENS,
                    messages=messages,
                    **extra,
                )
        except (anthropic.AuthenticationError, anthropic.PermissionDeniedError) as exc:
            raise AuthError(exc.message) from exc
        except anthropic.APIStatusError as exc:
            logger.warning(MSG_ANALYSIS_API_ERROR, self.name, exc.status_code, exc.message)
            raise ApiError(exc.status_code, exc.message) from exc
        except anthropic.APIConnectionError as exc:
            raise NetworkError(exc) from exc

        texts = [block.text for block in message.content if getattr(block, "type", None) == "text"]
        match texts:
            case [str() as first, *_] if first.strip():
                text = first
            case _:
                raise ParsingError(MSG_NO_CONTENT_TEXT % self.name)

        elapsed = time.monotonic() - started
        logger.info(MSG_ANALYSIS_DONE, self.name, elapsed)
        return AnalysisResult(
            raw_response=text,
            parsed_data=try_extract_structured(text),
            metadata=AnalysisMetadata(
                mime_type=loaded.mime_type,
                image_size_bytes=len(loaded.data),
                analyzer_name=self.name,
                processing_time_seconds=elapsed,
            ),
        )
