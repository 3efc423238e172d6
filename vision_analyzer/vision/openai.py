"""OpenAIImageAnalyzer — OpenAI GPT-4o vision backend."""
import base64
import logging
import time
from typing import Optional

import openai
from openai import AsyncOpenAI

from vision_analyzer.constants import (
    MSG_ANALYSIS_API_ERROR,
    MSG_ANALYSIS_DONE,
    MSG_ANALYSIS_START,
    MSG_NO_CONTENT_TEXT,
    OPENAI_ANALYZER_NAME,
    OPENAI_VISION_MODEL,
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


class OpenAIImageAnalyzer(ImageAnalyzer):

    def __init__(
        self,
        api_key: str,
        transport: Optional[Transport] = None,
        model: str = OPENAI_VISION_MODEL,
    ) -> None:
        self._api_key = api_key
        self._transport = transport or HttpxTransport()
        self._model = model

    @property
    def name(self) -> str:
        return OPENAI_ANALYZER_NAME

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

        image_data = base64.standard_b64encode(loaded.data).decode()
        extra: dict = {}
        if configuration.temperature is not None:
            extra["temperature"] = configuration.temperature
        if configuration.max_tokens is not None:
            extra["max_tokens"] = configuration.max_tokens
        messages = [
            {
                "role": "user",
                "content": [
                    {
                        "type": "image_url",
                        "image_url": {"url": f"data:{loaded.mime_type};base64,{image_data}"},
                    },
                    {"type": "text", "text": configuration.prompt},
                ],
            }
        ]
        try:
            async with AsyncOpenAI(api_key=self._api_key) as client:
                response = await client.chat.completions.create(
                    model=self._model,
                    messages=messages,
                    **extra,
                )
        except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
            raise AuthError(exc.message) from exc
        except openai.APIStatusError as exc:
            logger.warning(MSG_ANALYSIS_API_ERROR, self.name, exc.status_code, exc.message)
            raise ApiError(exc.status_code, exc.message) from exc
        except openai.APIConnectionError as exc:
            raise NetworkError(exc) from exc

        match response.choices:
            case [choice, *_] if choice.message.content and choice.message.content.strip():
                text = choice.message.content
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
