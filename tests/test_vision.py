"""Claude / OpenAI ImageAnalyzer backend tests"""
import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

import anthropic
import openai

from vision_analyzer.errors import ApiError, AuthError, InvalidImageDataError, NetworkError, ParsingError
from vision_analyzer.models import AnalysisConfiguration, ImageBytes
from vision_analyzer.vision.claude import ClaudeImageAnalyzer
from vision_analyzer.vision.client import ImageAnalyzer
from vision_analyzer.vision.openai import OpenAIImageAnalyzer

PNG = ImageBytes(b"fake-image-bytes", "image/png")


def http_response(status: int, url: str) -> httpx.Response:
    return httpx.Response(status, request=httpx.Request("POST", url))


def test_backends_implement_abc():
    assert issubclass(ClaudeImageAnalyzer, ImageAnalyzer)
    assert issubclass(OpenAIImageAnalyzer, ImageAnalyzer)
    assert ClaudeImageAnalyzer(api_key="k").name == "Claude Vision API"
    assert OpenAIImageAnalyzer(api_key="k").name == "OpenAI Vision API"


# ── ClaudeImageAnalyzer ───────────────────────────────────────────────────────

CLAUDE_URL = "https://api.anthropic.com/v1/messages"


def claude_message(text: str) -> MagicMock:
    block = MagicMock(type="text", text=text)
    return MagicMock(content=[block])


async def test_claude_analyze_calls_api_with_image():
    analyzer = ClaudeImageAnalyzer(api_key="test-key")

    with patch("vision_analyzer.vision.claude.AsyncAnthropic") as mock_cls:
        mock_anthropic = AsyncMock()
        mock_anthropic.messages.create = AsyncMock(return_value=claude_message("  a cat  "))
        mock_cls.return_value = mock_anthropic
        mock_anthropic.__aenter__.return_value = mock_anthropic

        result = await analyzer.analyze(PNG)

    mock_cls.assert_called_once_with(api_key="test-key")
    call_kwargs = mock_anthropic.messages.create.call_args.kwargs
    content = call_kwargs["messages"][0]["content"]
    image_blocks = [b for b in content if b["type"] == "image"]
    assert image_blocks[0]["source"]["media_type"] == "image/png"
    assert call_kwargs["temperature"] == 0.7
    assert call_kwargs["max_tokens"] == 1024
    assert result.raw_response == "  a cat  "
    assert result.parsed_data is None
    mock_anthropic.__aexit__.assert_awaited_once()
    assert result.metadata.image_size_bytes == len(PNG.data)
    assert result.metadata.analyzer_name == "Claude Vision API"


async def test_claude_analyze_uses_configuration():
    analyzer = ClaudeImageAnalyzer(api_key="test-key")
    config = AnalysisConfiguration(prompt="What is the error in this screenshot?", max_tokens=300)

    with patch("vision_analyzer.vision.claude.AsyncAnthropic") as mock_cls:
        mock_anthropic = AsyncMock()
        mock_anthropic.messages.create = AsyncMock(return_value=claude_message('```json\n{"error": "404"}\n```'))
        mock_cls.return_value = mock_anthropic
        mock_anthropic.__aenter__.return_value = mock_anthropic

        result = await analyzer.analyze(PNG, config)

    call_kwargs = mock_anthropic.messages.create.call_args.kwargs
    text_blocks = [b for b in call_kwargs["messages"][0]["content"] if b["type"] == "text"]
    assert text_blocks[0]["text"] == "What is the error in this screenshot?"
    assert call_kwargs["max_tokens"] == 300
    assert "temperature" not in call_kwargs
    assert result.parsed_data == {"error": "404"}


async def test_claude_empty_image_never_calls_api():
    with patch("vision_analyzer.vision.claude.AsyncAnthropic") as mock_cls:
        with pytest.raises(InvalidImageDataError):
            await ClaudeImageAnalyzer(api_key="k").analyze(ImageBytes(b"", "image/png"))

    mock_cls.assert_not_called()


@pytest.mark.parametrize(
    "error, expected",
    [
        (anthropic.AuthenticationError("invalid x-api-key", response=http_response(401, CLAUDE_URL), body=None), AuthError),
        (anthropic.PermissionDeniedError("forbidden", response=http_response(403, CLAUDE_URL), body=None), AuthError),
        (anthropic.RateLimitError("slow down", response=http_response(429, CLAUDE_URL), body=None), ApiError),
        (anthropic.APIConnectionError(request=httpx.Request("POST", CLAUDE_URL)), NetworkError),
    ],
)
async def test_claude_classifies_sdk_errors(error, expected):
    with patch("vision_analyzer.vision.claude.AsyncAnthropic") as mock_cls:
        mock_anthropic = AsyncMock()
        mock_anthropic.messages.create = AsyncMock(side_effect=error)
        mock_cls.return_value = mock_anthropic
        mock_anthropic.__aenter__.return_value = mock_anthropic

        with pytest.raises(expected):
            await ClaudeImageAnalyzer(api_key="k").analyze(PNG)


async def test_claude_rate_limit_keeps_status_code():
    error = anthropic.RateLimitError("slow down", response=http_response(429, CLAUDE_URL), body=None)

    with patch("vision_analyzer.vision.claude.AsyncAnthropic") as mock_cls:
        mock_anthropic = AsyncMock()
        mock_anthropic.messages.create = AsyncMock(side_effect=error)
        mock_cls.return_value = mock_anthropic
        mock_anthropic.__aenter__.return_value = mock_anthropic

        with pytest.raises(ApiError) as exc_info:
            await ClaudeImageAnalyzer(api_key="k").analyze(PNG)

    assert exc_info.value.status_code == 429
    assert exc_info.value.message == "slow down"


async def test_claude_without_text_is_parsing_error():
    with patch("vision_analyzer.vision.claude.AsyncAnthropic") as mock_cls:
        mock_anthropic = AsyncMock()
        mock_anthropic.messages.create = AsyncMock(return_value=MagicMock(content=[]))
        mock_cls.return_value = mock_anthropic
        mock_anthropic.__aenter__.return_value = mock_anthropic

        with pytest.raises(ParsingError):
            await ClaudeImageAnalyzer(api_key="k").analyze(PNG)


# ── OpenAIImageAnalyzer ───────────────────────────────────────────────────────

OPENAI_URL = "https://api.openai.com/v1/chat/completions"


def openai_response(content) -> MagicMock:
    mock_choice = MagicMock()
    mock_choice.message.content = content
    mock_response = MagicMock()
    mock_response.choices = [mock_choice]
    return mock_response


async def test_openai_analyze_calls_api_with_image():
    analyzer = OpenAIImageAnalyzer(api_key="test-key")

    with patch("vision_analyzer.vision.openai.AsyncOpenAI") as mock_cls:
        mock_openai = AsyncMock()
        mock_openai.chat.completions.create = AsyncMock(return_value=openai_response("  a cat  "))
        mock_cls.return_value = mock_openai
        mock_openai.__aenter__.return_value = mock_openai

        result = await analyzer.analyze(PNG)

    mock_openai.chat.completions.create.assert_called_once()
    call_kwargs = mock_openai.chat.completions.create.call_args.kwargs
    content = call_kwargs["messages"][0]["content"]
    image_blocks = [b for b in content if b["type"] == "image_url"]
    assert image_blocks[0]["image_url"]["url"].startswith("data:image/png;base64,")
    assert call_kwargs["temperature"] == 0.7
    assert "max_tokens" not in call_kwargs
    assert result.raw_response == "  a cat  "
    mock_openai.__aexit__.assert_awaited_once()


async def test_openai_analyze_uses_configuration():
    analyzer = OpenAIImageAnalyzer(api_key="test-key")
    config = AnalysisConfiguration(prompt="What is the error?", max_tokens=64, temperature=0.1)

    with patch("vision_analyzer.vision.openai.AsyncOpenAI") as mock_cls:
        mock_openai = AsyncMock()
        mock_openai.chat.completions.create = AsyncMock(return_value=openai_response('{"answer": 42}'))
        mock_cls.return_value = mock_openai
        mock_openai.__aenter__.return_value = mock_openai

        result = await analyzer.analyze(PNG, config)

    call_kwargs = mock_openai.chat.completions.create.call_args.kwargs
    text_blocks = [b for b in call_kwargs["messages"][0]["content"] if b["type"] == "text"]
    assert text_blocks[0]["text"] == "What is the error?"
    assert call_kwargs["max_tokens"] == 64
    assert call_kwargs["temperature"] == 0.1
    assert result.parsed_data == {"answer": 42}


@pytest.mark.parametrize("content", [None, "", "   "])
async def test_openai_without_text_is_parsing_error(content):
    with patch("vision_analyzer.vision.openai.AsyncOpenAI") as mock_cls:
        mock_openai = AsyncMock()
        mock_openai.chat.completions.create = AsyncMock(return_value=openai_response(content))
        mock_cls.return_value = mock_openai
        mock_openai.__aenter__.return_value = mock_openai

        with pytest.raises(ParsingError):
            await OpenAIImageAnalyzer(api_key="k").analyze(PNG)


@pytest.mark.parametrize(
    "error, expected",
    [
        (openai.AuthenticationError("bad key", response=http_response(401, OPENAI_URL), body=None), AuthError),
        (openai.InternalServerError("boom", response=http_response(500, OPENAI_URL), body=None), ApiError),
        (openai.APIConnectionError(request=httpx.Request("POST", OPENAI_URL)), NetworkError),
        (openai.APITimeoutError(request=httpx.Request("POST", OPENAI_URL)), NetworkError),
    ],
)
async def test_openai_classifies_sdk_errors(error, expected):
    with patch("vision_analyzer.vision.openai.AsyncOpenAI") as mock_cls:
        mock_openai = AsyncMock()
        mock_openai.chat.completions.create = AsyncMock(side_effect=error)
        mock_cls.return_value = mock_openai
        mock_openai.__aenter__.return_value = mock_openai

        with pytest.raises(expected):
            await OpenAIImageAnalyzer(api_key="k").analyze(PNG)


async def test_sdk_clients_are_closed_when_the_call_fails():
    error = anthropic.APIConnectionError(request=httpx.Request("POST", CLAUDE_URL))

    with patch("vision_analyzer.vision.claude.AsyncAnthropic") as mock_cls:
        mock_anthropic = AsyncMock()
        mock_anthropic.messages.create = AsyncMock(side_effect=error)
        mock_cls.return_value = mock_anthropic
        mock_anthropic.__aenter__.return_value = mock_anthropic

        with pytest.raises(NetworkError):
            await ClaudeImageAnalyzer(api_key="k").analyze(PNG)

    mock_anthropic.__aexit__.assert_awaited_once()
