"""Entry point — wires Config → Transport → ImageAnalyzer for one image."""
import argparse
import asyncio
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from vision_analyzer.config import Config
from vision_analyzer.constants import (
    BACKEND_CLAUDE,
    BACKEND_GEMINI,
    BACKEND_OPENAI,
    MSG_ANALYZER_STARTING,
    MSG_BACKEND_NOT_CONFIGURED,
    PRESET_DEFAULT,
    PRESET_DETAILED,
    PRESET_THUMBNAIL,
    REMOTE_URL_PREFIXES,
)
from vision_analyzer.errors import AnalysisError
from vision_analyzer.models import (
    DEFAULT_CONFIGURATION,
    DETAILED_CONFIGURATION,
    THUMBNAIL_CONFIGURATION,
    AnalysisConfiguration,
    AnalysisResult,
    ImageInput,
    LocalFile,
    RemoteUrl,
)
from vision_analyzer.transport.httpx_transport import HttpxTransport
from vision_analyzer.vision.claude import ClaudeImageAnalyzer
from vision_analyzer.vision.client import ImageAnalyzer
from vision_analyzer.vision.gemini import GeminiImageAnalyzer
from vision_analyzer.vision.openai import OpenAIImageAnalyzer

logger = logging.getLogger(__name__)

PRESETS: dict[str, AnalysisConfiguration] = {
    PRESET_DEFAULT: DEFAULT_CONFIGURATION,
    PRESET_THUMBNAIL: THUMBNAIL_CONFIGURATION,
    PRESET_DETAILED: DETAILED_CONFIGURATION,
}


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))


def to_image_input(target: str) -> ImageInput:
    match target.lower().startswith(REMOTE_URL_PREFIXES):
        case True:
            return RemoteUrl(target)
        case False:
            return LocalFile(target)


def build_analyzer(config: Config, backend: str) -> Optional[ImageAnalyzer]:
    """Return the analyzer for `backend`, or None when its key is missing."""
    transport = HttpxTransport(timeout=config.http_timeout)
    match backend:
        case b if b == BACKEND_GEMINI:
            return GeminiImageAnalyzer(config.gemini_api_key, transport, config.gemini_endpoint)
        case b if b == BACKEND_CLAUDE and config.anthropic_api_key:
            return ClaudeImageAnalyzer(config.anthropic_api_key, transport)
        case b if b == BACKEND_OPENAI and config.openai_api_key:
            return OpenAIImageAnalyzer(config.openai_api_key, transport)
        case _:
            return None


def _print_result(console: Console, result: AnalysisResult) -> None:
    console.print(result.raw_response, markup=False)
    match result.parsed_data:
        case None:
            pass
        case data:
            console.rule("parsed")
            console.print_json(data=data)
    console.print(
        f"[dim]{result.metadata.analyzer_name} · {result.metadata.mime_type} · "
        f"{result.metadata.image_size_bytes} bytes · "
        f"{result.metadata.processing_time_seconds or 0:.2f}s[/dim]"
    )


def _parse_args(argv: Optional[list[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="vision-analyzer", description="Describe an image.")
    parser.add_argument("image", help="local file path or http(s) URL")
    parser.add_argument("--preset", choices=sorted(PRESETS), default=PRESET_DEFAULT)
    parser.add_argument(
        "--backend",
        choices=(BACKEND_GEMINI, BACKEND_CLAUDE, BACKEND_OPENAI),
        default=BACKEND_GEMINI,
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = _parse_args(argv)
    config = Config.from_env()
    _setup_logging(config.log_level)
    logger.info(MSG_ANALYZER_STARTING)

    console = Console()
    analyzer = build_analyzer(config, args.backend)
    match analyzer:
        case None:
            logger.error(MSG_BACKEND_NOT_CONFIGURED, args.backend)
            return 1
        case _:
            pass

    try:
        result = asyncio.run(analyzer.analyze(to_image_input(args.image), PRESETS[args.preset]))
    except AnalysisError as exc:
        console.print(str(exc), style="red", markup=False)
        return 1
    _print_result(console, result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
