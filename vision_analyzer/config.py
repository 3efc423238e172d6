from dataclasses import dataclass
from typing import Optional
import os
from dotenv import load_dotenv

from vision_analyzer.constants import GEMINI_ENDPOINT, HTTP_TIMEOUT_SECONDS


@dataclass(frozen=True)
class Config:
    gemini_api_key: str
    gemini_endpoint: str
    log_level: str
    http_timeout: float
    anthropic_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        gemini_api_key = os.getenv("GEMINI_API_KEY")
        gemini_endpoint = os.getenv("GEMINI_ENDPOINT") or GEMINI_ENDPOINT
        log_level = os.getenv("LOG_LEVEL", "INFO")
        http_timeout = os.getenv("HTTP_TIMEOUT", str(HTTP_TIMEOUT_SECONDS))
        anthropic_api_key = os.getenv("ANTHROPIC_API_KEY") or None
        openai_api_key = os.getenv("OPENAI_API_KEY") or None

        return cls._validate(
            gemini_api_key=gemini_api_key,
            gemini_endpoint=gemini_endpoint,
            log_level=log_level,
            http_timeout=float(http_timeout),
            anthropic_api_key=anthropic_api_key,
            openai_api_key=openai_api_key,
        )

    @staticmethod
    def _validate(
        gemini_api_key: Optional[str],
        gemini_endpoint: str,
        log_level: str,
        http_timeout: float,
        anthropic_api_key: Optional[str],
        openai_api_key: Optional[str],
    ) -> "Config":
        match gemini_api_key:
            case None | "":
                raise ValueError("GEMINI_API_KEY must be set in .env")
            case _:
                pass

        match http_timeout:
            case t if t <= 0:
                raise ValueError("HTTP_TIMEOUT must be a positive number of seconds")
            case _:
                pass

        return Config(
            gemini_api_key=gemini_api_key,
            gemini_endpoint=gemini_endpoint,
            log_level=log_level,
            http_timeout=http_timeout,
            anthropic_api_key=anthropic_api_key,
            openai_api_key=openai_api_key,
        )
