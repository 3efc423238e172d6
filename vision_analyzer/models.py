"""Value objects: image inputs, analysis configuration, results and presets."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from os import PathLike
from typing import Optional, TypeAlias, Union

from vision_analyzer.constants import (
    DEFAULT_MIME_TYPE,
    DEFAULT_PROMPT,
    DEFAULT_TEMPERATURE,
    DETAILED_MAX_TOKENS,
    DETAILED_PROMPT,
    DETAILED_TEMPERATURE,
    THUMBNAIL_MAX_TOKENS,
    THUMBNAIL_PROMPT,
    THUMBNAIL_TEMPERATURE,
)
from vision_analyzer.mime import mime_type_for

JSONValue: TypeAlias = Union[
    dict[str, "JSONValue"], list["JSONValue"], str, int, float, bool, None
]
JSONObject: TypeAlias = dict[str, JSONValue]


# ── image inputs ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ImageBytes:
    data: bytes
    mime_type: str


@dataclass(frozen=True)
class LocalFile:
    path: str | PathLike[str]

    @property
    def mime_type(self) -> str:
        return mime_type_for(self.path)


@dataclass(frozen=True)
class RemoteUrl:
    url: str

    @property
    def mime_type(self) -> str:
        """Unknown until the image is downloaded."""
        return DEFAULT_MIME_TYPE


ImageInput: TypeAlias = ImageBytes | LocalFile | RemoteUrl


# ── configuration ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class AnalysisConfiguration:
    prompt: str
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    additional_parameters: Optional[JSONObject] = None

    def __post_init__(self) -> None:
        match self.max_tokens:
            case int() as n if n <= 0:
                raise ValueError(f"max_tokens must be positive, got {n}")
            case _:
                pass
        match self.temperature:
            case None:
                pass
            case t if not 0.0 <= t <= 1.0:
                raise ValueError(f"temperature must be within [0, 1], got {t}")
            case _:
                pass


DEFAULT_CONFIGURATION = AnalysisConfiguration(
    prompt=DEFAULT_PROMPT,
    temperature=DEFAULT_TEMPERATURE,
)

THUMBNAIL_CONFIGURATION = AnalysisConfiguration(
    prompt=THUMBNAIL_PROMPT,
    temperature=THUMBNAIL_TEMPERATURE,
    max_tokens=THUMBNAIL_MAX_TOKENS,
)

DETAILED_CONFIGURATION = AnalysisConfiguration(
    prompt=DETAILED_PROMPT,
    temperature=DETAILED_TEMPERATURE,
    max_tokens=DETAILED_MAX_TOKENS,
)


# ── results ───────────────────────────────────────────────────────────────────


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AnalysisMetadata:
    mime_type: str
    image_size_bytes: int
    analyzer_name: str
    processing_time_seconds: Optional[float] = None
    timestamp_utc: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        if self.image_size_bytes < 0:
            raise ValueError(f"image_size_bytes must be >= 0, got {self.image_size_bytes}")
        if self.processing_time_seconds is not None and self.processing_time_seconds < 0:
            raise ValueError(
                f"processing_time_seconds must be >= 0, got {self.processing_time_seconds}"
            )


@dataclass(frozen=True)
class AnalysisResult:
    raw_response: str
    metadata: AnalysisMetadata
    parsed_data: Optional[JSONObject] = None
