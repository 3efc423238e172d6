"""ImageAnalyzer — abstract base for image analysis backends."""
from abc import ABC, abstractmethod
from os import PathLike

from vision_analyzer.models import (
    DEFAULT_CONFIGURATION,
    AnalysisConfiguration,
    AnalysisResult,
    ImageBytes,
    ImageInput,
    LocalFile,
    RemoteUrl,
)


class ImageAnalyzer(ABC):
    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    async def analyze(
        self,
        image: ImageInput,
        configuration: AnalysisConfiguration = DEFAULT_CONFIGURATION,
    ) -> AnalysisResult:
        """Analyze one image and return its description. Raises AnalysisError on failure."""
        ...


# ── input-type shortcuts ──────────────────────────────────────────────────────


async def analyze_file(
    analyzer: ImageAnalyzer,
    path: str | PathLike[str],
    configuration: AnalysisConfiguration = DEFAULT_CONFIGURATION,
) -> AnalysisResult:
    return await analyzer.analyze(LocalFile(path), configuration)


async def analyze_url(
    analyzer: ImageAnalyzer,
    url: str,
    configuration: AnalysisConfiguration = DEFAULT_CONFIGURATION,
) -> AnalysisResult:
    return await analyzer.analyze(RemoteUrl(url), configuration)


async def analyze_bytes(
    analyzer: ImageAnalyzer,
    data: bytes,
    mime_type: str,
    configuration: AnalysisConfiguration = DEFAULT_CONFIGURATION,
) -> AnalysisResult:
    return await analyzer.analyze(ImageBytes(data, mime_type), configuration)
