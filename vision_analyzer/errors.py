"""AnalysisError hierarchy: every failure an analyzer surfaces."""
from vision_analyzer.constants import (
    MSG_API_ERROR,
    MSG_AUTH_ERROR,
    MSG_INVALID_IMAGE_DATA,
    MSG_NETWORK_ERROR,
    MSG_PARSING_ERROR,
    MSG_UNKNOWN_ERROR,
    MSG_UNSUPPORTED_FORMAT,
)


class AnalysisError(Exception):
    """Base class; str() gives the human-readable description."""


class InvalidImageDataError(AnalysisError):

    def __init__(self) -> None:
        super().__init__(MSG_INVALID_IMAGE_DATA)


class UnsupportedFormatError(AnalysisError):
    """Reserved for format gating; nothing raises it yet."""

    def __init__(self, format: str) -> None:
        self.format = format
        super().__init__(MSG_UNSUPPORTED_FORMAT.format(format=format))


class NetworkError(AnalysisError):

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(MSG_NETWORK_ERROR.format(cause=cause))


class ApiError(AnalysisError):

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(MSG_API_ERROR.format(status_code=status_code, message=message))


class AuthError(AnalysisError):

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(MSG_AUTH_ERROR.format(message=message))


class ParsingError(AnalysisError):

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(MSG_PARSING_ERROR.format(message=message))


class UnknownAnalysisError(AnalysisError):

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(MSG_UNKNOWN_ERROR.format(cause=cause))
