"""MIME type resolution from a file path or URL extension."""
import os
import posixpath
from urllib.parse import urlsplit

from vision_analyzer.constants import DEFAULT_MIME_TYPE, MIME_TYPES_BY_EXTENSION


def _extension(path_or_url: str) -> str:
    match urlsplit(path_or_url):
        case parts if parts.scheme and parts.netloc:
            path = parts.path
        case _:
            path = path_or_url
    _, ext = posixpath.splitext(path.replace(os.sep, "/"))
    return ext.lstrip(".").lower()


def mime_type_for(path_or_url: str | os.PathLike[str]) -> str:
    """Map a path's extension to an image MIME type, case-insensitively.

    URLs are resolved from their path component, so query strings and
    fragments are ignored. Unknown or missing extensions fall back to
    application/octet-stream.
    """
    return MIME_TYPES_BY_EXTENSION.get(_extension(os.fspath(path_or_url)), DEFAULT_MIME_TYPE)
