"""Normalizes every ImageInput into bytes + MIME type."""
import asyncio
import logging
from pathlib import Path
from typing import NamedTuple

from vision_analyzer.constants import MSG_REMOTE_FETCH, MSG_REMOTE_FETCH_STATUS
from vision_analyzer.errors import NetworkError, UnknownAnalysisError
from vision_analyzer.mime import mime_type_for
from vision_analyzer.models import ImageBytes, ImageInput, LocalFile, RemoteUrl
from vision_analyzer.transport.client import Transport

logger = logging.getLogger(__name__)


class LoadedImage(NamedTuple):
    data: bytes
    mime_type: str


async def _read_file(path: LocalFile) -> LoadedImage:
    try:
        data = await asyncio.to_thread(Path(path.path).read_bytes)
    except OSError as exc:
        raise UnknownAnalysisError(exc) from exc
    return LoadedImage(data, mime_type_for(path.path))


async def _fetch_remote(remote: RemoteUrl, transport: Transport) -> LoadedImage:
    logger.debug(MSG_REMOTE_FETCH, remote.url)
    try:
        response = await transport.send("GET", remote.url, {})
    except Exception as exc:
        raise NetworkError(exc) from exc
    match response.ok:
        case False:
            logger.warning(MSG_REMOTE_FETCH_STATUS, remote.url, response.status_code)
        case True:
            pass
    return LoadedImage(response.body, response.media_type or mime_type_for(remote.url))


async def load_image(image: ImageInput, transport: Transport) -> LoadedImage:
    """Single attempt per call; file reads run in a worker thread."""
    match image:
        case ImageBytes(data=data, mime_type=mime_type):
            return LoadedImage(data, mime_type)
        case LocalFile():
            return await _read_file(image)
        case RemoteUrl():
            return await _fetch_remote(image, transport)
        case _:
            raise TypeError(f"Unsupported image input: {type(image).__name__}")
