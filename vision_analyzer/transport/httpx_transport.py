"""HttpxTransport — Transport backed by httpx.AsyncClient."""
import logging
from typing import Mapping, Optional

import httpx

from vision_analyzer.constants import HTTP_TIMEOUT_SECONDS
from vision_analyzer.transport.client import Transport, TransportError, TransportResponse

logger = logging.getLogger(__name__)


class HttpxTransport(Transport):
    """Without an injected client a fresh AsyncClient is opened per request,
    so no connection outlives the call that made it."""

    def __init__(
        self,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._timeout = timeout
        self._client = client

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        try:
            match self._client:
                case None:
                    async with httpx.AsyncClient(
                        timeout=self._timeout, follow_redirects=True
                    ) as client:
                        response = await client.request(method, url, headers=dict(headers), content=body)
                case client:
                    response = await client.request(method, url, headers=dict(headers), content=body)
        except httpx.HTTPError as exc:
            logger.debug("%s request failed: %s", method, exc)
            raise TransportError(str(exc) or type(exc).__name__) from exc
        return TransportResponse(
            status_code=response.status_code,
            body=response.content,
            content_type=response.headers.get("content-type"),
        )
