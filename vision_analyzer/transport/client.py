"""Transport — abstract base for the single-attempt HTTP capability."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Mapping, Optional


class TransportError(Exception):
    """Connection or protocol failure; no response was received."""


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: bytes
    content_type: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code <= 299

    @property
    def media_type(self) -> Optional[str]:
        """Content type without parameters, e.g. 'image/png; q=1' → 'image/png'."""
        match self.content_type:
            case str() as value if value.split(";", 1)[0].strip():
                return value.split(";", 1)[0].strip().lower()
            case _:
                return None


class Transport(ABC):
    @abstractmethod
    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        """Issue one request and return status + body. Raises TransportError on failure."""
        ...
