from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from enum import Enum
from types import TracebackType

from httpsdk.request_execution.models import TransportRequest, TransportResponse


class TransportEngineType(str, Enum):
    AIOHTTP = "aiohttp"


class TransportEngine(ABC):
    """
    Sends exactly one HTTP request per `send` call and hands back a
    TransportResponse. Redirects are returned as-is and nothing is resent;
    the middleware pipeline owns both.

    `send` does not raise for network faults. Connection errors and timeouts
    come back as a response with `status=None` and `error` set (see
    `failure_response`), which RetryMiddleware treats as retryable and
    ApiClient.raise_for_status turns into TransportError.

    Engines holding a session open it in `__aenter__` and close it in
    `__aexit__`; the defaults here are no-ops for engines without one.
    """

    def __init__(self, base_url: str = "") -> None:
        self._base_url = base_url.rstrip("/")
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def base_url(self) -> str:
        return self._base_url

    def resolve_url(self, url: str) -> str:
        """Relative URLs are joined to base_url; absolute URLs pass through."""
        if url.startswith(("http://", "https://")) or not self._base_url:
            return url
        return f"{self._base_url}/{url.lstrip('/')}"

    def failure_response(self, request: TransportRequest, url: str, error: BaseException) -> TransportResponse:
        self._logger.warning("%s %s failed: %s: %s", request.method, url, type(error).__name__, error)
        return TransportResponse(
            status=None,
            headers={},
            body=None,
            error=f"{type(error).__name__}: {error}",
        )

    async def __aenter__(self) -> "TransportEngine":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        return None

    @abstractmethod
    async def send(self, request: TransportRequest) -> TransportResponse:
        ...
