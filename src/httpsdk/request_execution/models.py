from __future__ import annotations
from enum import Enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping

from httpsdk.request_execution.options import MiddlewareOptions

if TYPE_CHECKING:
    from httpsdk.request_execution.client import BaseClient


class RequestType(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


@dataclass
class RequestContext:
    """
    A container to hold everything needed to issue one HTTP request.
    • method: HTTP request type - GET, POST, etc
    • url: Absolute URL, or a path relative to the transport base URL
    • headers: Request headers
    • params: Query string parameters
    • json: Payload in JSON format
    • data: Payload sent as binary data
    • middleware_options: per-request handler configuration (see extensions)
    • client: owning client, used by decorators to resolve auth providers
    • metadata: Metadata associated with the HTTP request
    """
    method: RequestType
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, Any] | None = None
    json: Any | None = None
    data: Any | None = None
    middleware_options: MiddlewareOptions = field(default_factory=MiddlewareOptions)
    client: BaseClient | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def with_headers(self, new_headers: dict[str, str]) -> "RequestContext":
        """Return context with headers added"""
        self.headers = self.headers | new_headers
        return self

    def without_header(self, name: str) -> "RequestContext":
        """Return context with a header removed, matching the name case-insensitively"""
        lowered = name.lower()
        self.headers = {k: v for k, v in self.headers.items() if k.lower() != lowered}
        return self


@dataclass
class RequestExchange:
    """
    Data container for a single HTTP exchange as it travels through the
    middleware pipeline.
    • context: original RequestContext, possibly modified by middleware
    • status_code: HTTP status response code
    • headers: response headers
    • body: raw response body (bytes), if any
    • success: semantic success flag
    • error_message: error description
    • attempts: how many times the request was attempted (retries)
    • metadata: handler logs, redirect history, timings
    """
    context: RequestContext
    status_code: int | None = None
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None
    success: bool = True
    error_message: str | None = None
    attempts: int = 1
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_success_status(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300

    def header(self, name: str) -> str | None:
        """Case-insensitive response header lookup"""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None


@dataclass
class TransportRequest:
    """
    Wire-level HTTP request container for the Transport Layer.
    This data structure allows for the decoupling of the HTTP
    engine from the rest of the pipeline.
    """
    method: str
    url: str
    headers: dict[str, str]
    params: dict[str, Any] | None = None
    json: Any | None = None
    data: Any | None = None


@dataclass
class TransportResponse:
    """
    Wire-level HTTP response container for the Transport Layer.
    `error` is set instead of `status` when no response was received.
    """
    status: int | None
    headers: Mapping[str, str] | None
    body: bytes | None
    error: str | None = None
