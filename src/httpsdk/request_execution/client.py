from __future__ import annotations
import logging
from types import TracebackType
from typing import Any, Callable, Protocol, TypeVar

from pydantic import BaseModel

from httpsdk.auth.base import AuthenticationProvider
from httpsdk.core.exceptions import ErrorCode, ErrorDetail, ServiceError, TransportError
from httpsdk.request_execution.extensions import with_default_auth_provider
from httpsdk.request_execution.middleware.common import AuthenticationMiddleware
from httpsdk.request_execution.middleware.interceptors import RedirectMiddleware, RetryMiddleware
from httpsdk.request_execution.middleware.pipeline import MIDDLEWARE_FUNC, MiddlewarePipeline
from httpsdk.request_execution.models import (
    RequestContext,
    RequestExchange,
    RequestType,
    TransportRequest,
)
from httpsdk.request_execution.serializer import JsonSerializer, Serializer
from httpsdk.request_execution.transport.base import TransportEngine


T = TypeVar("T")

AuthProviderFactory = Callable[[], AuthenticationProvider]


class BaseClient(Protocol):
    """What requests, decorators and monitors need from their owning client."""
    authentication_provider: AuthenticationProvider | None
    per_request_auth_provider: AuthProviderFactory | None
    serializer: Serializer

    async def send(self, context: RequestContext) -> RequestExchange: ...


class _ErrorBody(BaseModel):
    code: str = ErrorCode.GENERAL_EXCEPTION.value
    message: str | None = None


class _ErrorResponse(BaseModel):
    error: _ErrorBody


def default_middleware() -> list[MIDDLEWARE_FUNC]:
    """authentication -> retry -> redirect, in front of the transport"""
    return [AuthenticationMiddleware(), RetryMiddleware(), RedirectMiddleware()]


class ApiClient:
    """
    Owning client for requests. It is a thin orchestration layer between
    request-building code and the Transport Layer:
    • Holds the default authentication provider and the optional per-request
      provider factory used by the request decorators.
    • Owns and runs the middleware pipeline.
    • Holds the body codec.
    • Manages the transport lifecycle through `async with`.

    The client is shared read-only across requests and monitors.
    """

    def __init__(
        self,
        transport: TransportEngine,
        *,
        authentication_provider: AuthenticationProvider | None = None,
        per_request_auth_provider: AuthProviderFactory | None = None,
        serializer: Serializer | None = None,
        middleware: list[MIDDLEWARE_FUNC] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.transport = transport
        self.authentication_provider = authentication_provider
        self.per_request_auth_provider = per_request_auth_provider
        self.serializer: Serializer = serializer or JsonSerializer()
        self._logger = logger or logging.getLogger(self.__class__.__name__)
        self._pipeline = MiddlewarePipeline(middleware if middleware is not None else default_middleware())

    @property
    def middleware(self) -> tuple[MIDDLEWARE_FUNC, ...]:
        """Handlers in chain order, outermost first."""
        return tuple(self._pipeline)

    def add_middleware(self, middleware: MIDDLEWARE_FUNC) -> None:
        self._pipeline.add(middleware)

    async def __aenter__(self) -> "ApiClient":
        await self.transport.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.transport.__aexit__(exc_type, exc_val, exc_tb)

    def build_request(
        self,
        method: RequestType | str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        json: Any | None = None,
        data: Any | None = None,
    ) -> RequestContext:
        """Create a request owned by this client, with the default auth provider installed."""
        context = RequestContext(
            method=RequestType(method),
            url=url,
            headers=dict(headers or {}),
            params=params,
            json=json,
            data=data,
            client=self,
        )
        return with_default_auth_provider(context)

    async def send(self, context: RequestContext) -> RequestExchange:
        """
        Execute a single HTTP request defined by the RequestContext through
        the middleware pipeline and underlying Transport layer.
        """

        async def terminal(req: RequestExchange) -> RequestExchange:
            transport_request = TransportRequest(
                method=req.context.method.value,
                url=req.context.url,
                headers=dict(req.context.headers),
                params=req.context.params,
                json=req.context.json,
                data=req.context.data,
            )
            transport_response = await self.transport.send(transport_request)

            req.status_code = transport_response.status
            req.headers = dict(transport_response.headers or {})
            req.body = transport_response.body

            if transport_response.error:
                req.success = False
                req.error_message = transport_response.error
            else:
                req.success = (
                    transport_response.status is not None
                    and transport_response.status < 400
                )
                req.error_message = None

            return req

        initial = RequestExchange(context=context)
        return await self._pipeline.execute(initial, terminal)

    def raise_for_status(self, exchange: RequestExchange) -> None:
        """Raise TransportError when nothing came back, ServiceError for 4xx/5xx."""
        if exchange.status_code is None:
            raise TransportError(exchange.error_message)

        if exchange.status_code < 400:
            return

        error = self.serializer.deserialize(exchange.body, _ErrorResponse)
        if error is not None:
            detail = ErrorDetail(error.error.code, error.error.message)
        else:
            detail = ErrorDetail(ErrorCode.GENERAL_EXCEPTION, f"HTTP {exchange.status_code}")

        raise ServiceError(detail, status_code=exchange.status_code, headers=exchange.headers)

    async def send_and_deserialize(self, context: RequestContext, result_type: type[T]) -> T | None:
        exchange = await self.send(context)
        self.raise_for_status(exchange)
        return self.serializer.deserialize(exchange.body, result_type)
