from enum import Enum
from typing import Awaitable, Callable, Iterator, Protocol

from httpsdk.request_execution.models import RequestExchange
from httpsdk.core.abstract_factory import TypeAbstractFactory


NEXT_CALL = Callable[[RequestExchange], Awaitable[RequestExchange]]
MIDDLEWARE_FUNC = Callable[[RequestExchange, NEXT_CALL], Awaitable[RequestExchange]]


class MiddlewareType(str, Enum):
    AUTHENTICATION = "authentication"
    RETRY = "retry"
    REDIRECT = "redirect"
    LOGGING = "logging"


class Middleware(Protocol):
    """
    One link of the handler chain: `await handler(exchange, next_call)`.

    Contract for implementations:
      • `next_call` sends the exchange through everything downstream (the
        remaining handlers, then the transport) and resolves to the exchange
        holding the response. A handler may call it zero times (short-circuit),
        once, or several times (retry, redirect).
      • The handler must return a RequestExchange; it is usually the same
        object it received, mutated in place.
      • Per-request settings are read from
        `exchange.context.middleware_options` under the handler's own
        OptionKind (RETRY, REDIRECT, AUTHENTICATION). When the request carries
        no option of that kind the handler uses the option it was built with.
        A handler never reads or writes another handler's option.
      • Exceptions propagate to the caller of ApiClient.send unless a handler
        upstream catches them.
    """

    async def __call__(
        self,
        request_exchange: RequestExchange,
        next_call: NEXT_CALL
    ) -> RequestExchange:
        ...


class MiddlewareFactory(TypeAbstractFactory[MiddlewareType, Middleware]):
    """Registry for Middleware components"""
    ...


def _link(handler: MIDDLEWARE_FUNC, downstream: NEXT_CALL) -> NEXT_CALL:
    async def call(exchange: RequestExchange) -> RequestExchange:
        result = await handler(exchange, downstream)
        if not isinstance(result, RequestExchange):
            name = getattr(handler, "__name__", type(handler).__name__)
            raise TypeError(f"Middleware {name} returned {type(result).__name__}, expected RequestExchange")
        return result

    return call


class MiddlewarePipeline:
    """
    Ordered handler chain. The first handler added is the outermost: it sees
    the request first and the response last. `execute` wraps the handlers
    around the terminal transport call.

    The chain is composed once per `execute` from a snapshot of the handler
    list, so adding a handler while requests are in flight only affects
    later requests.
    """

    def __init__(self, handlers: list[MIDDLEWARE_FUNC] | None = None) -> None:
        self._handlers: list[MIDDLEWARE_FUNC] = list(handlers or [])

    def add(self, middleware: MIDDLEWARE_FUNC) -> None:
        self._handlers.append(middleware)

    def __iter__(self) -> Iterator[MIDDLEWARE_FUNC]:
        return iter(tuple(self._handlers))

    def __len__(self) -> int:
        return len(self._handlers)

    def compose(self, terminal_handler: NEXT_CALL) -> NEXT_CALL:
        call = terminal_handler
        for handler in reversed(tuple(self._handlers)):
            call = _link(handler, call)
        return call

    async def execute(
        self,
        initial: RequestExchange,
        terminal_handler: NEXT_CALL,
    ) -> RequestExchange:
        return await self.compose(terminal_handler)(initial)
