# Middleware components that observe but does not change the request or response
import logging
import time

from httpsdk.request_execution.models import RequestExchange
from httpsdk.request_execution.middleware.pipeline import (
    NEXT_CALL,
    Middleware,
    MiddlewareFactory,
    MiddlewareType
)


@MiddlewareFactory.register(MiddlewareType.LOGGING)
class LoggingMiddleware(Middleware):
    """
    Logs each hop in both directions. Lines go to the logger and to
    RequestExchange.metadata["logs"]; the round-trip duration goes to
    RequestExchange.metadata["timing"].
    """

    def __init__(self, level: int = logging.DEBUG) -> None:
        self._level = level
        self._logger = logging.getLogger(self.__class__.__name__)

    def _log(self, request_exchange: RequestExchange, line: str) -> None:
        request_exchange.metadata.setdefault("logs", []).append(line)
        self._logger.log(self._level, line)

    async def __call__(self, request_exchange: RequestExchange, next_call: NEXT_CALL) -> RequestExchange:
        self._log(request_exchange, f"-> {request_exchange.context.method.value} {request_exchange.context.url}")

        start = time.monotonic()
        result = await next_call(request_exchange)
        duration = time.monotonic() - start

        timing = dict(result.metadata.get("timing", {}))
        timing["total_seconds"] = float(f"{duration:.2f}")
        result.metadata["timing"] = timing

        if result.status_code:
            self._log(result, f"<- {result.status_code} {result.context.url}")
        else:
            self._log(result, f"<- FAILED {result.context.url}: {result.error_message}")

        return result
