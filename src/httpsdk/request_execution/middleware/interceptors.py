# Wrap the downstream call and resend it: retry and redirect
import asyncio
import logging
import time
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import Iterable
from urllib.parse import urljoin, urlsplit

import aiohttp

from httpsdk.request_execution.models import RequestExchange, RequestType
from httpsdk.request_execution.options import (
    OptionKind,
    RedirectHandlerOption,
    RetryHandlerOption,
)
from httpsdk.request_execution.middleware.pipeline import (
    NEXT_CALL,
    Middleware,
    MiddlewareFactory,
    MiddlewareType,
)


RETRY_AFTER = "Retry-After"
RETRY_ATTEMPT = "Retry-Attempt"
RETRYABLE_STATUS_CODES = (429, 503, 504)
MAX_MAX_RETRY = 10
MAX_DELAY = 180.0

LOCATION = "Location"
AUTHORIZATION = "Authorization"
REDIRECT_STATUS_CODES = (301, 302, 303, 307, 308)
SEE_OTHER = 303
MAX_MAX_REDIRECT = 20


def parse_retry_after(raw: str | None) -> float | None:
    """Parse Retry-After header values (delta seconds or HTTP date) into seconds."""
    if raw is None or not raw.strip():
        return None

    raw = raw.strip()
    try:
        return max(0.0, float(raw))
    except ValueError:
        pass

    try:
        parsed = parsedate_to_datetime(raw)
    except (ValueError, TypeError, OverflowError):
        return None

    if parsed.utcoffset() is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return max(0.0, (parsed - datetime.now(timezone.utc)).total_seconds())


@MiddlewareFactory.register(MiddlewareType.RETRY)
class RetryMiddleware(Middleware):
    """
    Resend throttled or unavailable responses (429/503/504) and transport
    failures: exchanges that came back without a status (the engine caught a
    connection error or timeout) or retryable aiohttp exceptions raised by the
    terminal handler. Transport failures keep the engine error message once
    retries run out.

    The request's RetryHandlerOption wins over the defaults given here. A
    retryable response is resent only while `should_retry(attempt, exchange)`
    is true, the retry count is below `max_retry`, and (when
    `retries_time_limit` is non-zero) the elapsed time plus the next delay fits
    the budget. The first bound reached makes the last response final.
    """

    def __init__(
        self,
        max_retry: int = 3,
        delay: float = 3.0,
        retries_time_limit: timedelta | float = timedelta(0),
        retry_status_codes: Iterable[int] = RETRYABLE_STATUS_CODES,
        max_delay: float = MAX_DELAY,
    ) -> None:
        if not isinstance(retries_time_limit, timedelta):
            retries_time_limit = timedelta(seconds=retries_time_limit)
        self.default_option = RetryHandlerOption(
            max_retry=max_retry,
            delay=delay,
            retries_time_limit=retries_time_limit,
        )
        self.retry_status_codes = set(retry_status_codes)
        self.max_delay = max_delay
        self._logger = logging.getLogger(self.__class__.__name__)

    def _resolve_option(self, request_exchange: RequestExchange) -> RetryHandlerOption:
        option = request_exchange.context.middleware_options.get(OptionKind.RETRY)
        option = option if option is not None else self.default_option

        if not 0 <= option.max_retry <= MAX_MAX_RETRY:
            raise ValueError(f"max_retry must be between 0 and {MAX_MAX_RETRY}, got {option.max_retry}")
        if option.delay < 0:
            raise ValueError(f"delay must not be negative, got {option.delay}")
        if option.retries_time_limit < timedelta(0):
            raise ValueError("retries_time_limit must not be negative")

        return option

    def __is_retryable_exception(self, exc: Exception) -> bool:
        return isinstance(
            exc,
            (
                aiohttp.ClientConnectionError,
                aiohttp.ClientPayloadError,
                asyncio.TimeoutError,
            )
        )

    def __is_retryable_status(self, request_exchange: RequestExchange) -> bool:
        return (
            request_exchange.status_code is not None
            and request_exchange.status_code in self.retry_status_codes
        )

    def __is_transport_failure(self, request_exchange: RequestExchange) -> bool:
        # engines report connection errors and timeouts as a response without status
        return request_exchange.status_code is None and request_exchange.error_message is not None

    def _retry_delay(self, request_exchange: RequestExchange | None, base_delay: float, retry: int) -> float:
        """Server Retry-After if sent, else exponential backoff from base_delay."""
        retry_after = None
        if request_exchange is not None:
            retry_after = parse_retry_after(request_exchange.header(RETRY_AFTER))
        if retry_after is None:
            retry_after = base_delay * (2 ** (retry - 1))
        return min(retry_after, self.max_delay)

    def _within_time_limit(self, option: RetryHandlerOption, started: float, delay: float) -> bool:
        budget = option.retries_time_limit.total_seconds()
        if budget == 0:
            return True
        return (time.monotonic() - started) + delay <= budget

    async def __call__(self, request_exchange: RequestExchange, next_call: NEXT_CALL) -> RequestExchange:
        option = self._resolve_option(request_exchange)
        logs = request_exchange.metadata.setdefault("logs", [])
        started = time.monotonic()
        retry = 0

        # a context sent before may still carry the header of its last retry
        request_exchange.context.without_header(RETRY_ATTEMPT)

        while True:
            request_exchange.attempts = retry + 1
            try:
                request_exchange = await next_call(request_exchange)
            except Exception as exc:
                if not self.__is_retryable_exception(exc) or retry >= option.max_retry:
                    logs.append(f"[RetryMiddleware] {type(exc).__name__} on attempt {retry + 1}, giving up")
                    raise
                delay = self._retry_delay(None, option.delay, retry + 1)
                if not self._within_time_limit(option, started, delay):
                    logs.append("[RetryMiddleware] Retry time limit reached")
                    raise
                logs.append(
                    f"[RetryMiddleware] Retryable exception on attempt {retry + 1}: "
                    f"{type(exc).__name__}: {exc}"
                )
            else:
                transport_failure = self.__is_transport_failure(request_exchange)
                if not transport_failure and not self.__is_retryable_status(request_exchange):
                    return request_exchange

                outcome = (
                    f"transport failure ({request_exchange.error_message})"
                    if transport_failure
                    else f"HTTP {request_exchange.status_code}"
                )
                if retry >= option.max_retry:
                    request_exchange.success = False
                    request_exchange.metadata["retry_attempts"] = retry + 1
                    if not transport_failure:
                        request_exchange.error_message = (
                            f"Retry attempts exhausted ({outcome}) after {retry + 1} attempts"
                        )
                    logs.append(f"[RetryMiddleware] Retry attempts exhausted ({outcome}) after {retry + 1} attempts")
                    return request_exchange

                if not option.should_retry(retry + 1, request_exchange):
                    logs.append(f"[RetryMiddleware] should_retry declined {outcome}")
                    return request_exchange

                delay = self._retry_delay(request_exchange, option.delay, retry + 1)
                if not self._within_time_limit(option, started, delay):
                    request_exchange.metadata["retry_attempts"] = retry + 1
                    logs.append(
                        f"[RetryMiddleware] Retry time limit of "
                        f"{option.retries_time_limit.total_seconds()}s reached ({outcome})"
                    )
                    return request_exchange

                logs.append(f"[RetryMiddleware] Got retryable {outcome} on attempt {retry + 1}")

            retry += 1
            request_exchange.context.headers[RETRY_ATTEMPT] = str(retry)
            self._logger.info(
                "Retry %s/%s for %s in %.2fs",
                retry, option.max_retry, request_exchange.context.url, delay,
            )
            await asyncio.sleep(delay)


@MiddlewareFactory.register(MiddlewareType.REDIRECT)
class RedirectMiddleware(Middleware):
    """
    Follow 301/302/303/307/308 responses that carry a Location header, up to
    the request's RedirectHandlerOption.max_redirect (or the default given
    here). A 303 is followed with a body-less GET. Hops to another host drop
    the Authorization header. Once the cap is reached the last redirect
    response is returned as final.
    """

    def __init__(self, max_redirect: int = 5) -> None:
        self.default_option = RedirectHandlerOption(max_redirect=max_redirect)
        self._logger = logging.getLogger(self.__class__.__name__)

    def _resolve_option(self, request_exchange: RequestExchange) -> RedirectHandlerOption:
        option = request_exchange.context.middleware_options.get(OptionKind.REDIRECT)
        option = option if option is not None else self.default_option

        if not 0 <= option.max_redirect <= MAX_MAX_REDIRECT:
            raise ValueError(
                f"max_redirect must be between 0 and {MAX_MAX_REDIRECT}, got {option.max_redirect}"
            )
        return option

    def _is_redirect(self, request_exchange: RequestExchange) -> bool:
        return request_exchange.status_code in REDIRECT_STATUS_CODES

    async def __call__(self, request_exchange: RequestExchange, next_call: NEXT_CALL) -> RequestExchange:
        option = self._resolve_option(request_exchange)
        logs = request_exchange.metadata.setdefault("logs", [])
        hops = request_exchange.metadata.setdefault("redirects", [])

        request_exchange = await next_call(request_exchange)
        followed = 0

        while self._is_redirect(request_exchange) and option.should_redirect(request_exchange):
            location = request_exchange.header(LOCATION)
            if not location:
                logs.append(f"[RedirectMiddleware] HTTP {request_exchange.status_code} without Location")
                return request_exchange

            if followed >= option.max_redirect:
                request_exchange.metadata["redirect_limit_reached"] = True
                logs.append(f"[RedirectMiddleware] Redirect limit of {option.max_redirect} reached")
                self._logger.warning(
                    "Redirect limit of %s reached at %s", option.max_redirect, request_exchange.context.url
                )
                return request_exchange

            context = request_exchange.context
            target = urljoin(context.url, location)

            if urlsplit(target).netloc != urlsplit(context.url).netloc:
                context.without_header(AUTHORIZATION)

            if request_exchange.status_code == SEE_OTHER:
                context.method = RequestType.GET
                context.json = None
                context.data = None

            hops.append({
                "status_code": request_exchange.status_code,
                "from": context.url,
                "to": target,
            })
            logs.append(f"[RedirectMiddleware] {request_exchange.status_code} {context.url} -> {target}")
            context.url = target
            followed += 1

            request_exchange = await next_call(request_exchange)

        return request_exchange
