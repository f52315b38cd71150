from httpsdk.request_execution.middleware.pipeline import (
    MIDDLEWARE_FUNC,
    NEXT_CALL,
    Middleware,
    MiddlewareFactory,
    MiddlewarePipeline,
    MiddlewareType,
)
from httpsdk.request_execution.middleware.common import AuthenticationMiddleware
from httpsdk.request_execution.middleware.interceptors import (
    RedirectMiddleware,
    RetryMiddleware,
    parse_retry_after,
)
from httpsdk.request_execution.middleware.listeners import LoggingMiddleware

__all__ = [
    "MIDDLEWARE_FUNC",
    "NEXT_CALL",
    "Middleware",
    "MiddlewareFactory",
    "MiddlewarePipeline",
    "MiddlewareType",
    "AuthenticationMiddleware",
    "RedirectMiddleware",
    "RetryMiddleware",
    "parse_retry_after",
    "LoggingMiddleware",
]
