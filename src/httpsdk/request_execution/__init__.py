from httpsdk.request_execution.options import (
    AuthenticationHandlerOption,
    AuthenticationProviderOption,
    MiddlewareOptions,
    OptionKind,
    RedirectHandlerOption,
    RetryHandlerOption,
    SecurePassword,
    UserAccount,
    UserAssertion,
)
from httpsdk.request_execution.models import (
    RequestContext,
    RequestExchange,
    RequestType,
    TransportRequest,
    TransportResponse,
)
from httpsdk.request_execution.extensions import (
    ConfigurableRequest,
    with_default_auth_provider,
    with_force_refresh,
    with_max_redirects,
    with_max_retry,
    with_max_retry_time,
    with_per_request_auth_provider,
    with_scopes,
    with_should_retry,
    with_user_account,
    with_user_assertion,
    with_username_password,
)
from httpsdk.request_execution.middleware import (
    MIDDLEWARE_FUNC,
    NEXT_CALL,
    AuthenticationMiddleware,
    LoggingMiddleware,
    Middleware,
    MiddlewareFactory,
    MiddlewarePipeline,
    MiddlewareType,
    RedirectMiddleware,
    RetryMiddleware,
)
from httpsdk.request_execution.serializer import JsonSerializer, Serializer
from httpsdk.request_execution.transport import AiohttpEngine, TransportEngine
from httpsdk.request_execution.client import ApiClient, BaseClient, default_middleware
from httpsdk.request_execution.async_monitor import (
    POLLING_INTERVAL,
    AsyncMonitor,
    AsyncOperationStatus,
)

__all__ = [
    "AuthenticationHandlerOption",
    "AuthenticationProviderOption",
    "MiddlewareOptions",
    "OptionKind",
    "RedirectHandlerOption",
    "RetryHandlerOption",
    "SecurePassword",
    "UserAccount",
    "UserAssertion",
    "RequestContext",
    "RequestExchange",
    "RequestType",
    "TransportRequest",
    "TransportResponse",
    "ConfigurableRequest",
    "with_default_auth_provider",
    "with_force_refresh",
    "with_max_redirects",
    "with_max_retry",
    "with_max_retry_time",
    "with_per_request_auth_provider",
    "with_scopes",
    "with_should_retry",
    "with_user_account",
    "with_user_assertion",
    "with_username_password",
    "MIDDLEWARE_FUNC",
    "NEXT_CALL",
    "AuthenticationMiddleware",
    "LoggingMiddleware",
    "Middleware",
    "MiddlewareFactory",
    "MiddlewarePipeline",
    "MiddlewareType",
    "RedirectMiddleware",
    "RetryMiddleware",
    "JsonSerializer",
    "Serializer",
    "AiohttpEngine",
    "TransportEngine",
    "ApiClient",
    "BaseClient",
    "default_middleware",
    "POLLING_INTERVAL",
    "AsyncMonitor",
    "AsyncOperationStatus",
]
