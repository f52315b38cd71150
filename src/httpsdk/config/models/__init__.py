from httpsdk.config.models.client import ClientConfig
from httpsdk.config.models.middleware import (
    MiddlewareConfigModel,
    MiddlewareConfigUnion,
    RedirectMiddlewareModel,
    RetryMiddlewareModel,
    SimpleMiddlewareModel,
)
from httpsdk.config.models.transport import (
    AiohttpEngineConfig,
    TcpConnectionConfig,
    TlsConfig,
)

__all__ = [
    "ClientConfig",
    "MiddlewareConfigModel",
    "MiddlewareConfigUnion",
    "RedirectMiddlewareModel",
    "RetryMiddlewareModel",
    "SimpleMiddlewareModel",
    "AiohttpEngineConfig",
    "TcpConnectionConfig",
    "TlsConfig",
]
