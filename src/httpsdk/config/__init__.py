from httpsdk.config.loader import ConfigLoader
from httpsdk.config.preprocessor import (
    ConfigPreprocessor,
    ConfigValue,
    EnvironmentPreprocessor,
)
from httpsdk.config.models import (
    AiohttpEngineConfig,
    ClientConfig,
    MiddlewareConfigModel,
    RedirectMiddlewareModel,
    RetryMiddlewareModel,
    SimpleMiddlewareModel,
    TcpConnectionConfig,
    TlsConfig,
)

__all__ = [
    "ConfigLoader",
    "ConfigPreprocessor",
    "ConfigValue",
    "EnvironmentPreprocessor",
    "AiohttpEngineConfig",
    "ClientConfig",
    "MiddlewareConfigModel",
    "RedirectMiddlewareModel",
    "RetryMiddlewareModel",
    "SimpleMiddlewareModel",
    "TcpConnectionConfig",
    "TlsConfig",
]
