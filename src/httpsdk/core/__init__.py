from httpsdk.core.abstract_factory import TypeAbstractFactory
from httpsdk.core.exceptions import (
    AuthenticationError,
    ErrorCode,
    ErrorDetail,
    ServiceError,
    TransportError,
)
from httpsdk.core.logging import configure_logging, set_aiohttp_logging_level

__all__ = [
    "TypeAbstractFactory",
    "AuthenticationError",
    "ErrorCode",
    "ErrorDetail",
    "ServiceError",
    "TransportError",
    "configure_logging",
    "set_aiohttp_logging_level",
]
