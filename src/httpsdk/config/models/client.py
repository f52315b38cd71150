from pydantic import BaseModel, Field

from httpsdk.config.models.middleware import (
    MiddlewareConfigUnion,
    RedirectMiddlewareModel,
    RetryMiddlewareModel,
    SimpleMiddlewareModel,
)
from httpsdk.config.models.transport import AiohttpEngineConfig


def default_middleware() -> list[MiddlewareConfigUnion]:
    return [
        SimpleMiddlewareModel(type="authentication"),
        RetryMiddlewareModel(),
        RedirectMiddlewareModel(),
    ]


class ClientConfig(BaseModel):
    """
    Top level client configuration. `middleware` is applied in list order,
    outermost first, in front of the transport.
    """
    base_url: str = ""
    transport: AiohttpEngineConfig = Field(default_factory=AiohttpEngineConfig)
    middleware: list[MiddlewareConfigUnion] = Field(default_factory=default_middleware)
