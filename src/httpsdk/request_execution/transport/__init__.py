from httpsdk.request_execution.transport.base import TransportEngine, TransportEngineType
from httpsdk.request_execution.transport.engine import AiohttpEngine, TransportEngineFactory

__all__ = [
    "TransportEngine",
    "TransportEngineType",
    "AiohttpEngine",
    "TransportEngineFactory",
]
