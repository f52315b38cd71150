from .middleware import (
    base_exchange,
    base_request_context,
    scripted_handler,
    terminal_handler_ok,
    terminal_handler_fail,
)
from .transport import (
    FakeTransportEngine,
    failed_response,
    json_response,
)


__all__ = [
    'base_exchange',
    'base_request_context',
    'scripted_handler',
    'terminal_handler_ok',
    'terminal_handler_fail',
    'FakeTransportEngine',
    'failed_response',
    'json_response',
]
