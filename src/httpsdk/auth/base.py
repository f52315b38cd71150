from __future__ import annotations
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from httpsdk.request_execution.models import RequestContext


@runtime_checkable
class AuthenticationProvider(Protocol):
    """
    Structural interface for anything that can authenticate an outgoing request.
    Implementations may mutate request headers but must leave the body and
    target URL untouched. Failures are raised as AuthenticationError.
    """

    async def authenticate_request(self, request: RequestContext) -> None: ...
