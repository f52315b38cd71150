from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from httpsdk.auth.token.models import Token


class TokenProvider(ABC):
    """
    Token-acquisition backend. Concrete OAuth flows live outside this package;
    they receive the scopes and force-refresh flag configured on the request.
    """

    @abstractmethod
    async def get_token(
        self,
        scopes: Sequence[str] | None = None,
        force_refresh: bool = False,
    ) -> Token: ...

    @abstractmethod
    def token_telemetry(self) -> Mapping[str, Any]: ...


class StaticTokenProvider(TokenProvider):
    """Always hands out the same, never-expiring token."""

    def __init__(self, token: str) -> None:
        self._token = token

    async def get_token(
        self,
        scopes: Sequence[str] | None = None,
        force_refresh: bool = False,
    ) -> Token:
        return Token(
            token_value=self._token,
            expires_at=datetime.max.replace(tzinfo=timezone.utc),
        )

    def token_telemetry(self) -> dict[str, Any]:
        return {"provider": self.__class__.__name__, "path": "static"}
