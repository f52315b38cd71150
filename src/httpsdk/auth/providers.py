from __future__ import annotations
import base64
import logging
from typing import TYPE_CHECKING, Awaitable, Callable, Sequence

from httpsdk.auth.token.models import Token
from httpsdk.auth.token.token_provider import TokenProvider
from httpsdk.core.exceptions import AuthenticationError
from httpsdk.request_execution.options import AuthenticationProviderOption, OptionKind

if TYPE_CHECKING:
    from httpsdk.request_execution.models import RequestContext


AUTHORIZATION = "Authorization"

# Seconds before expiry at which a cached token is refreshed
TOKEN_REFRESH_MARGIN = 30


def provider_option(request: RequestContext) -> AuthenticationProviderOption | None:
    """The AuthenticationProviderOption configured on a request, if any."""
    option = request.middleware_options.get(OptionKind.AUTHENTICATION)
    if option is None:
        return None
    return option.authentication_provider_option


class DelegateAuthenticationProvider:
    """Authenticates requests with a caller-supplied coroutine function."""

    def __init__(self, authenticate: Callable[[RequestContext], Awaitable[None]]) -> None:
        self._authenticate = authenticate

    async def authenticate_request(self, request: RequestContext) -> None:
        await self._authenticate(request)


class TokenAuthenticationProvider:
    """
    Adds `Authorization: Bearer <token>` using a TokenProvider. Scopes and the
    force-refresh flag come from the request's AuthenticationProviderOption,
    falling back to the scopes given here.

    A token that expires within `refresh_margin` seconds is requested again
    with force_refresh=True; if the provider still hands back an expired
    token, authentication fails.
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        scopes: Sequence[str] | None = None,
        refresh_margin: int = TOKEN_REFRESH_MARGIN,
    ) -> None:
        self.token_provider = token_provider
        self._scopes = tuple(scopes) if scopes is not None else None
        self._refresh_margin = refresh_margin
        self._logger = logging.getLogger(self.__class__.__name__)

    async def _get_token(self, scopes: Sequence[str] | None, force_refresh: bool) -> Token:
        try:
            return await self.token_provider.get_token(scopes=scopes, force_refresh=force_refresh)
        except AuthenticationError:
            raise
        except Exception as e:
            self._logger.error("Failed to acquire token: %s: %s", type(e).__name__, e)
            raise AuthenticationError(f"Failed to acquire token: {e}") from e

    async def authenticate_request(self, request: RequestContext) -> None:
        option = provider_option(request)
        scopes = self._scopes
        force_refresh = False
        if option is not None:
            scopes = option.scopes if option.scopes is not None else scopes
            force_refresh = option.force_refresh

        token = await self._get_token(scopes, force_refresh)
        if not force_refresh and token.will_expire_within(self._refresh_margin):
            self._logger.info(
                "Token expires in %.0fs, requesting a fresh one", token.seconds_until_expiration()
            )
            token = await self._get_token(scopes, True)

        if token.is_expired:
            raise AuthenticationError("Token provider returned an expired token")

        request.with_headers({AUTHORIZATION: f"Bearer {token.token_value}"})
        request.metadata["token_provider"] = dict(self.token_provider.token_telemetry())


class UsernamePasswordAuthenticationProvider:
    """
    HTTP Basic authentication from the email and password set with
    `with_username_password`. The password buffer is zeroed once the header
    has been built.
    """

    async def authenticate_request(self, request: RequestContext) -> None:
        option = provider_option(request)
        email = option.user_account.email if option is not None and option.user_account else None
        password = option.password if option is not None else None

        if not email or password is None or password.is_cleared:
            raise AuthenticationError("A username and password are required for this request")

        raw_credentials = f"{email}:{password.reveal()}"
        password.clear()
        b64_credentials = base64.b64encode(raw_credentials.encode("utf-8")).decode("utf-8")
        request.with_headers({AUTHORIZATION: f"Basic {b64_credentials}"})
