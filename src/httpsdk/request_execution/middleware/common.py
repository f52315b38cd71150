import logging

from httpsdk.auth.base import AuthenticationProvider
from httpsdk.request_execution.models import RequestExchange
from httpsdk.request_execution.options import OptionKind
from httpsdk.request_execution.middleware.pipeline import (
    NEXT_CALL,
    Middleware,
    MiddlewareFactory,
    MiddlewareType,
)


@MiddlewareFactory.register(MiddlewareType.AUTHENTICATION)
class AuthenticationMiddleware(Middleware):
    """
    Authenticates the outgoing request with the provider from the request's
    authentication option, falling back to the provider given here. With
    neither, the request goes out unauthenticated.
    """

    def __init__(self, authentication_provider: AuthenticationProvider | None = None) -> None:
        self.authentication_provider = authentication_provider
        self._logger = logging.getLogger(self.__class__.__name__)

    def _resolve_provider(self, request_exchange: RequestExchange) -> AuthenticationProvider | None:
        option = request_exchange.context.middleware_options.get(OptionKind.AUTHENTICATION)
        if option is not None and option.authentication_provider is not None:
            return option.authentication_provider
        return self.authentication_provider

    async def __call__(self, request_exchange: RequestExchange, next_call: NEXT_CALL) -> RequestExchange:
        provider = self._resolve_provider(request_exchange)

        if provider is not None:
            await provider.authenticate_request(request_exchange.context)
            request_exchange.metadata["authentication_provider"] = type(provider).__name__
        else:
            self._logger.debug(
                "No authentication provider for %s %s",
                request_exchange.context.method.value,
                request_exchange.context.url,
            )

        return await next_call(request_exchange)
