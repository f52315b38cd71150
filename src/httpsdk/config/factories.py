from abc import ABC, abstractmethod
from typing import Any, Callable

from httpsdk.auth.base import AuthenticationProvider
from httpsdk.config.models.client import ClientConfig
from httpsdk.config.models.middleware import MiddlewareConfigModel
from httpsdk.config.models.transport import AiohttpEngineConfig
from httpsdk.request_execution.client import ApiClient, AuthProviderFactory
from httpsdk.request_execution.middleware.pipeline import MIDDLEWARE_FUNC, MiddlewareFactory
from httpsdk.request_execution.serializer import Serializer
from httpsdk.request_execution.transport.base import TransportEngine
from httpsdk.request_execution.transport.engine import TransportEngineFactory


class RuntimeFactory(ABC):

    @staticmethod
    @abstractmethod
    def build_factory(cfg: Any, *args, **kwargs) -> Callable[[], Any]: ...


class TransportRuntimeFactory(RuntimeFactory):

    @staticmethod
    def build_factory(cfg: AiohttpEngineConfig, base_url: str) -> Callable[[], TransportEngine]:

        def factory() -> TransportEngine:
            config_kwargs = cfg.to_runtime_args()
            config_kwargs["base_url"] = base_url

            return TransportEngineFactory.create(cfg.type, **config_kwargs)

        return factory


class MiddlewareRuntimeFactory(RuntimeFactory):

    @staticmethod
    def build_factory(cfg: MiddlewareConfigModel) -> Callable[[], MIDDLEWARE_FUNC]:

        def factory() -> MIDDLEWARE_FUNC:
            return MiddlewareFactory.create(cfg.type, **cfg.to_runtime_args())

        return factory

    @staticmethod
    def get_factories(mw_cfgs: list[MiddlewareConfigModel]) -> list[Callable[[], MIDDLEWARE_FUNC]]:

        return [MiddlewareRuntimeFactory.build_factory(cfg) for cfg in mw_cfgs]


class ClientRuntimeFactory(RuntimeFactory):
    """Assemble an ApiClient (transport + middleware chain) from a ClientConfig."""

    @staticmethod
    def build_client(
        cfg: ClientConfig,
        *,
        authentication_provider: AuthenticationProvider | None = None,
        per_request_auth_provider: AuthProviderFactory | None = None,
        serializer: Serializer | None = None,
    ) -> ApiClient:
        transport = TransportRuntimeFactory.build_factory(cfg.transport, cfg.base_url)()
        middleware = [factory() for factory in MiddlewareRuntimeFactory.get_factories(cfg.middleware)]

        return ApiClient(
            transport,
            authentication_provider=authentication_provider,
            per_request_auth_provider=per_request_auth_provider,
            serializer=serializer,
            middleware=middleware,
        )

    @staticmethod
    def build_factory(cfg: ClientConfig, **kwargs: Any) -> Callable[[], ApiClient]:

        def factory() -> ApiClient:
            return ClientRuntimeFactory.build_client(cfg, **kwargs)

        return factory
