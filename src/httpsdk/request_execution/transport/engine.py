import asyncio
import ssl
from types import TracebackType
from typing_extensions import Self
import aiohttp
from aiohttp import ClientSession, ClientTimeout, TCPConnector

from httpsdk.config.models.transport import TcpConnectionConfig, TlsConfig
from httpsdk.core.abstract_factory import TypeAbstractFactory
from httpsdk.request_execution.models import TransportRequest, TransportResponse
from httpsdk.request_execution.transport.base import TransportEngineType, TransportEngine


class TransportEngineFactory(TypeAbstractFactory[TransportEngineType, TransportEngine]):
    pass


@TransportEngineFactory.register(TransportEngineType.AIOHTTP)
class AiohttpEngine(TransportEngine):
    """
    TransportEngine adapter that uses aiohttp.ClientSession to make HTTP requests.
    Relative request URLs are resolved against base_url; absolute ones (such as
    monitor URLs or redirect targets) are used as given.
    """

    def __init__(
        self,
        base_url: str = "",
        connector_config: TcpConnectionConfig | None = None,
        base_timeout: int = 30,
    ) -> None:
        super().__init__(base_url)
        self._connector_config = connector_config or TcpConnectionConfig()
        self._timeout = ClientTimeout(total=base_timeout)

        self._session: ClientSession | None = None

    @property
    def session(self) -> ClientSession:
        if self._session is None:
            raise RuntimeError(f"{self.__class__.__name__} must be used as an async context manager")
        return self._session

    def _build_ssl_context(self, cfg: TlsConfig) -> ssl.SSLContext:
        context = ssl.create_default_context(purpose=ssl.Purpose.SERVER_AUTH)

        if not cfg.verify:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE

        if cfg.ca_bundle:
            context.load_verify_locations(cafile=str(cfg.ca_bundle))

        if cfg.client_cert:
            context.load_cert_chain(
                certfile=str(cfg.client_cert),
                keyfile=str(cfg.client_key) if cfg.client_key else None,
            )

        return context

    def _build_tcp_connector(self, cfg: TcpConnectionConfig) -> TCPConnector:
        kwargs = cfg.model_dump(exclude={"tls"})

        if cfg.tls and cfg.tls.enabled:
            kwargs["ssl"] = self._build_ssl_context(cfg.tls)

        return TCPConnector(**kwargs)

    async def __aenter__(self) -> Self:
        connector = self._build_tcp_connector(self._connector_config)
        self._session = ClientSession(connector=connector, timeout=self._timeout)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def send(self, request: TransportRequest) -> TransportResponse:
        url = self.resolve_url(request.url)
        session = self.session

        try:
            async with session.request(
                request.method,
                url,
                headers=request.headers,
                params=request.params,
                json=request.json,
                data=request.data,
                allow_redirects=False,
            ) as response:
                body = await response.read()
                return TransportResponse(
                    status=response.status,
                    headers=dict(response.headers),
                    body=body,
                    error=None,
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            return self.failure_response(request, url, e)
