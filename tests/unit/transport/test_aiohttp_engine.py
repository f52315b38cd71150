"""Unit tests for the aiohttp transport engine"""
import asyncio
import pytest
import aiohttp
from aiohttp import ClientSession, TCPConnector
from unittest.mock import AsyncMock, MagicMock

from httpsdk.config.models import TcpConnectionConfig, TlsConfig
from httpsdk.request_execution import AiohttpEngine, TransportRequest, TransportResponse
from httpsdk.request_execution.transport import TransportEngine, TransportEngineFactory, TransportEngineType


def tcp_config_no_tls() -> TcpConnectionConfig:
    return TcpConnectionConfig(limit=10, tls=None)


def mock_session_raising(exc: Exception) -> MagicMock:
    mock_cm = AsyncMock()
    mock_cm.__aenter__ = AsyncMock(side_effect=exc)
    mock_cm.__aexit__ = AsyncMock()

    mock_session = MagicMock()
    mock_session.request = MagicMock(return_value=mock_cm)
    return mock_session


def mock_session_answering(status: int, body: bytes, headers: dict) -> MagicMock:
    response = MagicMock()
    response.status = status
    response.headers = headers
    response.read = AsyncMock(return_value=body)

    mock_cm = AsyncMock()
    mock_cm.__aenter__ = AsyncMock(return_value=response)
    mock_cm.__aexit__ = AsyncMock(return_value=False)

    mock_session = MagicMock()
    mock_session.request = MagicMock(return_value=mock_cm)
    return mock_session


@pytest.mark.unit
@pytest.mark.transport
class TestResolveUrl:

    @pytest.mark.parametrize(
        "base_url, url, expected",
        [
            ("https://api.example.com/v1/", "/me", "https://api.example.com/v1/me"),
            ("https://api.example.com/v1", "me/drive", "https://api.example.com/v1/me/drive"),
            ("https://api.example.com/v1", "https://other.example.com/op/1", "https://other.example.com/op/1"),
            ("", "/relative", "/relative"),
        ],
    )
    def test_resolve(self, base_url, url, expected):
        assert AiohttpEngine(base_url=base_url).resolve_url(url) == expected


@pytest.mark.unit
@pytest.mark.transport
@pytest.mark.asyncio
class TestAiohttpEngineLifecycle:
    """Tests for async context manager protocol"""

    async def test_aenter_creates_session(self):
        engine = AiohttpEngine(base_url="https://example.com", connector_config=tcp_config_no_tls())

        async with engine as e:
            assert e is engine
            assert isinstance(engine.session, ClientSession)

    async def test_aexit_closes_session(self):
        engine = AiohttpEngine(base_url="https://example.com", connector_config=tcp_config_no_tls())

        async with engine:
            session = engine.session

        assert session.closed
        with pytest.raises(RuntimeError):
            engine.session

    async def test_send_without_session_raises(self):
        """
        GIVEN an engine that was never entered
        WHEN send is called
        THEN it raises RuntimeError
        """
        engine = AiohttpEngine(base_url="https://example.com")

        with pytest.raises(RuntimeError, match="async context manager"):
            await engine.send(TransportRequest(method="GET", url="test", headers={}))

    async def test_tcp_connector_uses_config(self):
        engine = AiohttpEngine(connector_config=tcp_config_no_tls())

        connector = engine._build_tcp_connector(tcp_config_no_tls())
        try:
            assert isinstance(connector, TCPConnector)
            assert connector.limit == 10
        finally:
            await connector.close()


@pytest.mark.unit
@pytest.mark.transport
@pytest.mark.asyncio
class TestAiohttpEngineSend:

    async def test_send_returns_response(self):
        engine = AiohttpEngine(base_url="https://example.com")
        engine._session = mock_session_answering(201, b'{"id": "1"}', {"Location": "/items/1"})

        resp = await engine.send(
            TransportRequest(method="POST", url="/items", headers={"A": "b"}, json={"id": "1"})
        )

        assert resp.status == 201
        assert resp.body == b'{"id": "1"}'
        assert resp.headers == {"Location": "/items/1"}
        assert resp.error is None

    async def test_redirects_are_not_followed_by_aiohttp(self):
        engine = AiohttpEngine(base_url="https://example.com")
        engine._session = mock_session_answering(302, b"", {})

        await engine.send(TransportRequest(method="GET", url="/moved", headers={}))

        args, kwargs = engine._session.request.call_args
        assert args == ("GET", "https://example.com/moved")
        assert kwargs["allow_redirects"] is False

    async def test_send_catches_client_errors(self):
        """
        GIVEN a session that raises ClientConnectionError
        WHEN send is called
        THEN the failure is returned in the TransportResponse
        """
        engine = AiohttpEngine(base_url="https://example.com")
        engine._session = mock_session_raising(aiohttp.ClientConnectionError("Failed"))

        resp = await engine.send(TransportRequest(method="GET", url="test", headers={}))

        assert resp.status is None
        assert resp.error == "ClientConnectionError: Failed"

    async def test_send_catches_timeouts(self):
        engine = AiohttpEngine(base_url="https://example.com")
        engine._session = mock_session_raising(asyncio.TimeoutError())

        resp = await engine.send(TransportRequest(method="GET", url="slow", headers={}))

        assert resp.status is None
        assert resp.error.startswith("TimeoutError")

    async def test_programming_errors_propagate(self):
        """
        GIVEN a request whose payload cannot be encoded
        WHEN send is called
        THEN the error is raised rather than reported as a network failure
        """
        engine = AiohttpEngine(base_url="https://example.com")
        engine._session = mock_session_raising(TypeError("Object of type set is not JSON serializable"))

        with pytest.raises(TypeError):
            await engine.send(TransportRequest(method="POST", url="/items", headers={}, json={1, 2}))


@pytest.mark.unit
@pytest.mark.transport
class TestTransportEngineBase:

    class EchoEngine(TransportEngine):
        async def send(self, request):
            return TransportResponse(status=200, headers={}, body=self.resolve_url(request.url).encode(), error=None)

    @pytest.mark.asyncio
    async def test_default_lifecycle_is_noop(self):
        engine = self.EchoEngine("https://api.example.com/")

        async with engine as entered:
            resp = await entered.send(TransportRequest(method="GET", url="/me", headers={}))

        assert entered is engine
        assert engine.base_url == "https://api.example.com"
        assert resp.body == b"https://api.example.com/me"

    def test_failure_response(self):
        engine = self.EchoEngine()

        resp = engine.failure_response(
            TransportRequest(method="GET", url="/me", headers={}),
            "/me",
            aiohttp.ClientConnectionError("refused"),
        )

        assert resp.status is None
        assert resp.body is None
        assert resp.error == "ClientConnectionError: refused"


@pytest.mark.unit
@pytest.mark.transport
class TestTransportEngineFactory:

    def test_aiohttp_registered(self):
        engine = TransportEngineFactory.create(TransportEngineType.AIOHTTP, base_url="https://example.com")

        assert isinstance(engine, AiohttpEngine)

    def test_ssl_context_without_verification(self):
        engine = AiohttpEngine()

        context = engine._build_ssl_context(TlsConfig(enabled=True, verify=False))

        assert context.check_hostname is False
