"""Integration tests for AsyncMonitor against a real aiohttp server"""
import asyncio
import socket
import pytest
from aiohttp import web
from pydantic import BaseModel

from httpsdk.core.exceptions import ServiceError, TransportError
from httpsdk.request_execution import (
    AiohttpEngine,
    ApiClient,
    AsyncMonitor,
    AuthenticationMiddleware,
    RetryMiddleware,
)
from tests.fixtures.auth import RecordingAuthenticationProvider


class Report(BaseModel):
    id: str
    rows: int


def create_operation_app(states: list[dict]):
    """
    Monitor endpoint that walks through `states`; a state without "status"
    is the finished resource.
    """
    app = web.Application()
    app["polls"] = []

    async def handle_operation(request):
        app["polls"].append(request.headers.get("Authorization"))
        state = states[min(len(app["polls"]) - 1, len(states) - 1)]
        if "status" in state:
            return web.json_response(state, status=202)
        return web.json_response(state)

    app.router.add_get("/operations/{op_id}", handle_operation)
    return app


@pytest.mark.integration
@pytest.mark.monitor
@pytest.mark.asyncio
class TestAsyncMonitorHttp:

    async def test_polls_until_resource_is_ready(self, aiohttp_client):
        """
        GIVEN an operation that runs for two polls and then completes
        WHEN the monitor polls it
        THEN progress is reported twice and the report is returned
        """
        app = create_operation_app([
            {"status": "notStarted"},
            {"status": "running", "percentageComplete": 50},
            {"id": "r-1", "rows": 12},
        ])
        server = await aiohttp_client(app)
        client = ApiClient(AiohttpEngine(), authentication_provider=RecordingAuthenticationProvider())
        seen = []

        async with client:
            monitor = AsyncMonitor(client, str(server.make_url("/operations/1")), Report, polling_interval=0.01)
            result = await monitor.poll_for_operation_completion(progress=lambda s: seen.append(s.status))

        assert result == Report(id="r-1", rows=12)
        assert seen == ["notStarted", "running"]
        assert app["polls"] == ["Bearer fake-token"] * 3

    async def test_failed_operation(self, aiohttp_client):
        app = create_operation_app([{"status": "failed", "message": "disk full"}])
        server = await aiohttp_client(app)
        client = ApiClient(AiohttpEngine())

        async with client:
            monitor = AsyncMonitor(client, str(server.make_url("/operations/2")), Report)
            with pytest.raises(ServiceError, match="disk full"):
                await monitor.poll_for_operation_completion()

    async def test_caller_cancellation(self, aiohttp_client):
        app = create_operation_app([{"status": "running"}])
        server = await aiohttp_client(app)
        client = ApiClient(AiohttpEngine())
        cancellation = asyncio.Event()

        async with client:
            monitor = AsyncMonitor(client, str(server.make_url("/operations/3")), Report, polling_interval=60)
            task = asyncio.create_task(monitor.poll_for_operation_completion(cancellation=cancellation))
            while not app["polls"]:
                await asyncio.sleep(0.01)
            cancellation.set()
            result = await asyncio.wait_for(task, timeout=5)

        assert result is None
        assert len(app["polls"]) == 1

    async def test_unreachable_monitor_raises_transport_error(self):
        """
        GIVEN a monitor URL on a port nothing listens on
        WHEN polling through a client that retries connection failures
        THEN each connection is retried and TransportError is raised afterwards
        """
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.bind(("127.0.0.1", 0))
            port = sock.getsockname()[1]
        retry = RetryMiddleware(max_retry=2, delay=0.0)
        client = ApiClient(AiohttpEngine(), middleware=[AuthenticationMiddleware(), retry])

        async with client:
            monitor = AsyncMonitor(client, f"http://127.0.0.1:{port}/operations/4", Report)
            with pytest.raises(TransportError, match="ClientConnectorError"):
                await monitor.poll_for_operation_completion()
