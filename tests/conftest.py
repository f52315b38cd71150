import pytest

from httpsdk.request_execution.client import ApiClient
from .fixtures.auth import RecordingAuthenticationProvider
from .fixtures.request_execution import FakeTransportEngine, json_response


@pytest.fixture
def auth_provider():
    return RecordingAuthenticationProvider()


@pytest.fixture
def fake_transport():
    return FakeTransportEngine(json_response(200, {"id": "1"}))


@pytest.fixture
def api_client(fake_transport, auth_provider):
    return ApiClient(fake_transport, authentication_provider=auth_provider)
