import pytest
from pydantic import ValidationError

from httpsdk.config.models import (
    AiohttpEngineConfig,
    ClientConfig,
    RedirectMiddlewareModel,
    RetryMiddlewareModel,
    SimpleMiddlewareModel,
)


@pytest.mark.unit
@pytest.mark.config
def test_client_config_default_chain():
    cfg = ClientConfig()

    assert [m.type for m in cfg.middleware] == ["authentication", "retry", "redirect"]
    assert cfg.transport == AiohttpEngineConfig()


@pytest.mark.unit
@pytest.mark.config
@pytest.mark.parametrize("max_retry", [-1, 11])
def test_retry_model_bounds(max_retry):
    with pytest.raises(ValidationError):
        RetryMiddlewareModel(max_retry=max_retry)


@pytest.mark.unit
@pytest.mark.config
@pytest.mark.parametrize("max_redirect", [-1, 21])
def test_redirect_model_bounds(max_redirect):
    with pytest.raises(ValidationError):
        RedirectMiddlewareModel(max_redirect=max_redirect)


@pytest.mark.unit
@pytest.mark.config
def test_unknown_middleware_type_rejected():
    with pytest.raises(ValidationError):
        ClientConfig.model_validate({"middleware": [{"type": "compression"}]})


@pytest.mark.unit
@pytest.mark.config
def test_retry_runtime_args():
    args = RetryMiddlewareModel(max_retry=2, retries_time_limit=30).to_runtime_args()

    assert args["max_retry"] == 2
    assert args["retries_time_limit"] == 30.0


@pytest.mark.unit
@pytest.mark.config
def test_middleware_models_are_frozen():
    model = SimpleMiddlewareModel(type="logging")

    with pytest.raises(ValidationError):
        model.type = "authentication"


@pytest.mark.unit
@pytest.mark.config
def test_transport_runtime_args():
    cfg = AiohttpEngineConfig(base_timeout=5)

    args = cfg.to_runtime_args()

    assert args["base_timeout"] == 5
    assert args["connector_config"] is cfg.tcp_connection
