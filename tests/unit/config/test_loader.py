import pytest
import json
import yaml

from httpsdk.config import ConfigLoader, EnvironmentPreprocessor
from httpsdk.config.models import ClientConfig, RedirectMiddlewareModel, RetryMiddlewareModel


CLIENT_YAML = """
base_url: https://api.example.com/v1
transport:
  type: aiohttp
  base_timeout: 10
middleware:
  - type: logging
  - type: authentication
  - type: retry
    max_retry: 5
    retries_time_limit: 60
  - type: redirect
    max_redirect: 2
"""


@pytest.mark.unit
@pytest.mark.config
def test_loader_from_yaml_string():
    cfg = ConfigLoader().from_yaml(CLIENT_YAML)

    assert isinstance(cfg, ClientConfig)
    assert cfg.base_url == "https://api.example.com/v1"
    assert cfg.transport.base_timeout == 10
    assert [m.type for m in cfg.middleware] == ["logging", "authentication", "retry", "redirect"]
    assert isinstance(cfg.middleware[2], RetryMiddlewareModel)
    assert cfg.middleware[2].max_retry == 5
    assert cfg.middleware[3] == RedirectMiddlewareModel(max_redirect=2)


@pytest.mark.unit
@pytest.mark.config
def test_loader_from_json_file(tmp_path):
    p = tmp_path / "client.json"
    p.write_text(json.dumps(yaml.safe_load(CLIENT_YAML)))

    cfg = ConfigLoader().from_json(p)

    assert cfg.base_url.startswith("https://")


@pytest.mark.unit
@pytest.mark.config
def test_loader_from_yaml_path_string(tmp_path):
    p = tmp_path / "client.yaml"
    p.write_text(CLIENT_YAML)

    cfg = ConfigLoader().from_yaml(str(p))

    assert cfg.transport.base_timeout == 10


@pytest.mark.unit
@pytest.mark.config
def test_read_source_prefers_file(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("foo: bar")

    assert ConfigLoader()._read_source(str(p)) == "foo: bar"


@pytest.mark.unit
@pytest.mark.config
def test_read_source_falls_back_to_raw_text():
    assert ConfigLoader()._read_source("base_url: x") == "base_url: x"


@pytest.mark.unit
@pytest.mark.config
def test_empty_document_gives_defaults():
    cfg = ConfigLoader().from_yaml("")

    assert cfg == ClientConfig()


@pytest.mark.unit
@pytest.mark.config
def test_preprocessors_run_before_validation():
    loader = ConfigLoader([EnvironmentPreprocessor({"API_HOST": "api.example.com"})])

    cfg = loader.from_yaml("base_url: https://${API_HOST}/v1")

    assert cfg.base_url == "https://api.example.com/v1"


@pytest.mark.unit
@pytest.mark.config
def test_invalid_config_raises():
    with pytest.raises(ValueError):
        ConfigLoader().from_yaml("middleware:\n  - type: retry\n    max_retry: 50\n")
