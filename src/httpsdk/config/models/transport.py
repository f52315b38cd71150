from pathlib import Path
from typing import Any, Literal
from pydantic import Field, BaseModel


class TlsConfig(BaseModel):
    enabled: bool = False
    verify: bool = True
    ca_bundle: Path | None = None
    client_cert: Path | None = None
    client_key: Path | None = None


class TcpConnectionConfig(BaseModel):
    """Keyword arguments for aiohttp.TCPConnector, plus TLS settings."""
    limit: int = 100
    limit_per_host: int = 0
    ttl_dns_cache: int = 300
    force_close: bool = False
    enable_cleanup_closed: bool = True
    tls: TlsConfig | None = None


class AiohttpEngineConfig(BaseModel):
    type: Literal["aiohttp"] = "aiohttp"
    base_timeout: int = Field(default=30, gt=0)
    tcp_connection: TcpConnectionConfig = Field(default_factory=TcpConnectionConfig)

    def to_runtime_args(self) -> dict[str, Any]:
        return {
            "connector_config": self.tcp_connection,
            "base_timeout": self.base_timeout,
        }
