"""Request-execution core for HTTP API client SDKs: per-request handler options and long-running operation polling."""

__version__ = "0.1.0"
