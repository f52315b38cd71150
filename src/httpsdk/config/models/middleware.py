from typing import Annotated, Any, Literal, Union
from pydantic import BaseModel, Field


class MiddlewareConfigModel(BaseModel):
    type: str

    model_config = {"frozen": True}

    def to_runtime_args(self) -> dict[str, Any]:
        return {}


class SimpleMiddlewareModel(MiddlewareConfigModel):
    """Middleware without settings"""
    type: Literal["authentication", "logging"]


class RetryMiddlewareModel(MiddlewareConfigModel):
    """Handler-wide retry defaults; a request's RetryHandlerOption overrides them"""
    type: Literal["retry"] = "retry"
    max_retry: int = Field(default=3, ge=0, le=10)
    delay: float = Field(default=3.0, ge=0)
    retries_time_limit: float = Field(default=0.0, ge=0, description="seconds, 0 disables")
    retry_status_codes: list[int] = [429, 503, 504]
    max_delay: float = Field(default=180.0, gt=0)

    def to_runtime_args(self) -> dict[str, Any]:
        return {
            "max_retry": self.max_retry,
            "delay": self.delay,
            "retries_time_limit": self.retries_time_limit,
            "retry_status_codes": self.retry_status_codes,
            "max_delay": self.max_delay,
        }


class RedirectMiddlewareModel(MiddlewareConfigModel):
    type: Literal["redirect"] = "redirect"
    max_redirect: int = Field(default=5, ge=0, le=20)

    def to_runtime_args(self) -> dict[str, Any]:
        return {"max_redirect": self.max_redirect}


MiddlewareConfigUnion = Annotated[
    Union[
        SimpleMiddlewareModel,
        RetryMiddlewareModel,
        RedirectMiddlewareModel,
    ],
    Field(discriminator="type"),
]
