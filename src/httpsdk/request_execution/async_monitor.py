import asyncio
import logging
from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidatorFunctionWrapHandler, field_validator

from httpsdk.core.exceptions import ErrorCode, ErrorDetail, ServiceError, TransportError
from httpsdk.request_execution.client import BaseClient
from httpsdk.request_execution.models import RequestContext, RequestExchange, RequestType


T = TypeVar("T")

# Seconds between two polls of a monitor URL
POLLING_INTERVAL = 1.0

ACCEPTED = 202
STATUS_CANCELLED = "cancelled"
STATUS_FAILED = ("failed", "deletefailed")
MONITOR_STATUS_ERROR = "Error retrieving monitor status."

ProgressCallback = Callable[["AsyncOperationStatus"], Any]


class AsyncOperationStatus(BaseModel):
    """
    Status document returned by a monitor URL while an operation runs:
    `{"status": ..., ...}`. Keys other than the declared fields are kept in
    `additional_data`.

    A declared field whose value has the wrong shape (`"percentageComplete":
    "n/a"`, an object for `operation`) reads as None; only a body that is not
    a JSON object fails to parse.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    status: str | None = None
    operation: str | None = None
    percentage_complete: float | None = Field(default=None, alias="percentageComplete")

    @field_validator("status", "operation", "percentage_complete", mode="wrap")
    @classmethod
    def none_when_malformed(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        try:
            return handler(value)
        except ValidationError:
            return None

    @property
    def additional_data(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class AsyncMonitor(Generic[T]):
    """
    Polls the monitor URL of a long-running operation until it completes.

    Each iteration authenticates a GET with the client's provider, sends it
    through the client, and interprets the answer:
      • a 2xx other than 202 is the finished resource, deserialized as
        result_type;
      • otherwise the body is an AsyncOperationStatus: "cancelled" resolves
        to None, "failed"/"deleteFailed" raise ServiceError with the status
        "message", anything else is reported to `progress` and polling
        continues after `polling_interval`.

    Polls are strictly sequential. There is no overall deadline; compose the
    cancellation event with a timer for one.
    """

    def __init__(
        self,
        client: BaseClient,
        monitor_url: str,
        result_type: Any = Any,
        *,
        polling_interval: float = POLLING_INTERVAL,
    ) -> None:
        self._client = client
        self._monitor_url = monitor_url
        self._result_type = result_type
        self._polling_interval = polling_interval
        self.last_status: AsyncOperationStatus | None = None
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def monitor_url(self) -> str:
        return self._monitor_url

    async def _poll_once(self) -> RequestExchange:
        context = RequestContext(method=RequestType.GET, url=self._monitor_url)

        provider = self._client.authentication_provider
        if provider is not None:
            await provider.authenticate_request(context)

        exchange = await self._client.send(context)
        if exchange.status_code is None:
            raise TransportError(exchange.error_message)
        return exchange

    def _read_status(self, exchange: RequestExchange) -> AsyncOperationStatus:
        status = self._client.serializer.deserialize(exchange.body, AsyncOperationStatus)
        if status is None:
            raise ServiceError(ErrorDetail(ErrorCode.GENERAL_EXCEPTION, MONITOR_STATUS_ERROR))
        return status

    async def _wait(self, cancellation: asyncio.Event | None) -> None:
        """Sleep for one polling interval, returning early once cancellation is set."""
        if cancellation is None:
            await asyncio.sleep(self._polling_interval)
            return
        try:
            await asyncio.wait_for(cancellation.wait(), timeout=self._polling_interval)
        except asyncio.TimeoutError:
            pass

    async def poll_for_operation_completion(
        self,
        progress: ProgressCallback | None = None,
        cancellation: asyncio.Event | None = None,
    ) -> T | None:
        """
        Returns the deserialized resource, or None when the operation was
        cancelled. A server-side "cancelled" status and a set `cancellation`
        event both give None; callers cannot tell the two apart.

        Raises:
            ServiceError: status body missing or unreadable, or the operation
                reported "failed"/"deleteFailed".
            TransportError, AuthenticationError: propagated from the
                collaborators, never retried here.
        """
        while cancellation is None or not cancellation.is_set():
            exchange = await self._poll_once()

            if exchange.is_success_status and exchange.status_code != ACCEPTED:
                self._logger.info("Operation at %s completed (HTTP %s)", self._monitor_url, exchange.status_code)
                return self._client.serializer.deserialize(exchange.body, self._result_type)

            status = self._read_status(exchange)
            self.last_status = status
            value = (status.status or "").lower()

            if value == STATUS_CANCELLED:
                self._logger.info("Operation at %s was cancelled", self._monitor_url)
                return None

            if value in STATUS_FAILED:
                message = status.additional_data.get("message")
                raise ServiceError(
                    ErrorDetail(
                        ErrorCode.GENERAL_EXCEPTION,
                        message if isinstance(message, str) else None,
                    )
                )

            self._logger.debug("Operation at %s is %s", self._monitor_url, status.status)
            if progress is not None:
                progress(status)

            await self._wait(cancellation)

        self._logger.info("Polling %s stopped by caller", self._monitor_url)
        return None
