from dataclasses import dataclass
from enum import Enum
from typing import Mapping


class ErrorCode(str, Enum):
    GENERAL_EXCEPTION = "generalException"
    AUTHENTICATION_FAILURE = "authenticationFailure"
    TRANSPORT_FAILURE = "transportFailure"


@dataclass(frozen=True)
class ErrorDetail:
    """
    Machine-readable code plus a human-readable message, which may be absent.
    Codes are ErrorCode members for SDK faults or the service's own code strings.
    """
    code: str
    message: str | None = None


class ServiceError(Exception):
    """Raised when a request to the service cannot be completed."""

    def __init__(
        self,
        error: ErrorDetail,
        *,
        status_code: int | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.error = error
        self.status_code = status_code
        self.headers = dict(headers) if headers is not None else {}
        code = error.code.value if isinstance(error.code, ErrorCode) else error.code
        super().__init__(f"Code: {code}\nMessage: {error.message}")

    @property
    def code(self) -> str:
        return self.error.code

    @property
    def message(self) -> str | None:
        return self.error.message


class AuthenticationError(ServiceError):
    """Raised when an authentication provider fails to authenticate a request"""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(ErrorDetail(ErrorCode.AUTHENTICATION_FAILURE, message))


class TransportError(ServiceError):
    """Raised when the transport returns no HTTP response at all"""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(ErrorDetail(ErrorCode.TRANSPORT_FAILURE, message))
