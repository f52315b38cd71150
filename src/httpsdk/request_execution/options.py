"""
Per-request handler configuration.

Every request carries a `MiddlewareOptions` registry holding at most one
record per `OptionKind`. Records are immutable; callers update them with
`dataclasses.replace` and store the result back with `MiddlewareOptions.set`,
so two requests never share a mutable option object.
"""
from __future__ import annotations
from dataclasses import dataclass, field, fields
from datetime import timedelta
from enum import Enum
from typing import TYPE_CHECKING, Callable, Iterator, Union

if TYPE_CHECKING:
    from httpsdk.auth.base import AuthenticationProvider
    from httpsdk.request_execution.models import RequestExchange


ShouldRetry = Callable[[int, "RequestExchange"], bool]
ShouldRedirect = Callable[["RequestExchange"], bool]

JWT_BEARER_ASSERTION_TYPE = "urn:ietf:params:oauth:grant-type:jwt-bearer"


class OptionKind(str, Enum):
    AUTHENTICATION = "authentication"
    RETRY = "retry"
    REDIRECT = "redirect"


def _always_retry(attempt: int, exchange: RequestExchange) -> bool:
    return True


def _always_redirect(exchange: RequestExchange) -> bool:
    return True


class SecurePassword:
    """
    Password kept in a mutable buffer so it can be zeroed once consumed.
    Never rendered by repr/str.
    """

    __slots__ = ("_buffer",)

    def __init__(self, password: str) -> None:
        self._buffer = bytearray(password.encode("utf-8"))

    def reveal(self) -> str:
        return self._buffer.decode("utf-8")

    def clear(self) -> None:
        for i in range(len(self._buffer)):
            self._buffer[i] = 0
        self._buffer = bytearray()

    @property
    def is_cleared(self) -> bool:
        return len(self._buffer) == 0

    def __len__(self) -> int:
        return len(self._buffer)

    def __repr__(self) -> str:
        return "SecurePassword(***)"

    __str__ = __repr__


@dataclass(frozen=True)
class UserAccount:
    """Account identity. Object id and tenant id identify it; email alone is enough for password flows."""
    object_id: str | None = None
    tenant_id: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class UserAssertion:
    """Opaque on-behalf-of credential"""
    assertion: str
    assertion_type: str = JWT_BEARER_ASSERTION_TYPE

    def __repr__(self) -> str:
        return f"UserAssertion(assertion=***, assertion_type={self.assertion_type!r})"


@dataclass(frozen=True)
class AuthenticationProviderOption:
    scopes: tuple[str, ...] | None = None
    force_refresh: bool = False
    user_account: UserAccount | None = None
    user_assertion: UserAssertion | None = None
    password: SecurePassword | None = field(default=None, compare=False)


@dataclass(frozen=True)
class AuthenticationHandlerOption:
    authentication_provider: AuthenticationProvider | None = None
    authentication_provider_option: AuthenticationProviderOption | None = None


@dataclass(frozen=True)
class RetryHandlerOption:
    """
    • should_retry: predicate(attempt, exchange) consulted for retryable responses
    • max_retry: maximum number of resends
    • retries_time_limit: cumulative delay budget; zero disables it
    • delay: base delay in seconds when the server sends no Retry-After
    """
    should_retry: ShouldRetry = _always_retry
    max_retry: int = 3
    retries_time_limit: timedelta = timedelta(0)
    delay: float = 3.0


@dataclass(frozen=True)
class RedirectHandlerOption:
    max_redirect: int = 5
    should_redirect: ShouldRedirect = _always_redirect


OptionRecord = Union[AuthenticationHandlerOption, RetryHandlerOption, RedirectHandlerOption]

OPTION_TYPES: dict[OptionKind, type] = {
    OptionKind.AUTHENTICATION: AuthenticationHandlerOption,
    OptionKind.RETRY: RetryHandlerOption,
    OptionKind.REDIRECT: RedirectHandlerOption,
}


@dataclass
class MiddlewareOptions:
    """
    Option registry attached to one request. The set of kinds is closed, so
    this is a struct of optional slots addressed by `OptionKind`.

    No locking: concurrent writers to the same request must serialize
    externally.
    """
    authentication: AuthenticationHandlerOption | None = None
    retry: RetryHandlerOption | None = None
    redirect: RedirectHandlerOption | None = None

    def get(self, kind: OptionKind) -> OptionRecord | None:
        return getattr(self, OptionKind(kind).value)

    def set(self, kind: OptionKind, record: OptionRecord) -> None:
        kind = OptionKind(kind)
        expected = OPTION_TYPES[kind]
        if not isinstance(record, expected):
            raise TypeError(
                f"{kind.value} option must be {expected.__name__}, got {type(record).__name__}"
            )
        setattr(self, kind.value, record)

    def pop(self, kind: OptionKind) -> OptionRecord | None:
        record = self.get(kind)
        setattr(self, OptionKind(kind).value, None)
        return record

    def __contains__(self, kind: object) -> bool:
        try:
            return self.get(OptionKind(kind)) is not None
        except ValueError:
            return False

    def __iter__(self) -> Iterator[OptionKind]:
        for f in fields(self):
            if getattr(self, f.name) is not None:
                yield OptionKind(f.name)

    def __len__(self) -> int:
        return sum(1 for _ in self)
