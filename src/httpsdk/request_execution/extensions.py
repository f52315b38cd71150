"""
Fluent configuration of per-request handler options.

Every function upserts into the request's `MiddlewareOptions`: when the option
kind is already present only the field owned by the function changes,
otherwise a record with defaults for everything else is inserted. Nothing is
validated here; handlers validate at execution time. Each function returns
the request it was given.
"""
from __future__ import annotations
from dataclasses import replace
from datetime import timedelta
from typing import TYPE_CHECKING, Any, Protocol, Sequence, TypeVar

from httpsdk.request_execution.options import (
    AuthenticationHandlerOption,
    AuthenticationProviderOption,
    MiddlewareOptions,
    OptionKind,
    RedirectHandlerOption,
    RetryHandlerOption,
    SecurePassword,
    ShouldRetry,
    UserAccount,
    UserAssertion,
)

if TYPE_CHECKING:
    from httpsdk.request_execution.client import BaseClient


class ConfigurableRequest(Protocol):
    """Anything with an option registry and an owning client."""
    middleware_options: MiddlewareOptions
    client: BaseClient | None


R = TypeVar("R", bound=ConfigurableRequest)


def _auth_option(request: ConfigurableRequest) -> AuthenticationHandlerOption:
    option = request.middleware_options.get(OptionKind.AUTHENTICATION)
    return option if option is not None else AuthenticationHandlerOption()


def _update_provider_option(request: R, **changes: Any) -> R:
    handler_option = _auth_option(request)
    provider_option = (
        handler_option.authentication_provider_option or AuthenticationProviderOption()
    )
    handler_option = replace(
        handler_option,
        authentication_provider_option=replace(provider_option, **changes),
    )
    request.middleware_options.set(OptionKind.AUTHENTICATION, handler_option)
    return request


def _update_retry_option(request: R, **changes: Any) -> R:
    option = request.middleware_options.get(OptionKind.RETRY)
    option = replace(option, **changes) if option is not None else RetryHandlerOption(**changes)
    request.middleware_options.set(OptionKind.RETRY, option)
    return request


def _set_provider(request: R, provider: Any) -> R:
    option = replace(_auth_option(request), authentication_provider=provider)
    request.middleware_options.set(OptionKind.AUTHENTICATION, option)
    return request


def with_default_auth_provider(request: R) -> R:
    """Install the owning client's configured authentication provider."""
    provider = request.client.authentication_provider if request.client is not None else None
    return _set_provider(request, provider)


def with_per_request_auth_provider(request: R) -> R:
    """
    Install a provider built by the client's per-request factory. Without a
    factory on the client this is a no-op and any provider already in place
    stays in effect.
    """
    client = request.client
    if client is None or client.per_request_auth_provider is None:
        return request
    return _set_provider(request, client.per_request_auth_provider())


def with_scopes(request: R, scopes: Sequence[str]) -> R:
    return _update_provider_option(request, scopes=tuple(scopes))


def with_force_refresh(request: R, force_refresh: bool) -> R:
    """Ask the provider to bypass its token cache. Defaults to False when never set."""
    return _update_provider_option(request, force_refresh=force_refresh)


def with_user_account(request: R, user_account: UserAccount) -> R:
    return _update_provider_option(request, user_account=user_account)


def with_user_assertion(request: R, user_assertion: UserAssertion) -> R:
    return _update_provider_option(request, user_assertion=user_assertion)


def with_username_password(request: R, email: str, password: str | SecurePassword) -> R:
    """
    Set credentials for the username/password provider. The email is merged
    into any user account already configured.
    """
    if not isinstance(password, SecurePassword):
        password = SecurePassword(password)

    handler_option = _auth_option(request)
    provider_option = handler_option.authentication_provider_option
    account = provider_option.user_account if provider_option is not None else None
    account = replace(account, email=email) if account is not None else UserAccount(email=email)

    return _update_provider_option(request, password=password, user_account=account)


def with_should_retry(request: R, should_retry: ShouldRetry) -> R:
    return _update_retry_option(request, should_retry=should_retry)


def with_max_retry(request: R, max_retry: int) -> R:
    return _update_retry_option(request, max_retry=max_retry)


def with_max_retry_time(request: R, retries_time_limit: timedelta | float) -> R:
    """Cumulative retry delay budget, as a timedelta or in seconds."""
    if not isinstance(retries_time_limit, timedelta):
        retries_time_limit = timedelta(seconds=retries_time_limit)
    return _update_retry_option(request, retries_time_limit=retries_time_limit)


def with_max_redirects(request: R, max_redirects: int) -> R:
    option = request.middleware_options.get(OptionKind.REDIRECT)
    option = (
        replace(option, max_redirect=max_redirects)
        if option is not None
        else RedirectHandlerOption(max_redirect=max_redirects)
    )
    request.middleware_options.set(OptionKind.REDIRECT, option)
    return request
