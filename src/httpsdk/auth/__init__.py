from httpsdk.auth.base import AuthenticationProvider
from httpsdk.auth.providers import (
    DelegateAuthenticationProvider,
    TokenAuthenticationProvider,
    UsernamePasswordAuthenticationProvider,
)
from httpsdk.auth.token import StaticTokenProvider, Token, TokenProvider

__all__ = [
    "AuthenticationProvider",
    "DelegateAuthenticationProvider",
    "TokenAuthenticationProvider",
    "UsernamePasswordAuthenticationProvider",
    "StaticTokenProvider",
    "Token",
    "TokenProvider",
]
