from httpsdk.auth.token.models import Token
from httpsdk.auth.token.token_provider import StaticTokenProvider, TokenProvider

__all__ = [
    "Token",
    "StaticTokenProvider",
    "TokenProvider",
]
