from .auth_token import (
    FakeTokenProvider,
    FailingTokenProvider,
    RecordingAuthenticationProvider,
    valid_token,
    expired_token,
)


__all__ = [
    'FakeTokenProvider',
    'FailingTokenProvider',
    'RecordingAuthenticationProvider',
    'valid_token',
    'expired_token',
]
