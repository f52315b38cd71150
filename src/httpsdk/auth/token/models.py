from dataclasses import dataclass, field
from datetime import datetime, timezone


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class Token:
    token_value: str = field(repr=False)
    expires_at: datetime | None = None

    @property
    def is_expired(self) -> bool:
        if self.expires_at is None:
            return False
        return datetime.now(timezone.utc) >= _as_utc(self.expires_at)

    def seconds_until_expiration(self) -> float:
        if self.expires_at is not None:
            return (_as_utc(self.expires_at) - datetime.now(timezone.utc)).total_seconds()
        return 0

    def will_expire_within(self, seconds: int) -> bool:
        if self.expires_at is None:
            return False
        return self.seconds_until_expiration() <= seconds
