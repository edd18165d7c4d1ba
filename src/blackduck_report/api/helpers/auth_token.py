from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, ClassVar, Dict, Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def milliseconds_remaining_to_absolute_expiry(now: datetime, milliseconds_remaining: int) -> datetime:
    """
    Convert the ``expiresInMilliseconds`` time-to-live returned by the token
    endpoint into an absolute expiry timestamp relative to ``now``.
    """
    if milliseconds_remaining is None:
        raise ValueError("Token time-to-live is missing")
    return now + timedelta(milliseconds=int(milliseconds_remaining))


@dataclass(frozen=True)
class AuthToken:
    """Bearer token issued by ``/api/tokens/authenticate``. Replaced, never mutated."""

    FIELD_MAP: ClassVar[Dict[str, str]] = {
        "bearer_token": "bearerToken",
        "expires_at": "expiresInMilliseconds",
    }

    bearer_token: str
    expires_at: datetime

    @property
    def is_logged(self) -> bool:
        return bool(self.bearer_token)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or utc_now()) >= self.expires_at

    @classmethod
    def from_json(cls, data: Any, now: Optional[datetime] = None) -> Optional["AuthToken"]:
        """
        Decode the token endpoint body. The time-to-live is turned into an
        absolute expiry here, so the token is only valid relative to parse time.
        """
        if not isinstance(data, dict):
            return None
        bearer_token = data.get(cls.FIELD_MAP["bearer_token"])
        expires_in = data.get(cls.FIELD_MAP["expires_at"])
        if not isinstance(bearer_token, str) or not bearer_token.strip():
            return None
        if not isinstance(expires_in, (int, float)) or isinstance(expires_in, bool):
            return None
        return cls(
            bearer_token=bearer_token,
            expires_at=milliseconds_remaining_to_absolute_expiry(now or utc_now(), int(expires_in)),
        )
