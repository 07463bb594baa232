"""Credential and access token domain models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

# Tokens closer than this to expiry are refreshed before use.
TOKEN_REFRESH_MARGIN = timedelta(minutes=5)


@dataclass(frozen=True)
class OAuthCredentials:
    """
    Static secrets used to talk to the YouTube Data API.

    Read-only after configuration has been loaded. The API key authorizes
    public reads; the OAuth client and refresh token authorize title writes.
    """

    api_key: str
    client_id: str
    client_secret: str
    refresh_token: str
    channel_id: str | None = None

    def __post_init__(self) -> None:
        """Validate that every required secret is present."""
        for field_name in ("api_key", "client_id", "client_secret", "refresh_token"):
            if not getattr(self, field_name):
                raise ValueError(f"Credential '{field_name}' cannot be empty")

    def __repr__(self) -> str:
        """Developer-friendly representation that never leaks secrets."""
        return (
            f"OAuthCredentials(client_id='{self.client_id}', "
            f"channel_id={self.channel_id!r}, api_key='***', "
            f"client_secret='***', refresh_token='***')"
        )


@dataclass(frozen=True)
class AccessToken:
    """Short-lived bearer credential obtained from the refresh-token exchange."""

    value: str
    expires_at: datetime

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Access token value cannot be empty")

    def remaining(self, now: datetime) -> timedelta:
        """Time left until the token expires."""
        return self.expires_at - now

    def is_fresh(self, now: datetime, margin: timedelta = TOKEN_REFRESH_MARGIN) -> bool:
        """Whether the token can still be used without refreshing first."""
        return self.remaining(now) >= margin

    def __repr__(self) -> str:
        return f"AccessToken(value='***', expires_at={self.expires_at.isoformat()})"
