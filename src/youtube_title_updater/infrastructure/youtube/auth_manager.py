"""YouTube API OAuth2 token manager."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path

from google.auth.exceptions import RefreshError, TransportError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from youtube_title_updater.domain.exceptions import AuthenticationError, ConfigurationError
from youtube_title_updater.domain.models.credentials import (
    TOKEN_REFRESH_MARGIN,
    AccessToken,
    OAuthCredentials,
)
from youtube_title_updater.domain.services.token_provider import TokenProvider

logger = logging.getLogger(__name__)

TOKEN_URI = "https://oauth2.googleapis.com/token"
# Lifetime assumed when the provider omits expires_in.
DEFAULT_TOKEN_LIFETIME = timedelta(hours=1)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class YouTubeTokenManager(TokenProvider):
    """
    Manages the OAuth2 access token used for title writes.

    The token is obtained from a long-lived refresh token via the Google
    token endpoint and refreshed whenever it is missing or within five
    minutes of expiry.
    """

    def __init__(
        self,
        credentials: OAuthCredentials,
        clock: Callable[[], datetime] = _utc_now,
        refresh_margin: timedelta = TOKEN_REFRESH_MARGIN,
    ) -> None:
        """
        Initialize the token manager.

        Args:
            credentials: OAuth2 client and refresh token
            clock: Source of the current time (aware UTC)
            refresh_margin: Minimum remaining lifetime of a usable token
        """
        self.credentials = credentials
        self.clock = clock
        self.refresh_margin = refresh_margin
        self._token: AccessToken | None = None

    async def ensure_valid_token(self) -> AccessToken:
        """Return the held token, refreshing it first when it is absent or stale."""
        if self._token is None or not self._token.is_fresh(self.clock(), self.refresh_margin):
            return await self.refresh()
        return self._token

    async def refresh(self) -> AccessToken:
        """Exchange the refresh token for a new access token."""
        google_credentials = Credentials(
            token=None,
            refresh_token=self.credentials.refresh_token,
            token_uri=TOKEN_URI,
            client_id=self.credentials.client_id,
            client_secret=self.credentials.client_secret,
        )

        try:
            await asyncio.to_thread(google_credentials.refresh, Request())
        except RefreshError as e:
            payload = e.args[1] if len(e.args) > 1 else None
            logger.error("Failed to refresh access token: %s", payload or e)
            raise AuthenticationError(
                f"Failed to refresh access token: {e.args[0] if e.args else e}",
                payload=payload,
                cause=e,
            ) from e
        except TransportError as e:
            logger.error("Token endpoint unreachable: %s", e)
            raise AuthenticationError(f"Token endpoint unreachable: {e}", cause=e) from e

        if not google_credentials.token:
            raise AuthenticationError("Token endpoint returned no access token")

        self._token = AccessToken(
            value=google_credentials.token,
            expires_at=self._expiry_of(google_credentials),
        )
        logger.info(
            "Access token refreshed successfully (expires at %s)",
            self._token.expires_at.isoformat(),
        )
        return self._token

    def _expiry_of(self, google_credentials: Credentials) -> datetime:
        """Convert the library's naive UTC expiry to an aware datetime."""
        expiry = google_credentials.expiry
        if expiry is None:
            return self.clock() + DEFAULT_TOKEN_LIFETIME
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=timezone.utc)
        return expiry


def run_authorization_flow(client_secrets_file: str | Path, scopes: list[str]) -> Credentials:
    """
    Run the installed-app OAuth2 consent flow.

    Used once to mint the refresh token the scheduled job runs with.

    Args:
        client_secrets_file: OAuth2 client secrets JSON from Google Cloud Console
        scopes: OAuth2 scopes to request

    Returns:
        Credentials holding the new refresh token

    Raises:
        ConfigurationError: If the client secrets file is missing
        AuthenticationError: If the consent flow fails
    """
    secrets_path = Path(client_secrets_file)
    if not secrets_path.exists():
        raise ConfigurationError(
            f"OAuth2 client secrets file not found: {secrets_path}\n"
            "Please download your client secrets JSON from Google Cloud Console."
        )

    try:
        flow = InstalledAppFlow.from_client_secrets_file(str(secrets_path), scopes)
        # offline access + consent prompt guarantee a refresh token is issued
        credentials = flow.run_local_server(
            port=0, open_browser=True, access_type="offline", prompt="consent"
        )
    except Exception as e:
        raise AuthenticationError(
            f"OAuth2 flow failed: {e}\n"
            "Please check your client secrets file and internet connection.",
            cause=e,
        ) from e

    if not credentials.refresh_token:
        raise AuthenticationError("OAuth2 flow did not return a refresh token")

    return credentials  # type: ignore[no-any-return]
