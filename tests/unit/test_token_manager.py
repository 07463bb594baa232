"""Tests for the YouTube OAuth2 token manager."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

import pytest
from google.auth.exceptions import RefreshError, TransportError

from youtube_title_updater.domain.exceptions import AuthenticationError, ConfigurationError
from youtube_title_updater.domain.models.credentials import OAuthCredentials
from youtube_title_updater.infrastructure.youtube.auth_manager import (
    TOKEN_URI,
    YouTubeTokenManager,
    run_authorization_flow,
)

AUTH_MODULE = "youtube_title_updater.infrastructure.youtube.auth_manager"
NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Settable clock for token expiry checks."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def google_credentials(token: str = "ya29.new-token", expiry: datetime | None = None) -> MagicMock:
    """A stand-in for google.oauth2.credentials.Credentials after a refresh."""
    creds = MagicMock()
    creds.token = token
    # The library reports expiry as naive UTC.
    creds.expiry = expiry if expiry is not None else (NOW + timedelta(hours=1)).replace(tzinfo=None)
    return creds


class TestYouTubeTokenManager:
    """Tests for YouTubeTokenManager."""

    @pytest.fixture
    def clock(self) -> FakeClock:
        return FakeClock(NOW)

    @pytest.fixture
    def token_manager(self, oauth_credentials: OAuthCredentials, clock: FakeClock) -> YouTubeTokenManager:
        return YouTubeTokenManager(oauth_credentials, clock=clock)

    @pytest.mark.asyncio
    async def test_refresh_builds_credentials_from_refresh_token(
        self, token_manager: YouTubeTokenManager, oauth_credentials: OAuthCredentials
    ) -> None:
        """Test refresh exchanges the configured refresh token."""
        creds = google_credentials()

        with patch(f"{AUTH_MODULE}.Credentials", return_value=creds) as mock_credentials, \
                patch(f"{AUTH_MODULE}.Request"):
            token = await token_manager.refresh()

        mock_credentials.assert_called_once_with(
            token=None,
            refresh_token=oauth_credentials.refresh_token,
            token_uri=TOKEN_URI,
            client_id=oauth_credentials.client_id,
            client_secret=oauth_credentials.client_secret,
        )
        creds.refresh.assert_called_once()
        assert token.value == "ya29.new-token"
        assert token.expires_at == NOW + timedelta(hours=1)
        assert token.expires_at.tzinfo is not None
        assert await token_manager.ensure_valid_token() is token

    @pytest.mark.asyncio
    async def test_refresh_without_expiry_assumes_one_hour(
        self, token_manager: YouTubeTokenManager
    ) -> None:
        """Test a missing expiry falls back to the default lifetime."""
        creds = google_credentials()
        creds.expiry = None

        with patch(f"{AUTH_MODULE}.Credentials", return_value=creds), patch(f"{AUTH_MODULE}.Request"):
            token = await token_manager.refresh()

        assert token.expires_at == NOW + timedelta(hours=1)

    @pytest.mark.asyncio
    async def test_ensure_valid_token_refreshes_when_absent(
        self, token_manager: YouTubeTokenManager
    ) -> None:
        """Test the first call always refreshes."""
        with patch(f"{AUTH_MODULE}.Credentials", return_value=google_credentials()) as mock_credentials, \
                patch(f"{AUTH_MODULE}.Request"):
            token = await token_manager.ensure_valid_token()

        assert token.value == "ya29.new-token"
        assert mock_credentials.call_count == 1

    @pytest.mark.asyncio
    async def test_ensure_valid_token_reuses_fresh_token(
        self, token_manager: YouTubeTokenManager
    ) -> None:
        """Test a token with more than five minutes left is reused."""
        with patch(f"{AUTH_MODULE}.Credentials", return_value=google_credentials()) as mock_credentials, \
                patch(f"{AUTH_MODULE}.Request"):
            first = await token_manager.ensure_valid_token()
            second = await token_manager.ensure_valid_token()

        assert first is second
        assert mock_credentials.call_count == 1

    @pytest.mark.asyncio
    async def test_ensure_valid_token_refreshes_near_expiry(
        self, token_manager: YouTubeTokenManager, clock: FakeClock
    ) -> None:
        """Test a token within five minutes of expiry is refreshed first."""
        with patch(f"{AUTH_MODULE}.Credentials", return_value=google_credentials()) as mock_credentials, \
                patch(f"{AUTH_MODULE}.Request"):
            await token_manager.ensure_valid_token()
            clock.now = NOW + timedelta(minutes=56)
            await token_manager.ensure_valid_token()

        assert mock_credentials.call_count == 2

    @pytest.mark.asyncio
    async def test_refresh_error_becomes_authentication_error(
        self, token_manager: YouTubeTokenManager
    ) -> None:
        """Test a rejected refresh carries the provider response."""
        creds = google_credentials()
        payload = {"error": "invalid_grant", "error_description": "Token has been expired or revoked."}
        creds.refresh.side_effect = RefreshError("invalid_grant: Token has been expired or revoked.", payload)

        with patch(f"{AUTH_MODULE}.Credentials", return_value=creds), patch(f"{AUTH_MODULE}.Request"):
            with pytest.raises(AuthenticationError) as exc_info:
                await token_manager.refresh()

        assert exc_info.value.payload == payload
        assert "invalid_grant" in str(exc_info.value)
        assert token_manager._token is None

    @pytest.mark.asyncio
    async def test_transport_error_becomes_authentication_error(
        self, token_manager: YouTubeTokenManager
    ) -> None:
        """Test network failures reaching the token endpoint."""
        creds = google_credentials()
        creds.refresh.side_effect = TransportError("connection reset")

        with patch(f"{AUTH_MODULE}.Credentials", return_value=creds), patch(f"{AUTH_MODULE}.Request"):
            with pytest.raises(AuthenticationError, match="Token endpoint unreachable"):
                await token_manager.refresh()

    @pytest.mark.asyncio
    async def test_empty_token_rejected(self, token_manager: YouTubeTokenManager) -> None:
        """Test a response without an access token is an error."""
        with patch(f"{AUTH_MODULE}.Credentials", return_value=google_credentials(token="")), \
                patch(f"{AUTH_MODULE}.Request"):
            with pytest.raises(AuthenticationError, match="no access token"):
                await token_manager.refresh()


class TestRunAuthorizationFlow:
    """Tests for the installed-app consent flow."""

    def test_missing_client_secrets(self, tmp_path: Path) -> None:
        """Test a missing client secrets file is a configuration error."""
        with pytest.raises(ConfigurationError, match="client secrets file not found"):
            run_authorization_flow(tmp_path / "missing.json", ["scope"])

    def test_flow_returns_credentials(self, tmp_path: Path) -> None:
        """Test offline access is requested and credentials returned."""
        secrets = tmp_path / "client_secrets.json"
        secrets.write_text("{}")
        creds = Mock(refresh_token="1//new-refresh-token")

        with patch(f"{AUTH_MODULE}.InstalledAppFlow") as mock_flow_cls:
            mock_flow_cls.from_client_secrets_file.return_value.run_local_server.return_value = creds
            result = run_authorization_flow(secrets, ["scope"])

        assert result is creds
        mock_flow_cls.from_client_secrets_file.assert_called_once_with(str(secrets), ["scope"])
        kwargs = mock_flow_cls.from_client_secrets_file.return_value.run_local_server.call_args.kwargs
        assert kwargs["access_type"] == "offline"
        assert kwargs["prompt"] == "consent"

    def test_flow_without_refresh_token(self, tmp_path: Path) -> None:
        """Test a grant without a refresh token is rejected."""
        secrets = tmp_path / "client_secrets.json"
        secrets.write_text("{}")

        with patch(f"{AUTH_MODULE}.InstalledAppFlow") as mock_flow_cls:
            mock_flow_cls.from_client_secrets_file.return_value.run_local_server.return_value = Mock(
                refresh_token=None
            )
            with pytest.raises(AuthenticationError, match="did not return a refresh token"):
                run_authorization_flow(secrets, ["scope"])

    def test_flow_failure(self, tmp_path: Path) -> None:
        """Test consent flow errors become authentication errors."""
        secrets = tmp_path / "client_secrets.json"
        secrets.write_text("{}")

        with patch(f"{AUTH_MODULE}.InstalledAppFlow") as mock_flow_cls:
            mock_flow_cls.from_client_secrets_file.side_effect = ValueError("bad client type")
            with pytest.raises(AuthenticationError, match="OAuth2 flow failed"):
                run_authorization_flow(secrets, ["scope"])
