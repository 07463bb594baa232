"""Abstract base class for OAuth2 access token management."""

from abc import ABC, abstractmethod

from youtube_title_updater.domain.models.credentials import AccessToken


class TokenProvider(ABC):
    """
    Abstract service owning the current OAuth2 access token.

    Implementations hold at most one token and replace it only by
    refreshing. Callers never mutate the token themselves.
    """

    @abstractmethod
    async def ensure_valid_token(self) -> AccessToken:
        """
        Return a token that stays valid for at least the refresh margin.

        Refreshes first when no token is held or the held one is close to
        expiry.

        Returns:
            A fresh access token

        Raises:
            AuthenticationError: If the refresh exchange fails
        """
        pass

    @abstractmethod
    async def refresh(self) -> AccessToken:
        """
        Exchange the refresh token for a new access token.

        There is no retry inside this call; recovering from a failed refresh
        is the caller's decision.

        Returns:
            The newly issued access token

        Raises:
            AuthenticationError: If the provider rejects the exchange
        """
        pass
