"""Domain-specific exceptions for the YouTube Title Updater application."""

from typing import Any, Optional


class TitleUpdaterError(Exception):
    """Base exception for all YouTube Title Updater errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConfigurationError(TitleUpdaterError):
    """Raised when there are configuration-related errors."""

    pass


class AuthenticationError(TitleUpdaterError):
    """Raised when an OAuth2 access token cannot be obtained."""

    def __init__(
        self,
        message: str,
        payload: Any = None,
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__(message, cause)
        self.payload = payload


class TokenRejectedError(AuthenticationError):
    """Raised when the API rejects the current access token (HTTP 401)."""

    pass


class APIError(TitleUpdaterError):
    """Raised when YouTube API calls fail."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__(message, cause)
        self.status_code = status_code


class RateLimitError(APIError):
    """Raised when YouTube API rate limits or quotas are exceeded."""

    def __init__(
        self,
        message: str = "YouTube API rate limit exceeded",
        retry_after: Optional[int] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__(message, 429, cause)
        self.retry_after = retry_after


class InsufficientPermissionsError(APIError):
    """Raised when the authenticated account may not modify a resource."""

    def __init__(
        self, operation: str, resource_id: str, cause: Optional[Exception] = None
    ) -> None:
        message = f"Insufficient permissions to {operation} on resource: {resource_id}"
        super().__init__(message, 403, cause)
        self.operation = operation
        self.resource_id = resource_id


class VideoNotFoundError(TitleUpdaterError):
    """Raised when a video cannot be found or accessed."""

    def __init__(self, video_id: str, cause: Optional[Exception] = None) -> None:
        message = f"Video not found or not accessible: {video_id}"
        super().__init__(message, cause)
        self.video_id = video_id


class UpdateError(TitleUpdaterError):
    """Raised when a title write still fails after the token refresh retry."""

    def __init__(
        self, video_id: str, reason: str, cause: Optional[Exception] = None
    ) -> None:
        message = f"Failed to update title of video {video_id}: {reason}"
        super().__init__(message, cause)
        self.video_id = video_id
        self.reason = reason
