"""Video domain models and related enums."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class UpdateStatus(str, Enum):
    """Outcome of processing one video in a cycle."""

    UPDATED = "updated"
    UNCHANGED = "unchanged"
    PREVIEWED = "previewed"
    FAILED = "failed"


@dataclass(frozen=True)
class VideoTask:
    """A configured video whose title should track its engagement stats."""

    video_id: str
    original_title: str

    def __post_init__(self) -> None:
        """Validate task data after initialization."""
        if not self.video_id:
            raise ValueError("Video ID cannot be empty")
        if not self.original_title:
            raise ValueError("Original title cannot be empty")

    def __str__(self) -> str:
        return f"VideoTask(id={self.video_id}, title='{self.original_title[:50]}')"


@dataclass(frozen=True)
class VideoStats:
    """
    Engagement snapshot of a video at the time it was fetched.

    Recomputed every cycle and never persisted. Ratios are derived from the
    counts so they can never disagree with them.
    """

    video_id: str
    views: int
    likes: int
    comments: int
    current_title: str
    published_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate stats after initialization."""
        if not self.video_id:
            raise ValueError("Video ID cannot be empty")
        for field_name in ("views", "likes", "comments"):
            if getattr(self, field_name) < 0:
                raise ValueError(f"{field_name} cannot be negative")

    @property
    def like_ratio(self) -> float:
        """Likes per view, 0 for a video without views."""
        if self.views == 0:
            return 0.0
        return self.likes / self.views

    @property
    def comment_ratio(self) -> float:
        """Comments per view, 0 for a video without views."""
        if self.views == 0:
            return 0.0
        return self.comments / self.views

    @property
    def engagement(self) -> int:
        """Total engagement used for peak tracking."""
        return self.likes + self.comments

    def __str__(self) -> str:
        return (
            f"{self.views:,} views, {self.likes:,} likes, "
            f"{self.comments:,} comments"
        )
