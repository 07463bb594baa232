"""Processing result models for tracking title update cycles."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from youtube_title_updater.domain.models.video import UpdateStatus, VideoStats


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass
class ProcessResult:
    """
    Result of processing a single video in one cycle.

    Tracks whether the title was rewritten, left alone because it already
    matched, or could not be processed, along with the stats used.
    """

    video_id: str
    status: UpdateStatus
    old_title: str | None = None
    new_title: str | None = None
    stats: VideoStats | None = None
    error: str | None = None
    processed_at: datetime = field(default_factory=utc_now)

    @property
    def success(self) -> bool:
        """Whether the video was processed without error."""
        return self.status != UpdateStatus.FAILED

    def __str__(self) -> str:
        """Human-readable string representation."""
        status_emoji = {
            UpdateStatus.UPDATED: "✅",
            UpdateStatus.UNCHANGED: "📋",
            UpdateStatus.PREVIEWED: "🔍",
            UpdateStatus.FAILED: "❌",
        }
        emoji = status_emoji.get(self.status, "❓")

        error_part = f" - {self.error}" if self.error else ""
        return f"{emoji} {self.video_id} ({self.status.value}){error_part}"


@dataclass
class BatchResult:
    """
    Result of one cycle over the configured videos.

    Results are kept in the order the videos were processed.
    """

    results: list[ProcessResult] = field(default_factory=list)
    started_at: datetime = field(default_factory=utc_now)
    completed_at: datetime | None = None

    @property
    def successful_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if not r.success)

    @property
    def updated_count(self) -> int:
        return sum(1 for r in self.results if r.status == UpdateStatus.UPDATED)

    @property
    def unchanged_count(self) -> int:
        return sum(1 for r in self.results if r.status == UpdateStatus.UNCHANGED)

    @property
    def has_errors(self) -> bool:
        return self.failed_count > 0

    @property
    def failed_results(self) -> list[ProcessResult]:
        return [r for r in self.results if not r.success]

    @property
    def processing_time_seconds(self) -> float:
        if self.completed_at is None:
            return 0.0
        return (self.completed_at - self.started_at).total_seconds()

    def add_result(self, result: ProcessResult) -> None:
        self.results.append(result)

    def complete(self) -> None:
        """Mark the cycle as completed."""
        self.completed_at = utc_now()

    def __len__(self) -> int:
        return len(self.results)

    def __str__(self) -> str:
        return (
            f"BatchResult(videos={len(self.results)}, "
            f"successful={self.successful_count}, failed={self.failed_count}, "
            f"updated={self.updated_count}, unchanged={self.unchanged_count})"
        )


@dataclass(frozen=True)
class PerformanceReport:
    """Read-only snapshot of the process-wide run statistics."""

    total_updates: int
    last_update: datetime | None
    peak_engagement: int
    uptime_seconds: float
    next_update_estimate: datetime

    def to_dict(self) -> dict[str, object]:
        return {
            "total_updates": self.total_updates,
            "last_update": self.last_update.isoformat() if self.last_update else None,
            "peak_engagement": self.peak_engagement,
            "uptime_seconds": round(self.uptime_seconds, 1),
            "next_update_estimate": self.next_update_estimate.isoformat(),
        }


@dataclass
class RunStats:
    """
    Process-wide counters shared by every cycle.

    A single instance is created at startup and handed to each collaborator
    that updates it. ``peak_engagement`` only ever increases.
    """

    updates_performed: int = 0
    last_update_at: datetime | None = None
    peak_engagement: int = 0
    started_at: datetime = field(default_factory=utc_now)

    def record_update(self, at: datetime | None = None) -> None:
        """Count a successful title write."""
        self.updates_performed += 1
        self.last_update_at = at or utc_now()

    def observe_engagement(self, engagement: int) -> None:
        """Raise the peak engagement if the observed value exceeds it."""
        if engagement > self.peak_engagement:
            self.peak_engagement = engagement

    def snapshot(
        self, update_interval: timedelta, now: datetime | None = None
    ) -> PerformanceReport:
        """Project the counters into a report for logging."""
        now = now or utc_now()
        return PerformanceReport(
            total_updates=self.updates_performed,
            last_update=self.last_update_at,
            peak_engagement=self.peak_engagement,
            uptime_seconds=(now - self.started_at).total_seconds(),
            next_update_estimate=now + update_interval,
        )
