"""Rendering of stats-bearing video titles."""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence

from youtube_title_updater.domain.models.video import VideoStats

# YouTube rejects titles longer than this.
MAX_TITLE_LENGTH = 100
ELLIPSIS = "..."

DETAILED_TEMPLATES: tuple[str, ...] = (
    "This video now has {views} views, {likes} likes, and {comments} comments - {title}",
    "{title} | This video now has {views} views, {likes} likes, {comments} comments",
    "This video now has {views} views, {likes} likes, {comments} comments: {title}",
)

TemplateChooser = Callable[[Sequence[str]], str]


def truncate_title(title: str, max_length: int = MAX_TITLE_LENGTH) -> str:
    """Cut a title to ``max_length`` characters, ending in an ellipsis when cut."""
    if len(title) <= max_length:
        return title
    return title[: max_length - len(ELLIPSIS)] + ELLIPSIS


class TitleRenderer:
    """
    Builds the title shown on a video from its current stats.

    The phrasing is picked by ``chooser`` from a fixed set of equivalent
    templates; pass a deterministic chooser to get a predictable result.
    Rendering never touches the network.
    """

    def __init__(
        self,
        chooser: TemplateChooser = random.choice,
        max_length: int = MAX_TITLE_LENGTH,
        templates: Sequence[str] = DETAILED_TEMPLATES,
    ) -> None:
        if not templates:
            raise ValueError("At least one title template is required")
        if max_length <= len(ELLIPSIS):
            raise ValueError(f"Maximum title length must exceed {len(ELLIPSIS)}")
        self.chooser = chooser
        self.max_length = max_length
        self.templates = tuple(templates)

    def render(self, stats: VideoStats, original_title: str) -> str:
        """Render a title embedding the counts of ``stats`` and ``original_title``."""
        template = self.chooser(self.templates)
        title = template.format(
            views=f"{stats.views:,}",
            likes=f"{stats.likes:,}",
            comments=f"{stats.comments:,}",
            title=original_title,
        )
        return truncate_title(title, self.max_length)
