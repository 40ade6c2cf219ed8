"""
cutline.export.plan - Render plan construction.

Turns the current arrangement into an immutable, ordered list of segments
for the external encoder to concatenate and render. No encoding or file I/O
happens here.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from cutline.exceptions import MissingSourceError
from cutline.library import ClipLibrary
from cutline.logging import logger
from cutline.models import TimelineClip


class RenderSegment(BaseModel):
    """One source range to render, in timeline order."""

    model_config = ConfigDict(frozen=True)

    source_clip_id: str
    trim_start: float
    trim_end: float
    track_id: int
    start_time: float

    @property
    def duration(self) -> float:
        return self.trim_end - self.trim_start

    @classmethod
    def from_clip(cls, clip: TimelineClip) -> RenderSegment:
        return cls(
            source_clip_id=clip.source_clip_id,
            trim_start=clip.trim_start,
            trim_end=clip.trim_end,
            track_id=clip.track_id,
            start_time=clip.start_time,
        )


class RenderPlan(BaseModel):
    """Ordered segments handed to the encoder."""

    model_config = ConfigDict(frozen=True)

    segments: tuple[RenderSegment, ...] = ()
    duration: float = 0.0

    def source_clip_ids(self) -> list[str]:
        """Distinct source ids in first-use order."""
        return list(dict.fromkeys(s.source_clip_id for s in self.segments))

    def __len__(self) -> int:
        return len(self.segments)


def build_plan(clips: Iterable[TimelineClip], library: ClipLibrary) -> RenderPlan:
    """Build the render plan for a set of timeline clips.

    Args:
        clips: Timeline clips in insertion order
        library: Lookup used to check every source reference

    Returns:
        Plan with segments sorted by start time (ties keep input order)

    Raises:
        MissingSourceError: If any source clip id does not resolve
    """
    ordered = sorted(clips, key=lambda c: c.start_time)

    missing = [
        source_id
        for source_id in dict.fromkeys(c.source_clip_id for c in ordered)
        if library.get_clip(source_id) is None
    ]
    if missing:
        logger.warning("Render plan references missing sources: %s", ", ".join(missing))
        raise MissingSourceError(missing)

    return RenderPlan(
        segments=tuple(RenderSegment.from_clip(c) for c in ordered),
        duration=max((c.end_time for c in ordered), default=0.0),
    )
