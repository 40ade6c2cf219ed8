"""
cutline.timeline.model - Timeline clip store.

The TimelineModel is the single source of truth for placed clips. Every
command and query takes one coarse re-entrant lock; all operations are
O(number of clips) and never block on I/O.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from pydantic import ValidationError

from cutline.exceptions import InvalidRange, NotFound
from cutline.logging import logger
from cutline.models import TimelineClip
from cutline.utils import format_time

MIN_DISPLAY_DURATION = 60.0


class TimelineModel:
    """Ordered set of timeline clips across all tracks.

    Clips are kept in insertion order internally; ``list_clips`` returns
    them sorted by start time with ties kept in insertion order.
    """

    def __init__(self, min_display_duration: float = MIN_DISPLAY_DURATION) -> None:
        self.min_display_duration = min_display_duration
        self._clips: list[TimelineClip] = []
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self) -> Iterator[TimelineModel]:
        """Hold the model lock for a compound command.

        If the block raises, the clip set is restored to what it was on entry.
        """
        with self._lock:
            saved = list(self._clips)
            try:
                yield self
            except BaseException:
                self._clips = saved
                raise

    def add(self, clip: TimelineClip) -> str:
        """Insert a clip and return its id."""
        with self._lock:
            if self._index_of(clip.id) is not None:
                raise InvalidRange(f"Duplicate clip id: {clip.id}")
            self._clips.append(clip)
            logger.debug(
                "Added clip %s (source=%s, track=%d, start=%.3f, duration=%.3f)",
                clip.id,
                clip.source_clip_id,
                clip.track_id,
                clip.start_time,
                clip.duration,
            )
            return clip.id

    def remove(self, clip_id: str) -> bool:
        """Remove a clip by ID. Returns True if found and removed."""
        with self._lock:
            index = self._index_of(clip_id)
            if index is None:
                return False
            self._clips.pop(index)
            logger.debug("Removed clip %s", clip_id)
            return True

    def update(self, clip_id: str, **fields: Any) -> TimelineClip:
        """Replace fields of a stored clip and return the new record.

        Raises:
            NotFound: If no clip has this id
            InvalidRange: If the new values break a clip invariant
        """
        if "id" in fields and fields["id"] != clip_id:
            raise InvalidRange("Clip id cannot be changed")
        with self._lock:
            index = self._index_of(clip_id)
            if index is None:
                raise NotFound(clip_id)
            try:
                updated = self._clips[index].with_changes(**fields)
            except ValidationError as e:
                raise InvalidRange(f"Invalid update for clip {clip_id}: {e}") from e
            self._clips[index] = updated
            return updated

    def get(self, clip_id: str) -> TimelineClip:
        """Get a clip by id, raising NotFound if absent."""
        clip = self.find(clip_id)
        if clip is None:
            raise NotFound(clip_id)
        return clip

    def find(self, clip_id: str) -> TimelineClip | None:
        with self._lock:
            index = self._index_of(clip_id)
            return None if index is None else self._clips[index]

    def list_clips(self, track_id: int | None = None) -> list[TimelineClip]:
        """Clips ordered by start time, optionally limited to one track."""
        with self._lock:
            clips = [c for c in self._clips if track_id is None or c.track_id == track_id]
        return sorted(clips, key=lambda c: c.start_time)

    def snapshot(self) -> tuple[TimelineClip, ...]:
        """Immutable view of all clips in insertion order."""
        with self._lock:
            return tuple(self._clips)

    def tracks(self) -> list[int]:
        """Track ids that currently hold at least one clip."""
        with self._lock:
            return sorted({c.track_id for c in self._clips})

    def clear(self) -> None:
        with self._lock:
            self._clips.clear()

    @property
    def content_duration(self) -> float:
        """End time of the last clip, or 0 for an empty timeline."""
        with self._lock:
            return max((c.end_time for c in self._clips), default=0.0)

    @property
    def duration(self) -> float:
        """Timeline duration for display, floored at the display minimum."""
        return max(self.content_duration, self.min_display_duration)

    def _index_of(self, clip_id: str) -> int | None:
        for i, clip in enumerate(self._clips):
            if clip.id == clip_id:
                return i
        return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._clips)

    def __contains__(self, clip_id: object) -> bool:
        with self._lock:
            return any(c.id == clip_id for c in self._clips)

    def __repr__(self) -> str:
        return (
            f"TimelineModel(clips={len(self)}, "
            f"tracks={len(self.tracks())}, "
            f"duration={format_time(self.content_duration)})"
        )
