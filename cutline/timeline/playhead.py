"""
cutline.timeline.playhead - Playhead resolution for preview binding.

Pure functions called on every tick of the external playback clock or scrub
gesture. None of them keep state or mutate their inputs, so bursty or
out-of-order ticks cannot desynchronize the timeline.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

from cutline.models import TimelineClip


class PreviewBinding(NamedTuple):
    """Which source position a track should show at a playhead time."""

    track_id: int
    clip: TimelineClip
    media_time: float


def active_clip(
    playhead: float,
    track_id: int,
    clips: Iterable[TimelineClip],
) -> TimelineClip | None:
    """First clip on track_id with start_time <= playhead < end_time."""
    for clip in clips:
        if clip.track_id == track_id and clip.contains(playhead):
            return clip
    return None


def active_clips(playhead: float, clips: Iterable[TimelineClip]) -> dict[int, TimelineClip]:
    """Active clip per track; tracks with nothing under the playhead are absent."""
    result: dict[int, TimelineClip] = {}
    for clip in clips:
        if clip.track_id not in result and clip.contains(playhead):
            result[clip.track_id] = clip
    return result


def media_time_for(clip: TimelineClip, playhead: float) -> float:
    """Position to seek to within the referenced source clip."""
    return clip.trim_start + (playhead - clip.start_time)


def timeline_time_for(clip: TimelineClip, media_time: float) -> float:
    """Timeline position of a source position reported by the player."""
    return clip.start_time + (media_time - clip.trim_start)


def bind_preview(playhead: float, clips: Iterable[TimelineClip]) -> list[PreviewBinding]:
    """Preview bindings for every track with an active clip, ordered by track."""
    active = active_clips(playhead, clips)
    return [
        PreviewBinding(track_id, clip, media_time_for(clip, playhead))
        for track_id, clip in sorted(active.items())
    ]


def next_clip(current: TimelineClip, clips: Iterable[TimelineClip]) -> TimelineClip | None:
    """Clip to advance to when current finishes playing.

    The earliest clip on the same track starting at or after current's end.
    """
    following = [
        c
        for c in clips
        if c.track_id == current.track_id and c.id != current.id and c.start_time >= current.end_time
    ]
    if not following:
        return None
    return min(following, key=lambda c: c.start_time)
