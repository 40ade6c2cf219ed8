"""
cutline.timeline.placement - Clip placement and snapping.

Resolves a candidate timeline position (clamped, then snapped to the
one-second grid or to a neighbouring clip edge) and creates or moves
timeline clips.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from pydantic import ValidationError

from cutline.exceptions import InvalidRange, OverlapError
from cutline.logging import logger
from cutline.models import TimelineClip
from cutline.timeline.model import TimelineModel
from cutline.utils import clamp

GRID_INTERVAL = 1.0
SNAP_THRESHOLD = 0.5

# Grid marks are rounded to this many decimals to drop float noise (3 * 0.1).
_GRID_DECIMALS = 9


def snap_to_grid(
    time: float,
    grid_interval: float = GRID_INTERVAL,
    threshold: float = SNAP_THRESHOLD,
) -> float | None:
    """Nearest grid multiple if it lies within threshold, else None."""
    nearest = round(math.floor(time / grid_interval + 0.5) * grid_interval, _GRID_DECIMALS)
    if abs(time - nearest) <= threshold:
        return nearest
    return None


def snap_to_edges(
    time: float,
    clips: Iterable[TimelineClip],
    exclude_clip_id: str | None = None,
    threshold: float = SNAP_THRESHOLD,
) -> float | None:
    """First clip edge within threshold, scanning clips in iteration order.

    For each clip the start edge is checked before the end edge.
    """
    for clip in clips:
        if clip.id == exclude_clip_id:
            continue
        for edge in (clip.start_time, clip.end_time):
            if abs(time - edge) <= threshold:
                return edge
    return None


def resolve_position(
    candidate_time: float,
    timeline_duration: float,
    exclude_clip_id: str | None = None,
    clips: Iterable[TimelineClip] = (),
    snap_enabled: bool = True,
    grid_interval: float = GRID_INTERVAL,
    threshold: float = SNAP_THRESHOLD,
) -> float:
    """Compute a valid, optionally snapped start position.

    Args:
        candidate_time: Requested position in seconds
        timeline_duration: Upper clamp bound
        exclude_clip_id: Clip whose own edges must not attract it (the one moving)
        clips: Clips whose edges can be snapped to, in insertion order
        snap_enabled: If False, only clamping is applied
        grid_interval: Grid spacing in seconds
        threshold: Maximum snapping distance in seconds

    Returns:
        Resolved position in [0, timeline_duration]
    """
    clamped = clamp(candidate_time, 0.0, timeline_duration)
    if not snap_enabled:
        return clamped

    grid = snap_to_grid(clamped, grid_interval, threshold)
    if grid is not None and 0.0 <= grid <= timeline_duration:
        return grid

    edge = snap_to_edges(clamped, clips, exclude_clip_id, threshold)
    if edge is not None:
        return edge

    return clamped


def find_overlaps(
    clips: Iterable[TimelineClip],
    track_id: int,
    start_time: float,
    duration: float,
    exclude_clip_id: str | None = None,
) -> list[TimelineClip]:
    """Clips on track_id intersecting [start_time, start_time + duration)."""
    end_time = start_time + duration
    return [
        c
        for c in clips
        if c.track_id == track_id
        and c.id != exclude_clip_id
        and c.start_time < end_time
        and start_time < c.end_time
    ]


def _check_overlap(
    model: TimelineModel,
    track_id: int,
    start_time: float,
    duration: float,
    exclude_clip_id: str | None,
    overlap_policy: str,
) -> None:
    if overlap_policy != "reject":
        return
    overlapping = find_overlaps(model.snapshot(), track_id, start_time, duration, exclude_clip_id)
    if overlapping:
        raise OverlapError([c.id for c in overlapping], track_id)


def place_clip(
    model: TimelineModel,
    source_clip_id: str,
    track_id: int,
    start_time: float,
    duration: float,
    overlap_policy: str = "allow",
) -> TimelineClip:
    """Create a timeline clip playing the first ``duration`` seconds of its source.

    Raises:
        InvalidRange: If start_time, duration or track_id is invalid
        OverlapError: If overlap_policy is "reject" and the track is occupied
    """
    try:
        clip = TimelineClip(
            source_clip_id=source_clip_id,
            track_id=track_id,
            start_time=start_time,
            duration=duration,
            trim_start=0.0,
            trim_end=duration,
        )
    except ValidationError as e:
        raise InvalidRange(f"Invalid placement: {e}") from e
    with model.transaction():
        _check_overlap(model, track_id, start_time, duration, None, overlap_policy)
        model.add(clip)
    return clip


def move_clip(
    model: TimelineModel,
    clip_id: str,
    new_start_time: float,
    new_track_id: int | None = None,
    *,
    snap_enabled: bool = True,
    grid_interval: float = GRID_INTERVAL,
    threshold: float = SNAP_THRESHOLD,
    overlap_policy: str = "allow",
) -> TimelineClip:
    """Reposition a clip, re-resolving the requested start with snapping.

    Raises:
        NotFound: If clip_id is not on the timeline
        InvalidRange: If new_track_id is negative
        OverlapError: If overlap_policy is "reject" and the target is occupied
    """
    with model.transaction():
        clip = model.get(clip_id)
        track_id = clip.track_id if new_track_id is None else new_track_id
        resolved = resolve_position(
            new_start_time,
            model.duration,
            exclude_clip_id=clip_id,
            clips=model.snapshot(),
            snap_enabled=snap_enabled,
            grid_interval=grid_interval,
            threshold=threshold,
        )
        _check_overlap(model, track_id, resolved, clip.duration, clip_id, overlap_policy)
        logger.debug(
            "Moving clip %s to %.3f (requested %.3f) on track %d",
            clip_id,
            resolved,
            new_start_time,
            track_id,
        )
        return model.update(clip_id, start_time=resolved, track_id=track_id)
