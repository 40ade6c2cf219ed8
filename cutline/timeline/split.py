"""
cutline.timeline.split - Divide one timeline clip into two.

The left part keeps the original id and start; the right part is a new
record starting at the split time and playing the rest of the same source
range.
"""

from __future__ import annotations

from collections.abc import Iterable

from cutline.exceptions import InvalidRange
from cutline.logging import logger
from cutline.models import TimelineClip, new_clip_id
from cutline.timeline.model import TimelineModel


def compute_split(clip: TimelineClip, split_time: float) -> tuple[TimelineClip, TimelineClip]:
    """Return the (left, right) records for splitting clip at split_time.

    Raises:
        InvalidRange: If split_time is not strictly inside the clip
    """
    if not clip.start_time < split_time < clip.end_time:
        raise InvalidRange(
            f"Split time {split_time} is not inside clip {clip.id} "
            f"[{clip.start_time}, {clip.end_time}]"
        )

    offset = split_time - clip.start_time
    left = clip.with_changes(
        duration=offset,
        trim_end=clip.trim_start + offset,
    )
    right = TimelineClip(
        id=new_clip_id(),
        source_clip_id=clip.source_clip_id,
        track_id=clip.track_id,
        start_time=split_time,
        duration=clip.duration - offset,
        trim_start=clip.trim_start + offset,
        trim_end=clip.trim_end,
    )
    return left, right


def find_split_target(
    split_time: float,
    clips: Iterable[TimelineClip],
    track_id: int | None = None,
) -> TimelineClip | None:
    """Find the clip to split at split_time.

    Returns the first clip strictly containing the time, or None if no clip
    touches it at all.

    Raises:
        InvalidRange: If clips only touch split_time at their boundaries
    """
    touching = [
        c
        for c in clips
        if (track_id is None or c.track_id == track_id)
        and c.start_time <= split_time <= c.end_time
    ]
    if not touching:
        return None
    for clip in touching:
        if clip.start_time < split_time < clip.end_time:
            return clip
    raise InvalidRange(f"Split time {split_time} falls on a clip boundary")


def split_at(
    model: TimelineModel,
    split_time: float,
    track_id: int | None = None,
) -> tuple[TimelineClip, TimelineClip] | None:
    """Split the clip under split_time, writing both halves back to the model.

    Returns:
        (left, right), or None when split_time is outside every clip

    Raises:
        InvalidRange: If split_time falls exactly on a clip boundary
    """
    with model.transaction():
        target = find_split_target(split_time, model.list_clips(), track_id)
        if target is None:
            logger.debug("No clip at %.3f, split skipped", split_time)
            return None
        left, right = compute_split(target, split_time)
        model.update(target.id, duration=left.duration, trim_end=left.trim_end)
        model.add(right)
        logger.debug("Split clip %s at %.3f into %s", target.id, split_time, right.id)
        return left, right
