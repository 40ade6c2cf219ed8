"""
cutline.timeline.trim - In/out point adjustment.

In/out points are source-relative: they name the seconds of the source clip
a placement plays. Points picked against the timeline (e.g. from the
playhead) go through ``trim_to_timeline_range`` which converts them first.
"""

from __future__ import annotations

from cutline.exceptions import InvalidRange
from cutline.logging import logger
from cutline.models import TimelineClip
from cutline.timeline.model import TimelineModel

# Tolerance when comparing an out point against the source duration.
_EPSILON = 1e-9


def apply_trim(
    model: TimelineModel,
    clip_id: str,
    in_point: float,
    out_point: float,
    source_duration: float | None = None,
) -> TimelineClip:
    """Set a clip's in/out points, keeping its timeline start.

    Args:
        model: Timeline holding the clip
        clip_id: Clip to trim
        in_point: New trim start in source seconds
        out_point: New trim end in source seconds
        source_duration: Length of the source clip, if known

    Returns:
        The trimmed clip, with duration == out_point - in_point

    Raises:
        NotFound: If clip_id is not on the timeline
        InvalidRange: If out_point <= in_point, in_point < 0, or out_point
            runs past the end of the source
    """
    with model.transaction():
        model.get(clip_id)
        if out_point <= in_point:
            raise InvalidRange(f"Out point {out_point} must be after in point {in_point}")
        if in_point < 0:
            raise InvalidRange(f"In point {in_point} is before the start of the source")
        if source_duration is not None and out_point > source_duration + _EPSILON:
            raise InvalidRange(
                f"Out point {out_point} is past the end of the source ({source_duration})"
            )
        logger.debug("Trimming clip %s to [%.3f, %.3f]", clip_id, in_point, out_point)
        return model.update(
            clip_id,
            duration=out_point - in_point,
            trim_start=in_point,
            trim_end=out_point,
        )


def timeline_to_source(clip: TimelineClip, timeline_time: float) -> float:
    """Convert a timeline position into the clip's source time."""
    return clip.trim_start + (timeline_time - clip.start_time)


def trim_to_timeline_range(
    model: TimelineModel,
    clip_id: str,
    timeline_in: float,
    timeline_out: float,
    source_duration: float | None = None,
) -> TimelineClip:
    """Trim using in/out points expressed on the timeline axis.

    Both points are converted to source time through the clip's current
    placement before ``apply_trim`` runs; the clip's start stays put.
    """
    with model.transaction():
        clip = model.get(clip_id)
        return apply_trim(
            model,
            clip_id,
            timeline_to_source(clip, timeline_in),
            timeline_to_source(clip, timeline_out),
            source_duration=source_duration,
        )
