"""
cutline.timeline - Timeline editing engine.

- model: TimelineModel, the single source of truth for placed clips
- placement: snapping, placing and moving clips
- trim: in/out point adjustment
- split: dividing one clip into two
- playhead: active clip and media time under the playhead
"""

from __future__ import annotations

from cutline.timeline.model import TimelineModel
from cutline.timeline.placement import move_clip, place_clip, resolve_position
from cutline.timeline.playhead import active_clip, media_time_for
from cutline.timeline.split import split_at
from cutline.timeline.trim import apply_trim

__all__ = [
    "TimelineModel",
    "active_clip",
    "apply_trim",
    "media_time_for",
    "move_clip",
    "place_clip",
    "resolve_position",
    "split_at",
]
