"""
cutline.models - Source and timeline clip records.

The data model follows a time-based approach where:
- Source clips describe imported or recorded media and are never modified
- Timeline clips reference a source clip and play a portion of it
- All positions and lengths are stored in seconds

Records are immutable. The timeline model replaces a stored record with a
validated copy instead of mutating it, so a rejected edit can never leave a
half-updated clip behind.
"""

from __future__ import annotations

import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def new_clip_id() -> str:
    """Generate a unique handle for a timeline clip."""
    return uuid.uuid4().hex


class SourceClip(BaseModel):
    """An imported or recorded media file held by the clip library.

    Attributes:
        id: Library identifier referenced by timeline clips
        duration_seconds: Intrinsic length of the media
        has_audio: Whether the media carries an audio stream
        name: Display name (defaults to the file name of ``path``)
        path: Location of the media file, if any
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    duration_seconds: float = Field(gt=0.0)
    has_audio: bool = True
    name: str = ""
    path: str | None = None
    width: int | None = Field(default=None, gt=0)
    height: int | None = Field(default=None, gt=0)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        if self.path:
            return self.path.replace("\\", "/").rsplit("/", 1)[-1]
        return self.id


class TimelineClip(BaseModel):
    """A placement of (part of) a source clip on one track of the timeline.

    ``trim_start`` and ``trim_end`` are expressed in the source clip's own
    time, so ``trim_end - trim_start == duration`` after any trim or split.

    Attributes:
        id: Unique handle, generated on creation
        source_clip_id: Library id of the referenced source clip
        track_id: Parallel lane the clip sits on (0-indexed)
        start_time: Position on the shared timeline (seconds)
        duration: Length occupied on the timeline (seconds)
        trim_start: First source second played by this placement
        trim_end: Source second where this placement stops playing
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(default_factory=new_clip_id)
    source_clip_id: str
    track_id: int = Field(default=0, ge=0)
    start_time: float = Field(ge=0.0)
    duration: float = Field(gt=0.0)
    trim_start: float = Field(default=0.0, ge=0.0)
    trim_end: float

    @property
    def end_time(self) -> float:
        """End position on the timeline."""
        return self.start_time + self.duration

    def contains(self, time: float) -> bool:
        """Check if a timeline time falls within this clip."""
        return self.start_time <= time < self.end_time

    def with_changes(self, **fields: Any) -> TimelineClip:
        """Return a validated copy with ``fields`` replaced.

        Raises:
            pydantic.ValidationError: If a value breaks a field constraint
        """
        return type(self).model_validate({**self.model_dump(), **fields})
