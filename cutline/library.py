"""
cutline.library - Source clip library.

The timeline only ever looks source clips up by id. ``ClipLibrary`` is the
lookup the core consumes; ``InMemoryClipLibrary`` is the store the importer
and the capture subsystem register finished clips into.
"""

from __future__ import annotations

from typing import Any, Protocol

from cutline.exceptions import NotFound
from cutline.logging import logger
from cutline.models import SourceClip


class ClipLibrary(Protocol):
    """Lookup of source clips by id. The core never mutates it."""

    def get_clip(self, clip_id: str) -> SourceClip | None: ...


class InMemoryClipLibrary:
    """Ordered in-memory media pool."""

    def __init__(self, clips: list[SourceClip] | None = None) -> None:
        self._clips: dict[str, SourceClip] = {}
        for clip in clips or []:
            self.register(clip)

    def get_clip(self, clip_id: str) -> SourceClip | None:
        return self._clips.get(clip_id)

    def register(self, clip: SourceClip) -> SourceClip:
        """Add a source clip, replacing any clip with the same id."""
        if clip.id in self._clips:
            logger.debug("Replacing source clip %s", clip.id)
        self._clips[clip.id] = clip
        return clip

    def update(self, clip_id: str, **fields: Any) -> SourceClip:
        """Replace descriptive fields of a registered clip."""
        clip = self._clips.get(clip_id)
        if clip is None:
            raise NotFound(clip_id, kind="source clip")
        updated = SourceClip.model_validate({**clip.model_dump(), **fields, "id": clip_id})
        self._clips[clip_id] = updated
        return updated

    def remove(self, clip_id: str) -> bool:
        """Remove a source clip. Returns True if found and removed.

        Timeline clips referencing it are left alone; the dangling reference
        is reported when the next render plan is built.
        """
        return self._clips.pop(clip_id, None) is not None

    def list_clips(self) -> list[SourceClip]:
        return list(self._clips.values())

    def __contains__(self, clip_id: object) -> bool:
        return clip_id in self._clips

    def __len__(self) -> int:
        return len(self._clips)
