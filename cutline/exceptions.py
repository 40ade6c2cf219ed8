"""
cutline.exceptions - Custom exception classes.

All Cutline-specific exceptions inherit from CutlineError. A command that
raises one of these leaves the timeline exactly as it was before the call.
"""

from __future__ import annotations


class CutlineError(Exception):
    """Base exception for all Cutline errors."""

    pass


class ConfigError(CutlineError):
    """Configuration loading or validation error."""

    pass


class InvalidRange(CutlineError):
    """Trim, split or update arguments violate ordering constraints."""

    pass


class NotFound(CutlineError):
    """A command referenced a clip id that does not exist."""

    def __init__(self, clip_id: str, kind: str = "clip"):
        self.clip_id = clip_id
        self.kind = kind
        super().__init__(f"{kind} not found: {clip_id}")


class OverlapError(CutlineError):
    """Placement would overlap another clip on the same track."""

    def __init__(self, clip_ids: list[str], track_id: int):
        self.clip_ids = clip_ids
        self.track_id = track_id
        super().__init__(f"overlaps {', '.join(clip_ids)} on track {track_id}")


class MissingSourceError(CutlineError):
    """Render plan references source clips missing from the library."""

    def __init__(self, missing_ids: list[str]):
        self.missing_ids = missing_ids
        super().__init__(f"missing source clips: {', '.join(missing_ids)}")


class ExportError(CutlineError):
    """Encoder failure surfaced from an export job."""

    pass
