"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
import yaml

from cutline.library import InMemoryClipLibrary
from cutline.models import SourceClip, TimelineClip
from cutline.session import EditorSession
from cutline.timeline.model import TimelineModel


def _make_clip(
    start_time: float,
    duration: float,
    track_id: int = 0,
    source_clip_id: str = "src-a",
    trim_start: float = 0.0,
    clip_id: str | None = None,
) -> TimelineClip:
    """Build a timeline clip whose trim range matches its duration."""
    fields = {
        "source_clip_id": source_clip_id,
        "track_id": track_id,
        "start_time": start_time,
        "duration": duration,
        "trim_start": trim_start,
        "trim_end": trim_start + duration,
    }
    if clip_id is not None:
        fields["id"] = clip_id
    return TimelineClip(**fields)


@pytest.fixture
def make_clip():
    """Factory for timeline clips (start, duration, track, source, trim_start, id)."""
    return _make_clip


@pytest.fixture
def library() -> InMemoryClipLibrary:
    """Library with two video sources and one silent screen capture."""
    return InMemoryClipLibrary(
        [
            SourceClip(id="src-a", duration_seconds=30.0, name="interview.mp4"),
            SourceClip(id="src-b", duration_seconds=12.5, path="/media/broll/river.mov"),
            SourceClip(id="screen-001", duration_seconds=90.0, has_audio=False),
        ]
    )


@pytest.fixture
def model() -> TimelineModel:
    return TimelineModel()


@pytest.fixture
def session(library: InMemoryClipLibrary) -> Iterator[EditorSession]:
    s = EditorSession(library)
    yield s
    s.close()


@pytest.fixture
def tmp_config_dir(tmp_path: Path) -> Path:
    """Directory holding a minimal cutline.yaml."""
    config_dir = tmp_path / "editor"
    config_dir.mkdir()
    with open(config_dir / "cutline.yaml", "w") as f:
        yaml.dump({"editor_profile": "standard"}, f)
    return config_dir
