"""Tests for cutline.export.plan module."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cutline.exceptions import MissingSourceError
from cutline.export.plan import RenderSegment, build_plan
from cutline.library import InMemoryClipLibrary


class TestBuildPlan:
    def test_orders_by_start_time(self, library: InMemoryClipLibrary, make_clip) -> None:
        clips = [
            make_clip(5, 3, source_clip_id="src-b", trim_start=1.0),
            make_clip(0, 5, source_clip_id="src-a"),
        ]
        plan = build_plan(clips, library)

        assert [s.source_clip_id for s in plan.segments] == ["src-a", "src-b"]
        assert (plan.segments[0].trim_start, plan.segments[0].trim_end) == (0.0, 5)
        assert (plan.segments[1].trim_start, plan.segments[1].trim_end) == (1.0, 4.0)
        assert plan.duration == 8

    def test_ties_keep_input_order(self, library: InMemoryClipLibrary, make_clip) -> None:
        clips = [
            make_clip(0, 3, source_clip_id="src-b"),
            make_clip(0, 3, track_id=1, source_clip_id="src-a"),
        ]
        plan = build_plan(clips, library)
        assert [s.source_clip_id for s in plan.segments] == ["src-b", "src-a"]

    def test_empty_timeline(self, library: InMemoryClipLibrary) -> None:
        plan = build_plan([], library)
        assert len(plan) == 0
        assert plan.duration == 0.0

    def test_segment_carries_placement(self, library: InMemoryClipLibrary, make_clip) -> None:
        plan = build_plan([make_clip(12, 4, track_id=2, trim_start=6.0)], library)
        segment = plan.segments[0]
        assert segment.track_id == 2
        assert segment.start_time == 12
        assert segment.duration == pytest.approx(4.0)

    def test_missing_source_raises(self, library: InMemoryClipLibrary, make_clip) -> None:
        clips = [
            make_clip(0, 3, source_clip_id="gone"),
            make_clip(3, 3, source_clip_id="src-a"),
            make_clip(6, 3, source_clip_id="gone"),
            make_clip(9, 3, source_clip_id="also-gone"),
        ]
        with pytest.raises(MissingSourceError) as exc:
            build_plan(clips, library)
        assert exc.value.missing_ids == ["gone", "also-gone"]

    def test_source_clip_ids_first_use_order(self, library: InMemoryClipLibrary, make_clip) -> None:
        clips = [
            make_clip(0, 1, source_clip_id="src-b"),
            make_clip(1, 1, source_clip_id="src-a"),
            make_clip(2, 1, source_clip_id="src-b"),
        ]
        assert build_plan(clips, library).source_clip_ids() == ["src-b", "src-a"]

    def test_plan_is_immutable(self, library: InMemoryClipLibrary, make_clip) -> None:
        plan = build_plan([make_clip(0, 1)], library)
        with pytest.raises(ValidationError):
            plan.duration = 99.0


class TestRenderSegment:
    def test_from_clip(self, make_clip) -> None:
        clip = make_clip(3, 2, source_clip_id="src-b", trim_start=1.5)
        segment = RenderSegment.from_clip(clip)
        assert segment.source_clip_id == "src-b"
        assert segment.trim_start == 1.5
        assert segment.trim_end == 3.5
