"""Tests for cutline.timeline.split module."""

from __future__ import annotations

import pytest

from cutline.exceptions import InvalidRange
from cutline.timeline.model import TimelineModel
from cutline.timeline.split import compute_split, find_split_target, split_at


class TestComputeSplit:
    def test_halves_cover_original(self, make_clip) -> None:
        clip = make_clip(2, 8, trim_start=1.0)
        left, right = compute_split(clip, 5.0)

        assert left.id == clip.id
        assert right.id != clip.id
        assert left.duration + right.duration == pytest.approx(clip.duration)
        assert right.trim_start == pytest.approx(left.trim_end)
        assert right.trim_end == clip.trim_end
        assert right.start_time == 5.0
        assert right.track_id == clip.track_id
        assert right.source_clip_id == clip.source_clip_id

    @pytest.mark.parametrize("split_time", [2.0, 10.0, 1.0, 11.0])
    def test_outside_or_on_edge_rejected(self, make_clip, split_time: float) -> None:
        clip = make_clip(2, 8)
        with pytest.raises(InvalidRange):
            compute_split(clip, split_time)


class TestFindSplitTarget:
    def test_none_when_nothing_under_time(self, make_clip) -> None:
        assert find_split_target(50.0, [make_clip(0, 10)]) is None

    def test_boundary_raises(self, make_clip) -> None:
        clips = [make_clip(0, 5), make_clip(5, 5)]
        with pytest.raises(InvalidRange):
            find_split_target(5.0, clips)

    def test_prefers_strictly_containing_clip(self, make_clip) -> None:
        clips = [make_clip(0, 5, track_id=1), make_clip(3, 5, clip_id="inner")]
        assert find_split_target(5.0, clips).id == "inner"

    def test_track_filter(self, make_clip) -> None:
        clips = [make_clip(0, 10, clip_id="v1"), make_clip(0, 10, track_id=1, clip_id="v2")]
        assert find_split_target(4.0, clips, track_id=1).id == "v2"


class TestSplitAt:
    def test_split_scenario(self, model: TimelineModel, make_clip) -> None:
        clip = make_clip(0, 10, clip_id="A")
        model.add(clip)

        left, right = split_at(model, 4.0)

        assert (left.start_time, left.duration) == (0, 4.0)
        assert (left.trim_start, left.trim_end) == (0, 4.0)
        assert (right.start_time, right.duration) == (4.0, 6.0)
        assert (right.trim_start, right.trim_end) == (4.0, 10)
        assert [c.id for c in model.list_clips()] == ["A", right.id]
        assert model.get("A") == left

    def test_outside_every_clip_is_noop(self, model: TimelineModel, make_clip) -> None:
        model.add(make_clip(0, 10))
        before = model.list_clips()
        assert split_at(model, 25.0) is None
        assert model.list_clips() == before

    def test_empty_timeline_is_noop(self, model: TimelineModel) -> None:
        assert split_at(model, 1.0) is None
        assert len(model) == 0

    def test_boundary_leaves_model_unchanged(self, model: TimelineModel, make_clip) -> None:
        model.add(make_clip(0, 5))
        model.add(make_clip(5, 5))
        before = model.list_clips()
        with pytest.raises(InvalidRange):
            split_at(model, 5.0)
        assert model.list_clips() == before

    def test_split_keeps_source_continuity(self, model: TimelineModel, make_clip) -> None:
        model.add(make_clip(10, 6, trim_start=3.0, clip_id="c"))
        left, right = split_at(model, 12.5)
        assert left.trim_end == pytest.approx(5.5)
        assert right.trim_start == pytest.approx(5.5)
        assert right.trim_end == pytest.approx(9.0)
        assert right.end_time == pytest.approx(16.0)

    def test_split_only_given_track(self, model: TimelineModel, make_clip) -> None:
        model.add(make_clip(0, 10, clip_id="base"))
        model.add(make_clip(0, 10, track_id=1, clip_id="overlay"))
        left, _ = split_at(model, 3.0, track_id=1)
        assert left.id == "overlay"
        assert model.get("base").duration == 10
        assert len(model) == 3
