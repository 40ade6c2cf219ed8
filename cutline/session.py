"""
cutline.session - Editing session.

An EditorSession owns one TimelineModel and exposes the commands the UI
layer issues (place, move, trim, split, remove) and the queries it reads
(clips, active clip, render plan). There is no global editor state: each
session is an explicit object, and the core never calls back into the UI.
"""

from __future__ import annotations

from pathlib import Path

from cutline.config import EditorConfig, ExportSettings
from cutline.exceptions import NotFound
from cutline.export.edl import write_edl
from cutline.export.encoder import Encoder, ExportDispatcher, ExportJob, ProgressCallback
from cutline.export.plan import RenderPlan, build_plan
from cutline.library import ClipLibrary
from cutline.logging import logger
from cutline.models import TimelineClip
from cutline.timeline import playhead as resolver
from cutline.timeline.model import TimelineModel
from cutline.timeline.placement import move_clip, place_clip, resolve_position
from cutline.timeline.split import split_at
from cutline.timeline.trim import apply_trim, trim_to_timeline_range


class EditorSession:
    """Command/query facade over one timeline."""

    def __init__(self, library: ClipLibrary, config: EditorConfig | None = None) -> None:
        self.library = library
        self.config = config or EditorConfig()
        self.model = TimelineModel(min_display_duration=self.config.min_display_duration)
        self._dispatcher: ExportDispatcher | None = None

    # Commands

    def place(
        self,
        source_clip_id: str,
        track_id: int = 0,
        start_time: float = 0.0,
        duration: float | None = None,
        snap: bool = False,
    ) -> TimelineClip:
        """Drop a source clip onto a track.

        Without an explicit duration the whole source clip is placed.
        """
        if duration is None:
            source = self.library.get_clip(source_clip_id)
            if source is None:
                raise NotFound(source_clip_id, kind="source clip")
            duration = source.duration_seconds
        with self.model.transaction():
            if snap:
                start_time = self.resolve_position(start_time)
            return place_clip(
                self.model,
                source_clip_id,
                track_id,
                start_time,
                duration,
                overlap_policy=self.config.overlap_policy,
            )

    def move(
        self,
        clip_id: str,
        new_start_time: float,
        new_track_id: int | None = None,
    ) -> TimelineClip:
        snap = self.config.snap
        return move_clip(
            self.model,
            clip_id,
            new_start_time,
            new_track_id,
            snap_enabled=snap.enabled,
            grid_interval=snap.grid_interval,
            threshold=snap.threshold,
            overlap_policy=self.config.overlap_policy,
        )

    def trim(self, clip_id: str, in_point: float, out_point: float) -> TimelineClip:
        """Trim with source-relative in/out points."""
        with self.model.transaction():
            return apply_trim(
                self.model,
                clip_id,
                in_point,
                out_point,
                source_duration=self._source_duration(clip_id),
            )

    def trim_timeline(self, clip_id: str, timeline_in: float, timeline_out: float) -> TimelineClip:
        """Trim with in/out points marked on the timeline axis."""
        with self.model.transaction():
            return trim_to_timeline_range(
                self.model,
                clip_id,
                timeline_in,
                timeline_out,
                source_duration=self._source_duration(clip_id),
            )

    def split(
        self, split_time: float, track_id: int | None = None
    ) -> tuple[TimelineClip, TimelineClip] | None:
        return split_at(self.model, split_time, track_id)

    def remove(self, clip_id: str) -> bool:
        return self.model.remove(clip_id)

    def clear(self) -> None:
        self.model.clear()

    # Queries

    def clips(self, track_id: int | None = None) -> list[TimelineClip]:
        return self.model.list_clips(track_id)

    def get(self, clip_id: str) -> TimelineClip:
        return self.model.get(clip_id)

    @property
    def timeline_duration(self) -> float:
        return self.model.duration

    def resolve_position(self, candidate_time: float, exclude_clip_id: str | None = None) -> float:
        snap = self.config.snap
        return resolve_position(
            candidate_time,
            self.model.duration,
            exclude_clip_id=exclude_clip_id,
            clips=self.model.snapshot(),
            snap_enabled=snap.enabled,
            grid_interval=snap.grid_interval,
            threshold=snap.threshold,
        )

    def active_clip(self, playhead: float, track_id: int = 0) -> TimelineClip | None:
        return resolver.active_clip(playhead, track_id, self.model.list_clips(track_id))

    def preview(self, playhead: float) -> list[resolver.PreviewBinding]:
        return resolver.bind_preview(playhead, self.model.list_clips())

    def media_time_for(self, clip_id: str, playhead: float) -> float:
        return resolver.media_time_for(self.model.get(clip_id), playhead)

    def next_clip(self, clip_id: str) -> TimelineClip | None:
        return resolver.next_clip(self.model.get(clip_id), self.model.list_clips())

    def build_plan(self) -> RenderPlan:
        return build_plan(self.model.snapshot(), self.library)

    # Export

    def export(
        self,
        encoder: Encoder,
        output_path: str | Path,
        settings: ExportSettings | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> ExportJob:
        """Hand the current plan to encoder and return without waiting."""
        plan = self.build_plan()
        if self._dispatcher is None:
            self._dispatcher = ExportDispatcher()
        logger.debug("Submitting export of %d segment(s)", len(plan))
        return self._dispatcher.submit(
            plan,
            encoder,
            output_path,
            settings or self.config.export,
            on_progress,
        )

    def write_edl(self, path: Path, title: str = "Cutline Timeline") -> Path:
        return write_edl(path, title, self.build_plan(), self.library, fps=self.config.export.fps)

    def close(self) -> None:
        if self._dispatcher is not None:
            self._dispatcher.shutdown(wait=True)
            self._dispatcher = None

    def _source_duration(self, clip_id: str) -> float | None:
        source = self.library.get_clip(self.model.get(clip_id).source_clip_id)
        return source.duration_seconds if source else None
