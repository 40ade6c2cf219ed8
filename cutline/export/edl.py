"""
cutline.export.edl - CMX 3600 EDL generator.

Renders a RenderPlan as an Edit Decision List so the arrangement can be
handed to encoders and NLEs that consume EDLs.
"""

from __future__ import annotations

from pathlib import Path

from cutline.export.plan import RenderPlan
from cutline.export.timecode import is_drop_frame_fps, seconds_to_timecode
from cutline.io import write_text
from cutline.library import ClipLibrary

# Record timecode starts at 01:00:00:00, the usual programme start.
RECORD_START_SECONDS = 3600.0

# CMX 3600 readers expect DOS line endings.
EDL_NEWLINE = "\r\n"


def _reel_names(plan: RenderPlan) -> dict[str, str]:
    reels: dict[str, str] = {}
    taken: set[str] = set()
    for counter, source_id in enumerate(plan.source_clip_ids(), 1):
        cleaned = "".join(ch for ch in source_id if ch.isalnum()).upper()[:8]
        reel = cleaned if len(cleaned) == 8 and cleaned not in taken else f"R{counter:03d}"
        reels[source_id] = reel
        taken.add(reel)
    return reels


def generate_edl(
    title: str,
    plan: RenderPlan,
    library: ClipLibrary,
    fps: float = 30.0,
) -> str:
    """Generate a CMX 3600 EDL from a render plan.

    Args:
        title: EDL title
        plan: Ordered segments to list as events
        library: Source lookup for clip names and audio presence
        fps: Frame rate used for all timecodes

    Returns:
        EDL content as string
    """
    fcm = "DROP FRAME" if is_drop_frame_fps(fps) else "NON-DROP FRAME"
    lines = [f"TITLE: {title}", f"FCM: {fcm}", ""]

    reels = _reel_names(plan)
    if len(reels) > 1:
        lines.append("* REEL MAPPING:")
        for source_id, reel in reels.items():
            source = library.get_clip(source_id)
            lines.append(f"* {reel} = {source.display_name if source else source_id}")
        lines.append("")

    for i, segment in enumerate(plan.segments, 1):
        source = library.get_clip(segment.source_clip_id)
        channels = "AA/V" if source is None or source.has_audio else "V"

        src_in = seconds_to_timecode(segment.trim_start, fps)
        src_out = seconds_to_timecode(segment.trim_end, fps)
        rec_start = RECORD_START_SECONDS + segment.start_time
        rec_in = seconds_to_timecode(rec_start, fps)
        rec_out = seconds_to_timecode(rec_start + segment.duration, fps)

        reel = reels[segment.source_clip_id]
        lines.append(f"{i:03d}  {reel:<8s} {channels:<5s} C        {src_in} {src_out} {rec_in} {rec_out}")
        name = source.display_name if source else segment.source_clip_id
        lines.append(f"* FROM CLIP NAME: {name}")
        if segment.track_id > 0:
            lines.append(f"* TRACK: {segment.track_id + 1}")
        lines.append("")

    return "\n".join(lines)


def write_edl(
    path: Path,
    title: str,
    plan: RenderPlan,
    library: ClipLibrary,
    fps: float = 30.0,
) -> Path:
    """Write the EDL for plan to path atomically and return the path."""
    write_text(path, generate_edl(title, plan, library, fps), newline=EDL_NEWLINE)
    return path
