"""
cutline.export.timecode - Timecode math for interchange export.

Converts timeline seconds into SMPTE timecode, drop-frame for 29.97 fps and
non-drop-frame otherwise.
"""

from __future__ import annotations

# Frames in ten minutes / one minute of 29.97 drop-frame timecode.
_DF_FRAMES_PER_10_MIN = 17982
_DF_FRAMES_PER_MIN = 1798


def is_drop_frame_fps(fps: float) -> bool:
    """Check if frame rate requires drop-frame timecode."""
    return abs(fps - 29.97) < 0.01


def seconds_to_frames(seconds: float, fps: float) -> int:
    """Nearest whole frame for a time in seconds."""
    return round(seconds * fps)


def frames_to_ndf_timecode(total_frames: int, fps: float) -> str:
    """Format a frame count as HH:MM:SS:FF non-drop-frame timecode."""
    frames_per_second = round(fps)
    total_seconds, ff = divmod(total_frames, frames_per_second)
    hh, rem = divmod(total_seconds, 3600)
    mm, ss = divmod(rem, 60)
    return f"{hh:02d}:{mm:02d}:{ss:02d}:{ff:02d}"


def frames_to_df_timecode(total_frames: int) -> str:
    """Format a 29.97 fps frame count as HH:MM:SS;FF drop-frame timecode.

    Frame numbers :00 and :01 are skipped at every minute except each tenth.
    """
    tens, m = divmod(total_frames, _DF_FRAMES_PER_10_MIN)
    skipped = 18 * tens
    if m >= 2:
        skipped += 2 * ((m - 2) // _DF_FRAMES_PER_MIN)
    labelled = total_frames + skipped

    ff = labelled % 30
    ss = (labelled // 30) % 60
    mm = (labelled // 1800) % 60
    hh = labelled // 108000
    return f"{hh:02d}:{mm:02d}:{ss:02d};{ff:02d}"


def seconds_to_timecode(seconds: float, fps: float) -> str:
    """Convert seconds to timecode, using drop-frame when fps is 29.97."""
    if is_drop_frame_fps(fps):
        return frames_to_df_timecode(seconds_to_frames(seconds, 29.97))
    return frames_to_ndf_timecode(seconds_to_frames(seconds, fps), fps)
