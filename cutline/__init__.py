"""
Cutline - timeline editing engine for a multi-track video editor.

Places, trims, splits and snaps clips on parallel tracks, resolves the
active clip under the playhead for preview, and turns the arrangement into
an ordered render plan for an external encoder.
"""

__version__ = "0.1.0"
