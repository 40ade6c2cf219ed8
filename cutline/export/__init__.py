"""
cutline.export - Render plan and encoder hand-off.

- plan: ordered, immutable render plan built from the timeline
- encoder: background hand-off of a plan to an external encoder
- edl: CMX 3600 EDL rendering of a plan
"""

from __future__ import annotations
