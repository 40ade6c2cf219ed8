"""
cutline.io - Atomic file writes for interchange output.

External tools (NLEs, encoders watching a folder) may open an EDL as soon
as it appears, so files are staged next to the destination and swapped in
with a single rename.
"""

from __future__ import annotations

import tempfile
from pathlib import Path


def write_text(path: Path, content: str, newline: str | None = None) -> None:
    """Write content to path atomically.

    Args:
        path: Destination path; parent directories are created
        content: Text to write
        newline: Line ending to translate "\\n" into (None keeps the platform default)
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        newline=newline,
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    ) as staged:
        staged_path = Path(staged.name)
        try:
            staged.write(content)
        except Exception:
            staged_path.unlink(missing_ok=True)
            raise
    staged_path.replace(path)
