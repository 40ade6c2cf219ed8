"""
cutline.export.encoder - Out-of-band hand-off to an external encoder.

The core never encodes. It passes an immutable RenderPlan to an encoder
running on a background worker and returns at once with an ExportJob that
tracks progress and the terminal result. Encoder failures (codec
unavailable, I/O errors) are surfaced as ExportError without being
interpreted. Cancelling a running render is up to the encoder itself.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Protocol

from cutline.config import ExportSettings
from cutline.exceptions import ExportError
from cutline.export.plan import RenderPlan
from cutline.logging import logger

ProgressCallback = Callable[[float], None]  # 0.0 - 1.0


class Encoder(Protocol):
    """External renderer consuming a plan.

    ``render`` yields progress fractions in [0, 1] and raises on failure.
    """

    def render(
        self, plan: RenderPlan, output_path: Path, settings: ExportSettings
    ) -> Iterator[float]: ...


class ExportJob:
    """Handle on a render running in the background."""

    def __init__(self, plan: RenderPlan, output_path: Path, settings: ExportSettings) -> None:
        self.plan = plan
        self.output_path = output_path
        self.settings = settings
        self._progress = 0.0
        self._lock = threading.Lock()
        self._future: Future[Path] | None = None

    @property
    def progress(self) -> float:
        with self._lock:
            return self._progress

    def _set_progress(self, value: float) -> None:
        with self._lock:
            self._progress = max(self._progress, min(1.0, max(0.0, value)))

    def done(self) -> bool:
        return self._future is not None and self._future.done()

    def result(self, timeout: float | None = None) -> Path:
        """Wait for the render and return the output path.

        Raises:
            ExportError: If the encoder failed
            Exception: Whatever the on_progress callback raised, unwrapped
            TimeoutError: If the render did not finish within timeout
        """
        if self._future is None:
            raise ExportError("Export job was never started")
        return self._future.result(timeout=timeout)


def _render_steps(job: ExportJob, encoder: Encoder) -> Iterator[float]:
    """Progress from encoder, with encoder failures raised as ExportError."""
    try:
        yield from encoder.render(job.plan, job.output_path, job.settings)
    except Exception as e:
        logger.error("Export to %s failed: %s", job.output_path, e)
        raise ExportError(f"Export to {job.output_path} failed: {e}") from e


def _run(job: ExportJob, encoder: Encoder, on_progress: ProgressCallback | None) -> Path:
    logger.info(
        "Rendering %d segment(s) to %s (%s, %s)",
        len(job.plan),
        job.output_path,
        job.settings.resolution,
        job.settings.quality,
    )
    # Callback errors propagate as-is; only encoder errors become ExportError.
    for fraction in _render_steps(job, encoder):
        job._set_progress(fraction)
        if on_progress:
            on_progress(job.progress)

    job._set_progress(1.0)
    if on_progress:
        on_progress(1.0)
    logger.info("Export complete: %s", job.output_path)
    return job.output_path


class ExportDispatcher:
    """Runs encoder renders on a background worker."""

    def __init__(self, max_workers: int = 1) -> None:
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="cutline-export")

    def submit(
        self,
        plan: RenderPlan,
        encoder: Encoder,
        output_path: str | Path,
        settings: ExportSettings | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> ExportJob:
        """Start rendering plan and return without waiting for it."""
        job = ExportJob(plan, Path(output_path), settings or ExportSettings())
        job._future = self._executor.submit(_run, job, encoder, on_progress)
        return job

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
