"""
Pipeline runner for webmshrink.

Runs the stages strictly in order inside a scratch workspace that is removed
on every exit path:

    init -> extracting -> enumerating -> resizing -> encoding -> concatenating -> done

Any failure moves the run to ``failed`` and the error propagates unchanged.
"""

from __future__ import annotations

import contextlib
import tempfile
import time
from collections.abc import Iterator
from pathlib import Path

from .config import AppConfig, JobConfig, ProgressionMode, app_config
from .core.errors import PipelineIOError
from .core.types import FrameRecord, FrameSize, PipelineResult, PipelineStage
from .output.logger import SimpleLogger
from .processing.concat import concat_clips
from .processing.encode import encode_clips
from .processing.extract import extract_frames
from .processing.frames import enumerate_frames
from .processing.resize import make_progression, resize_frames
from .utils.path import ensure_output_dir

WORKSPACE_PREFIX = "webmshrink_"


@contextlib.contextmanager
def scratch_workspace(prefix: str = WORKSPACE_PREFIX) -> Iterator[Path]:
    """Yield a fresh temporary directory, deleting it on exit whatever happens."""
    try:
        td = tempfile.TemporaryDirectory(prefix=prefix)
    except OSError as exc:
        raise PipelineIOError(f"Failed to make temp directory: {exc}") from exc
    with td as name:
        yield Path(name)


class Pipeline:
    """One run of the video -> resized frames -> clips -> WebM pipeline."""

    def __init__(self, job: JobConfig, config: AppConfig = app_config, logger: SimpleLogger | None = None) -> None:
        self.job = job
        self.config = config
        self.logger = logger or SimpleLogger()
        self.seed = time.time_ns() if job.seed is None else job.seed
        self.workspace: Path | None = None
        self._stage = PipelineStage.INIT

    @property
    def stage(self) -> PipelineStage:
        return self._stage

    def _enter(self, stage: PipelineStage, message: str) -> None:
        self._stage = stage
        self.logger.info(message)

    def _progress_hook(self, total: int, verb: str):
        interval = self.config.progress_interval

        def report(frame: FrameRecord, size: FrameSize | None = None) -> None:
            if frame.index % interval == 0 or frame.index == total:
                detail = f"{verb} {frame.base.name}" + (f" -> {size}" if size is not None else "")
                self.logger.progress(frame.index, total, detail)

        return report

    def run(self) -> PipelineResult:
        """Run every stage once, in order.

        Returns:
            PipelineResult describing the written output.

        Raises:
            WebmShrinkError: The first stage failure; the workspace is already removed.
        """
        try:
            return self._run()
        except Exception:
            self._stage = PipelineStage.FAILED
            raise

    def _run(self) -> PipelineResult:
        job, cfg = self.job, self.config
        log = job.verbose

        ensure_output_dir(job.output_path)
        progression = make_progression(job.mode, self.seed, cfg.resize)
        if job.mode is ProgressionMode.RANDOM:
            self.logger.info(f"Random progression seed: {self.seed}")

        with scratch_workspace() as workspace:
            self.workspace = workspace

            self._enter(PipelineStage.EXTRACTING, "Extracting frames...")
            frame_rate = extract_frames(job.input_path, workspace, cfg, log=log)
            self.logger.info(f"Detected frame rate: {frame_rate} fps")

            self._enter(PipelineStage.ENUMERATING, "Enumerating frames...")
            frames = enumerate_frames(workspace, cfg.frames)
            self.logger.info(f"Extracted {len(frames)} frames")

            self._enter(PipelineStage.RESIZING, f"Resizing frames ({job.mode.label})...")
            sizes = resize_frames(frames, progression, on_frame=self._progress_hook(len(frames), "resized"))

            self._enter(PipelineStage.ENCODING, "Frames -> WebMs...")
            clips = encode_clips(
                frames, frame_rate, cfg.ffmpeg, log=log, on_frame=self._progress_hook(len(frames), "encoded")
            )

            self._enter(PipelineStage.CONCATENATING, "Concatenating WebMs...")
            manifest = workspace / cfg.frames.manifest_name
            concat_clips(clips, manifest, job.output_path, cfg.ffmpeg, log=log)

        self._stage = PipelineStage.DONE
        return PipelineResult(output_path=job.output_path, frame_rate=frame_rate, seed=self.seed, sizes=sizes)
