"""Per-frame clip encoding."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

from ..config import FFmpegSettings, app_config
from ..core.errors import EncodeError
from ..core.types import FrameRecord
from ..utils.subprocess import pretty_command, run_subprocess
from .ffmpeg import FFmpegCommandBuilder


def encode_clip(frame: FrameRecord, frame_rate: str, settings: FFmpegSettings, *, log: bool = False) -> Path:
    """Encode the resized image of one frame into its clip.

    Raises:
        EncodeError: If ffmpeg exits non-zero.
    """
    cmd = FFmpegCommandBuilder.build_clip_cmd(frame.resized_path, frame.clip_path, frame_rate, settings)
    code, stderr = run_subprocess(cmd, log=log)
    if code != 0:
        raise EncodeError(f"ffmpeg failed ({code}) encoding frame {frame.index}: {pretty_command(cmd)}", stderr)
    return frame.clip_path


def encode_clips(
    frames: Sequence[FrameRecord],
    frame_rate: str,
    settings: FFmpegSettings = app_config.ffmpeg,
    *,
    log: bool = False,
    on_frame: Callable[[FrameRecord], None] | None = None,
) -> list[Path]:
    """Encode every frame, one ffmpeg invocation each, stopping at the first failure."""
    clips: list[Path] = []
    for frame in frames:
        clips.append(encode_clip(frame, frame_rate, settings, log=log))
        if on_frame is not None:
            on_frame(frame)
    return clips
