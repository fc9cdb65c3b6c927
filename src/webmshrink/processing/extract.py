"""
Frame extraction for webmshrink.

Decodes the input video into numbered PNG frames with ffmpeg and recovers
the source frame rate from ffmpeg's stream description lines.
"""

from __future__ import annotations

import re
from pathlib import Path

from ..config import AppConfig, app_config
from ..core.errors import ExtractionError
from ..utils.path import frame_name, frame_pattern
from ..utils.subprocess import pretty_command, run_subprocess
from .ffmpeg import FFmpegCommandBuilder

FRAME_RATE_RE = re.compile(r"(\d+\.\d+|\d+) fps")
STREAM_LINE_PREFIX = "Stream"


def parse_frame_rate(diagnostics: str) -> str | None:
    """Return the frame rate from the first stream line that reports one.

    Lines are scanned one at a time so that only stream descriptions are
    considered; a match anywhere else in the output (metadata, titles) is
    ignored. Audio streams carry no fps and are skipped naturally.

    Examples:
        "Stream #0:0: Video: h264, yuv420p, 640x480, 24 fps, 24 tbr" -> "24"
        "Stream #0:0: Video: h264, 1920x1080, 29.97 fps, 29.97 tbr" -> "29.97"

    Args:
        diagnostics (str): ffmpeg stderr text.

    Returns:
        Optional[str]: The rate as printed by ffmpeg, or None when no stream line matches.
    """
    for raw_line in diagnostics.splitlines():
        line = raw_line.strip()
        if not line.startswith(STREAM_LINE_PREFIX):
            continue
        match = FRAME_RATE_RE.search(line)
        if match:
            return match.group(1)
    return None


def extract_frames(video_path: Path, workspace: Path, config: AppConfig = app_config, *, log: bool = False) -> str:
    """Decode every frame of ``video_path`` into ``workspace`` and return its frame rate.

    Frames are numbered from 1 using the configured zero-padded pattern.

    Raises:
        ExtractionError: If ffmpeg fails, writes no frames, or no frame rate can be parsed.
    """
    pattern = workspace / frame_pattern(config.frames)
    cmd = FFmpegCommandBuilder.build_extract_cmd(video_path, pattern, config.ffmpeg)
    code, stderr = run_subprocess(cmd, log=log)
    if code != 0:
        raise ExtractionError(f"ffmpeg failed ({code}) extracting frames: {pretty_command(cmd)}", stderr)

    frame_rate = parse_frame_rate(stderr)
    if frame_rate is None:
        raise ExtractionError("No regex match for frame rate.", stderr)

    first = workspace / (frame_name(1, config.frames) + config.frames.image_ext)
    if not first.exists():
        raise ExtractionError(f"ffmpeg produced no frames from {video_path}", stderr)
    return frame_rate
