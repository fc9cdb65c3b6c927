"""
Clip concatenation for webmshrink.

Writes a concat demuxer list of the per-frame clips and merges them into the
final output with a stream copy.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from ..config import FFmpegSettings, app_config
from ..core.errors import ConcatError, PipelineIOError
from ..utils.subprocess import pretty_command, run_subprocess
from .ffmpeg import FFmpegCommandBuilder


def quote_concat_path(path: Path) -> str:
    """Quote a path for a concat demuxer ``file`` directive.

    Single quotes are closed, escaped and reopened: ``it's`` -> ``'it'\\''s'``.
    """
    escaped = path.as_posix().replace("'", r"'\''")
    return f"'{escaped}'"


def write_concat_manifest(clip_paths: Sequence[Path], list_path: Path) -> Path:
    """Write a concat list file enumerating clips in order.

    Args:
        clip_paths (Sequence[Path]): Clip paths in frame order.
        list_path (Path): Where to write the list.

    Returns:
        Path: ``list_path``.

    Raises:
        PipelineIOError: If the file cannot be written.
    """
    try:
        with list_path.open("w", encoding="utf-8") as f:
            for p in clip_paths:
                f.write(f"file {quote_concat_path(p)}\n")
    except OSError as exc:
        raise PipelineIOError(f"Failed to write concat manifest {list_path}: {exc}") from exc
    return list_path


def concat_clips(
    clip_paths: Sequence[Path],
    list_path: Path,
    out_path: Path,
    settings: FFmpegSettings = app_config.ffmpeg,
    *,
    log: bool = False,
) -> Path:
    """Merge ``clip_paths`` into ``out_path`` without re-encoding, replacing any existing file.

    Raises:
        PipelineIOError: If the manifest cannot be written.
        ConcatError: If ffmpeg exits non-zero.
    """
    write_concat_manifest(clip_paths, list_path)
    cmd = FFmpegCommandBuilder.build_concat_cmd(list_path, out_path, settings)
    code, stderr = run_subprocess(cmd, log=log)
    if code != 0:
        raise ConcatError(f"ffmpeg failed ({code}) concatenating clips: {pretty_command(cmd)}", stderr)
    return out_path
