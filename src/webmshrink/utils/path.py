"""
Path and file system utilities for webmshrink.

This module handles output directory preparation and the
zero-padded frame naming scheme shared by extraction and enumeration.
"""

from __future__ import annotations

from pathlib import Path

from ..config import FrameSettings
from ..core.errors import PipelineIOError

OUTPUT_DIR_MODE = 0o755


def ensure_output_dir(output_path: Path) -> Path | None:
    """Create the directory that will hold ``output_path`` when it names one.

    A bare filename needs no directory. Nested directories are created with
    OUTPUT_DIR_MODE permissions.

    Args:
        output_path (Path): Final output file path.

    Returns:
        Optional[Path]: The directory that was ensured, or None for a bare filename.

    Raises:
        PipelineIOError: If the directory cannot be created.
    """
    parent = output_path.parent
    if parent == Path("."):
        return None
    try:
        parent.mkdir(mode=OUTPUT_DIR_MODE, parents=True, exist_ok=True)
    except OSError as exc:
        raise PipelineIOError(f"Failed to make output path {parent}: {exc}") from exc
    return parent


def frame_name(index: int, frames: FrameSettings) -> str:
    """Return the file stem of frame ``index``.

    Examples (defaults):
        1 -> "out0001"
        12345 -> "out12345"
    """
    return f"{frames.name_prefix}{index:0{frames.pad_digits}d}"


def frame_pattern(frames: FrameSettings) -> str:
    """Return the printf-style image pattern ffmpeg writes extracted frames to."""
    return f"{frames.name_prefix}%0{frames.pad_digits}d{frames.image_ext}"
