"""
External tool validation utilities for webmshrink.

This module handles validation of the external transcoder
required by the pipeline.
"""

from __future__ import annotations

from shutil import which

from ..config import app_config


def check_tools(ffmpeg_binary: str | None = None) -> tuple[bool, list[str]]:
    """Check availability of required external tools.

    Args:
        ffmpeg_binary: Executable to look for. Defaults to the configured binary.

    Returns:
        Tuple[bool, List[str]]: (all_ok, problems). If `all_ok` is False, problems lists the issues.
    """
    binary = ffmpeg_binary or app_config.ffmpeg.binary
    problems: list[str] = []
    if which(binary) is None:
        problems.append(f"{binary} not found in PATH")
    return (len(problems) == 0, problems)
