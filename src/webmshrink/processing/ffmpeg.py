"""
FFmpeg command building module for webmshrink.

This module consolidates all FFmpeg command construction logic,
separating it from the pipeline stages that run the commands.
"""

from __future__ import annotations

from pathlib import Path

from ..config import FFmpegSettings


class FFmpegCommandBuilder:
    """Builder class for constructing FFmpeg commands."""

    @staticmethod
    def build_extract_cmd(video_path: Path, image_pattern: Path, settings: FFmpegSettings) -> list[str]:
        """Create ffmpeg command decoding every frame of a video to numbered images.

        No -loglevel here: the stream description lines on stderr are needed
        to recover the frame rate.
        """
        return [
            settings.binary,
            "-hide_banner",
            "-nostdin",
            "-i", str(video_path),
            str(image_pattern),
        ]

    @staticmethod
    def build_clip_cmd(src: Path, dst: Path, frame_rate: str, settings: FFmpegSettings) -> list[str]:
        """Create ffmpeg command encoding one still image into a short alpha-capable clip."""
        return [
            settings.binary,
            "-hide_banner",
            "-loglevel", settings.loglevel,
            "-nostdin",
            "-framerate", frame_rate,
            "-f", "image2",
            "-i", str(src),
            "-c:v", settings.clip_codec,
            "-pix_fmt", settings.pixel_format,
            str(dst),
        ]

    @staticmethod
    def build_concat_cmd(list_file: Path, out_path: Path, settings: FFmpegSettings) -> list[str]:
        """Create ffmpeg command stream-copying the clips listed in a concat file, overwriting out_path."""
        return [
            settings.binary,
            "-hide_banner",
            "-loglevel", settings.loglevel,
            "-nostdin",
            "-f", "concat",
            "-safe", "0",
            "-i", str(list_file),
            "-c", "copy",
            "-y",
            str(out_path),
        ]
