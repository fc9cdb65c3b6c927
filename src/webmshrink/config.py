"""
Consolidated configuration system for webmshrink.

This module provides the Pydantic-based run configuration (``JobConfig``) built
once from command-line input, and the ambient ``AppConfig`` settings that can be
overridden through environment variables with the ``WEBMSHRINK_`` prefix.
"""

from __future__ import annotations

from enum import IntEnum
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.errors import ConfigurationError

# =============================================================================
# PROGRESSION MODE ENUM
# =============================================================================


class ProgressionMode(IntEnum):
    """How target frame sizes evolve across the sequence."""

    RANDOM = 1
    GROWING = 2

    @property
    def label(self) -> str:
        return self.name.lower()


# =============================================================================
# FFMPEG SETTINGS
# =============================================================================


class FFmpegSettings(BaseModel):
    """External transcoder invocation settings."""

    binary: Annotated[str, Field(
        default="ffmpeg",
        min_length=1,
        description="ffmpeg executable name or path"
    )] = "ffmpeg"

    clip_codec: Annotated[str, Field(
        default="libvpx-vp9",
        description="Video codec used for each per-frame clip"
    )] = "libvpx-vp9"

    pixel_format: Annotated[str, Field(
        default="yuva420p",
        description="Alpha-capable pixel format for per-frame clips"
    )] = "yuva420p"

    loglevel: Annotated[str, Field(
        default="error",
        description="ffmpeg -loglevel for encode and concat invocations"
    )] = "error"


# =============================================================================
# FRAME NAMING SETTINGS
# =============================================================================


class FrameSettings(BaseModel):
    """Naming scheme for the per-frame files inside the scratch workspace."""

    name_prefix: Annotated[str, Field(
        default="out",
        min_length=1,
        description="Filename prefix shared by every extracted frame"
    )] = "out"

    pad_digits: Annotated[int, Field(
        default=4,
        ge=1,
        le=10,
        description="Zero-padding width of frame numbers"
    )] = 4

    image_ext: str = ".png"
    resized_suffix: str = "_r"
    clip_ext: str = ".webm"
    manifest_name: str = "concat.txt"

    @field_validator("image_ext", "clip_ext")
    @classmethod
    def validate_extension_format(cls, v):
        """Ensure extension starts with dot."""
        if not v.startswith("."):
            raise ValueError(f"Extension must start with dot, got: {v}")
        return v


# =============================================================================
# RESIZE SETTINGS
# =============================================================================


class ResizeSettings(BaseModel):
    """Size progression parameters."""

    random_min: Annotated[int, Field(
        default=50,
        ge=1,
        description="Smallest width/height drawn by the random progression"
    )] = 50

    random_span: Annotated[int, Field(
        default=1000,
        ge=1,
        description="Number of distinct values drawn above random_min"
    )] = 1000

    growth_step: Annotated[int, Field(
        default=20,
        ge=1,
        description="Pixels added to width and height per frame in growing mode"
    )] = 20

    @property
    def random_max(self) -> int:
        """Largest value the random progression can produce (inclusive)."""
        return self.random_min + self.random_span - 1


# =============================================================================
# MAIN APPLICATION CONFIGURATION
# =============================================================================


class AppConfig(BaseSettings):
    """
    Ambient application configuration with environment variable support.

    All settings can be overridden via environment variables with WEBMSHRINK_ prefix.
    Example: WEBMSHRINK_FFMPEG__BINARY=/opt/ffmpeg/bin/ffmpeg
    """

    model_config = SettingsConfigDict(
        env_prefix="WEBMSHRINK_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    ffmpeg: FFmpegSettings = FFmpegSettings()
    frames: FrameSettings = FrameSettings()
    resize: ResizeSettings = ResizeSettings()

    output_ext: str = ".webm"
    progress_interval: Annotated[int, Field(default=25, ge=1)] = 25


# =============================================================================
# JOB CONFIGURATION
# =============================================================================


class JobConfig(BaseModel):
    """Immutable run configuration built from command-line input."""

    model_config = ConfigDict(frozen=True)

    input_path: Path
    output_path: Path
    mode: ProgressionMode = ProgressionMode.RANDOM
    seed: int | None = None
    verbose: bool = False
    log_file: Path | None = None

    @field_validator("mode", mode="before")
    @classmethod
    def validate_mode(cls, v):
        """Accept only the enumerated progression modes, as integers."""
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError("Mode must be 1 or 2.")
        try:
            return ProgressionMode(v)
        except ValueError:
            raise ValueError("Mode must be 1 or 2.") from None

    @field_validator("output_path")
    @classmethod
    def validate_output_extension(cls, v):
        """Only WebM output is supported."""
        if not str(v).endswith(app_config.output_ext):
            raise ValueError(f'Output file extension must be "{app_config.output_ext}".')
        return v

    @field_validator("input_path")
    @classmethod
    def validate_input_exists(cls, v):
        """The input video must be an existing file."""
        if not v.is_file():
            raise ValueError(f"Input video not found: {v}")
        return v


def build_job_config(**values) -> JobConfig:
    """Create a JobConfig, reporting validation failures as ConfigurationError.

    Raises:
        ConfigurationError: When any field fails validation.
    """
    try:
        return JobConfig(**values)
    except ValidationError as exc:
        reasons = "; ".join(str(err["msg"]).removeprefix("Value error, ") for err in exc.errors())
        raise ConfigurationError(reasons) from exc


# =============================================================================
# DEFAULT INSTANCE
# =============================================================================

# Create default configuration instance for easy importing
app_config = AppConfig()
