"""
Core data types for webmshrink.

These are the small records passed between pipeline stages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import NamedTuple

from ..config import FrameSettings
from ..utils.path import frame_name


class FrameSize(NamedTuple):
    """Pixel dimensions of a frame."""

    width: int
    height: int

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class FrameRecord:
    """One extracted frame and its family of on-disk files.

    All three representations share ``base``, the path without extension.
    Build records with ``for_index`` so names always follow the frame settings.
    """

    index: int  # 1-based
    base: Path
    image_ext: str
    resized_suffix: str
    clip_ext: str

    @classmethod
    def for_index(cls, index: int, directory: Path, frames: FrameSettings) -> FrameRecord:
        return cls(
            index=index,
            base=directory / frame_name(index, frames),
            image_ext=frames.image_ext,
            resized_suffix=frames.resized_suffix,
            clip_ext=frames.clip_ext,
        )

    @property
    def raw_path(self) -> Path:
        return self.base.with_name(self.base.name + self.image_ext)

    @property
    def resized_path(self) -> Path:
        return self.base.with_name(self.base.name + self.resized_suffix + self.image_ext)

    @property
    def clip_path(self) -> Path:
        return self.base.with_name(self.base.name + self.clip_ext)


class PipelineStage(str, Enum):
    """States of a pipeline run. Transitions are strictly forward."""

    INIT = "init"
    EXTRACTING = "extracting"
    ENUMERATING = "enumerating"
    RESIZING = "resizing"
    ENCODING = "encoding"
    CONCATENATING = "concatenating"
    DONE = "done"
    FAILED = "failed"


@dataclass
class PipelineResult:
    """Outcome of a successful run."""

    output_path: Path
    frame_rate: str
    seed: int
    sizes: list[FrameSize] = field(default_factory=list)

    @property
    def frame_count(self) -> int:
        return len(self.sizes)
