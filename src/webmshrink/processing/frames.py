"""Frame enumeration for the scratch workspace."""

from __future__ import annotations

import os
from pathlib import Path

from ..config import FrameSettings, app_config
from ..core.errors import PipelineIOError
from ..core.types import FrameRecord


def count_frames(workspace: Path, frames: FrameSettings) -> int:
    """Count extracted frame images in ``workspace``.

    Only files named like ``<prefix><digits><image_ext>`` are counted, so the
    manifest or resized copies never inflate the count.

    Raises:
        PipelineIOError: If the directory cannot be read.
    """
    try:
        names = os.listdir(workspace)
    except OSError as exc:
        raise PipelineIOError(f"Failed to read workspace {workspace}: {exc}") from exc

    prefix, ext = frames.name_prefix, frames.image_ext
    total = 0
    for name in names:
        if not (name.startswith(prefix) and name.endswith(ext)):
            continue
        if name[len(prefix):-len(ext)].isdigit():
            total += 1
    return total


def enumerate_frames(workspace: Path, frames: FrameSettings = app_config.frames) -> list[FrameRecord]:
    """Return the frame records 1..N for the frames extracted into ``workspace``.

    Directory listing order is not guaranteed, so the ordered list is rebuilt
    from the count and the zero-padded naming scheme.
    """
    total = count_frames(workspace, frames)
    return [FrameRecord.for_index(i, workspace, frames) for i in range(1, total + 1)]
