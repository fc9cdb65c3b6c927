"""
Frame resizing for webmshrink.

The first frame passes through untouched and fixes the baseline size. Every
later frame is resized to the size its progression picks for it:

- random: independent width and height in [random_min, random_min + random_span - 1]
- growing: baseline plus growth_step pixels per frame in both dimensions
"""

from __future__ import annotations

import os
import random
import time
from collections.abc import Callable, Sequence

from PIL import Image, UnidentifiedImageError

from ..config import ProgressionMode, ResizeSettings, app_config
from ..core.errors import ImageError
from ..core.types import FrameRecord, FrameSize

RESAMPLE_FILTER = Image.Resampling.LANCZOS


class RandomProgression:
    """Independent random width and height for every frame.

    Owns its own ``random.Random`` so runs are reproducible from ``seed``.
    """

    def __init__(self, seed: int, settings: ResizeSettings) -> None:
        self.seed = seed
        self.settings = settings
        self._rng = random.Random(seed)

    def start(self, baseline: FrameSize) -> None:
        # Baseline does not influence random sizes.
        pass

    def _draw(self) -> int:
        return self.settings.random_min + self._rng.randrange(self.settings.random_span)

    def next_size(self) -> FrameSize:
        width = self._draw()
        height = self._draw()
        return FrameSize(width, height)


class GrowingProgression:
    """Width and height grow by a fixed step on every frame."""

    def __init__(self, settings: ResizeSettings) -> None:
        self.settings = settings
        self._current: FrameSize | None = None

    def start(self, baseline: FrameSize) -> None:
        self._current = baseline

    def next_size(self) -> FrameSize:
        if self._current is None:
            raise RuntimeError("GrowingProgression.start() must be called with the baseline first")
        step = self.settings.growth_step
        self._current = FrameSize(self._current.width + step, self._current.height + step)
        return self._current


Progression = RandomProgression | GrowingProgression


def make_progression(
    mode: ProgressionMode, seed: int | None = None, settings: ResizeSettings = app_config.resize
) -> Progression:
    """Build the size progression for ``mode``.

    A missing seed is taken from the clock.
    """
    if mode is ProgressionMode.RANDOM:
        return RandomProgression(time.time_ns() if seed is None else seed, settings)
    if mode is ProgressionMode.GROWING:
        return GrowingProgression(settings)
    raise ValueError(f"Unsupported ProgressionMode: {mode}")


def image_dimensions(path: os.PathLike) -> FrameSize:
    """Return the (width, height) of an image file.

    Raises:
        ImageError: If the file cannot be decoded.
    """
    try:
        with Image.open(path) as im:
            return FrameSize(*im.size)
    except (OSError, UnidentifiedImageError) as exc:
        raise ImageError(f"Failed to open frame {path}: {exc}") from exc


def resize_image(src: os.PathLike, dst: os.PathLike, size: FrameSize) -> None:
    """Resize ``src`` to exactly ``size`` (aspect ratio ignored) and save it to ``dst``.

    Raises:
        ImageError: On decode, resize or save failure.
    """
    try:
        with Image.open(src) as im:
            if im.mode not in ("RGB", "RGBA"):
                im = im.convert("RGBA")
            resized = im.resize((size.width, size.height), RESAMPLE_FILTER)
    except (OSError, UnidentifiedImageError, ValueError) as exc:
        raise ImageError(f"Failed to resize frame {src}: {exc}") from exc

    try:
        resized.save(dst)
    except (OSError, ValueError) as exc:
        raise ImageError(f"Failed to save resized frame {dst}: {exc}") from exc


def resize_frames(
    frames: Sequence[FrameRecord],
    progression: Progression,
    on_frame: Callable[[FrameRecord, FrameSize], None] | None = None,
) -> list[FrameSize]:
    """Write the resized image of every frame and return the size of each.

    Frame 1 is renamed to its resized path rather than copied; the raw files
    of the other frames are left in place.

    Args:
        frames: Ordered frame records.
        progression: Size policy; started with frame 1's dimensions.
        on_frame: Optional callback invoked after each frame is written.

    Returns:
        Sizes in frame order, frame 1 first.

    Raises:
        ImageError: On any decode, resize, save or rename failure.
    """
    sizes: list[FrameSize] = []
    for i, frame in enumerate(frames):
        if i == 0:
            size = image_dimensions(frame.raw_path)
            try:
                os.replace(frame.raw_path, frame.resized_path)
            except OSError as exc:
                raise ImageError(f"Failed to move first frame {frame.raw_path}: {exc}") from exc
            progression.start(size)
        else:
            size = progression.next_size()
            resize_image(frame.raw_path, frame.resized_path, size)
        sizes.append(size)
        if on_frame is not None:
            on_frame(frame, size)
    return sizes
