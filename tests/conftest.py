"""Shared pytest fixtures for webmshrink tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

FFMPEG_STDERR = """\
Input #0, mov,mp4,m4a,3gp,3g2,mj2, from 'input.mp4':
  Metadata:
    title           : shot at 60 fps
  Duration: 00:00:00.42, start: 0.000000, bitrate: 100 kb/s
  Stream #0:0(und): Audio: aac (LC) (mp4a / 0x6134706D), 48000 Hz, stereo, fltp, 128 kb/s (default)
  Stream #0:1(und): Video: h264 (High) (avc1 / 0x31637661), yuv420p, {w}x{h}, 90 kb/s, {fps} fps, {fps} tbr, 12288 tbn (default)
Stream mapping:
  Stream #0:1 -> #0:0 (h264 (native) -> png (native))
Output #0, image2, to 'out%04d.png':
  Stream #0:0(und): Video: png, rgb24, {w}x{h}, q=2-31, 200 kb/s, {fps} fps, {fps} tbn (default)
frame=   10 fps=0.0 q=-0.0 Lsize=N/A time=00:00:00.41 bitrate=N/A speed=3.1x
"""


def write_png(path: Path, size: tuple[int, int], mode: str = "RGB") -> Path:
    """Write a solid-colour PNG of ``size`` to ``path``."""
    color = (200, 40, 40, 255)[: len(mode)] if mode in ("RGB", "RGBA") else 128
    Image.new(mode, size, color).save(path)
    return path


class FakeFFmpeg:
    """Stands in for ffmpeg by recognising the three command shapes the pipeline builds.

    - extract: writes ``frame_count`` PNGs of ``frame_size`` to the numbered pattern
    - clip: writes a small file recording the source image size
    - concat: writes the manifest's clip names, one per line, to the output
    """

    def __init__(self, frame_count: int = 10, frame_size: tuple[int, int] = (640, 480), fps: str = "24"):
        self.frame_count = frame_count
        self.frame_size = frame_size
        self.fps = fps
        self.calls: list[list[str]] = []
        self.fail_on: str | None = None
        self.fail_at_call: int | None = None
        self.stderr_override: str | None = None

    def kind(self, cmd: list[str]) -> str:
        if "concat" in cmd:
            return "concat"
        if "-framerate" in cmd:
            return "clip"
        return "extract"

    def calls_of(self, kind: str) -> list[list[str]]:
        return [c for c in self.calls if self.kind(c) == kind]

    def __call__(self, cmd: list[str], *, log: bool = False) -> tuple[int, str]:
        self.calls.append(list(cmd))
        kind = self.kind(cmd)
        if kind == self.fail_on and (self.fail_at_call is None or len(self.calls_of(kind)) == self.fail_at_call):
            return 1, f"{kind}: Invalid data found when processing input"
        return getattr(self, f"_{kind}")(cmd)

    def _extract(self, cmd: list[str]) -> tuple[int, str]:
        pattern = Path(cmd[-1])
        for i in range(1, self.frame_count + 1):
            write_png(pattern.parent / (pattern.name % i), self.frame_size)
        if self.stderr_override is not None:
            return 0, self.stderr_override
        w, h = self.frame_size
        return 0, FFMPEG_STDERR.format(w=w, h=h, fps=self.fps)

    def _clip(self, cmd: list[str]) -> tuple[int, str]:
        src = Path(cmd[cmd.index("-i") + 1])
        with Image.open(src) as im:
            w, h = im.size
        Path(cmd[-1]).write_text(f"{w}x{h}@{cmd[cmd.index('-framerate') + 1]}\n")
        return 0, ""

    def _concat(self, cmd: list[str]) -> tuple[int, str]:
        manifest = Path(cmd[cmd.index("-i") + 1])
        out = Path(cmd[-1])
        lines = manifest.read_text(encoding="utf-8").splitlines()
        clips = [Path(line[len("file '"):-1]) for line in lines]
        out.write_text("".join(c.read_text() for c in clips))
        return 0, ""


@pytest.fixture
def fake_ffmpeg(monkeypatch) -> FakeFFmpeg:
    """Patch every processing module to run the fake instead of ffmpeg."""
    fake = FakeFFmpeg()
    for module in ("extract", "encode", "concat"):
        monkeypatch.setattr(f"webmshrink.processing.{module}.run_subprocess", fake)
    return fake


@pytest.fixture
def input_video(tmp_path: Path) -> Path:
    """A placeholder input file; the fake ffmpeg never reads it."""
    video = tmp_path / "input.mp4"
    video.write_bytes(b"\x00\x00\x00\x18ftypmp42")
    return video
