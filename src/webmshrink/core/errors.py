"""Error types raised by the pipeline stages.

Every error is fatal. Stages raise, and the CLI reports the first failure.
"""

from __future__ import annotations


class WebmShrinkError(Exception):
    """Base class for all pipeline failures.

    Attributes:
        diagnostics: Captured stderr of the failing external tool, if any.
    """

    def __init__(self, message: str, diagnostics: str | None = None) -> None:
        super().__init__(message)
        self.diagnostics = diagnostics


class ConfigurationError(WebmShrinkError):
    """Invalid command-line input, detected before any work begins."""


class PipelineIOError(WebmShrinkError):
    """Directory creation, listing or manifest write failure."""


class ExtractionError(WebmShrinkError):
    """ffmpeg failed to decode frames or its frame rate could not be parsed."""


class ImageError(WebmShrinkError):
    """A frame could not be decoded, resized or saved."""


class EncodeError(WebmShrinkError):
    """ffmpeg failed to encode a frame into a clip."""


class ConcatError(WebmShrinkError):
    """ffmpeg failed to merge the per-frame clips."""
