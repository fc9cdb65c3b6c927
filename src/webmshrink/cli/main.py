#!/usr/bin/env python3
"""
webmshrink: Turn a video into a WebM whose frame size changes on every frame.

Each frame is resized (randomly, or growing steadily), encoded as its own
VP9 clip, and the clips are concatenated with a stream copy.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from ..config import JobConfig, ProgressionMode, app_config, build_job_config
from ..core.errors import ConfigurationError, PipelineIOError, WebmShrinkError
from ..output.logger import SimpleLogger
from ..pipeline import Pipeline
from ..tools.check import check_tools

err_console = Console(stderr=True)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    p = argparse.ArgumentParser(
        prog="webmshrink",
        description="Convert a video to a WebM whose frame size changes on every frame.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument("input", nargs="?", type=Path, help="Input video path")
    p.add_argument(
        "-m", "--mode", type=int, default=int(ProgressionMode.RANDOM), help="1 = random, 2 = growing."
    )
    p.add_argument(
        "-o", "--output", type=Path,
        help="Path to write output WebM to. Path will be made if it doesn't already exist.",
    )
    p.add_argument("-s", "--seed", type=int, default=None, help="Seed for random mode (defaults to the clock)")
    p.add_argument("-v", "--verbose", action="store_true", help="Echo every ffmpeg command to stderr")
    p.add_argument("--log-file", type=Path, default=None, help="Also append log lines to this file")
    p.add_argument("--check-tools", action="store_true", help="Verify external tools and exit")
    args = p.parse_args(argv)
    if not args.check_tools and (args.input is None or args.output is None):
        p.error("the following arguments are required: input, -o/--output")
    return args


def build_config(args: argparse.Namespace) -> JobConfig:
    """Create a JobConfig from parsed args.

    Raises:
        ConfigurationError: For a bad mode, output extension or input path.
    """
    return build_job_config(
        input_path=args.input,
        output_path=args.output,
        mode=args.mode,
        seed=args.seed,
        verbose=args.verbose,
        log_file=args.log_file,
    )


def print_run_header(logger: SimpleLogger, config: JobConfig) -> None:
    """Print the run configuration."""
    logger.section("Run Configuration")
    rows = [
        ["Input:", str(config.input_path)],
        ["Output:", str(config.output_path)],
        ["Mode:", f"{int(config.mode)} ({config.mode.label})"],
        ["Codec:", f"{app_config.ffmpeg.clip_codec} / {app_config.ffmpeg.pixel_format}"],
    ]
    for label, value in rows:
        logger.log(f"{label:<12} {value}")


def report_error(exc: WebmShrinkError, logger: SimpleLogger | None = None) -> None:
    """Print a fatal error and any captured ffmpeg diagnostics."""
    if logger is not None:
        logger.error(f"{type(exc).__name__}: {exc}")
    else:
        err_console.print(f"[bold red]{type(exc).__name__}:[/bold red] {escape(str(exc))}", highlight=False)
    if exc.diagnostics and exc.diagnostics.strip():
        err_console.print(
            Panel(Text(exc.diagnostics.strip()), title="ffmpeg output", border_style="red", expand=False),
            highlight=False,
        )


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    args = parse_args(argv)

    if args.check_tools:
        ok, probs = check_tools()
        if ok:
            print(f"Tools OK: {app_config.ffmpeg.binary}")
            return 0
        for p in probs:
            print(f"Missing: {p}", file=sys.stderr)
        return 1

    logger: SimpleLogger | None = None
    try:
        config = build_config(args)

        tools_ok, probs = check_tools()
        if not tools_ok:
            raise ConfigurationError("; ".join(probs))

        try:
            logger = SimpleLogger(config.log_file)
        except OSError as exc:
            raise PipelineIOError(f"Failed to open log file {config.log_file}: {exc}") from exc
        print_run_header(logger, config)

        result = Pipeline(config, app_config, logger).run()
    except WebmShrinkError as exc:
        report_error(exc, logger)
        return 1

    logger.section("Summary")
    rows = [
        ["Output:", str(result.output_path)],
        ["Frames:", str(result.frame_count)],
        ["Frame rate:", f"{result.frame_rate} fps"],
        ["Total Time:", f"{logger.elapsed:.1f}s"],
    ]
    if config.mode is ProgressionMode.RANDOM:
        rows.append(["Seed:", str(result.seed)])
    for label, value in rows:
        logger.log(f"{label:<20} {value}")
    logger.success(f"Wrote {result.output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
