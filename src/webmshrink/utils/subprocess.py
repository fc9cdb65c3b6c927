"""Subprocess and external command utilities."""

from __future__ import annotations

import shlex
import subprocess
import sys


def pretty_command(cmd: list[str]) -> str:
    """Return a shell-quoted string of the command for logs and error text."""
    return " ".join(shlex.quote(c) for c in cmd)


def run_subprocess(cmd: list[str], *, log: bool = False) -> tuple[int, str]:
    """Run a command to completion, capturing its stderr.

    Args:
        cmd: Command and arguments list
        log: Whether to echo the command to stderr before running it

    Returns:
        Tuple of (return_code, stderr_output). A command that cannot be
        started at all is reported as return code -1 with the OS error text.
    """
    if log:
        print(f"[ffmpeg] {pretty_command(cmd)}", file=sys.stderr, flush=True)

    try:
        result = subprocess.run(cmd, capture_output=True, text=True, errors="replace")
        return result.returncode, result.stderr
    except OSError as e:
        return -1, f"{type(e).__name__}: {e}"
