"""
Simple logging system for pipeline progress.
"""

from __future__ import annotations

import sys
import time
from datetime import datetime
from pathlib import Path


class SimpleLogger:
    """Simple logger that writes to console and, optionally, a file."""

    def __init__(self, log_file: Path | None = None, *, quiet: bool = False):
        self.log_file = log_file
        self.quiet = quiet
        self.start_time = time.time()

        if self.log_file:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(f"\n{'='*60}\n")
                f.write(f"Session started: {datetime.now().isoformat()}\n")
                f.write(f"{'='*60}\n")

    @property
    def elapsed(self) -> float:
        return time.time() - self.start_time

    def log(self, message: str, prefix: str = "", error: bool = False) -> None:
        """Log a message to console and file.

        Args:
            message: The message to log
            prefix: Optional prefix like [INFO], [ERROR], etc.
            error: Whether to write to stderr instead of stdout
        """
        timestamp = datetime.now().strftime("%H:%M:%S")

        if prefix:
            formatted = f"[{timestamp}] {prefix} {message}"
        else:
            formatted = f"[{timestamp}] {message}"

        if not self.quiet or error:
            output = sys.stderr if error else sys.stdout
            print(formatted, file=output, flush=True)

        # File logging is best-effort; the first failure turns it off.
        if self.log_file:
            try:
                with open(self.log_file, "a", encoding="utf-8") as f:
                    f.write(formatted + "\n")
            except OSError as exc:
                print(f"[{timestamp}] [WARNING] Log file disabled: {exc}", file=sys.stderr, flush=True)
                self.log_file = None

    def progress(self, current: int, total: int, description: str = "") -> None:
        """Show simple progress indicator.

        Args:
            current: Current item number
            total: Total items
            description: Optional description
        """
        percent = (current / total * 100) if total > 0 else 0

        if description:
            self.log(f"[{current}/{total}] ({percent:.1f}%) {description} - {self.elapsed:.1f}s elapsed")
        else:
            self.log(f"[{current}/{total}] ({percent:.1f}%) - {self.elapsed:.1f}s elapsed")

    def section(self, title: str) -> None:
        """Print a section header."""
        self.log("")
        self.log("=" * 60)
        self.log(title.center(60))
        self.log("=" * 60)

    def success(self, message: str) -> None:
        """Log a success message."""
        self.log(message, prefix="[SUCCESS]")

    def error(self, message: str) -> None:
        """Log an error message."""
        self.log(message, prefix="[ERROR]", error=True)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.log(message, prefix="[WARNING]")

    def info(self, message: str) -> None:
        """Log an info message."""
        self.log(message, prefix="[INFO]")
