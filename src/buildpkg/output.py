"""
Timestamped console output for buildpkg.

Every line is prefixed with the time elapsed since the resolution session
started, in MM:SS.cc format (minutes:seconds.centiseconds), so slow passes
over a large package set are easy to spot.

Example output:
    00:00.01 Resolving packages for target blinky (arch: cortex_m4)...
    00:00.02 [1/?] Resolution pass 1: 3 packages
    00:00.02       [pending] @apache-mynewt-core/hw/hal
    00:00.03 [2/?] Resolution pass 2: 5 packages
    00:00.04       Converged after 2 passes: 5 packages, 1 features
    00:00.04       Done (0.03s)

Usage:
    from buildpkg.output import log, log_phase, log_detail, init_timer

    init_timer()
    log("Resolving packages...")
    log_phase(1, 3, "Loading features...")
    log_detail("Package: sys/console")
"""

import sys
import time
from types import TracebackType
from typing import Optional, TextIO

# Global state for the timer
_start_time: Optional[float] = None
_output_stream: TextIO = sys.stdout
_verbose: bool = True


def init_timer(output_stream: Optional[TextIO] = None) -> None:
    """
    Initialize the session timer.

    If not called explicitly, it is called automatically on first log.

    Args:
        output_stream: Optional output stream (defaults to sys.stdout)
    """
    global _start_time, _output_stream
    _start_time = time.time()
    if output_stream is not None:
        _output_stream = output_stream


def set_verbose(verbose: bool) -> None:
    """
    Set verbose mode for logging.

    Args:
        verbose: If True, all messages are printed. If False, only non-verbose messages.
    """
    global _verbose
    _verbose = verbose


def get_elapsed() -> float:
    """
    Get elapsed time since timer initialization.

    Returns:
        Elapsed time in seconds
    """
    global _start_time
    if _start_time is None:
        init_timer()
    return time.time() - _start_time  # type: ignore


def format_timestamp() -> str:
    """
    Format the current elapsed time as MM:SS.cc.

    Returns:
        Formatted timestamp string
    """
    elapsed = get_elapsed()
    minutes = int(elapsed // 60)
    seconds = elapsed % 60
    return f"{minutes:02d}:{seconds:05.2f}"


def _print(message: str, end: str = "\n") -> None:
    timestamp = format_timestamp()
    _output_stream.write(f"{timestamp} {message}{end}")
    _output_stream.flush()


def log(message: str, verbose_only: bool = False) -> None:
    """
    Log a message with timestamp.

    Args:
        message: Message to log
        verbose_only: If True, only print if verbose mode is enabled
    """
    if verbose_only and not _verbose:
        return
    _print(message)


def log_phase(phase: int, total: Optional[int], message: str, verbose_only: bool = False) -> None:
    """
    Log a phase message.

    Format: [N/M] message, or [N/?] when the total is not known up front
    (resolution passes run until a fixed point is reached).

    Args:
        phase: Current phase number
        total: Total number of phases, or None if unknown
        message: Phase description
        verbose_only: If True, only print if verbose mode is enabled
    """
    if verbose_only and not _verbose:
        return
    total_str = "?" if total is None else str(total)
    _print(f"[{phase}/{total_str}] {message}")


def log_detail(message: str, indent: int = 6, verbose_only: bool = False) -> None:
    """
    Log a detail message (indented).

    Args:
        message: Detail message
        indent: Number of spaces to indent (default 6)
        verbose_only: If True, only print if verbose mode is enabled
    """
    if verbose_only and not _verbose:
        return
    _print(f"{' ' * indent}{message}")


def log_package(status: str, package_name: str, verbose_only: bool = True) -> None:
    """
    Log a per-package resolution status line.

    Format: [status] package_name

    Args:
        status: Resolution status (e.g. 'loaded', 'pending')
        package_name: Full name of the package
        verbose_only: If True, only print if verbose mode is enabled
    """
    if verbose_only and not _verbose:
        return
    _print(f"      [{status}] {package_name}")


def log_error(message: str) -> None:
    """Log an error message."""
    _print(f"ERROR: {message}")


class TimedLogger:
    """
    Context manager for logging with elapsed time tracking.

    Usage:
        with TimedLogger("Resolving packages") as timed:
            passes = run_passes()
            timed.detail(f"Converged after {passes} passes")
        # Automatically logs completion time
    """

    def __init__(self, operation: str, phase: Optional[tuple[int, int]] = None, verbose_only: bool = False):
        """
        Initialize timed logger.

        Args:
            operation: Description of the operation
            phase: Optional (current, total) phase numbers
            verbose_only: If True, only print if verbose mode is enabled
        """
        self.operation = operation
        self.phase = phase
        self.verbose_only = verbose_only
        self.start_time = 0.0

    def __enter__(self) -> "TimedLogger":
        self.start_time = time.time()
        if self.phase:
            log_phase(self.phase[0], self.phase[1], f"{self.operation}...", self.verbose_only)
        else:
            log(f"{self.operation}...", self.verbose_only)
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        del exc_val, exc_tb  # Unused
        elapsed = time.time() - self.start_time
        if exc_type is None:
            log_detail(f"Done ({elapsed:.2f}s)", verbose_only=self.verbose_only)
        return None

    def detail(self, message: str) -> None:
        """Log a detail message within this operation."""
        log_detail(message, verbose_only=self.verbose_only)
