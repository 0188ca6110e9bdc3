"""Subprocess execution core shared by every CLI provider adapter.

Purpose
    Resolve a provider executable on ``PATH``, run it with a hard deadline,
    capture stdout/stderr into bounded buffers, and translate every failure
    into a :class:`~conclave_providers.base.errors.CLIError` with a
    normalized :class:`~conclave_providers.base.errors.ErrorCode`.

External Dependencies
    * Provider CLI binaries executed via :mod:`subprocess` (``shell=False``).

Fallback Semantics
    None. Errors are raised to the caller; nothing is logged-and-swallowed.

Timeout Strategy
    The effective deadline is the configured provider timeout (default 300 s)
    capped by an optional per-call timeout. On deadline or cancellation the
    whole process group is killed (POSIX) before the error is raised.
"""
from __future__ import annotations

import contextlib
import logging
import os
import shutil
import signal
import subprocess  # nosec B404 - executes configured provider CLIs with a fixed arg vector
import threading
import time
from typing import IO, List, Optional, Sequence, Tuple

from ..cancellation import CancellationToken, CancelledError
from ..constants import MAX_OUTPUT_SIZE, STDERR_TRUNCATION_MARKER, STDOUT_TRUNCATION_MARKER
from ..errors import CLIError, ErrorCode
from ..logging import LogContext, get_logger, log_event
from ..timeouts import effective_timeout
from .bounded_buffer import BoundedBuffer

_READ_CHUNK = 64 * 1024
_CANCEL_POLL_SECONDS = 0.05
# Grace period for reader threads once the process is gone
_DRAIN_GRACE_SECONDS = 2.0

_POSIX = os.name == "posix"

_logger = get_logger("conclave.process")


def _drain(stream: IO[bytes], sink: BoundedBuffer) -> None:
    """Copy ``stream`` into ``sink`` until EOF."""
    with contextlib.suppress(OSError, ValueError):
        while True:
            chunk = stream.read1(_READ_CHUNK) if hasattr(stream, "read1") else stream.read(_READ_CHUNK)
            if not chunk:
                break
            sink.write(chunk)


def _kill(proc: subprocess.Popen) -> None:
    """Kill ``proc`` and, on POSIX, every process in its session group."""
    if _POSIX:
        with contextlib.suppress(ProcessLookupError, PermissionError, OSError):
            os.killpg(proc.pid, signal.SIGKILL)
    with contextlib.suppress(ProcessLookupError, OSError):
        proc.kill()
    with contextlib.suppress(subprocess.TimeoutExpired):
        proc.wait(timeout=_DRAIN_GRACE_SECONDS)


class ProcessExecutor:
    """Run one provider CLI with bounded time and bounded output.

    Parameters
    ----------
    provider: str
        Provider name used for error attribution and logging.
    command: str
        Executable name or path.
    args: Sequence[str]
        Fixed arguments placed right after the executable on every run.
    timeout: Optional[float]
        Configured per-call deadline in seconds (``None``/``0`` = 300 s).
    max_output_size: int
        Per-stream capture cap in bytes.
    """

    def __init__(
        self,
        provider: str,
        command: str,
        args: Sequence[str] = (),
        timeout: Optional[float] = None,
        max_output_size: int = MAX_OUTPUT_SIZE,
    ) -> None:
        self.provider = provider
        self.command = command
        self.args: Tuple[str, ...] = tuple(args or ())
        self.timeout = effective_timeout(timeout)
        self.max_output_size = max_output_size

    def resolve(self) -> str:
        """Return the absolute executable path or raise a ``NOT_FOUND`` error."""
        path = shutil.which(self.command) if self.command else None
        if not path:
            raise CLIError(
                provider=self.provider,
                message=f"executable '{self.command}' not found in PATH",
                code=ErrorCode.NOT_FOUND,
            )
        return os.path.abspath(path)

    def available(self) -> bool:
        try:
            self.resolve()
        except CLIError:
            return False
        return True

    def run(
        self,
        args: Sequence[str] = (),
        *,
        working_dir: Optional[str] = None,
        timeout: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> str:
        """Execute the CLI and return its stripped stdout.

        Raises
        ------
        CLIError
            ``NOT_FOUND`` before spawning when the executable is missing,
            ``TIMEOUT`` when the deadline elapsed, ``CANCELLED`` when the
            token fired, ``PROCESS_FAILED`` on non-zero exit or spawn failure.
        """
        exe = self.resolve()
        all_args: List[str] = [*self.args, *args]
        deadline = effective_timeout(self.timeout, timeout)
        ctx = LogContext(provider=self.provider).with_extra(command=self.command)
        log_event(
            _logger,
            "cli.exec.start",
            ctx,
            args=all_args,
            working_dir=working_dir,
            timeout_s=deadline,
        )

        if cancel_token is not None and cancel_token.cancelled:
            raise self._cancelled(cancel_token)

        stdout_buf = BoundedBuffer(self.max_output_size)
        stderr_buf = BoundedBuffer(self.max_output_size)
        try:
            proc = subprocess.Popen(  # nosec B603 - shell=False, executable resolved via shutil.which
                [exe, *all_args],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                cwd=working_dir or None,
                start_new_session=_POSIX,
            )
        except OSError as exc:
            log_event(_logger, "cli.exec.error", ctx, level=logging.WARNING, error=str(exc), phase="spawn")
            raise CLIError(self.provider, "command failed", ErrorCode.PROCESS_FAILED, exc) from exc

        readers = [
            threading.Thread(target=_drain, args=(proc.stdout, stdout_buf), daemon=True),
            threading.Thread(target=_drain, args=(proc.stderr, stderr_buf), daemon=True),
        ]
        for reader in readers:
            reader.start()

        started = time.monotonic()
        deadline_at = started + deadline
        outcome = self._wait(proc, deadline_at, cancel_token)
        if outcome != "exited":
            _kill(proc)
        self._join_readers(proc, readers, deadline_at)
        elapsed = time.monotonic() - started

        if outcome == "timeout":
            cause = subprocess.TimeoutExpired([exe, *all_args], deadline)
            log_event(_logger, "cli.exec.error", ctx, level=logging.WARNING, error="timeout", duration_s=round(elapsed, 3))
            raise CLIError(self.provider, "command timed out", ErrorCode.TIMEOUT, cause) from cause
        if outcome == "cancelled":
            log_event(_logger, "cli.exec.error", ctx, level=logging.WARNING, error="cancelled", duration_s=round(elapsed, 3))
            raise self._cancelled(cancel_token)

        returncode = proc.returncode
        if returncode != 0:
            stderr_text = stderr_buf.text()
            cause = subprocess.CalledProcessError(returncode, [exe, *all_args], stderr=stderr_text)
            log_event(
                _logger,
                "cli.exec.error",
                ctx,
                level=logging.WARNING,
                returncode=returncode,
                stderr=stderr_text[:500],
                duration_s=round(elapsed, 3),
            )
            if len(stderr_buf) > 0:
                message = stderr_text
                if stderr_buf.truncated:
                    message += STDERR_TRUNCATION_MARKER
                raise CLIError(self.provider, message, ErrorCode.PROCESS_FAILED, cause) from cause
            raise CLIError(self.provider, "command failed", ErrorCode.PROCESS_FAILED, cause) from cause

        result = stdout_buf.text().strip()
        log_event(
            _logger,
            "cli.exec.done",
            ctx,
            returncode=returncode,
            output_len=len(result),
            truncated=stdout_buf.truncated,
            duration_s=round(elapsed, 3),
        )
        if stdout_buf.truncated:
            result += STDOUT_TRUNCATION_MARKER
        return result

    @staticmethod
    def _wait(
        proc: subprocess.Popen,
        deadline_at: float,
        cancel_token: Optional[CancellationToken],
    ) -> str:
        """Block until exit, deadline, or cancellation; return which happened."""
        while True:
            remaining = deadline_at - time.monotonic()
            if remaining <= 0:
                # Exit status wins if the process finished right at the deadline
                return "exited" if proc.poll() is not None else "timeout"
            step = remaining if cancel_token is None else min(remaining, _CANCEL_POLL_SECONDS)
            try:
                proc.wait(timeout=step)
                return "exited"
            except subprocess.TimeoutExpired:
                if cancel_token is not None and cancel_token.cancelled:
                    return "cancelled"

    @staticmethod
    def _join_readers(proc: subprocess.Popen, readers: List[threading.Thread], deadline_at: float) -> None:
        for reader in readers:
            reader.join(timeout=max(deadline_at - time.monotonic(), _DRAIN_GRACE_SECONDS))
        if any(reader.is_alive() for reader in readers):
            # A detached descendant still holds the pipes open
            _kill(proc)
            for reader in readers:
                reader.join(timeout=_DRAIN_GRACE_SECONDS)
        for stream in (proc.stdout, proc.stderr):
            if stream is not None:
                with contextlib.suppress(OSError):
                    stream.close()

    def _cancelled(self, token: Optional[CancellationToken]) -> CLIError:
        reason = token.reason if token is not None and token.reason else "operation cancelled"
        cause = CancelledError(reason)
        err = CLIError(self.provider, "command cancelled", ErrorCode.CANCELLED, cause)
        err.__cause__ = cause
        return err


__all__ = ["ProcessExecutor"]
