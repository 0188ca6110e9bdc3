from __future__ import annotations

import subprocess  # nosec B404 - exception types only

from conclave_providers.base.cancellation import CancelledError
from conclave_providers.base.errors import CLIError, ErrorCode, ProviderNotFoundError, classify_exception


def test_cli_error_str_with_and_without_cause():
    plain = CLIError("gemini", "command failed", ErrorCode.PROCESS_FAILED)
    assert str(plain) == "gemini provider error: command failed"
    wrapped = CLIError("gemini", "command timed out", ErrorCode.TIMEOUT, TimeoutError("30s"))
    assert str(wrapped) == "gemini provider error: command timed out: 30s"
    assert wrapped.timed_out and not wrapped.not_found


def test_error_codes_are_stable_strings():
    assert [c.value for c in ErrorCode] == ["not_found", "timeout", "cancelled", "process_failed", "unknown"]


def test_classify_exception():
    assert classify_exception(CLIError("x", "m", ErrorCode.NOT_FOUND)) is ErrorCode.NOT_FOUND  # nosec B101
    assert classify_exception(TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(subprocess.TimeoutExpired(["x"], 1)) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(CancelledError("stop")) is ErrorCode.CANCELLED  # nosec B101
    assert classify_exception(FileNotFoundError()) is ErrorCode.NOT_FOUND  # nosec B101
    assert classify_exception(subprocess.CalledProcessError(1, ["x"])) is ErrorCode.PROCESS_FAILED  # nosec B101
    assert classify_exception(RuntimeError("random")) is ErrorCode.UNKNOWN  # nosec B101


def test_provider_not_found_is_lookup_error():
    err = ProviderNotFoundError("nope")
    assert isinstance(err, LookupError)
    assert str(err) == "provider not found: nope"
