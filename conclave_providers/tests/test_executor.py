"""Process executor tests using the running interpreter as the child CLI."""

from __future__ import annotations

import os
import subprocess  # nosec B404 - exception types only
import threading
import time

import pytest

from conclave_providers.base.cancellation import CancellationToken, CancelledError
from conclave_providers.base.constants import STDERR_TRUNCATION_MARKER, STDOUT_TRUNCATION_MARKER
from conclave_providers.base.errors import CLIError, ErrorCode
from conclave_providers.base.process import ProcessExecutor


def _py(python_exe: str, script: str, **kwargs) -> ProcessExecutor:
    return ProcessExecutor("test", python_exe, ["-c", script], **kwargs)


def test_success_returns_trimmed_stdout(python_exe):
    ex = _py(python_exe, "print('  hello world  ')")
    assert ex.run() == "hello world"


def test_configured_args_precede_call_args(python_exe):
    ex = _py(python_exe, "import sys; print(' '.join(sys.argv[1:]))")
    assert ex.run(["--model", "m1", "prompt text"]) == "--model m1 prompt text"


def test_nonzero_exit_uses_stderr_as_message(python_exe):
    ex = _py(python_exe, "import sys; sys.stderr.write('boom happened'); sys.exit(3)")
    with pytest.raises(CLIError) as info:
        ex.run()
    err = info.value
    assert err.code is ErrorCode.PROCESS_FAILED
    assert err.message == "boom happened"
    assert err.provider == "test"
    assert isinstance(err.cause, subprocess.CalledProcessError)
    assert err.cause.returncode == 3
    assert "boom happened" in str(err)


def test_nonzero_exit_without_stderr_is_command_failed(python_exe):
    ex = _py(python_exe, "import sys; sys.exit(1)")
    with pytest.raises(CLIError) as info:
        ex.run()
    assert info.value.message == "command failed"
    assert info.value.code is ErrorCode.PROCESS_FAILED


def test_missing_executable_is_not_found():
    ex = ProcessExecutor("ghost", "conclave-definitely-missing-cli")
    assert ex.available() is False
    with pytest.raises(CLIError) as info:
        ex.run(["hi"])
    assert info.value.code is ErrorCode.NOT_FOUND
    assert info.value.not_found
    assert "conclave-definitely-missing-cli" in info.value.message


def test_timeout_kills_process(python_exe):
    ex = _py(python_exe, "import time; time.sleep(30)", timeout=0.5)
    started = time.monotonic()
    with pytest.raises(CLIError) as info:
        ex.run()
    assert time.monotonic() - started < 10
    assert info.value.code is ErrorCode.TIMEOUT
    assert info.value.message == "command timed out"
    assert isinstance(info.value.cause, subprocess.TimeoutExpired)


def test_per_call_timeout_caps_configured_timeout(python_exe):
    ex = _py(python_exe, "import time; time.sleep(30)", timeout=120)
    with pytest.raises(CLIError) as info:
        ex.run(timeout=0.5)
    assert info.value.timed_out


def test_stdout_truncation_marker(python_exe):
    ex = _py(python_exe, "print('x' * 100)", max_output_size=10)
    assert ex.run() == "x" * 10 + STDOUT_TRUNCATION_MARKER


def test_stdout_truncation_never_exceeds_cap_in_bytes(python_exe):
    ex = _py(python_exe, "import sys; sys.stdout.buffer.write('\\u00e9'.encode('utf-8') * 20)", max_output_size=11)
    out = ex.run()
    assert out.endswith(STDOUT_TRUNCATION_MARKER)
    body = out[: -len(STDOUT_TRUNCATION_MARKER)]
    assert body == "\u00e9" * 5
    assert len(body.encode("utf-8")) <= 11


def test_stderr_truncation_marker(python_exe):
    ex = _py(python_exe, "import sys; sys.stderr.write('e' * 100); sys.exit(2)", max_output_size=8)
    with pytest.raises(CLIError) as info:
        ex.run()
    assert info.value.message == "e" * 8 + STDERR_TRUNCATION_MARKER


def test_working_dir_is_respected(python_exe, tmp_path):
    ex = _py(python_exe, "import os; print(os.getcwd())")
    out = ex.run(working_dir=str(tmp_path))
    assert os.path.realpath(out) == os.path.realpath(str(tmp_path))


def test_cancellation_stops_process(python_exe):
    ex = _py(python_exe, "import time; time.sleep(30)", timeout=60)
    token = CancellationToken()
    timer = threading.Timer(0.3, token.cancel, kwargs={"reason": "user abort"})
    timer.start()
    started = time.monotonic()
    try:
        with pytest.raises(CLIError) as info:
            ex.run(cancel_token=token)
    finally:
        timer.cancel()
    assert time.monotonic() - started < 10
    assert info.value.code is ErrorCode.CANCELLED
    assert isinstance(info.value.cause, CancelledError)
    assert "user abort" in str(info.value.cause)


def test_already_cancelled_token_never_spawns(python_exe, tmp_path):
    marker = tmp_path / "ran"
    ex = _py(python_exe, f"open({str(marker)!r}, 'w').close()")
    token = CancellationToken()
    token.cancel()
    with pytest.raises(CLIError) as info:
        ex.run(cancel_token=token)
    assert info.value.code is ErrorCode.CANCELLED
    assert not marker.exists()


def test_default_timeout_applied_for_zero():
    ex = ProcessExecutor("t", "x", timeout=0)
    assert ex.timeout == 300


def test_one_millisecond_deadline_is_timeout_not_failure(python_exe):
    ex = _py(python_exe, "import time; time.sleep(5)", timeout=0.001)
    with pytest.raises(CLIError) as info:
        ex.run()
    assert info.value.code is ErrorCode.TIMEOUT
