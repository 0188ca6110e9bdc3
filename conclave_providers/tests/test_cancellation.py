from __future__ import annotations

import pytest

from conclave_providers.base.cancellation import CancellationToken, CancelledError


def test_cancel_sets_reason_and_is_idempotent():
    token = CancellationToken()
    assert not token.cancelled
    token.cancel("first")
    token.cancel("second")
    assert token.cancelled
    assert token.reason == "first"


def test_child_cancelled_with_parent():
    parent = CancellationToken()
    child = parent.child()
    parent.cancel("stop")
    assert child.cancelled
    assert child.reason == "stop"


def test_child_of_cancelled_parent_starts_cancelled():
    parent = CancellationToken()
    parent.cancel()
    assert parent.child().cancelled


def test_raise_if_cancelled():
    token = CancellationToken()
    token.raise_if_cancelled()
    token.cancel()
    with pytest.raises(CancelledError):
        token.raise_if_cancelled()


def test_wait_times_out_when_not_cancelled():
    assert CancellationToken().wait(0.01) is False
