from __future__ import annotations

import pytest

from conclave_providers.base.process import BoundedBuffer


def test_write_under_limit_keeps_everything():
    buf = BoundedBuffer(10)
    assert buf.write(b"hello") == 5
    assert buf.getvalue() == b"hello"
    assert not buf.truncated
    assert len(buf) == 5


def test_write_past_limit_reports_full_length_and_truncates():
    buf = BoundedBuffer(4)
    assert buf.write(b"abcdef") == 6
    assert buf.getvalue() == b"abcd"
    assert buf.truncated
    # Writes after the cap are still accepted so the pipe keeps draining
    assert buf.write(b"more") == 4
    assert buf.getvalue() == b"abcd"


def test_exact_fill_is_not_truncated():
    buf = BoundedBuffer(3)
    buf.write(b"abc")
    buf.write(b"")
    assert not buf.truncated


def test_text_replaces_undecodable_bytes():
    buf = BoundedBuffer(16)
    buf.write(b"ok\xff")
    assert buf.text() == "ok�"


def test_negative_limit_rejected():
    with pytest.raises(ValueError):
        BoundedBuffer(-1)


def test_text_drops_character_split_by_cap():
    buf = BoundedBuffer(5)
    buf.write("ééé".encode("utf-8"))
    assert buf.truncated
    assert buf.text() == "éé"


def test_text_keeps_replacement_for_bad_tail_when_not_truncated():
    buf = BoundedBuffer(16)
    buf.write(b"ok\xc3")
    assert not buf.truncated
    assert buf.text() == "ok�"
