"""Test the character stream: reads, lookahead, exhaustion, and I/O failures."""

import io

import pytest

from sylan.errors import SourceReadError
from sylan.source import SourceStream


class TestRead:
    def test_read_and_look_ahead(self, stream):
        s = stream("abcdefghi")
        assert s.look_ahead(5) == "abcde"
        assert s.read(3) == "abc"
        assert s.look_ahead(4) == "defg"

    def test_single_character(self, stream):
        s = stream("xy")
        assert s.read() == "x"
        assert s.read() == "y"
        assert s.read() is None

    def test_zero_and_negative_counts(self, stream):
        s = stream("abc")
        assert s.read(0) == ""
        assert s.read(-2) == ""
        assert s.position.offset == 0
        assert not s.is_empty()

    def test_insufficient_input(self, stream):
        s = stream("ab")
        assert s.read(3) is None

    def test_read_advances_position(self, stream):
        s = stream("ab\ncd")
        s.read(4)
        assert s.position.offset == 4
        assert s.position.row == 1

    @pytest.mark.parametrize("k", [0, 1, 2, 3, 4])
    def test_split_reads_equal_single_read(self, stream, k):
        whole = stream("hello world").read(4)
        s = stream("hello world")
        first = s.read(k)
        second = s.read(4 - k)
        assert first + second == whole


class TestLookAhead:
    def test_does_not_move_position(self, stream):
        s = stream("abc")
        s.look_ahead(3)
        assert s.position.offset == 0

    def test_look_ahead_then_read_match(self, stream):
        s = stream("lookahead")
        peeked = s.look_ahead(6)
        assert s.read(6) == peeked

    def test_default_is_one_character(self, stream):
        assert stream("qr").look_ahead() == "q"

    def test_insufficient_input(self, stream):
        s = stream("ab")
        assert s.look_ahead(3) is None
        # the buffered characters are still there
        assert s.read(2) == "ab"


class TestIsEmpty:
    def test_lazy(self, stream):
        s = stream("")
        assert not s.is_empty()
        assert s.look_ahead() is None
        assert s.is_empty()

    def test_buffered_characters_keep_stream_alive(self, stream):
        s = stream("a")
        assert s.look_ahead(2) is None
        assert not s.is_empty()
        assert s.read() == "a"
        assert s.look_ahead() is None
        assert s.is_empty()


class TestBytes:
    def test_bytes_promote_one_at_a_time(self):
        s = SourceStream(io.BytesIO("é".encode("utf-8")))
        assert s.read(2) == "\xc3\xa9"


class _FailingReader(io.RawIOBase):
    def readable(self):
        return True

    def read(self, size=-1):
        raise OSError("disk on fire")


class TestIoFailure:
    def test_wrapped_and_raised(self):
        s = SourceStream(_FailingReader())
        with pytest.raises(SourceReadError) as exc_info:
            s.read()
        assert isinstance(exc_info.value.__cause__, OSError)
        assert "offset 0" in str(exc_info.value)

    def test_closed_source(self):
        raw = io.BytesIO(b"abc")
        raw.close()
        s = SourceStream(raw)
        with pytest.raises(SourceReadError) as exc_info:
            s.read()
        assert isinstance(exc_info.value.__cause__, ValueError)
