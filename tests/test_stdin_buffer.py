"""Tests for tabview.stdin_buffer -- splitting raw input into sequences."""

from __future__ import annotations

import pytest

from tabview.stdin_buffer import ESC, StdinBuffer, sequence_status, split_sequences


# ---------------------------------------------------------------------------
# sequence_status
# ---------------------------------------------------------------------------


class TestSequenceStatus:
    @pytest.mark.parametrize("data", ["a", "日", " "])
    def test_not_escape(self, data: str) -> None:
        assert sequence_status(data) == "not-escape"

    @pytest.mark.parametrize(
        "data",
        [
            ESC,
            "\x1b[",
            "\x1b[1;5",
            "\x1b[<0;10;5",
            "\x1b[M !",
            "\x1bO",
            "\x1b]0;title",
            "\x1bP1$r",
            "\x1b_Gi=1",
        ],
    )
    def test_incomplete(self, data: str) -> None:
        assert sequence_status(data) == "incomplete"

    @pytest.mark.parametrize(
        "data",
        [
            "\x1b[C",
            "\x1b[1;5C",
            "\x1b[3~",
            "\x1b[99;5u",
            "\x1b[<0;10;5M",
            "\x1b[M !!",
            "\x1bOA",
            "\x1b]0;title\x07",
            "\x1b]0;title\x1b\\",
            "\x1bP1$r\x1b\\",
            "\x1b_Gi=1\x1b\\",
            "\x1bq",
        ],
    )
    def test_complete(self, data: str) -> None:
        assert sequence_status(data) == "complete"


# ---------------------------------------------------------------------------
# split_sequences
# ---------------------------------------------------------------------------


class TestSplitSequences:
    def test_plain_characters_one_each(self) -> None:
        assert split_sequences("abc") == (["a", "b", "c"], "")

    def test_several_keys_in_one_read(self) -> None:
        assert split_sequences("\x1b[C\x1b[Dq") == (["\x1b[C", "\x1b[D", "q"], "")

    def test_unfinished_tail_kept(self) -> None:
        assert split_sequences("q\x1b[1;") == (["q"], "\x1b[1;")

    def test_trailing_escape_kept(self) -> None:
        assert split_sequences("ab\x1b") == (["a", "b"], ESC)

    def test_mouse_reports(self) -> None:
        data = "\x1b[<0;10;5M\x1b[M !!x"
        assert split_sequences(data) == (["\x1b[<0;10;5M", "\x1b[M !!", "x"], "")

    def test_alt_combination(self) -> None:
        assert split_sequences("\x1bqq") == (["\x1bq", "q"], "")

    def test_empty(self) -> None:
        assert split_sequences("") == ([], "")


# ---------------------------------------------------------------------------
# StdinBuffer
# ---------------------------------------------------------------------------


class TestStdinBuffer:
    def test_initial_state(self) -> None:
        assert not StdinBuffer().pending

    def test_sequence_across_reads(self) -> None:
        buf = StdinBuffer()
        assert buf.feed("\x1b[") == []
        assert buf.pending
        assert buf.feed("1;5") == []
        assert buf.feed("Cq") == ["\x1b[1;5C", "q"]
        assert not buf.pending

    def test_flush_releases_lone_escape(self) -> None:
        buf = StdinBuffer()
        assert buf.feed(ESC) == []
        assert buf.flush() == [ESC]
        assert not buf.pending
        assert buf.flush() == []

    def test_flush_releases_fragment_whole(self) -> None:
        buf = StdinBuffer()
        buf.feed("\x1b[1;")
        assert buf.flush() == ["\x1b[1;"]

    def test_clear_discards(self) -> None:
        buf = StdinBuffer()
        buf.feed("\x1b[")
        buf.clear()
        assert not buf.pending
        assert buf.feed("C") == ["C"]
