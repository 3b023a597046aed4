"""Tests for tabview.keys -- raw input to key identifiers."""

from __future__ import annotations

import pytest

from tabview.keys import Key, is_key_release, matches_key, parse_key


# ---------------------------------------------------------------------------
# Key helper class
# ---------------------------------------------------------------------------


class TestKeyHelpers:
    """Key exposes names and modifier builders."""

    def test_arrow_names(self):
        assert (Key.up, Key.down, Key.left, Key.right) == ("up", "down", "left", "right")

    def test_modifier_builders(self):
        assert Key.ctrl("c") == "ctrl+c"
        assert Key.shift("tab") == "shift+tab"
        assert Key.alt("x") == "alt+x"


# ---------------------------------------------------------------------------
# Legacy sequences
# ---------------------------------------------------------------------------


class TestLegacySequences:
    """CSI and SS3 cursor keys, with and without modifier parameters."""

    @pytest.mark.parametrize(
        "data,expected",
        [
            ("\x1b[A", "up"),
            ("\x1b[B", "down"),
            ("\x1b[C", "right"),
            ("\x1b[D", "left"),
            ("\x1b[H", "home"),
            ("\x1b[F", "end"),
            ("\x1bOA", "up"),
            ("\x1bOD", "left"),
            ("\x1bOP", "f1"),
        ],
    )
    def test_unmodified(self, data: str, expected: str) -> None:
        assert parse_key(data) == expected

    @pytest.mark.parametrize(
        "data,expected",
        [
            ("\x1b[1;2C", "shift+right"),
            ("\x1b[1;3D", "alt+left"),
            ("\x1b[1;5C", "ctrl+right"),
            ("\x1b[1;5D", "ctrl+left"),
            ("\x1b[1;6A", "ctrl+shift+up"),
            ("\x1b[1;7B", "ctrl+alt+down"),
        ],
    )
    def test_modified_arrows(self, data: str, expected: str) -> None:
        assert parse_key(data) == expected

    @pytest.mark.parametrize(
        "data,expected",
        [
            ("\x1b[2~", "insert"),
            ("\x1b[3~", "delete"),
            ("\x1b[5~", "pageUp"),
            ("\x1b[6~", "pageDown"),
            ("\x1b[15~", "f5"),
            ("\x1b[3;5~", "ctrl+delete"),
        ],
    )
    def test_tilde_keys(self, data: str, expected: str) -> None:
        assert parse_key(data) == expected

    def test_shift_tab(self) -> None:
        assert parse_key("\x1b[Z") == "shift+tab"

    @pytest.mark.parametrize("data", ["\x1b[1;5X", "\x1b[99~", "\x1bOZ"])
    def test_unknown_final_or_code(self, data: str) -> None:
        assert parse_key(data) is None


# ---------------------------------------------------------------------------
# Kitty keyboard protocol
# ---------------------------------------------------------------------------


class TestKittySequences:
    """CSI <codepoint>;<modifier> u sequences."""

    @pytest.mark.parametrize(
        "data,expected",
        [
            ("\x1b[113u", "q"),
            ("\x1b[99;5u", "ctrl+c"),
            ("\x1b[65;2u", "shift+a"),
            ("\x1b[13u", "enter"),
            ("\x1b[27u", "escape"),
            ("\x1b[9;2u", "shift+tab"),
            ("\x1b[113;1:1u", "q"),
            ("\x1b[99;69u", "ctrl+c"),
        ],
    )
    def test_presses(self, data: str, expected: str) -> None:
        assert parse_key(data) == expected

    def test_release_is_not_a_key(self) -> None:
        assert parse_key("\x1b[113;1:3u") is None

    def test_release_detection(self) -> None:
        assert is_key_release("\x1b[113;1:3u")
        assert not is_key_release("\x1b[113;1:1u")
        assert not is_key_release("\x1b[113u")
        assert not is_key_release("q")


# ---------------------------------------------------------------------------
# Single characters
# ---------------------------------------------------------------------------


class TestSingleCharacters:
    """Printable characters, control characters and Alt prefixes."""

    @pytest.mark.parametrize("data", ["q", "Q", "1", "é", "日"])
    def test_printable_is_itself(self, data: str) -> None:
        assert parse_key(data) == data

    @pytest.mark.parametrize(
        "data,expected",
        [
            ("\x1b", "escape"),
            ("\r", "enter"),
            ("\n", "enter"),
            ("\t", "tab"),
            (" ", "space"),
            ("\x7f", "backspace"),
            ("\x08", "backspace"),
            ("\x00", "ctrl+space"),
            ("\x03", "ctrl+c"),
            ("\x01", "ctrl+a"),
            ("\x1a", "ctrl+z"),
        ],
    )
    def test_control_characters(self, data: str, expected: str) -> None:
        assert parse_key(data) == expected

    def test_alt_prefix(self) -> None:
        assert parse_key("\x1bq") == "alt+q"
        assert parse_key("\x1b\x03") == "alt+ctrl+c"

    def test_double_escape_is_not_a_key(self) -> None:
        assert parse_key("\x1b\x1b") is None

    def test_empty(self) -> None:
        assert parse_key("") is None


# ---------------------------------------------------------------------------
# Mouse reports
# ---------------------------------------------------------------------------


class TestMouse:
    """Mouse reports parse to a single ``mouse`` key that nothing binds."""

    @pytest.mark.parametrize("data", ["\x1b[<0;10;5M", "\x1b[<0;10;5m", "\x1b[<64;1;1M", "\x1b[M !!"])
    def test_mouse_reports(self, data: str) -> None:
        assert parse_key(data) == Key.mouse


# ---------------------------------------------------------------------------
# matches_key
# ---------------------------------------------------------------------------


class TestMatchesKey:
    def test_match(self) -> None:
        assert matches_key("\x1b[C", "right")
        assert matches_key("\x03", "ctrl+c")
        assert matches_key("\x1b[99;5u", "ctrl+c")

    def test_no_match(self) -> None:
        assert not matches_key("\x1b[C", "left")
        assert not matches_key("Q", "q")
        assert not matches_key("\x1b[1;5C", "right")
