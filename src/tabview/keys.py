"""Decoding of raw terminal input into key identifiers.

Understands plain characters, control characters, legacy CSI/SS3 cursor and
function-key sequences (with xterm-style modifier parameters), the Kitty
``CSI <codepoint>;<modifier> u`` form, and SGR mouse reports.  Key
identifiers use the ``"ctrl+shift+alt+<key>"`` format, e.g. ``"left"``,
``"q"``, ``"ctrl+c"``, ``"shift+right"``.
"""

from __future__ import annotations

import re
from typing import Optional

KeyId = str


class Key:
    """Named key identifiers."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    delete = "delete"
    insert = "insert"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"
    mouse = "mouse"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"

    @staticmethod
    def shift(key: str) -> str:
        return f"shift+{key}"

    @staticmethod
    def alt(key: str) -> str:
        return f"alt+{key}"


# xterm modifier parameter = 1 + bitmask
MODIFIERS: dict[str, int] = {
    "shift": 1,
    "alt": 2,
    "ctrl": 4,
}

# Caps lock / num lock bits reported by Kitty
LOCK_MASK = 64 + 128

# Final byte of ``CSI 1;<mod> X`` / ``SS3 X`` sequences
_LETTER_FINALS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
    "E": "clear",
    "P": "f1",
    "Q": "f2",
    "R": "f3",
    "S": "f4",
}

# Number in ``CSI <n>;<mod> ~`` sequences
_TILDE_CODES: dict[int, str] = {
    1: "home",
    2: "insert",
    3: "delete",
    4: "end",
    5: "pageUp",
    6: "pageDown",
    15: "f5",
    17: "f6",
    18: "f7",
    19: "f8",
    20: "f9",
    21: "f10",
    23: "f11",
    24: "f12",
}

# Kitty codepoints with a name
_KITTY_CODEPOINTS: dict[int, str] = {
    9: "tab",
    13: "enter",
    27: "escape",
    32: "space",
    127: "backspace",
    57414: "enter",
}

_CSI_LETTER_RE = re.compile(r"^\x1b\[(?:1;(\d+))?([A-Z])$")
_SS3_RE = re.compile(r"^\x1bO(\d?)([A-Z])$")
_CSI_TILDE_RE = re.compile(r"^\x1b\[(\d+)(?:;(\d+))?~$")
_KITTY_CSI_U_RE = re.compile(r"^\x1b\[(\d+)(?::\d*)*(?:;(\d+)(?::(\d+))?)?u$")
_MOUSE_SGR_RE = re.compile(r"^\x1b\[<\d+;\d+;\d+[Mm]$")


def _modifier_prefix(modifier: int) -> str:
    """Turn an xterm/Kitty modifier parameter into a ``"ctrl+shift+alt+"`` prefix."""
    bits = (modifier - 1) & ~LOCK_MASK if modifier > 0 else 0
    prefix = ""
    if bits & MODIFIERS["ctrl"]:
        prefix += "ctrl+"
    if bits & MODIFIERS["shift"]:
        prefix += "shift+"
    if bits & MODIFIERS["alt"]:
        prefix += "alt+"
    return prefix


def is_key_release(data: str) -> bool:
    """Return ``True`` for a Kitty key-release event (event type 3)."""
    match = _KITTY_CSI_U_RE.match(data)
    return bool(match and match.group(3) == "3")


def parse_key(data: str) -> Optional[KeyId]:  # noqa: C901
    """Parse one complete input sequence into a key identifier.

    Returns ``None`` for input that is not a recognizable key press.
    """
    if not data:
        return None

    if _MOUSE_SGR_RE.match(data) or (data.startswith("\x1b[M") and len(data) == 6):
        return Key.mouse

    if data == "\x1b[Z":
        return "shift+tab"

    match = _CSI_LETTER_RE.match(data)
    if match:
        name = _LETTER_FINALS.get(match.group(2))
        if name is None:
            return None
        return _modifier_prefix(int(match.group(1) or 1)) + name

    match = _SS3_RE.match(data)
    if match:
        name = _LETTER_FINALS.get(match.group(2))
        if name is None:
            return None
        return _modifier_prefix(int(match.group(1) or 1)) + name

    match = _CSI_TILDE_RE.match(data)
    if match:
        name = _TILDE_CODES.get(int(match.group(1)))
        if name is None:
            return None
        return _modifier_prefix(int(match.group(2) or 1)) + name

    match = _KITTY_CSI_U_RE.match(data)
    if match:
        if match.group(3) == "3":
            return None
        codepoint = int(match.group(1))
        prefix = _modifier_prefix(int(match.group(2) or 1))
        name = _KITTY_CODEPOINTS.get(codepoint)
        if name is not None:
            return prefix + name
        ch = chr(codepoint)
        if ch.isprintable():
            return prefix + ch.lower()
        return None

    # Single bytes
    if data == "\x1b":
        return Key.escape
    if data in ("\r", "\n"):
        return Key.enter
    if data == "\t":
        return Key.tab
    if data == " ":
        return Key.space
    if data in ("\x7f", "\x08"):
        return Key.backspace
    if data == "\x00":
        return "ctrl+space"
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)

    # ESC-prefixed characters are Alt combinations
    if len(data) == 2 and data[0] == "\x1b":
        inner = parse_key(data[1])
        if inner is not None and inner != Key.escape:
            return "alt+" + inner
        return None

    if len(data) == 1 and data.isprintable():
        return data

    return None


def matches_key(data: str, key_id: KeyId) -> bool:
    """Check whether raw input *data* is the key named *key_id*."""
    return parse_key(data) == key_id
