"""Splits raw stdin data into complete key sequences.

A single ``read`` can return several keys at once (``"\\x1b[C\\x1b[C"``) or
stop in the middle of an escape sequence.  ``StdinBuffer`` keeps the
unfinished tail until more data arrives, or until the caller decides no more
is coming and calls :meth:`StdinBuffer.flush`.
"""

from __future__ import annotations

import re
from typing import Literal

ESC = "\x1b"

Completeness = Literal["complete", "incomplete", "not-escape"]

_SGR_MOUSE_RE = re.compile(r"^<\d+;\d+;\d+[Mm]$")


def _csi_status(data: str) -> Completeness:
    if len(data) < 3:
        return "incomplete"
    payload = data[2:]
    # X10 mouse: ESC [ M b x y
    if payload.startswith("M"):
        return "complete" if len(data) >= 6 else "incomplete"
    if not 0x40 <= ord(payload[-1]) <= 0x7E:
        return "incomplete"
    if payload.startswith("<"):
        return "complete" if _SGR_MOUSE_RE.match(payload) else "incomplete"
    return "complete"


def _string_terminated(data: str, allow_bel: bool) -> Completeness:
    if data.endswith(ESC + "\\") or (allow_bel and data.endswith("\x07")):
        return "complete"
    return "incomplete"


def sequence_status(data: str) -> Completeness:
    """Classify *data* as a complete escape sequence, a prefix of one, or plain text."""
    if not data.startswith(ESC):
        return "not-escape"
    if len(data) == 1:
        return "incomplete"

    introducer = data[1]
    if introducer == "[":
        return _csi_status(data)
    if introducer == "]":
        return _string_terminated(data, allow_bel=True)
    if introducer in ("P", "_"):
        return _string_terminated(data, allow_bel=False)
    if introducer == "O":
        return "complete" if len(data) >= 3 else "incomplete"
    # ESC + one character (Alt combination)
    return "complete"


def split_sequences(buffer: str) -> tuple[list[str], str]:
    """Split *buffer* into complete sequences.

    Returns ``(sequences, remainder)`` where *remainder* is an unfinished
    escape sequence at the end of the buffer.
    """
    sequences: list[str] = []
    pos = 0
    while pos < len(buffer):
        if buffer[pos] != ESC:
            sequences.append(buffer[pos])
            pos += 1
            continue

        end = pos + 1
        while True:
            if end > len(buffer):
                return sequences, buffer[pos:]
            status = sequence_status(buffer[pos:end])
            if status != "incomplete":
                break
            end += 1
        sequences.append(buffer[pos:end])
        pos = end

    return sequences, ""


class StdinBuffer:
    """Accumulates input and hands out complete sequences."""

    def __init__(self) -> None:
        self._buffer = ""

    @property
    def pending(self) -> bool:
        """``True`` while an unfinished escape sequence is being held back."""
        return bool(self._buffer)

    def feed(self, data: str) -> list[str]:
        """Add *data* and return every sequence completed by it."""
        sequences, self._buffer = split_sequences(self._buffer + data)
        return sequences

    def flush(self) -> list[str]:
        """Give up waiting and release whatever is held back.

        A lone ``ESC`` comes out as the escape key; a longer fragment is
        returned as a single unrecognized sequence.
        """
        if not self._buffer:
            return []
        held, self._buffer = self._buffer, ""
        return [held]

    def clear(self) -> None:
        self._buffer = ""
