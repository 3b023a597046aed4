"""Text styles and their SGR encoding."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

RESET = "\x1b[0m"


class Color(Enum):
    """ANSI palette colours.  The value is the foreground SGR code."""

    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    MAGENTA = 35
    CYAN = 36
    WHITE = 37

    @property
    def fg_code(self) -> int:
        return self.value

    @property
    def bg_code(self) -> int:
        return self.value + 10


class Alignment(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class Style:
    """Foreground, background and bold attribute of a cell.

    ``None`` means "inherit": :meth:`patch` only overrides the fields the
    other style actually sets.
    """

    fg: Optional[Color] = None
    bg: Optional[Color] = None
    bold: Optional[bool] = None

    def patch(self, other: Style) -> Style:
        changes = {
            name: getattr(other, name)
            for name in ("fg", "bg", "bold")
            if getattr(other, name) is not None
        }
        return replace(self, **changes) if changes else self

    def sgr(self) -> str:
        """Return the escape sequence that switches the terminal to this style."""
        codes = ["0"]
        if self.bold:
            codes.append("1")
        if self.fg is not None:
            codes.append(str(self.fg.fg_code))
        if self.bg is not None:
            codes.append(str(self.bg.bg_code))
        return "\x1b[" + ";".join(codes) + "m"

    @property
    def is_plain(self) -> bool:
        return self.fg is None and self.bg is None and not self.bold


@dataclass(frozen=True)
class Span:
    """A run of text drawn in a single style."""

    text: str
    style: Style = Style()
