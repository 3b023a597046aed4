"""Drawing surface: bordered blocks, aligned text and tab bars on a cell grid.

``DrawingSurface`` is the interface the layout composer draws against.
``Canvas`` implements it with an in-memory grid of styled cells that is
turned into ANSI lines and written to a terminal with a differential update,
so only rows that changed since the previous frame are repainted.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, Sequence

from tabview.layout import Rect
from tabview.style import RESET, Alignment, Span, Style
from tabview.utils import clip_to_width, iter_clusters

if TYPE_CHECKING:
    from tabview.terminal import Terminal

logger = logging.getLogger(__name__)

__all__ = ["DrawingSurface", "Canvas"]

# Box-drawing characters
_TOP_LEFT = "┌"
_TOP_RIGHT = "┐"
_BOTTOM_LEFT = "└"
_BOTTOM_RIGHT = "┘"
_HORIZONTAL = "─"
_VERTICAL = "│"

_TAB_DIVIDER = _VERTICAL

# Marks the second cell of a wide character
_CONTINUATION = ""


class DrawingSurface(Protocol):
    """Operations the layout composer needs.  All are no-ops on empty rects."""

    def draw_block(self, region: Rect, title: str = "", style: Style = Style()) -> None:
        ...

    def draw_text(
        self,
        region: Rect,
        text: str,
        alignment: Alignment = Alignment.LEFT,
        border_style: Style = Style(),
    ) -> None:
        ...

    def draw_tabs(
        self,
        region: Rect,
        labels: Sequence[Sequence[Span]],
        selected: int,
        style: Style = Style(),
        highlight_style: Style = Style(),
        title: str = "",
    ) -> None:
        ...


class Canvas:
    """A ``width x height`` grid of styled cells."""

    def __init__(self, width: int, height: int) -> None:
        self._width = max(0, width)
        self._height = max(0, height)
        self._cells: list[list[tuple[str, Style]]] = self._blank_rows()

        # Previous frame (for differential flushes)
        self._previous_lines: list[str] = []
        self._previous_size: tuple[int, int] | None = None
        self._full_redraw_count = 0

    # -- geometry -----------------------------------------------------------

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def area(self) -> Rect:
        return Rect(0, 0, self._width, self._height)

    @property
    def full_redraws(self) -> int:
        """Number of flushes that repainted the whole screen."""
        return self._full_redraw_count

    def resize(self, width: int, height: int) -> None:
        """Change the grid size.  Contents are discarded."""
        self._width = max(0, width)
        self._height = max(0, height)
        self._cells = self._blank_rows()

    def clear(self) -> None:
        self._cells = self._blank_rows()

    def _blank_rows(self) -> list[list[tuple[str, Style]]]:
        return [[(" ", Style())] * self._width for _ in range(self._height)]

    def _clip(self, region: Rect) -> Rect:
        x = max(region.x, 0)
        y = max(region.y, 0)
        right = min(region.right, self._width)
        bottom = min(region.bottom, self._height)
        return Rect(x, y, max(0, right - x), max(0, bottom - y))

    # -- cell primitives ----------------------------------------------------

    def _put(self, x: int, y: int, symbol: str, style: Style, width: int = 1) -> None:
        row = self._cells[y]
        # Overwriting half of a wide character blanks the other half
        if row[x][0] == _CONTINUATION and x > 0:
            row[x - 1] = (" ", row[x - 1][1])
        end = x + width
        if end < self._width and row[end][0] == _CONTINUATION:
            row[end] = (" ", row[end][1])
        row[x] = (symbol, style)
        if width == 2:
            row[x + 1] = (_CONTINUATION, style)

    def set_string(self, x: int, y: int, text: str, style: Style, limit: int) -> int:
        """Write *text* at ``(x, y)`` without passing column *limit*.

        Returns the column after the last cell written.
        """
        if not 0 <= y < self._height:
            return x
        limit = min(limit, self._width)
        for cluster, width in iter_clusters(text):
            if x + width > limit:
                break
            if x >= 0:
                self._put(x, y, cluster, style, width)
            x += width
        return x

    def set_style(self, region: Rect, style: Style) -> None:
        """Patch *style* onto every cell of *region*, keeping the symbols."""
        region = self._clip(region)
        for y in range(region.y, region.bottom):
            row = self._cells[y]
            for x in range(region.x, region.right):
                symbol, current = row[x]
                row[x] = (symbol, current.patch(style))

    def cell(self, x: int, y: int) -> tuple[str, Style]:
        return self._cells[y][x]

    # -- DrawingSurface -----------------------------------------------------

    def draw_block(self, region: Rect, title: str = "", style: Style = Style()) -> None:
        region = self._clip(region)
        if region.is_empty:
            return

        left, top = region.x, region.y
        right, bottom = region.right - 1, region.bottom - 1

        for x in range(left, right + 1):
            self._put(x, top, _HORIZONTAL, style)
            self._put(x, bottom, _HORIZONTAL, style)
        for y in range(top, bottom + 1):
            self._put(left, y, _VERTICAL, style)
            self._put(right, y, _VERTICAL, style)
        self._put(left, top, _TOP_LEFT, style)
        self._put(right, top, _TOP_RIGHT, style)
        self._put(left, bottom, _BOTTOM_LEFT, style)
        self._put(right, bottom, _BOTTOM_RIGHT, style)

        if title and region.width > 2:
            self.set_string(left + 1, top, title, style, right)

    def draw_text(
        self,
        region: Rect,
        text: str,
        alignment: Alignment = Alignment.LEFT,
        border_style: Style = Style(),
    ) -> None:
        region = self._clip(region)
        if region.is_empty:
            return

        self.draw_block(region, style=border_style)
        inner = region.inner(1)
        if inner.is_empty:
            return

        for row, line in enumerate(text.split("\n")[: inner.height]):
            clipped, width = clip_to_width(line, inner.width)
            if alignment is Alignment.CENTER:
                offset = (inner.width - width) // 2
            elif alignment is Alignment.RIGHT:
                offset = inner.width - width
            else:
                offset = 0
            self.set_string(inner.x + offset, inner.y + row, clipped, Style(), inner.right)

    def draw_tabs(
        self,
        region: Rect,
        labels: Sequence[Sequence[Span]],
        selected: int,
        style: Style = Style(),
        highlight_style: Style = Style(),
        title: str = "",
    ) -> None:
        region = self._clip(region)
        if region.is_empty:
            return

        self.draw_block(region, title, style)
        inner = region.inner(1)
        if inner.is_empty:
            return
        self.set_style(inner, style)

        y = inner.y
        x = inner.x
        last = len(labels) - 1
        for index, label in enumerate(labels):
            x += 1
            if x >= inner.right:
                break
            start = x
            for span in label:
                x = self.set_string(x, y, span.text, style.patch(span.style), inner.right)
            if index == selected:
                self.set_style(Rect(start, y, x - start, 1), highlight_style)
            x += 1
            if index < last and x < inner.right:
                self._put(x, y, _TAB_DIVIDER, style)
                x += 1

    # -- output -------------------------------------------------------------

    def lines(self) -> list[str]:
        """Return every row as a string with SGR codes at style changes."""
        result: list[str] = []
        for row in self._cells:
            parts: list[str] = []
            current = Style()
            for symbol, style in row:
                if symbol == _CONTINUATION:
                    continue
                if style != current:
                    parts.append(style.sgr())
                    current = style
                parts.append(symbol)
            if not current.is_plain:
                parts.append(RESET)
            result.append("".join(parts))
        return result

    def plain_lines(self) -> list[str]:
        """Return every row with styling dropped."""
        return ["".join(symbol for symbol, _ in row) for row in self._cells]

    def flush(self, terminal: Terminal) -> None:
        """Write the frame to *terminal*, repainting only rows that changed.

        A change of canvas size forces a full repaint.
        """
        lines = self.lines()
        size = (self._width, self._height)
        force_full = size != self._previous_size

        out: list[str] = []
        if force_full:
            self._full_redraw_count += 1
            out.append("\x1b[2J")

        for i, line in enumerate(lines):
            if not force_full and i < len(self._previous_lines) and self._previous_lines[i] == line:
                continue
            out.append(f"\x1b[{i + 1};1H")
            out.append(line)

        self._previous_lines = lines
        self._previous_size = size

        if out:
            logger.debug(
                "flush %dx%d full=%s bytes=%d", self._width, self._height, force_full, sum(map(len, out))
            )
            terminal.write("".join(out))
