"""Layout composition: turns the navigation state into draw calls.

Each render pass splits the display into a fixed-height tab bar and a
content area, then hands the content area to the layout policy registered
for the selected view.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from tabview.layout import Direction, Length, Min, Percentage, Rect, split
from tabview.navigation import NavigationState, View
from tabview.style import Alignment, Color, Span, Style
from tabview.surface import DrawingSurface

logger = logging.getLogger(__name__)

__all__ = [
    "HEADER_HEIGHT",
    "MARGIN",
    "LayoutPolicy",
    "LayoutComposer",
    "DEFAULT_POLICIES",
    "split_windows_layout",
    "placeholder_layout",
    "tab_label",
]

HEADER_HEIGHT = 3
MARGIN = 5

TAB_STYLE = Style(fg=Color.CYAN)
TAB_HIGHLIGHT_STYLE = Style(bg=Color.BLACK, bold=True)
LABEL_HEAD_STYLE = Style(fg=Color.YELLOW)
LABEL_TAIL_STYLE = Style(fg=Color.GREEN)

LEFT_BLOCK_TEXT = (
    "このように日本語も表示される\n"
    "改行を入れれば改行される\n"
    "wrapすれば改行をせずに一文で表示できる\n"
    "長すぎると見切れるる" + "う" * 49
)
MIDDLE_BLOCK_TEXT = "This is a sentence.\ntomorrow and tomorrow and tomorrow\nThis is a pen."
RIGHT_BLOCK_TEXT = "This is a right block's text.\n Do you see me?\nToday is the day"

PLACEHOLDER_TITLE = "Inner 1"

LayoutPolicy = Callable[[Rect, DrawingSurface], None]

_THIRDS = [Percentage(33), Percentage(33), Percentage(33)]


def split_windows_layout(content: Rect, surface: DrawingSurface) -> None:
    """Three columns: left-aligned text, a stack of centered blocks, right-aligned text."""
    left, middle, right = split(content, Direction.HORIZONTAL, _THIRDS)

    if not left.is_empty:
        surface.draw_text(left, LEFT_BLOCK_TEXT, Alignment.LEFT)

    for row in split(middle, Direction.VERTICAL, _THIRDS):
        if not row.is_empty:
            surface.draw_text(row, MIDDLE_BLOCK_TEXT, Alignment.CENTER)

    if not right.is_empty:
        surface.draw_text(right, RIGHT_BLOCK_TEXT, Alignment.RIGHT)


def placeholder_layout(content: Rect, surface: DrawingSurface) -> None:
    """A single titled block over the whole content area."""
    if not content.is_empty:
        surface.draw_block(content, PLACEHOLDER_TITLE)


# INPUTS and MULTI_INPUTS have no content of their own yet and share the
# placeholder.
DEFAULT_POLICIES: Dict[View, LayoutPolicy] = {
    View.SPLIT_WINDOWS: split_windows_layout,
    View.INPUTS: placeholder_layout,
    View.MULTI_INPUTS: placeholder_layout,
}


def tab_label(text: str) -> list[Span]:
    """Style a tab label: first character yellow, the rest green."""
    if not text:
        return []
    return [Span(text[:1], LABEL_HEAD_STYLE), Span(text[1:], LABEL_TAIL_STYLE)]


class LayoutComposer:
    """Maps ``(display area, navigation state)`` to draw calls.

    Parameters
    ----------
    policies:
        Layout policy per view.  Defaults to :data:`DEFAULT_POLICIES`.
    margin:
        Blank cells kept around the whole layout.
    header_height:
        Rows given to the tab bar, borders included.
    """

    def __init__(
        self,
        policies: Optional[Dict[View, LayoutPolicy]] = None,
        margin: int = MARGIN,
        header_height: int = HEADER_HEIGHT,
    ) -> None:
        self._policies = dict(DEFAULT_POLICIES if policies is None else policies)
        self._margin = margin
        self._header_height = header_height

    def partition(self, area: Rect) -> tuple[Rect, Rect]:
        """Split *area* into the tab bar and the content area."""
        header, content = split(
            area,
            Direction.VERTICAL,
            [Length(self._header_height), Min(0)],
            margin=self._margin,
        )
        return header, content

    def render(self, area: Rect, state: NavigationState, surface: DrawingSurface) -> None:
        header, content = self.partition(area)
        view = state.current()
        logger.debug(
            "render %s: area=%s header=%s content=%s", view.name, area, header, content
        )

        if not header.is_empty:
            surface.draw_tabs(
                header,
                [tab_label(label) for label in state.labels],
                state.selected,
                TAB_STYLE,
                TAB_HIGHLIGHT_STYLE,
                title=f"index: {state.selected}",
            )

        policy = self._policies.get(view)
        if policy is None:
            logger.warning("no layout policy registered for %s", view.name)
            return
        policy(content, surface)
