"""A drawing surface that records draw calls instead of painting them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from tabview.layout import Rect
from tabview.style import Alignment, Span, Style


@dataclass(frozen=True)
class DrawCall:
    op: str
    region: Rect
    args: tuple[Any, ...] = ()


class RecordingSurface:
    """Implements ``DrawingSurface`` by appending a ``DrawCall`` per operation."""

    def __init__(self) -> None:
        self.calls: list[DrawCall] = []

    def draw_block(self, region: Rect, title: str = "", style: Style = Style()) -> None:
        self.calls.append(DrawCall("block", region, (title, style)))

    def draw_text(
        self,
        region: Rect,
        text: str,
        alignment: Alignment = Alignment.LEFT,
        border_style: Style = Style(),
    ) -> None:
        self.calls.append(DrawCall("text", region, (text, alignment, border_style)))

    def draw_tabs(
        self,
        region: Rect,
        labels: Sequence[Sequence[Span]],
        selected: int,
        style: Style = Style(),
        highlight_style: Style = Style(),
        title: str = "",
    ) -> None:
        frozen_labels = tuple(tuple(label) for label in labels)
        self.calls.append(
            DrawCall("tabs", region, (frozen_labels, selected, style, highlight_style, title))
        )

    def ops(self, op: str) -> list[DrawCall]:
        return [call for call in self.calls if call.op == op]
