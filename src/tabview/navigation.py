"""The set of tabs and the selection cursor over them."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Sequence

logger = logging.getLogger(__name__)


class View(Enum):
    """A selectable tab.  The value is the label shown in the tab bar."""

    SPLIT_WINDOWS = "split windows"
    INPUTS = "inputs"
    MULTI_INPUTS = "multi inputs"

    @property
    def label(self) -> str:
        return self.value


class NavigationState:
    """Ordered views plus the index of the selected one.

    ``advance`` and ``retreat`` move the selection one step and wrap around
    at either end, so ``0 <= selected < len(views)`` always holds.
    """

    def __init__(self, views: Sequence[View] = tuple(View)) -> None:
        if not views:
            raise ValueError("NavigationState needs at least one view")
        self._views: tuple[View, ...] = tuple(views)
        self._selected = 0

    @property
    def views(self) -> tuple[View, ...]:
        return self._views

    @property
    def selected(self) -> int:
        return self._selected

    @property
    def labels(self) -> list[str]:
        return [view.label for view in self._views]

    def current(self) -> View:
        return self._views[self._selected]

    def advance(self) -> None:
        self._selected = (self._selected + 1) % len(self._views)
        logger.debug("advanced to %d (%s)", self._selected, self.current().label)

    def retreat(self) -> None:
        if self._selected > 0:
            self._selected -= 1
        else:
            self._selected = len(self._views) - 1
        logger.debug("retreated to %d (%s)", self._selected, self.current().label)

    def select(self, index: int) -> None:
        """Jump straight to *index*.  Raises ``IndexError`` when out of range."""
        if not 0 <= index < len(self._views):
            raise IndexError(
                f"view index {index} out of range 0..{len(self._views) - 1}"
            )
        self._selected = index
