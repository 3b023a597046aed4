"""Rectangle arithmetic and constraint-based splitting.

A ``Rect`` is an area of the terminal in cell coordinates.  ``split`` divides
a rect along one axis into children that exactly tile it: fixed constraints
are honoured first, percentages are taken of the full span, and whatever is
left after rounding goes to the last child.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Union

__all__ = [
    "Rect",
    "Direction",
    "Length",
    "Percentage",
    "Min",
    "Constraint",
    "split",
]


@dataclass(frozen=True)
class Rect:
    """An axis-aligned area in cell coordinates."""

    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        return max(self.width, 0) * max(self.height, 0)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @property
    def right(self) -> int:
        return self.x + max(self.width, 0)

    @property
    def bottom(self) -> int:
        return self.y + max(self.height, 0)

    def inner(self, margin: int) -> Rect:
        """Shrink the rect by *margin* cells on every side, never below zero.

        The result always lies inside this rect, even when *margin* eats the
        whole area.
        """
        return Rect(
            min(self.x + margin, self.right),
            min(self.y + margin, self.bottom),
            max(0, self.width - 2 * margin),
            max(0, self.height - 2 * margin),
        )

    def contains(self, other: Rect) -> bool:
        """Return ``True`` if *other* lies entirely inside this rect."""
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def intersects(self, other: Rect) -> bool:
        if self.is_empty or other.is_empty:
            return False
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )


class Direction(Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass(frozen=True)
class Length:
    """Exactly *value* cells."""

    value: int


@dataclass(frozen=True)
class Percentage:
    """*value* percent of the parent span, rounded down."""

    value: int


@dataclass(frozen=True)
class Min:
    """At least *value* cells."""

    value: int


Constraint = Union[Length, Percentage, Min]


def _fixed_size(constraint: Constraint) -> int:
    if isinstance(constraint, (Length, Min)):
        return constraint.value
    return 0


def split(
    area: Rect,
    direction: Direction,
    constraints: Sequence[Constraint],
    margin: int = 0,
) -> list[Rect]:
    """Split *area* along *direction* into one rect per constraint.

    *margin* is applied to *area* before splitting.  If the fixed-size
    constraints do not fit, every child comes back empty.  Raises
    ``ValueError`` for an empty constraint list or percentages totalling
    more than 100.
    """
    if not constraints:
        raise ValueError("split() needs at least one constraint")

    total_pct = sum(c.value for c in constraints if isinstance(c, Percentage))
    if total_pct > 100:
        raise ValueError(f"percentages sum to {total_pct}%, more than 100%")

    area = area.inner(margin)
    span = area.height if direction is Direction.VERTICAL else area.width

    fixed = [_fixed_size(c) for c in constraints]
    if sum(fixed) > span:
        sizes = [0] * len(constraints)
    else:
        sizes = []
        used = 0
        for i, constraint in enumerate(constraints[:-1]):
            # Keep room for the fixed children still to come
            available = span - used - sum(fixed[i + 1 :])
            if isinstance(constraint, Percentage):
                size = math.floor(span * constraint.value / 100)
            else:
                size = constraint.value
            size = max(0, min(size, available))
            sizes.append(size)
            used += size
        sizes.append(span - used)

    rects: list[Rect] = []
    offset = 0
    for size in sizes:
        if direction is Direction.VERTICAL:
            rects.append(Rect(area.x, area.y + offset, area.width, size))
        else:
            rects.append(Rect(area.x + offset, area.y, size, area.height))
        offset += size
    return rects
