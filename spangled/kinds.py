"""
Layer 1 — Star Layout Classifier
================================
A layout is a tuple of four integers describing the rows of stars in the canton:

    (a, b, c, d) = a rows of b stars, interspersed with c rows of d stars

The first pair always describes the longer rows, even when the first row
drawn is one of the shorter ones. When every row has the same length, c and d
are both zero.

The six kinds below are the patterns historically used on the U.S. flag.
Every kind is defined by integer relations between a, b, c and d, so that
deciding whether a layout is valid and naming it is a single procedure.
"""

from __future__ import annotations
from enum import Enum
from typing import Tuple

Layout = Tuple[int, int, int, int]

# The current 50-star flag: 5 rows of 6 stars, 4 rows of 5 stars
DEFAULT_LAYOUT: Layout = (5, 6, 4, 5)


class InvalidLayout(ValueError):
    """The 4-tuple breaks the joint-zero rule or matches no known pattern."""

    def __init__(self, layout):
        self.layout = tuple(layout)
        super().__init__(f"Invalid layout: {self.layout}")


class LayoutKind(str, Enum):
    GRID           = "GRID"
    SHORT_SANDWICH = "SHORT_SANDWICH"
    LONG_SANDWICH  = "LONG_SANDWICH"
    PAGODA         = "PAGODA"
    SIDE_PAGODA    = "SIDE_PAGODA"
    CUBE           = "CUBE"

    @property
    def description(self) -> str:
        return KIND_DESCRIPTIONS[self]

    @classmethod
    def from_layout(cls, layout: Layout) -> "LayoutKind":
        return classify(layout)


KIND_DESCRIPTIONS = {
    LayoutKind.GRID:
        "Stars in a plain grid, like the 24-star 'Old Glory' or the 48-star flag.",
    LayoutKind.SHORT_SANDWICH:
        "Each shorter row sits between two longer rows, like the 50-star flag.",
    LayoutKind.LONG_SANDWICH:
        "Each longer row sits between two shorter rows: a rectangle with its corners cut off.",
    LayoutKind.PAGODA:
        "Each longer row is followed by a shorter one, like the 45-star flag (bottom corners cut).",
    LayoutKind.SIDE_PAGODA:
        "Rows of equal length, odd number of them, like the 49-star flag (right corners cut).",
    LayoutKind.CUBE:
        "Rows of equal length, even number of them (top-right and bottom-left corners cut).",
}


def count_stars(layout: Layout) -> int:
    a, b, c, d = layout
    return a * b + c * d


def classify(layout: Layout) -> LayoutKind:
    """
    Return the kind of a layout, or raise InvalidLayout.

    Short rows either hold the same number of stars as the long rows
    (SIDE_PAGODA, CUBE: only the row count alternates) or one star less
    (SHORT_SANDWICH, LONG_SANDWICH, PAGODA).
    """
    a, b, c, d = layout

    if (a == 0) != (b == 0) or (c == 0) != (d == 0):
        raise InvalidLayout(layout)

    if c == 0:
        return LayoutKind.GRID

    if d == b:
        if c == a - 1:
            return LayoutKind.SIDE_PAGODA
        if c == a:
            return LayoutKind.CUBE
    elif d == b - 1:
        if c == a - 1:
            return LayoutKind.SHORT_SANDWICH
        if c == a + 1:
            return LayoutKind.LONG_SANDWICH
        if c == a:
            return LayoutKind.PAGODA

    raise InvalidLayout(layout)
