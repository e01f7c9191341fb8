"""
Layer 2 — Star Layout Generator
===============================
Enumerates every layout (a, b, c, d) placing exactly n_stars stars:

    a*b + c*d = n_stars
    c in (0, a-1, a, a+1), and d = 0 when c = 0
    d = b-1, or d = b when c is a-1 or a

The search is two-level: the outer level walks the number of long rows a,
the inner level walks the long row length b until a*b overshoots n_stars.
A plain grid match at (a, b) ends the inner level for that a, since every
longer row would overshoot.

Each candidate is checked by the Layer 1 classifier; candidates that match no
pattern are skipped. The number of rows drawn is a + c, the number of columns
is b + d.
"""

from __future__ import annotations
import logging
from typing import Iterable, Iterator, Optional, FrozenSet

from spangled.kinds import Layout, LayoutKind, InvalidLayout, classify

log = logging.getLogger(__name__)


def _short_row_candidates(a: int, b: int) -> Iterator[Layout]:
    """Candidate (a, b, c, d) tuples with short rows, in a fixed order."""
    for c in (a - 1, a, a + 1):
        if c <= 0:
            continue
        d_options = [b - 1]
        if c in (a - 1, a):
            d_options.append(b)
        for d in d_options:
            yield a, b, c, d


def generate_star_layouts(n_stars: int,
                          kinds: Optional[Iterable[LayoutKind]] = None) -> Iterator[Layout]:
    """
    Yield every valid layout of n_stars stars, lazily.

    If kinds is passed, only layouts of those kinds are yielded (an empty
    collection yields nothing). n_stars <= 0 yields nothing.
    """
    if isinstance(kinds, str):
        raise TypeError(f"kinds must be a collection of LayoutKind, not the string {kinds!r}")
    allowed: Optional[FrozenSet[LayoutKind]] = None if kinds is None else frozenset(kinds)
    grid_allowed = allowed is None or LayoutKind.GRID in allowed

    for a in range(1, n_stars + 1):
        b = 0
        while a * b <= n_stars:
            if a * b == n_stars:
                if grid_allowed:
                    yield a, b, 0, 0
                break

            for layout in _short_row_candidates(a, b):
                _, _, c, d = layout
                if a * b + c * d != n_stars:
                    continue
                try:
                    kind = classify(layout)
                except InvalidLayout:
                    log.debug("Skipping unclassifiable candidate %s", layout)
                    continue
                if allowed is None or kind in allowed:
                    yield layout

            b += 1
