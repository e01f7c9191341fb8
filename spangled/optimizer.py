"""
Layer 3 — Star Layout Optimizer
===============================
Ranks the layouts produced by Layer 2 by how well they fit a canton of a
given aspect ratio (width over height, the "canton factor").

Score of a layout (a, b, c, d) for a canton factor R:

    score = | (a + c + 1) * R  -  (b + d + 1) |

a + c rows and b + d columns of stars, plus one spacing unit for the two
half-margins on each axis. Lower is better; a score of 0 means the star
field has exactly the canton's proportions.

Ties keep the generator's enumeration order: the single-answer search keeps a
strict running minimum and the ranking uses a stable sort, so both agree on
the best layout.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple
import logging
import numpy as np

from spangled.kinds import Layout, LayoutKind, InvalidLayout, classify, count_stars
from spangled.generator import generate_star_layouts

log = logging.getLogger(__name__)

# Traditional U.S. flag canton: 0.76 wide by 0.5385 high (hoist = 1)
DEFAULT_CANTON_FACTOR = 247 / 175


class NoLayoutFound(LookupError):
    """No layout of the requested kinds places the requested number of stars."""


def layout_score(layout: Layout, canton_factor: float = DEFAULT_CANTON_FACTOR) -> float:
    a, b, c, d = layout
    if (c == 0) != (d == 0):
        raise InvalidLayout(layout)
    return abs((a + c + 1) * canton_factor - (b + d + 1))


def score_layouts(layouts: List[Layout], canton_factor: float = DEFAULT_CANTON_FACTOR) -> np.ndarray:
    """Vectorised layout_score over an (N, 4) stack of layouts."""
    L = np.asarray(layouts, dtype=np.int64).reshape(-1, 4)
    with np.errstate(over="ignore"):
        return np.abs((L[:, 0] + L[:, 2] + 1) * canton_factor - (L[:, 1] + L[:, 3] + 1))


def find_best_star_layout(n_stars: int,
                          canton_factor: float = DEFAULT_CANTON_FACTOR,
                          kinds: Optional[Iterable[LayoutKind]] = None) -> Layout:
    """
    Return the layout fitting the canton factor best.
    Raises NoLayoutFound when no layout exists (n_stars <= 0, or kinds filters everything out).
    """
    best: Optional[Layout] = None
    best_score = float("inf")
    for layout in generate_star_layouts(n_stars, kinds=kinds):
        score = layout_score(layout, canton_factor)
        if best is None or score < best_score:
            best, best_score = layout, score

    if best is None:
        raise NoLayoutFound(f"No layout found for {n_stars} stars")
    log.debug("Best layout for %d stars (factor %.4f): %s, score %.4f",
              n_stars, canton_factor, best, best_score)
    return best


def find_best_star_layouts(n_stars: int,
                           canton_factor: float = DEFAULT_CANTON_FACTOR,
                           kinds: Optional[Iterable[LayoutKind]] = None) -> List[Tuple[Layout, float]]:
    """
    Return every layout paired with its score, best first.
    An empty list is a valid answer: unlike find_best_star_layout, nothing is raised.
    """
    layouts = list(generate_star_layouts(n_stars, kinds=kinds))
    if not layouts:
        return []

    scores = score_layouts(layouts, canton_factor)
    order = np.argsort(scores, kind="stable")
    return [(layouts[i], float(scores[i])) for i in order]


# ── Search report (service layer) ─────────────────────────────────────────────

@dataclass
class LayoutReport:
    n_stars: int
    canton_factor: float
    kinds: Optional[List[LayoutKind]]
    ranked: List[Tuple[Layout, float]] = field(default_factory=list)

    @property
    def best(self) -> Optional[Layout]:
        return self.ranked[0][0] if self.ranked else None

    def summary(self) -> dict:
        return {
            "n_stars": self.n_stars,
            "canton_factor": self.canton_factor,
            "kinds": [k.value for k in self.kinds] if self.kinds is not None else None,
            "n_layouts": len(self.ranked),
            "best": list(self.best) if self.best else None,
            "layouts": [
                {
                    "layout": list(layout),
                    "kind": classify(layout).value,
                    "rows": layout[0] + layout[2],
                    "columns": layout[1] + layout[3],
                    "n_stars": count_stars(layout),
                    "score": round(score, 6),
                }
                for layout, score in self.ranked
            ],
        }


def run_layout_search(n_stars: int,
                      canton_factor: float = DEFAULT_CANTON_FACTOR,
                      kinds: Optional[Iterable[LayoutKind]] = None) -> LayoutReport:
    """Rank all layouts and bundle them into a report."""
    kinds = list(kinds) if kinds is not None else None
    ranked = find_best_star_layouts(n_stars, canton_factor=canton_factor, kinds=kinds)
    log.info("Ranked %d layouts for %d stars", len(ranked), n_stars)
    return LayoutReport(n_stars=n_stars, canton_factor=canton_factor, kinds=kinds, ranked=ranked)
