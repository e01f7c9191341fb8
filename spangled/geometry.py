"""
Layer 4 — Flag Measurements & Star Coordinates
==============================================
Proportions follow the lettering of the U.S. government flag specification,
relative to the hoist (flag height) A = 1:

  A  height                  E  vertical stars margin      K  star diameter
  B  width          (1.9 A)  F  vertical star spacing      L  stripe height
  C  canton height           G  horizontal stars margin
  D  canton width   (2/5 B)  H  horizontal star spacing

The canton covers ceil(n_stripes / 2) stripes. For the 50-star, 13-stripe
flag this gives E = F = 0.054, G = H = 0.063 and K = 0.0616.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
import math
import numpy as np

from spangled.kinds import Layout, LayoutKind, DEFAULT_LAYOUT, classify

DEFAULT_N_STRIPES = 13
FLAG_WIDTH_RATIO = 19 / 10
CANTON_WIDTH_RATIO = 2 / 5
# Keeps K at 0.0616 for the 50-star flag when star size follows the spacing
STAR_SIZE_COMPAT_FACTOR = 6633010231827852 / 8960234537720383


@dataclass(frozen=True)
class Measurements:
    height: float                    # A
    width: float                     # B
    canton_height: float             # C
    canton_width: float              # D
    vertical_stars_margin: float     # E
    vertical_star_spacing: float     # F
    horizontal_stars_margin: float   # G
    horizontal_star_spacing: float   # H
    star_diameter: float             # K
    stripe_height: float             # L

    @property
    def n_stripes(self) -> int:
        return round(self.height / self.stripe_height)

    def check(self):
        """Raise ValueError if the proportions cannot describe a striped flag."""
        canton_stripes = self.canton_height / self.stripe_height
        if not math.isclose(canton_stripes, round(canton_stripes), abs_tol=1e-9):
            raise ValueError("The canton height should be a multiple of the stripe height.")
        if self.canton_width >= self.width:
            raise ValueError("The canton should not cover the whole width of the flag.")
        # looser than the historical "at most half the height" rule, which the 7-of-13 canton breaks
        if self.canton_height >= self.height:
            raise ValueError("The canton should not cover the whole height of the flag.")

    @classmethod
    def generate(cls,
                 star_layout: Layout = DEFAULT_LAYOUT,
                 n_stripes: int = DEFAULT_N_STRIPES,
                 proportional_star_size: bool = True) -> "Measurements":
        """Build the specification values for a layout and a number of stripes."""
        if n_stripes < 1:
            raise ValueError(f"A flag needs at least one stripe, got {n_stripes}")

        a, b, c, d = star_layout
        is_grid = classify(star_layout) == LayoutKind.GRID

        A = 1.0
        B = A * FLAG_WIDTH_RATIO
        C = A * math.ceil(n_stripes / 2) / n_stripes
        D = B * CANTON_WIDTH_RATIO
        if is_grid:
            # Margins are 2/3 of a spacing: n - 1 spacings + 2 * 2/3 margins
            F = C / (a + c + 1 / 3)
            E = 2 / 3 * F
            H = D / (b + d + 1 / 3)
            G = 2 / 3 * H
        else:
            E = F = C / (a + c + 1)
            G = H = D / (b + d + 1)

        L = A / n_stripes
        if proportional_star_size:
            # Closest distance between two stars; diagonals are always longer in a grid
            if is_grid:
                dists = [D / (b + 1), C / (a + 1)]
            else:
                dists = [
                    2 * D / (b + d + 1),
                    2 * C / (a + c + 1),
                    math.hypot(D / (b + d + 1), C / (a + c + 1)),
                ]
            K = STAR_SIZE_COMPAT_FACTOR * min(dists)
        else:
            K = L * 4 / 5

        return cls(A, B, C, D, E, F, G, H, K, L)

    def to_dict(self) -> dict:
        return {
            "height": self.height,
            "width": round(self.width, 6),
            "canton_height": round(self.canton_height, 6),
            "canton_width": round(self.canton_width, 6),
            "vertical_stars_margin": round(self.vertical_stars_margin, 6),
            "vertical_star_spacing": round(self.vertical_star_spacing, 6),
            "horizontal_stars_margin": round(self.horizontal_stars_margin, 6),
            "horizontal_star_spacing": round(self.horizontal_star_spacing, 6),
            "star_diameter": round(self.star_diameter, 6),
            "stripe_height": round(self.stripe_height, 6),
            "n_stripes": self.n_stripes,
        }


def _row_block(n_rows: int, n_cols: int, x0: float, y0: float,
               dx: float, dy: float) -> np.ndarray:
    """(n_rows * n_cols, 2) array of (x, y), row-major."""
    ys, xs = np.mgrid[0:n_rows, 0:n_cols]
    return np.column_stack([x0 + xs.ravel() * dx, y0 + ys.ravel() * dy])


def coordinates_from_layout(layout: Layout,
                            n_stripes: int = DEFAULT_N_STRIPES,
                            proportional_star_size: bool = True) -> np.ndarray:
    """
    Star centres as an (n_stars, 2) array of (x, y), relative to the canton:
    x is a fraction of the canton width, y of the canton height, origin top-left.
    Long rows come first, then short rows.
    """
    a, b, c, d = layout
    kind = classify(layout)

    m = Measurements.generate(star_layout=layout, n_stripes=n_stripes,
                              proportional_star_size=proportional_star_size)
    x_margin = m.horizontal_stars_margin / m.canton_width
    y_margin = m.vertical_stars_margin / m.canton_height
    x_step = m.horizontal_star_spacing / m.canton_width
    y_step = m.vertical_star_spacing / m.canton_height

    if kind == LayoutKind.GRID:
        return _row_block(a, b, x_margin, y_margin, x_step, y_step)

    if kind == LayoutKind.LONG_SANDWICH:
        # the first and last rows are short ones
        long_rows = _row_block(a, b, x_margin, y_margin + y_step, 2 * x_step, 2 * y_step)
        short_rows = _row_block(c, d, x_margin + x_step, y_margin, 2 * x_step, 2 * y_step)
    else:
        # long rows left-aligned, short rows shifted right by one spacing
        long_rows = _row_block(a, b, x_margin, y_margin, 2 * x_step, 2 * y_step)
        short_rows = _row_block(c, d, x_margin + x_step, y_margin + y_step, 2 * x_step, 2 * y_step)

    return np.vstack([long_rows, short_rows])


def star_bounding_box(coords: np.ndarray) -> Tuple[float, float, float, float]:
    """(min_x, min_y, max_x, max_y) of a coordinate array."""
    (min_x, min_y), (max_x, max_y) = coords.min(axis=0), coords.max(axis=0)
    return float(min_x), float(min_y), float(max_x), float(max_y)
