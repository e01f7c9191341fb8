"""
Layout generator tests: completeness, validity, filtering and laziness.
"""

import types

import pytest

from spangled.generator import generate_star_layouts
from spangled.kinds import InvalidLayout, LayoutKind, classify, count_stars

STAR_COUNTS = range(1, 101)


class TestEnumeration:
    """generate_star_layouts() finds every layout, in a fixed order."""

    def test_layout_counts(self):
        assert len(list(generate_star_layouts(50))) == 17
        assert len(list(generate_star_layouts(67))) == 12

    def test_exact_order_for_four_stars(self):
        assert list(generate_star_layouts(4)) == [
            (1, 2, 1, 2),
            (1, 2, 2, 1),
            (1, 4, 0, 0),
            (2, 1, 2, 1),
            (2, 2, 0, 0),
            (4, 1, 0, 0),
        ]

    def test_contains_the_50_star_flag(self):
        assert (5, 6, 4, 5) in generate_star_layouts(50)

    def test_single_star(self):
        assert list(generate_star_layouts(1)) == [(1, 1, 0, 0)]

    def test_no_duplicates(self):
        layouts = list(generate_star_layouts(60))
        assert len(layouts) == len(set(layouts))

    @pytest.mark.parametrize("n_stars", [0, -1, -50])
    def test_non_positive_counts_yield_nothing(self, n_stars):
        assert list(generate_star_layouts(n_stars)) == []


class TestValidity:
    """Every emitted layout holds the layout invariants."""

    @pytest.mark.parametrize("n_stars", STAR_COUNTS)
    def test_star_count_and_joint_zero(self, n_stars):
        for layout in generate_star_layouts(n_stars):
            a, b, c, d = layout
            assert count_stars(layout) == n_stars
            assert (c == 0) == (d == 0)
            assert all(isinstance(v, int) and v >= 0 for v in layout)

    @pytest.mark.parametrize("n_stars", STAR_COUNTS)
    def test_every_layout_classifies(self, n_stars):
        for layout in generate_star_layouts(n_stars):
            try:
                classify(layout)
            except InvalidLayout:
                pytest.fail(f"generated an invalid layout {layout} for {n_stars} stars")

    @pytest.mark.parametrize("n_stars", STAR_COUNTS)
    def test_every_star_count_has_at_least_the_single_row(self, n_stars):
        assert (1, n_stars, 0, 0) in generate_star_layouts(n_stars)
        assert (n_stars, 1, 0, 0) in generate_star_layouts(n_stars)


class TestKindFilter:
    """The kinds argument restricts the search without changing it."""

    def test_grid_only(self):
        kinds = {classify(layout) for layout in generate_star_layouts(60, kinds=[LayoutKind.GRID])}
        assert kinds == {LayoutKind.GRID}

    def test_filter_is_a_pure_restriction(self, kind_subsets):
        everything = list(generate_star_layouts(60))
        for subset in kind_subsets:
            filtered = list(generate_star_layouts(60, kinds=subset))
            assert filtered == [layout for layout in everything if classify(layout) in subset]

    def test_sixty_stars_reach_every_kind(self, kind_subsets):
        for subset in kind_subsets:
            found = {classify(layout) for layout in generate_star_layouts(60, kinds=subset)}
            assert found == set(subset)

    def test_empty_filter_yields_nothing(self):
        assert list(generate_star_layouts(50, kinds=[])) == []

    @pytest.mark.parametrize("kinds", ["GRID", LayoutKind.GRID])
    def test_bare_string_filter_is_rejected(self, kinds):
        with pytest.raises(TypeError):
            list(generate_star_layouts(50, kinds=kinds))

    def test_filter_accepts_any_iterable(self):
        wanted = (k for k in LayoutKind if k != LayoutKind.GRID)
        layouts = list(generate_star_layouts(24, kinds=wanted))
        assert layouts
        assert all(classify(layout) != LayoutKind.GRID for layout in layouts)


class TestLaziness:

    def test_returns_a_generator(self):
        assert isinstance(generate_star_layouts(50), types.GeneratorType)

    def test_partial_consumption(self):
        gen = generate_star_layouts(50)
        first = next(gen)
        assert count_stars(first) == 50

    def test_restartable(self):
        assert list(generate_star_layouts(67)) == list(generate_star_layouts(67))
