"""
Positions unit tests
"""

from itertools import permutations

import pytest

from rootdigits.positions import PositionRange, Positions, PositionsBuilder, between, up_to


def ranges_of(positions):
    return [tuple(r) for r in positions.ranges()]


class TestPositionsBuilder:
    """Merging ranges added in any order"""

    def test_unsorted_adds(self):
        builder = PositionsBuilder()
        builder.add_range(13, 15).add_range(20, 26).add(10).add(4).add_range(0, 3)
        builder.add_range(15, 19).add_range(14, 17).add_range(5, 5)
        positions = builder.build()
        assert ranges_of(positions) == [(0, 3), (4, 5), (10, 11), (13, 19), (20, 26)]
        assert positions.end() == 26

    def test_sorted_adds(self):
        builder = PositionsBuilder()
        builder.add_range(0, 2).add_range(2, 4).add(4).add(5)
        builder.add_range(10, 15).add_range(12, 17).add_range(100, 200).add_range(150, 160)
        assert ranges_of(builder.build()) == [(0, 6), (10, 17), (100, 200)]

    def test_single_and_range(self):
        positions = PositionsBuilder().add(0).add_range(4, 5).build()
        assert ranges_of(positions) == [(0, 1), (4, 5)]
        assert positions.end() == 5

    def test_overlapping_negative_start(self):
        positions = PositionsBuilder().add_range(0, 2).add(4).add_range(-1, 3).build()
        assert ranges_of(positions) == [(0, 3), (4, 5)]
        assert positions.end() == 5

    def test_order_does_not_matter(self):
        parts = [(0, 2), (1, 4), (6, 7), (7, 9), (20, 21), (19, 20)]
        expected = [(0, 4), (6, 9), (19, 21)]
        for order in permutations(parts):
            builder = PositionsBuilder()
            for start, end in order:
                builder.add_range(start, end)
            assert ranges_of(builder.build()) == expected

    def test_negative_and_empty(self):
        builder = PositionsBuilder().add(-1).add_range(-5, 2).add_range(7, 3)
        assert ranges_of(builder.build()) == [(0, 2)]

    def test_build_resets(self):
        builder = PositionsBuilder().add_range(5, 8).add(1)
        assert ranges_of(builder.build()) == [(1, 2), (5, 8)]
        assert ranges_of(builder.build()) == []
        assert ranges_of(builder.add(3).build()) == [(3, 4)]


class TestPositions:
    """Positions queries"""

    def test_empty(self):
        positions = Positions()
        assert positions.end() == 0
        assert len(positions) == 0
        assert list(positions) == []
        assert not positions.filter().includes(0)

    def test_up_to(self):
        assert ranges_of(up_to(5)) == [(0, 5)]
        assert up_to(0) == Positions()

    def test_between(self):
        assert list(between(3, 7)) == [PositionRange(3, 7)]
        assert between(7, 3).end() == 0

    def test_equality(self):
        assert between(0, 4) == up_to(4)
        assert hash(between(0, 4)) == hash(up_to(4))
        assert between(1, 4) != up_to(4)

    def test_repr(self):
        assert repr(PositionsBuilder().add(0).add_range(4, 6).build()) == "Positions([0, 1), [4, 6))"

    @pytest.mark.parametrize(
        "posit, expected",
        [(0, True), (2, True), (3, False), (9, False), (10, True), (11, True), (12, False), (40, False)],
    )
    def test_filter(self, posit, expected):
        positions = PositionsBuilder().add_range(0, 3).add_range(10, 12).build()
        selected = positions.filter()
        assert selected.includes(posit) is expected

    def test_filter_walk(self):
        positions = PositionsBuilder().add_range(0, 3).add_range(10, 12).add(20).build()
        selected = positions.filter()
        assert [p for p in range(25) if selected.includes(p)] == [0, 1, 2, 10, 11, 20]
