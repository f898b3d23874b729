"""Tests for might_be_minified.length."""

from might_be_minified import Analysis
from might_be_minified.length import (
    LENGTH_METHOD,
    SHORT_IDENTIFIER_MAX,
    LengthDistribution,
    length_distribution,
    p75_index,
    p75_width,
)


class TestP75:
    def test_index_rounds_down(self):
        assert [p75_index(n) for n in range(1, 9)] == [0, 0, 0, 3, 3, 3, 3, 6]

    def test_width(self):
        assert p75_width((10, 20, 30, 40)) == 40
        assert p75_width((1, 37, 50)) == 1

    def test_width_empty(self):
        assert p75_width(()) == 0

    def test_matches_shape(self):
        a = Analysis(line_widths=(8, 2, 4, 6, 10))
        assert a.shape() == len(a.line_widths) / p75_width(a.line_widths)
        assert a.to_dict()["p75_width"] == 8


class TestLengthDistribution:
    def test_basic(self):
        dist = length_distribution([3, 5, 7])
        assert dist is not None
        assert dist.count == 3
        assert dist.min == 3
        assert dist.max == 7
        assert dist.mean == 5.0
        assert dist.median == 5.0
        assert dist.p75 == 3

    def test_unsorted_input(self):
        dist = length_distribution([9, 1, 4, 2])
        assert dist.min == 1
        assert dist.max == 9
        assert dist.p75 == 9

    def test_even_count_median(self):
        dist = length_distribution([1, 2, 3, 4])
        assert dist.median == 2.5

    def test_rounding(self):
        dist = length_distribution([1, 1, 2])
        assert dist.mean == 1.33

    def test_short_share_minified_names(self):
        assert SHORT_IDENTIFIER_MAX == 2
        dist = length_distribution([1, 1, 2, 1, 3])
        assert dist.short_share == 0.8

    def test_short_share_readable_names(self):
        dist = length_distribution([7, 7, 9, 9, 19])
        assert dist.short_share == 0.0

    def test_empty_list(self):
        assert length_distribution([]) is None

    def test_all_zeros(self):
        assert length_distribution([0, 0]) is None

    def test_zeros_ignored(self):
        dist = length_distribution([0, 3, 0, 5])
        assert dist.count == 2

    def test_to_dict(self):
        dist = LengthDistribution(
            count=2, min=1, max=10, mean=5.5, median=5.5, p75=1, short_share=0.5
        )
        assert dist.to_dict() == {
            "count": 2, "min": 1, "max": 10, "mean": 5.5, "median": 5.5,
            "p75": 1, "short_share": 0.5,
        }


class TestLengthMethod:
    def test_method_string(self):
        assert LENGTH_METHOD == "unicode_codepoints"
