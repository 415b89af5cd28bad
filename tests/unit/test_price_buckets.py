"""
Tests for the histogram bucket helpers in web.services.transaction_service.
"""
import pytest

from web.services.transaction_service import PRICE_RANGES, price_bands, bucket_index


class TestPriceRanges:
    """Tests for the reported bucket bounds."""

    def test_ten_buckets(self):
        assert len(PRICE_RANGES) == 10

    def test_bounds(self):
        """Reported bounds follow the 0-100, 101-200, ... 901+ layout."""
        assert PRICE_RANGES[0] == (0, 100)
        assert PRICE_RANGES[1] == (101, 200)
        assert PRICE_RANGES[8] == (801, 900)
        assert PRICE_RANGES[-1] == (901, None)


class TestPriceBands:
    """Tests for the counting bands."""

    def test_contiguous(self):
        """Each band ends where the next begins."""
        bands = price_bands()
        for (_, high), (next_low, _) in zip(bands, bands[1:]):
            assert high == next_low

    def test_last_open(self):
        assert price_bands()[-1] == (901, None)


class TestBucketIndex:
    """Tests for bucket_index."""

    @pytest.mark.parametrize("price,expected", [
        (0, 0),
        (50, 0),
        (100, 0),
        (100.5, 0),
        (101, 1),
        (150, 1),
        (200.99, 1),
        (900, 8),
        (900.5, 8),
        (901, 9),
        (999, 9),
        (1_000_000, 9),
    ])
    def test_index(self, price, expected):
        assert bucket_index(price) == expected

    def test_negative(self):
        """Negative prices fall in no bucket."""
        assert bucket_index(-1) is None

    def test_exactly_one_bucket(self):
        """Every non-negative price matches exactly one band."""
        bands = price_bands()
        for cents in range(0, 120000, 37):
            price = cents / 100
            matches = [
                i for i, (low, high) in enumerate(bands)
                if price >= low and (high is None or price < high)
            ]
            assert len(matches) == 1
