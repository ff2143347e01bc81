"""Tests for SARS tax-year helpers."""

from datetime import datetime

import pytest

from zacgt.domain.tax_year import tax_year_boundary, tax_year_for, tax_year_range


class TestTaxYearFor:
    @pytest.mark.parametrize(
        ("moment", "expected"),
        [
            (datetime(2024, 2, 15), 2024),
            (datetime(2024, 3, 15), 2025),
            (datetime(2024, 1, 1), 2024),
            (datetime(2024, 2, 29, 23, 59, 59), 2024),
            (datetime(2024, 3, 1), 2025),
            (datetime(2024, 12, 31), 2025),
        ],
    )
    def test_february_march_split(self, moment, expected):
        assert tax_year_for(moment) == expected


class TestTaxYearBoundary:
    def test_first_of_march(self):
        assert tax_year_boundary(2026) == datetime(2026, 3, 1, 0, 0, 0)


class TestTaxYearRange:
    def test_regular_year(self):
        assert tax_year_range(2025) == "1 Mar 2024 – 28 Feb 2025"

    def test_leap_year(self):
        assert tax_year_range(2024) == "1 Mar 2023 – 29 Feb 2024"

    def test_century_not_leap(self):
        assert tax_year_range(2100) == "1 Mar 2099 – 28 Feb 2100"
