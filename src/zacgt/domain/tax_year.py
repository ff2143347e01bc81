"""South African tax year helpers.

A SARS tax year runs from 1 March to the last day of February and is
named after the calendar year in which it ends.
"""

import calendar
from datetime import datetime

TAX_YEAR_START_MONTH = 3


def tax_year_for(moment: datetime) -> int:
    """Tax year a timestamp falls in: Jan/Feb belong to the current year, March onward to the next."""
    if moment.month < TAX_YEAR_START_MONTH:
        return moment.year
    return moment.year + 1


def tax_year_boundary(tax_year: int) -> datetime:
    """1 March 00:00:00 of the given tax year, i.e. the first instant after it ends."""
    return datetime(tax_year, TAX_YEAR_START_MONTH, 1)


def tax_year_range(tax_year: int) -> str:
    """Human label, e.g. ``1 Mar 2023 – 29 Feb 2024``."""
    end_day = 29 if calendar.isleap(tax_year) else 28
    return f"1 Mar {tax_year - 1} – {end_day} Feb {tax_year}"
