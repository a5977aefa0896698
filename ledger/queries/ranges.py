"""
Canned report ranges, each computed from an explicit "today".

Every range is a closed interval (start, end) for by_date_range.
"""

from datetime import date, timedelta


DateRange = tuple[date, date]

# Offset the previous-year report has always used for its last day
PREVIOUS_YEAR_LAST_DAY_OF_YEAR = 365


def month_to_date(today: date) -> DateRange:
    return today.replace(day=1), today


def previous_month(today: date) -> DateRange:
    """First to last day of the month before today's month."""
    first_of_this_month = today.replace(day=1)
    last_of_previous = first_of_this_month - timedelta(days=1)
    return last_of_previous.replace(day=1), last_of_previous


def year_to_date(today: date) -> DateRange:
    return date(today.year, 1, 1), today


def previous_year(today: date, through_dec31: bool = False) -> DateRange:
    """
    Previous calendar year.

    By default the range ends on day 365 of that year, which is Dec 30
    in a leap year, so Dec 31 of a leap year is left out. Pass
    through_dec31=True to end on Dec 31 every year.
    """
    year = today.year - 1
    start = date(year, 1, 1)
    if through_dec31:
        return start, date(year, 12, 31)
    return start, start + timedelta(days=PREVIOUS_YEAR_LAST_DAY_OF_YEAR - 1)
