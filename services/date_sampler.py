# services/date_sampler.py
"""
Sampling grid for the price calendar.

Instead of searching every day of the next half year, the calendar samples
two departure days (the 1st and the 15th) in each of 6 consecutive months,
i.e. 12 upstream calls per calendar. Every sample is a round trip of
``trip_duration`` days.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional, Tuple

MONTH_NAMES: Tuple[str, ...] = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

SAMPLE_MONTHS = 6
SAMPLE_DAYS: Tuple[int, ...] = (1, 15)


@dataclass(frozen=True)
class SampleQuery:
    """Parameters of one upstream search in the sampling grid."""
    origin: str
    destination: str
    month_offset: int
    month_name: str
    outbound_date: date
    return_date: date


def month_label(today: date, month_offset: int) -> str:
    """Name of the calendar month ``month_offset`` months after today's, wrapping December."""
    return MONTH_NAMES[(today.month - 1 + month_offset) % 12]


def add_months(d: date, months: int) -> date:
    """First day of the month ``months`` after ``d``'s month."""
    index = d.year * 12 + (d.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def sampled_months(today: date) -> List[str]:
    return [month_label(today, offset) for offset in range(SAMPLE_MONTHS)]


def build_sampling_grid(
    origin: str,
    destination: str,
    trip_duration: int,
    today: Optional[date] = None,
) -> List[SampleQuery]:
    """
    Build the 12 (outbound, return) searches of a calendar request.

    The target month is derived from the first of today's month, and the
    sample day is set afterwards, so a request made on the 31st never drifts
    into the following month.

    Args:
        origin: Departure location id (IATA code or kgmid)
        destination: Arrival location id
        trip_duration: Trip length in days, must be positive
        today: Reference date (defaults to the local date)

    Returns:
        Queries ordered by month offset, then by sample day
    """
    if trip_duration < 1:
        raise ValueError("trip_duration must be a positive number of days")

    today = today or date.today()
    queries: List[SampleQuery] = []

    for month_offset in range(SAMPLE_MONTHS):
        month_start = add_months(today, month_offset)
        for day in SAMPLE_DAYS:
            outbound = month_start.replace(day=day)
            queries.append(
                SampleQuery(
                    origin=origin,
                    destination=destination,
                    month_offset=month_offset,
                    month_name=month_label(today, month_offset),
                    outbound_date=outbound,
                    return_date=outbound + timedelta(days=trip_duration),
                )
            )

    return queries
