from datetime import date, timedelta

import pytest

from services.date_sampler import (
    MONTH_NAMES,
    add_months,
    build_sampling_grid,
    month_label,
    sampled_months,
)

from tests.conftest import TODAY


def test_grid_has_two_samples_per_month_for_six_months():
    queries = build_sampling_grid("JFK", "LAX", 5, today=TODAY)

    assert len(queries) == 12
    assert [q.month_offset for q in queries] == [0, 0, 1, 1, 2, 2, 3, 3, 4, 4, 5, 5]
    assert [q.outbound_date.day for q in queries] == [1, 15] * 6
    assert all(q.origin == "JFK" and q.destination == "LAX" for q in queries)


def test_return_date_is_outbound_plus_trip_duration():
    queries = build_sampling_grid("JFK", "LAX", 5, today=TODAY)

    for q in queries:
        assert q.return_date - q.outbound_date == timedelta(days=5)


def test_outbound_dates_from_october():
    queries = build_sampling_grid("JFK", "LAX", 7, today=TODAY)

    assert [q.outbound_date for q in queries[:4]] == [
        date(2026, 10, 1),
        date(2026, 10, 15),
        date(2026, 11, 1),
        date(2026, 11, 15),
    ]
    assert queries[-1].outbound_date == date(2027, 3, 15)


def test_month_labels_wrap_year_boundary():
    today = date(2026, 11, 30)

    assert sampled_months(today) == ["November", "December", "January", "February", "March", "April"]
    queries = build_sampling_grid("JFK", "LAX", 7, today=today)
    assert queries[4].outbound_date == date(2027, 1, 1)
    assert queries[4].month_name == "January"


def test_day_31_does_not_drift_into_next_month():
    # adding a month to Jan 31 must not land in March
    queries = build_sampling_grid("JFK", "LAX", 7, today=date(2027, 1, 31))

    assert queries[2].outbound_date == date(2027, 2, 1)
    assert queries[3].outbound_date == date(2027, 2, 15)
    for q in queries:
        assert MONTH_NAMES[q.outbound_date.month - 1] == q.month_name


def test_return_date_rolls_over_year():
    queries = build_sampling_grid("JFK", "LAX", 20, today=date(2026, 12, 3))

    assert queries[1].outbound_date == date(2026, 12, 15)
    assert queries[1].return_date == date(2027, 1, 4)


def test_sampled_months_are_six_distinct_names():
    for month in range(1, 13):
        names = sampled_months(date(2026, month, 10))
        assert len(set(names)) == 6
        assert names[0] == MONTH_NAMES[month - 1]


def test_month_label_and_add_months():
    assert month_label(TODAY, 0) == "October"
    assert month_label(TODAY, 3) == "January"
    assert add_months(date(2026, 12, 31), 1) == date(2027, 1, 1)
    assert add_months(date(2026, 3, 15), 0) == date(2026, 3, 1)


@pytest.mark.parametrize("duration", [0, -3])
def test_non_positive_duration_rejected(duration):
    with pytest.raises(ValueError):
        build_sampling_grid("JFK", "LAX", duration, today=TODAY)
