from datetime import date

import pytest

from app.mappers.serpapi_mapper import SerpApiMapper, round_half_up
from schemas.serpapi import ProviderFlight, ProviderResponse
from services.date_sampler import SampleQuery

from tests.conftest import make_flight, make_payload


def _flight(**raw) -> ProviderFlight:
    return ProviderFlight.model_validate(raw)


@pytest.mark.parametrize(
    "value,expected",
    [(548.5, 549), (548.49, 548), (2.5, 3), (3.5, 4), (120, 120), (0.4, 0)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_offer_from_complete_entry():
    flight = _flight(**make_flight(
        412.6,
        ("United", "United"),
        departure_time="2026-11-01 07:00",
        arrival_time="2026-11-01 13:10",
        total_duration=430,
    ))

    offer = SerpApiMapper.to_flight_offer(flight)

    assert offer.price == 413
    assert offer.airline == "United"
    assert offer.stops == 1
    assert offer.departure_time == "2026-11-01 07:00"
    assert offer.arrival_time == "2026-11-01 13:10"
    assert offer.total_duration == 430


def test_times_come_from_first_departure_and_last_arrival():
    flight = _flight(price=300, flights=[
        {"airline": "Delta", "departure_airport": {"time": "08:00"}, "arrival_airport": {"time": "10:00"}},
        {"airline": "Delta", "departure_airport": {"time": "11:00"}, "arrival_airport": {"time": "14:30"}},
    ])

    offer = SerpApiMapper.to_flight_offer(flight)

    assert offer.departure_time == "08:00"
    assert offer.arrival_time == "14:30"


def test_missing_fields_fall_back_to_defaults():
    offer = SerpApiMapper.to_flight_offer(_flight(price=199))

    assert offer.price == 199
    assert offer.airline == "Unknown"
    assert offer.stops == 0
    assert offer.departure_time is None
    assert offer.arrival_time is None
    assert offer.total_duration is None


def test_empty_segment_list_never_gives_negative_stops():
    offer = SerpApiMapper.to_flight_offer(_flight(price=199, flights=[], total_duration=0))

    assert offer.stops == 0
    assert offer.total_duration is None


def test_segment_without_airline_is_unknown():
    offer = SerpApiMapper.to_flight_offer(_flight(**make_flight(250, (None,))))

    assert offer.airline == "Unknown"


@pytest.mark.parametrize("price", [None, 0])
def test_entries_without_price_are_skipped(price):
    assert SerpApiMapper.to_flight_offer(_flight(price=price, flights=[])) is None


def test_non_object_entries_are_dropped():
    flights = SerpApiMapper.parse_flights([
        make_flight(100),
        "not a flight",
        None,
        make_flight(200),
    ])

    assert [f.price for f in flights] == [100, 200]


def test_unreadable_price_is_treated_as_missing():
    flights = SerpApiMapper.parse_flights([{"price": "cheap", "flights": []}])

    assert len(flights) == 1
    assert flights[0].price is None
    assert SerpApiMapper.to_flight_offer(flights[0]) is None


@pytest.mark.parametrize(
    "entry",
    [
        {"price": 300, "flights": [{"airline": "Delta", "flight_number": 123}]},
        {"price": 300, "total_duration": 330.5, "flights": [{"airline": "Delta"}]},
        {"price": 300, "flights": [{"airline": "Delta", "departure_airport": {"id": 7, "time": "08:00"}}]},
        {"price": 300, "type": ["Round", "trip"], "flights": [{"airline": "Delta", "duration": "long"}]},
    ],
)
def test_odd_unread_fields_do_not_drop_priced_offer(entry):
    flights = SerpApiMapper.parse_flights([entry])

    offer = SerpApiMapper.to_flight_offer(flights[0])

    assert offer.price == 300
    assert offer.airline == "Delta"


def test_wrongly_typed_read_fields_fall_back_to_none():
    flight = _flight(
        price=250,
        total_duration="about five hours",
        booking_token=42,
        flights=[{"airline": ["Delta"], "travel_class": 3, "departure_airport": "JFK", "arrival_airport": {"time": 9}}],
    )

    offer = SerpApiMapper.to_flight_offer(flight)

    assert offer.price == 250
    assert offer.airline == "Unknown"
    assert offer.stops == 0
    assert offer.departure_time is None
    assert offer.arrival_time is None
    assert offer.total_duration is None
    assert flight.booking_token is None


@pytest.mark.parametrize("other", [{"oops": 1}, "none", 7, None])
def test_non_list_other_flights_keeps_best_flights(other):
    response = ProviderResponse.model_validate({"best_flights": [make_flight(120)], "other_flights": other})

    assert response.other_flights == []
    assert [f.price for f in SerpApiMapper.calendar_candidates(response)] == [120]
    assert [f.price for f in SerpApiMapper.search_candidates(response)] == [120]


def test_non_list_best_flights_keeps_other_flights():
    response = ProviderResponse.model_validate({"best_flights": {"oops": 1}, "other_flights": [make_flight(180)]})

    assert response.best_flights == []
    assert [f.price for f in SerpApiMapper.calendar_candidates(response)] == [180]


def test_calendar_candidates_take_all_best_and_three_other():
    response = ProviderResponse.model_validate(make_payload(
        best=[make_flight(p) for p in (100, 110)],
        other=[make_flight(p) for p in (200, 210, 220, 230, 240)],
    ))

    prices = [f.price for f in SerpApiMapper.calendar_candidates(response)]

    assert prices == [100, 110, 200, 210, 220]


def test_calendar_candidates_with_only_other_flights():
    response = ProviderResponse.model_validate({"other_flights": [make_flight(150)]})

    assert [f.price for f in SerpApiMapper.calendar_candidates(response)] == [150]


def test_trip_record_carries_sample_dates():
    query = SampleQuery("JFK", "LAX", 1, "November", date(2026, 11, 1), date(2026, 11, 8))
    flight = _flight(**make_flight(305.5, total_duration=345))
    offer = SerpApiMapper.to_flight_offer(flight)

    trip = SerpApiMapper.to_trip_record(offer, flight, query)

    assert trip.departure_date == "2026-11-01"
    assert trip.return_date == "2026-11-08"
    assert trip.price == 306
    assert trip.duration == 345
    dumped = trip.model_dump(by_alias=True)
    assert dumped["departureDate"] == "2026-11-01"
    assert dumped["totalDuration"] == 345


def test_search_offer_nonstop_detection():
    nonstop = _flight(**make_flight(150, ("JetBlue",), travel_class="Nonstop"))
    economy = _flight(**make_flight(150, ("JetBlue",), travel_class="Economy"))

    assert SerpApiMapper.to_search_offer(nonstop).stops == 0
    assert SerpApiMapper.to_search_offer(economy).stops == 1


def test_search_offer_keeps_raw_price_and_first_segment_times():
    flight = _flight(
        price=412,
        total_duration=430,
        booking_token="abc",
        flights=[
            {"airline": "United", "departure_airport": {"time": "07:00"}, "arrival_airport": {"time": "09:00"}},
            {"airline": "Alaska", "departure_airport": {"time": "10:00"}, "arrival_airport": {"time": "13:10"}},
        ],
    )

    offer = SerpApiMapper.to_search_offer(flight)

    assert offer.price == 412
    assert offer.airline == "United"
    assert offer.departure_time == "07:00"
    assert offer.arrival_time == "09:00"
    assert offer.duration == 430
    assert offer.booking_link == "abc"


def test_search_offer_without_segments():
    offer = SerpApiMapper.to_search_offer(_flight(price=99))

    assert offer.airline is None
    assert offer.stops == 1
    assert offer.departure_time is None
