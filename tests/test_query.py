"""
Tests for booking search, filters, sorting and stats.
"""

from __future__ import annotations

from datetime import date

import pytest

from probook.application.use_cases.query import BookingQuery, SortOrder, query_bookings, summarize
from probook.domain.entities.booking import BookingStatus
from tests.factories import make_booking


@pytest.fixture
def bookings():
    return [
        make_booking("ravi", name="Ravi Kumar", email="ravi@example.com", booking_date=date(2025, 6, 11), start="09:00"),
        make_booking(
            "sana",
            name="Sana Mehta",
            email="sana@example.com",
            service_id="svc-salon",
            booking_date=date(2025, 6, 10),
            start="11:00",
            status=BookingStatus.CONFIRMED,
        ),
        make_booking(
            "arjun",
            name="Arjun Rao",
            email="arjun@example.com",
            booking_date=date(2025, 6, 10),
            start="10:00",
            status=BookingStatus.CANCELLED,
        ),
    ]


def test_search_matches_name_or_email_case_insensitively(bookings):
    assert [b.id for b in query_bookings(bookings, BookingQuery(search_text="ravi"))] == ["ravi"]
    assert [b.id for b in query_bookings(bookings, BookingQuery(search_text="SANA@EX"))] == ["sana"]
    assert [b.id for b in query_bookings(bookings, BookingQuery(search_text="  mehta "))] == ["sana"]


def test_empty_search_and_no_filters_keep_everything(bookings):
    result = query_bookings(bookings, BookingQuery(sort=SortOrder.NONE))

    assert [b.id for b in result] == ["ravi", "sana", "arjun"]


def test_filters_are_exact_matches(bookings):
    by_service = query_bookings(bookings, BookingQuery(service_id="svc-salon"))
    by_status = query_bookings(bookings, BookingQuery(status=BookingStatus.CANCELLED))
    by_date = query_bookings(bookings, BookingQuery(date=date(2025, 6, 10)))

    assert [b.id for b in by_service] == ["sana"]
    assert [b.id for b in by_status] == ["arjun"]
    assert [b.id for b in by_date] == ["arjun", "sana"]


def test_filters_combine(bookings):
    params = BookingQuery(service_id="svc-doctor", date=date(2025, 6, 10), status=BookingStatus.PENDING)

    assert query_bookings(bookings, params) == []


def test_sort_by_date_and_time(bookings):
    asc = query_bookings(bookings, BookingQuery(sort=SortOrder.DATE_ASC))
    desc = query_bookings(bookings, BookingQuery(sort=SortOrder.DATE_DESC))

    assert [b.id for b in asc] == ["arjun", "sana", "ravi"]
    assert [b.id for b in desc] == ["ravi", "sana", "arjun"]


def test_sort_is_stable_for_equal_slots():
    first = make_booking("first", start="10:00")
    second = make_booking("second", start="10:00", service_id="svc-yoga")

    assert [b.id for b in query_bookings([first, second], BookingQuery(sort=SortOrder.DATE_ASC))] == ["first", "second"]
    assert [b.id for b in query_bookings([first, second], BookingQuery(sort=SortOrder.DATE_DESC))] == ["first", "second"]


def test_unknown_sort_order_is_rejected(bookings):
    with pytest.raises(ValueError):
        query_bookings(bookings, BookingQuery(sort="newest"))


def test_query_does_not_mutate_input(bookings):
    snapshot = list(bookings)

    result = query_bookings(bookings, BookingQuery(sort=SortOrder.DATE_DESC))

    assert bookings == snapshot
    assert result is not bookings


def test_summarize_counts_statuses(bookings):
    stats = summarize(bookings)

    assert (stats.total, stats.confirmed, stats.pending, stats.cancelled) == (3, 1, 1, 1)
    assert summarize([]).total == 0
