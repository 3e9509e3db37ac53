"""요청/응답 스키마 검증 테스트."""

import math
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from app.schemas.plan import PlanSession, RouteResponse
from app.schemas.route import RoutingResult
from app.schemas.trip import TripDetails, UserPreferences


def test_trip_details_normalizes_terminal_and_gates() -> None:
    trip = TripDetails(arrival_time=datetime(2026, 1, 31, 10), terminal=" t2 ", arriving_gate="c1", gate_number=" ")

    assert trip.terminal == "T2"
    assert trip.arriving_gate == "C1"
    assert trip.gate_number is None


def test_trip_details_rejects_mixed_timezones() -> None:
    with pytest.raises(ValidationError):
        TripDetails(
            arrival_time=datetime(2026, 1, 31, 10),
            terminal="T1",
            next_flight_time=datetime(2026, 1, 31, 14, tzinfo=timezone.utc),
        )


def test_user_preferences_budget_range() -> None:
    assert UserPreferences(budget=2).budget == 2

    with pytest.raises(ValidationError):
        UserPreferences(budget=4)


def test_custom_preferences_blank_text() -> None:
    assert not UserPreferences(custom_preferences="   ").has_custom_preferences
    assert UserPreferences(custom_preferences="coffee").has_custom_preferences


def test_plan_session_reference_time_defaults_to_arrival() -> None:
    trip = TripDetails(arrival_time=datetime(2026, 1, 31, 10), terminal="T1")

    assert PlanSession(trip=trip).reference_time == datetime(2026, 1, 31, 10)
    assert PlanSession(trip=trip, now=datetime(2026, 1, 31, 11)).reference_time == datetime(2026, 1, 31, 11)


def test_route_response_maps_infinite_distance_to_null() -> None:
    response = RouteResponse.from_result(RoutingResult.empty(math.inf))

    assert response.total_distance is None
    assert response.stops == []
    assert not RoutingResult.empty(math.inf).is_reachable


def test_plan_session_rejects_aware_now_for_naive_trip() -> None:
    trip = TripDetails(arrival_time=datetime(2026, 1, 31, 10), terminal="T1", next_flight_time=datetime(2026, 1, 31, 14))

    with pytest.raises(ValidationError):
        PlanSession(trip=trip, now=datetime(2026, 1, 31, 10, tzinfo=timezone.utc))


def test_plan_session_rejects_naive_now_for_aware_trip() -> None:
    trip = TripDetails(
        arrival_time=datetime(2026, 1, 31, 10, tzinfo=timezone.utc),
        terminal="T1",
        next_flight_time=datetime(2026, 1, 31, 14, tzinfo=timezone.utc),
    )

    with pytest.raises(ValidationError):
        PlanSession(trip=trip, now=datetime(2026, 1, 31, 10))

    aware_now = datetime(2026, 1, 31, 11, tzinfo=timezone.utc)
    assert PlanSession(trip=trip, now=aware_now).reference_time == aware_now
