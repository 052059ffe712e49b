from datetime import datetime, time

import pytest
from sqlalchemy.orm import Session

from booking.repositories.location import create_location, update_location
from booking.services.location import list_locations

LOCATIONS_URL = "/api/v1/locations"


def _payload(**overrides) -> dict:
    payload = {
        "name": "Harbour Hall",
        "address": "7 Pier Road",
        "description": "Event venue by the sea",
        "capacity": 300,
        "open_time": "08:00:00",
        "close_time": "18:00:00",
        "location_type": "venue",
    }
    payload.update(overrides)
    return payload


def _active_location(db: Session, name: str, open_time: time, close_time: time, location_type="venue"):
    location = create_location(
        db,
        name=name,
        address="Somewhere",
        capacity=10,
        open_time=open_time,
        close_time=close_time,
        location_type=location_type,
    )
    return update_location(db, location_id=location.id, is_active=True)


# ============================================================================
# CREATE LOCATION TESTS
# ============================================================================


def test_create_location_success(client):
    """Test successful location creation; new locations start inactive."""
    response = client.post(LOCATIONS_URL, json=_payload())
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Harbour Hall"
    assert data["location_type"] == "venue"
    assert data["capacity"] == 300
    assert data["open_time"] == "08:00:00"
    assert data["is_active"] is False
    assert "id" in data


def test_create_location_defaults_to_hotel(client):
    """Test the location type defaults to hotel when omitted."""
    payload = _payload()
    del payload["location_type"]
    response = client.post(LOCATIONS_URL, json=payload)
    assert response.status_code == 201
    assert response.json()["location_type"] == "hotel"


def test_create_location_accepts_window_through_midnight(client):
    """Test a closing time earlier than the opening time is allowed."""
    response = client.post(
        LOCATIONS_URL, json=_payload(open_time="22:00:00", close_time="06:00:00")
    )
    assert response.status_code == 201


@pytest.mark.parametrize(
    "field,value",
    [
        ("capacity", 0),
        ("capacity", -5),
        ("name", ""),
        ("location_type", "spaceship"),
        ("open_time", "25:00:00"),
    ],
)
def test_create_location_invalid_payload(client, field, value):
    """Test invalid location payloads are rejected by request validation."""
    response = client.post(LOCATIONS_URL, json=_payload(**{field: value}))
    assert response.status_code == 422


# ============================================================================
# READ LOCATION TESTS
# ============================================================================


def test_get_location_by_id(client, hotel):
    """Test fetching a location by ID."""
    response = client.get(f"{LOCATIONS_URL}/{hotel.id}")
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == hotel.id
    assert data["name"] == "Grand Hotel"
    assert data["is_active"] is True


def test_get_location_not_found(client):
    """Test a missing location returns 404 with a stable code."""
    response = client.get(f"{LOCATIONS_URL}/9999")
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_list_locations_paginated(client, hotel, inactive_hotel):
    """Test listing returns a page and the total count."""
    response = client.get(LOCATIONS_URL, params={"page": 1, "page_size": 1})
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert data["page"] == 1
    assert data["page_size"] == 1
    assert len(data["items"]) == 1
    assert data["items"][0]["id"] == hotel.id


def test_list_locations_filter_by_type(client, db: Session, hotel):
    """Test filtering by location type."""
    _active_location(db, "Hall", time(8, 0), time(18, 0))

    response = client.get(LOCATIONS_URL, params={"location_type": "venue"})
    assert response.status_code == 200
    items = response.json()["items"]
    assert [item["name"] for item in items] == ["Hall"]


def test_list_locations_available_now_skips_inactive(client, inactive_hotel, db: Session):
    """Test available_now never lists inactive locations."""
    always_open = _active_location(db, "All Day", time(0, 0), time(23, 59, 59, 999999))

    response = client.get(LOCATIONS_URL, params={"available_now": True})
    assert response.status_code == 200
    ids = [item["id"] for item in response.json()["items"]]
    assert ids == [always_open.id]


def test_list_locations_available_at_respects_operating_hours(db: Session):
    """Test the open-now filter applies the window, including midnight wrap."""
    day = _active_location(db, "Day", time(9, 0), time(17, 0))
    night = _active_location(db, "Night", time(22, 0), time(6, 0))

    def names_open_at(moment):
        locations, total = list_locations(db, available_now=True, now=moment)
        assert total == len(locations)
        return {location.name for location in locations}

    assert names_open_at(datetime(2024, 5, 1, 12, 0)) == {day.name}
    assert names_open_at(datetime(2024, 5, 1, 23, 0)) == {night.name}
    assert names_open_at(datetime(2024, 5, 1, 3, 0)) == {night.name}
    assert names_open_at(datetime(2024, 5, 1, 17, 0)) == {day.name}
    assert names_open_at(datetime(2024, 5, 1, 20, 0)) == set()


# ============================================================================
# UPDATE LOCATION TESTS
# ============================================================================


def test_update_location_partial(client, hotel):
    """Test fields not included in the request are left untouched."""
    response = client.put(f"{LOCATIONS_URL}/{hotel.id}", json={"capacity": 80})
    assert response.status_code == 200
    data = response.json()
    assert data["capacity"] == 80
    assert data["name"] == "Grand Hotel"
    assert data["location_type"] == "hotel"


def test_update_location_type(client, hotel):
    """Test a location may change type; its defaults follow the new type."""
    response = client.put(f"{LOCATIONS_URL}/{hotel.id}", json={"location_type": "venue"})
    assert response.status_code == 200
    assert response.json()["location_type"] == "venue"

    policies = client.get(f"{LOCATIONS_URL}/{hotel.id}/policies").json()
    assert [p["key"] for p in policies][0] == "no-overlap"
    assert len(policies) == 5


def test_update_location_not_found(client):
    """Test updating a missing location returns 404."""
    response = client.put(f"{LOCATIONS_URL}/9999", json={"capacity": 5})
    assert response.status_code == 404


def test_set_location_availability(client, inactive_hotel):
    """Test activating and deactivating a location."""
    url = f"{LOCATIONS_URL}/{inactive_hotel.id}/availability"

    response = client.put(url, json={"is_active": True})
    assert response.status_code == 200
    assert response.json()["is_active"] is True

    response = client.put(url, json={"is_active": False})
    assert response.status_code == 200
    assert response.json()["is_active"] is False


def test_set_availability_not_found(client):
    """Test availability of a missing location returns 404."""
    response = client.put(f"{LOCATIONS_URL}/9999/availability", json={"is_active": True})
    assert response.status_code == 404


# ============================================================================
# EFFECTIVE POLICIES TESTS
# ============================================================================


def test_get_effective_policies_of_hotel(client, hotel):
    """Test a hotel without overrides reports its three defaults."""
    response = client.get(f"{LOCATIONS_URL}/{hotel.id}/policies")
    assert response.status_code == 200
    data = response.json()
    assert [(p["key"], p["source"]) for p in data] == [
        ("advance-notice", "default"),
        ("gap", "default"),
        ("no-overlap", "default"),
    ]
    assert data[0]["parameters"] == {"advance_time": "P2D"}
    assert data[2]["parameters"] == {}


def test_get_effective_policies_not_found(client):
    """Test policies of a missing location return 404."""
    response = client.get(f"{LOCATIONS_URL}/9999/policies")
    assert response.status_code == 404
