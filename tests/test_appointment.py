from datetime import date

import pytest

from Appointment_module.Appointment_model import Appointment


def test_submit_appointment(client, valid_appointment):
    response = client.post("/api/appointment", json=valid_appointment)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Appointment request submitted successfully"
    assert body["id"]


def test_preferred_date_is_stored_as_a_date(client, store, valid_appointment):
    client.post("/api/appointment", json=valid_appointment)

    [appointment] = store.list_all(Appointment)
    assert isinstance(appointment.preferred_date, date)
    assert appointment.preferred_date == date(2025, 3, 14)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2025-03-14", date(2025, 3, 14)),
        ("2025-03-14T10:30:00", date(2025, 3, 14)),
        ("2025-03-14T00:00:00.000Z", date(2025, 3, 14)),
    ],
)
def test_preferred_date_accepts_iso_formats(client, store, valid_appointment, raw, expected):
    valid_appointment["preferredDate"] = raw

    assert client.post("/api/appointment", json=valid_appointment).status_code == 201
    assert store.list_all(Appointment)[0].preferred_date == expected


def test_unparseable_date_is_a_validation_error(client, store, valid_appointment):
    valid_appointment["preferredDate"] = "next tuesday"

    response = client.post("/api/appointment", json=valid_appointment)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation error"
    assert "preferredDate" in body["details"]
    assert store.list_all(Appointment) == []


@pytest.mark.parametrize(
    "field", ["name", "email", "phone", "preferredDate", "preferredTime", "purpose"]
)
def test_missing_required_field_is_rejected(client, store, valid_appointment, field):
    valid_appointment[field] = ""

    response = client.post("/api/appointment", json=valid_appointment)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Missing required fields"
    assert body["missing"] == [field]
    assert store.list_all(Appointment) == []


def test_listed_appointment_shape(client, valid_appointment):
    created = client.post("/api/appointment", json=valid_appointment).json()

    data = client.get("/api/appointments").json()

    assert data["success"] is True
    assert data["count"] == 1
    record = data["data"][0]
    assert record == {
        "id": created["id"],
        "name": "Vikram Shetty",
        "email": "vikram@example.com",
        "phone": "+91 99000 11111",
        "preferredDate": "2025-03-14",
        "preferredTime": "10:30 AM",
        "purpose": "Contract review",
        "type": "appointment_request",
        "status": "pending",
        "createdAt": record["createdAt"],
    }


def test_appointments_are_listed_most_recent_first(client, valid_appointment):
    first = client.post("/api/appointment", json=dict(valid_appointment, name="First")).json()
    second = client.post("/api/appointment", json=dict(valid_appointment, name="Second")).json()

    ids = [record["id"] for record in client.get("/api/appointments").json()["data"]]
    assert ids == [second["id"], first["id"]]


def test_appointments_and_enquiries_are_independent(client, valid_appointment):
    client.post("/api/appointment", json=valid_appointment)

    assert client.get("/api/enquiries").json()["count"] == 0
    assert client.get("/api/appointments").json()["count"] == 1


def test_list_fails_with_500_when_store_is_closed(client, store):
    store.close()

    response = client.get("/api/appointments")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to fetch appointments"}


def test_free_text_preferred_time_is_accepted(client, store, valid_appointment):
    valid_appointment["preferredTime"] = "Any weekday after 3pm, but please avoid Friday afternoons"

    response = client.post("/api/appointment", json=valid_appointment)

    assert response.status_code == 201
    assert store.list_all(Appointment)[0].preferred_time == valid_appointment["preferredTime"]


def test_null_type_and_status_fall_back_to_defaults(client, valid_appointment):
    valid_appointment["type"] = None
    valid_appointment["status"] = ""

    response = client.post("/api/appointment", json=valid_appointment)

    assert response.status_code == 201
    record = client.get("/api/appointments").json()["data"][0]
    assert record["type"] == "appointment_request"
    assert record["status"] == "pending"
