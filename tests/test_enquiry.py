from datetime import datetime, timedelta, timezone

import pytest

from Enquiry_module.Enquiry_model import Enquiry


def test_submit_enquiry_example(client):
    response = client.post(
        "/api/enquiry",
        json={"name": "A", "email": "a@x.com", "message": "hi"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Enquiry submitted successfully"
    assert body["id"]

    listing = client.get("/api/enquiries")
    assert listing.status_code == 200
    data = listing.json()
    assert data["success"] is True
    assert data["count"] >= 1
    assert data["data"][0]["id"] == body["id"]


def test_listed_enquiry_matches_submission(client, valid_enquiry):
    created = client.post("/api/enquiry", json=valid_enquiry).json()

    record = client.get("/api/enquiries").json()["data"][0]

    assert record["id"] == created["id"]
    for field, value in valid_enquiry.items():
        assert record[field] == value
    assert record["type"] == "general_enquiry"
    assert datetime.fromisoformat(record["createdAt"]).tzinfo is not None


@pytest.mark.parametrize("field", ["name", "email", "message"])
@pytest.mark.parametrize("blank", [None, "", "   "])
def test_missing_required_field_is_rejected(client, store, valid_enquiry, field, blank):
    payload = dict(valid_enquiry)
    if blank is None:
        payload.pop(field)
    else:
        payload[field] = blank

    response = client.post("/api/enquiry", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Missing required fields: name, email, and message are required"
    assert body["code"] == "missing_required_fields"
    assert body["missing"] == [field]
    assert store.list_all(Enquiry) == []


def test_optional_fields_may_be_omitted(client):
    response = client.post(
        "/api/enquiry",
        json={"name": "B", "email": "b@x.com", "message": "call me"},
    )
    assert response.status_code == 201

    record = client.get("/api/enquiries").json()["data"][0]
    assert record["phone"] is None
    assert record["subject"] is None


def test_caller_supplied_type_is_kept(client, valid_enquiry):
    valid_enquiry["type"] = "callback_request"
    client.post("/api/enquiry", json=valid_enquiry)

    assert client.get("/api/enquiries").json()["data"][0]["type"] == "callback_request"


def test_unknown_fields_are_dropped(client, store, valid_enquiry):
    valid_enquiry["isAdmin"] = True
    client.post("/api/enquiry", json=valid_enquiry)

    record = client.get("/api/enquiries").json()["data"][0]
    assert "isAdmin" not in record


def test_numeric_phone_is_stored_as_text(client, valid_enquiry):
    valid_enquiry["phone"] = 9845000000
    assert client.post("/api/enquiry", json=valid_enquiry).status_code == 201

    assert client.get("/api/enquiries").json()["data"][0]["phone"] == "9845000000"


def test_structured_value_is_a_validation_error(client, store, valid_enquiry):
    valid_enquiry["subject"] = {"nested": "object"}

    response = client.post("/api/enquiry", json=valid_enquiry)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation error"
    assert body["code"] == "validation_error"
    assert "subject" in body["details"]
    assert store.list_all(Enquiry) == []


def test_form_encoded_submission(client):
    response = client.post(
        "/api/enquiry",
        data={"name": "C", "email": "c@x.com", "message": "from a plain form"},
    )

    assert response.status_code == 201
    assert client.get("/api/enquiries").json()["data"][0]["message"] == "from a plain form"


def test_malformed_json_is_rejected(client):
    response = client.post(
        "/api/enquiry",
        content=b'{"name": "A",',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body", "code": "invalid_body"}


def test_non_object_json_reports_missing_fields(client):
    response = client.post("/api/enquiry", json=["name", "email", "message"])

    assert response.status_code == 400
    assert response.json()["missing"] == ["name", "email", "message"]


def test_enquiries_are_listed_most_recent_first(client, monkeypatch):
    start = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)
    stamps = iter([start, start + timedelta(minutes=5)])
    monkeypatch.setattr("Enquiry_module.Enquiry_crud.now_utc", lambda: next(stamps))

    first = client.post("/api/enquiry", json={"name": "A", "email": "a@x.com", "message": "first"}).json()
    second = client.post("/api/enquiry", json={"name": "B", "email": "b@x.com", "message": "second"}).json()

    data = client.get("/api/enquiries").json()
    assert data["count"] == 2
    assert [record["id"] for record in data["data"]] == [second["id"], first["id"]]


def test_submit_fails_with_500_when_store_is_closed(client, store, valid_enquiry):
    store.close()

    response = client.post("/api/enquiry", json=valid_enquiry)

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Failed to submit enquiry"
    assert body["details"] == "Record store is closed"


def test_list_fails_with_500_when_store_is_closed(client, store):
    store.close()

    response = client.get("/api/enquiries")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to fetch enquiries"}


def test_long_name_and_subject_are_accepted(client, store, valid_enquiry):
    valid_enquiry["name"] = "Dr. " + "Venkataramanan " * 20
    valid_enquiry["subject"] = "Re: " + "boundary dispute and easement rights " * 8

    response = client.post("/api/enquiry", json=valid_enquiry)

    assert response.status_code == 201
    [enquiry] = store.list_all(Enquiry)
    assert enquiry.subject == valid_enquiry["subject"]
    assert len(enquiry.subject) > 255


@pytest.mark.parametrize("empty_type", [None, "", "  "])
def test_empty_type_falls_back_to_general_enquiry(client, valid_enquiry, empty_type):
    valid_enquiry["type"] = empty_type

    response = client.post("/api/enquiry", json=valid_enquiry)

    assert response.status_code == 201
    assert client.get("/api/enquiries").json()["data"][0]["type"] == "general_enquiry"
