"""HTTP routes of the travel blueprint."""

import io

import pytest


@pytest.fixture
def trip_id(client):
    response = client.post("/travel/api/itineraries", json={
        "name": "Paris", "startDate": "2024-06-01", "endDate": "2024-06-10",
    })
    assert response.status_code == 201
    return response.get_json()["id"]


def add_stop(client, trip_id, **data):
    response = client.post(f"/travel/api/itineraries/{trip_id}/stops", json=data)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def test_health(client):
    assert client.get("/travel/health").get_json() == {"status": "ok", "service": "travel"}


def test_list_and_fetch(client, trip_id):
    assert [i["id"] for i in client.get("/travel/api/itineraries").get_json()] == [trip_id]
    assert client.get(f"/travel/api/itineraries/{trip_id}").get_json()["name"] == "Paris"


def test_unknown_itinerary_is_404(client):
    response = client.get("/travel/api/itineraries/missing")
    assert response.status_code == 404
    assert response.get_json()["reason"] == "itinerary_not_found"


def test_non_json_body_is_400(client, trip_id):
    response = client.put(f"/travel/api/itineraries/{trip_id}", data="name=x")
    assert response.status_code == 400
    assert response.get_json()["type"] == "validation_error"


def test_update_and_delete(client, trip_id):
    response = client.put(f"/travel/api/itineraries/{trip_id}", json={"status": "Active"})
    assert response.get_json()["status"] == "Active"
    assert client.delete(f"/travel/api/itineraries/{trip_id}").status_code == 204
    assert client.get(f"/travel/api/itineraries/{trip_id}").status_code == 404


def test_stop_outside_range_is_rejected(client, trip_id):
    response = client.post(f"/travel/api/itineraries/{trip_id}/stops",
                           json={"name": "Nice", "date": "2024-06-12"})
    assert response.status_code == 400
    assert response.get_json() == {
        "error": "Date must be between 2024-06-01 and 2024-06-10",
        "type": "date_range_error",
    }


def test_editor_view_and_collapse(client, trip_id):
    add_stop(client, trip_id, name="Dinner", date="2024-06-01", time="19:00")
    add_stop(client, trip_id, name="Louvre", date="2024-06-01", timeMode="bucket", timeBucket="morning")
    add_stop(client, trip_id, name="Someday")

    view = client.get(f"/travel/api/itineraries/{trip_id}/editor?collapsed=Unscheduled").get_json()
    assert [d["date"] for d in view["days"]] == ["2024-06-01", "Unscheduled"]
    assert [s["name"] for s in view["days"][0]["stops"]] == ["Louvre", "Dinner"]
    assert [d["collapsed"] for d in view["days"]] == [False, True]


def test_move_toggle_complete_and_remove(client, trip_id):
    a = add_stop(client, trip_id, name="A", date="2024-06-01", time="10:00")
    b = add_stop(client, trip_id, name="B", date="2024-06-01", time="11:00")
    base = f"/travel/api/itineraries/{trip_id}/stops"

    conflict = client.post(f"{base}/{b['id']}/move", json={"direction": "up"})
    assert conflict.status_code == 400
    assert conflict.get_json()["type"] == "ordering_conflict"

    noop = client.post(f"{base}/{a['id']}/move", json={"direction": "up"}).get_json()
    assert noop["moved"] is False

    assert client.post(f"{base}/{a['id']}/toggle").get_json()["completed"] is True
    done = client.post(f"{base}/{b['id']}/complete").get_json()
    assert done["stop"]["journalEntryId"] == done["journalEntryId"]

    edited = client.put(f"{base}/{a['id']}", json={"notes": "Bring tickets"}).get_json()
    assert edited["notes"] == "Bring tickets"
    assert client.delete(f"{base}/{a['id']}").status_code == 204
    assert client.delete(f"{base}/{a['id']}").status_code == 404


def test_share_and_public_view(client, trip_id, monkeypatch):
    monkeypatch.setenv("PUBLIC_BASE_URL", "https://lifeos.example/")
    add_stop(client, trip_id, name="Louvre", date="2024-06-02")

    shared = client.post(f"/travel/api/itineraries/{trip_id}/share").get_json()
    token = shared["publicShareToken"]
    assert shared["isPublic"] is True
    assert shared["shareUrl"] == f"https://lifeos.example/travel/api/share/{token}"

    public = client.get(f"/travel/api/share/{token}").get_json()
    assert public["name"] == "Paris"
    assert public["days"][0]["stops"][0]["name"] == "Louvre"

    client.post(f"/travel/api/itineraries/{trip_id}/share")
    gone = client.get(f"/travel/api/share/{token}")
    assert gone.status_code == 404
    assert gone.get_json()["reason"] == "not_found"


def test_pdf_download(client, trip_id):
    add_stop(client, trip_id, name="Louvre", date="2024-06-02")
    response = client.get(f"/travel/api/itineraries/{trip_id}/pdf")
    assert response.status_code == 200
    assert response.mimetype == "application/pdf"
    assert "attachment" in response.headers["Content-Disposition"]
    assert "Paris_itinerary.pdf" in response.headers["Content-Disposition"]
    assert response.data.startswith(b"%PDF")


def test_place_search_and_details(client):
    predictions = client.get("/travel/api/places/search?q=Louvre").get_json()["predictions"]
    assert [p["place_id"] for p in predictions] == ["place-louvre"]
    assert client.get("/travel/api/places/search?q=L").get_json() == {"predictions": []}

    details = client.get("/travel/api/places/place-louvre").get_json()["details"]
    assert details["lat"] == 48.8606
    assert client.get("/travel/api/places/nowhere").get_json() == {"details": None}


def test_photo_upload_and_serve(client):
    response = client.post("/travel/api/photos", data={
        "photos": [
            (io.BytesIO(b"jpeg bytes"), "eiffel.jpg", "image/jpeg"),
            (io.BytesIO(b"plain"), "notes.txt", "text/plain"),
        ],
    }, content_type="multipart/form-data")
    result = response.get_json()
    assert result["skipped"] == ["notes.txt"]
    (url,) = result["urls"]
    assert client.get(url).data == b"jpeg bytes"


def test_photo_upload_without_files(client):
    response = client.post("/travel/api/photos", data={}, content_type="multipart/form-data")
    assert response.status_code == 400


def test_maps_config(client, monkeypatch):
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "test-key")
    assert client.get("/travel/api/config").get_json()["google_maps_api_key"] == "test-key"

    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "")
    assert client.get("/travel/api/config").status_code == 500


def test_numeric_notes_still_export(client, trip_id):
    stop = add_stop(client, trip_id, name="Louvre", date="2024-06-02", notes=5)
    assert stop["notes"] == "5"
    response = client.get(f"/travel/api/itineraries/{trip_id}/pdf")
    assert response.status_code == 200
    assert response.data.startswith(b"%PDF")


def test_string_false_does_not_complete_a_stop(client, trip_id):
    stop = add_stop(client, trip_id, name="Louvre")
    edited = client.put(f"/travel/api/itineraries/{trip_id}/stops/{stop['id']}",
                        json={"completed": "false"}).get_json()
    assert edited["completed"] is False
