from __future__ import annotations


def test_create_defaults_then_status_update(client):
    created = client.post("/api/candidates", json={"name": "A", "subject": "Math"})

    assert created.status_code == 201
    body = created.json()
    assert body["id"].startswith("C-")
    assert body["status"] == "Imported"
    assert body["trackId"] == "t1"
    assert body["gpa"] == 0
    assert body["extensions"] == {}
    assert body["enrollments"] == [] and body["courseResults"] == [] and body["notesThread"] == []

    updated = client.put(f"/api/candidates/{body['id']}", json={"status": "Eligible"})
    assert updated.status_code == 200
    assert updated.json()["status"] == "Eligible"
    assert updated.json()["name"] == "A"
    assert updated.json()["subject"] == "Math"


def test_get_matches_create_response(client):
    created = client.post(
        "/api/candidates",
        json={
            "name": "B",
            "nationalId": "784-1990-1234567-1",
            "sponsor": "Mawaheb",
            "university": "Zayed University",
            "enrollments": [{"courseCode": "EDU101", "required": "Required"}],
        },
    ).json()

    fetched = client.get(f"/api/candidates/{created['id']}")

    assert fetched.status_code == 200
    assert fetched.json() == created
    assert created["extensions"] == {"university": "Zayed University"}
    assert created["enrollments"][0]["required"] == "Required"
    assert created["enrollments"][0]["status"] == "Enrolled"
    assert created["enrollments"][0]["passState"] == "Not Started"


def test_invalid_enum_values_are_422(client):
    assert client.post("/api/candidates", json={"name": "C", "trackId": "t9"}).status_code == 422
    assert client.post("/api/candidates", json={"name": "C", "status": "Promoted"}).status_code == 422
    assert client.post("/api/candidates", json={"subject": "Math"}).status_code == 422


def test_missing_candidate_is_404(client):
    assert client.get("/api/candidates/C-missing").status_code == 404
    assert client.put("/api/candidates/C-missing", json={"name": "X"}).status_code == 404
    assert client.delete("/api/candidates/C-missing").status_code == 404


def test_delete_and_notes_routes(client):
    candidate = client.post("/api/candidates", json={"name": "D"}).json()

    noted = client.post(
        f"/api/candidates/{candidate['id']}/notes",
        json={"text": "Needs transcript", "author": "trainer@example.com", "role": "ECAE Trainer"},
    )
    assert noted.status_code == 201
    assert noted.json()["notesThread"][0]["text"] == "Needs transcript"

    deleted = client.delete(f"/api/candidates/{candidate['id']}")
    assert deleted.json() == {"success": True}
    assert client.get(f"/api/candidates/{candidate['id']}").status_code == 404


def test_summary_route_is_not_an_id(client):
    client.post("/api/candidates", json={"name": "E", "trackId": "t2"})

    response = client.get("/api/candidates/summary")

    assert response.status_code == 200
    [row] = response.json()
    assert row["trackName"] == "Languages"
    assert row["enrollmentCount"] == 0
    assert row["stageIndex"] == 0


def test_list_filter_by_track(client):
    client.post("/api/candidates", json={"name": "F", "trackId": "t3"})
    client.post("/api/candidates", json={"name": "G"})

    names = [c["name"] for c in client.get("/api/candidates", params={"trackId": "t3"}).json()]

    assert names == ["F"]


def test_put_of_fetched_record_keeps_extensions_clean(client):
    created = client.post("/api/candidates", json={"name": "A", "hometown": "Hatta"}).json()
    fetched = client.get(f"/api/candidates/{created['id']}").json()

    fetched["status"] = "Eligible"
    updated = client.put(f"/api/candidates/{created['id']}", json=fetched)

    assert updated.status_code == 200
    body = updated.json()
    assert body["status"] == "Eligible"
    assert body["extensions"] == {"hometown": "Hatta"}
    assert body["id"] == created["id"]
    assert body["createdAt"] == created["createdAt"]
