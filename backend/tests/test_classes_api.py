def test_class_crud(client):
    created = client.post("/api/classes", json={"name": " 网络1班 ", "major": "网络工程", "student_count": 31})
    assert created.status_code == 201
    entry = created.json()
    assert entry["name"] == "网络1班"

    duplicate = client.post("/api/classes", json={"name": "网络1班", "student_count": 5})
    assert duplicate.status_code == 409

    updated = client.put(f"/api/classes/{entry['id']}", json={"student_count": 29, "major": ""})
    assert updated.status_code == 200
    assert updated.json()["student_count"] == 29
    assert updated.json()["major"] is None

    assert client.get(f"/api/classes/{entry['id']}").json()["name"] == "网络1班"
    assert client.delete(f"/api/classes/{entry['id']}").json() == {"success": True}
    assert client.get(f"/api/classes/{entry['id']}").status_code == 404


def test_class_validation(client):
    assert client.post("/api/classes", json={"name": "   ", "student_count": 10}).status_code == 422
    assert client.post("/api/classes", json={"name": "X", "student_count": 0}).status_code == 422


def test_batch_create_reports_duplicates_and_clear(client):
    client.post("/api/classes", json={"name": "物联网1班", "student_count": 20})
    response = client.post(
        "/api/classes/batch",
        json={
            "classes": [
                {"name": "物联网1班", "student_count": 22},
                {"name": "物联网2班", "student_count": 24},
            ]
        },
    )
    assert response.json() == {
        "success": 1,
        "failed": 1,
        "errors": ["物联网1班: Class already exists: 物联网1班"],
    }
    assert [item["name"] for item in client.get("/api/classes").json()] == ["物联网1班", "物联网2班"]

    assert client.post("/api/classes/clear").json() == {"success": True, "deleted": 2}
    assert client.get("/api/classes").json() == []


def test_headcount_preview(client):
    client.post("/api/classes/batch", json={"classes": [{"name": "A", "student_count": 12}, {"name": "B", "student_count": 13}]})

    response = client.post("/api/classes/resolve", json={"classNames": "A，B,A"})
    assert response.json() == {"class_names": ["A", "B", "A"], "total": 37}

    assert client.post("/api/classes/resolve", json={"classNames": ""}).json() == {"class_names": [], "total": 0}

    missing = client.post("/api/classes/resolve", json={"classNames": "A,Q"})
    assert missing.status_code == 422
    assert missing.json()["details"]["names"] == ["Q"]
