def test_semester_start_defaults_and_snaps_to_monday(client):
    assert client.get("/api/calendar/semester-start").json() == {
        "semester_start_monday": "2025-09-01",
        "semester_year": 2025,
    }

    response = client.put("/api/calendar/semester-start", json={"date": "2026-02-26"})
    assert response.status_code == 200
    assert response.json() == {"semester_start_monday": "2026-02-23", "semester_year": 2026}
    assert client.get("/api/calendar/semester-start").json()["semester_start_monday"] == "2026-02-23"

    assert client.put("/api/calendar/semester-start", json={"date": "26/02/2026"}).status_code == 422


def test_overrides_upsert_reset_and_delete(client):
    response = client.post(
        "/api/calendar/overrides",
        json={"overrides": [{"date": "2025-10-11", "type": "work"}, {"date": "2025-10-01", "type": "off"}]},
    )
    assert response.status_code == 200
    assert response.json() == [
        {"date": "2025-10-01", "type": "off"},
        {"date": "2025-10-11", "type": "work"},
    ]

    flipped = client.post("/api/calendar/overrides", json={"overrides": [{"date": "2025-10-01", "type": "work"}]})
    assert {"date": "2025-10-01", "type": "work"} in flipped.json()
    assert len(flipped.json()) == 2

    reset = client.post(
        "/api/calendar/overrides",
        json={"overrides": [{"date": "2026-01-01", "type": "off"}], "reset": True},
    )
    assert reset.json() == [{"date": "2026-01-01", "type": "off"}]

    assert client.delete("/api/calendar/overrides/2026-01-01").json() == []
    assert client.get("/api/calendar/overrides").json() == []
    assert client.delete("/api/calendar/overrides/not-a-date").status_code == 400

    bad_type = client.post("/api/calendar/overrides", json={"overrides": [{"date": "2026-01-01", "type": "half"}]})
    assert bad_type.status_code == 422


def test_period_schedule_follows_the_season_and_overrides(client):
    summer = client.get("/api/calendar/periods", params={"date": "2025-10-07"}).json()
    assert summer["seasonal_shift"] is True
    assert summer["periods"][4] == {"period": 5, "start": "14:30", "end": "15:20"}
    assert summer["week"] == {"monday": "2025-10-06", "sunday": "2025-10-12"}
    assert summer["week_number"] == 6
    assert summer["workday"] is True

    winter = client.get("/api/calendar/periods", params={"date": "2025-10-08"}).json()
    assert winter["seasonal_shift"] is False
    assert winter["periods"][4] == {"period": 5, "start": "14:00", "end": "14:50"}
    assert winter["periods"][0] == {"period": 1, "start": "08:00", "end": "08:50"}

    saturday = client.get("/api/calendar/periods", params={"date": "2025-10-11"}).json()
    assert saturday["workday"] is False
    client.post("/api/calendar/overrides", json={"overrides": [{"date": "2025-10-11", "type": "work"}]})
    assert client.get("/api/calendar/periods", params={"date": "2025-10-11"}).json()["workday"] is True

    before_term = client.get("/api/calendar/periods", params={"date": "2025-08-20"}).json()
    assert before_term["week_number"] == 0
