from __future__ import annotations

import csv
import io


def _create(client, name="Alice", **extra):
    payload = {"name": name, "currentLesson": "Sword", "status": "Active"}
    payload.update(extra)
    res = client.post("/api/students", json=payload)
    assert res.status_code == 201
    return res.get_json()


def test_health(client):
    res = client.get("/health")

    assert res.status_code == 200
    assert res.get_json() == {"status": "ok", "backend": "memory"}


def test_student_crud(client):
    created = _create(client, "Alice", feesPaid=True, classId="Class 2")
    assert created["feesPaid"] is True
    assert created["classId"] == "Class 2"

    sid = created["id"]
    assert client.get(f"/api/students/{sid}").get_json() == created

    res = client.patch(f"/api/students/{sid}", json={"status": "Graduated"})
    assert res.status_code == 200
    assert res.get_json()["status"] == "Graduated"
    assert res.get_json()["name"] == "Alice"

    assert client.delete(f"/api/students/{sid}").status_code == 204
    assert client.get(f"/api/students/{sid}").status_code == 404
    assert client.get("/api/students").get_json() == []


def test_student_search_is_case_insensitive(client):
    _create(client, "Alice Johnson")
    _create(client, "Bob Smith")

    names = [s["name"] for s in client.get("/api/students?search=aLiCe").get_json()]

    assert names == ["Alice Johnson"]


def test_create_student_reports_first_invalid_field(client):
    res = client.post("/api/students", json={"name": "  ", "currentLesson": "Sword", "status": "Active"})

    assert res.status_code == 400
    assert res.get_json()["field"] == "name"

    res = client.post("/api/students", json={"name": "Al", "currentLesson": "Sword", "status": "Sleeping"})
    assert res.status_code == 400
    assert res.get_json()["field"] == "status"


def test_unknown_student_is_404(client):
    assert client.patch("/api/students/999", json={"name": "X"}).status_code == 404
    assert client.delete("/api/students/999").status_code == 404
    assert client.get("/api/students/999/logs").status_code == 404
    assert client.post("/api/students/999/logs", json={}).status_code == 404


def test_logs_for_student_are_newest_first(client):
    sid = _create(client)["id"]
    client.post(f"/api/students/{sid}/logs", json={"date": "2024-06-01T10:00:00", "lessonSummary": "Basics"})
    client.post(f"/api/students/{sid}/logs", json={"date": "2024-06-03T10:00:00", "attended": False})

    logs = client.get(f"/api/students/{sid}/logs").get_json()

    assert [log["date"][:10] for log in logs] == ["2024-06-03", "2024-06-01"]
    assert logs[0]["attended"] is False
    assert logs[1]["lessonSummary"] == "Basics"


def test_log_range_query_is_inclusive(client):
    sid = _create(client)["id"]
    for day in ("2024-05-31", "2024-06-01", "2024-06-30", "2024-07-01"):
        client.post(f"/api/students/{sid}/logs", json={"date": f"{day}T23:00:00"})

    logs = client.get("/api/logs?start=2024-06-01&end=2024-06-30").get_json()

    assert [log["date"][:10] for log in logs] == ["2024-06-01", "2024-06-30"]


def test_log_query_requires_a_date(client):
    res = client.get("/api/logs")
    assert res.status_code == 400
    assert res.get_json()["field"] == "date"

    res = client.get("/api/logs?start=2024-06-02&end=2024-06-01")
    assert res.status_code == 400


def test_new_log_is_visible_in_cached_date_query(client):
    sid = _create(client)["id"]
    assert client.get("/api/logs?date=2024-06-05").get_json() == []

    client.post(f"/api/students/{sid}/logs", json={"date": "2024-06-05T09:00:00"})

    assert len(client.get("/api/logs?date=2024-06-05").get_json()) == 1


def test_delete_log(client):
    sid = _create(client)["id"]
    log = client.post(f"/api/students/{sid}/logs", json={"date": "2024-06-05T09:00:00"}).get_json()
    client.get("/api/logs?date=2024-06-05")

    assert client.delete(f"/api/logs/{log['id']}").status_code == 204
    assert client.get("/api/logs?date=2024-06-05").get_json() == []
    assert client.delete(f"/api/logs/{log['id']}").status_code == 404


def test_achievements_and_medal_tally(client):
    sid = _create(client)["id"]
    for medal in ("Gold", "Gold", "Bronze"):
        res = client.post(
            f"/api/students/{sid}/achievements",
            json={"level": "State", "medal": medal, "description": "Silambam open"},
        )
        assert res.status_code == 201

    assert len(client.get(f"/api/students/{sid}/achievements").get_json()) == 3
    assert client.get(f"/api/students/{sid}/medals").get_json() == {"Gold": 2, "Silver": 0, "Bronze": 1}


def test_invalid_achievement_is_400(client):
    sid = _create(client)["id"]

    res = client.post(f"/api/students/{sid}/achievements", json={"level": "State", "medal": "Platinum"})

    assert res.status_code == 400
    assert res.get_json()["field"] == "medal"


def test_history_for_past_month(client):
    a = _create(client, "Alice")["id"]
    _create(client, "Bob", classId="Class 2")
    client.post(f"/api/students/{a}/logs", json={"date": "2024-06-03T10:00:00", "attended": False})

    body = client.get("/api/attendance/history?month=2024-06").get_json()

    assert body["month"] == "2024-06"
    assert body["isCurrentMonth"] is False
    assert len(body["days"]) == 30
    assert [group["classId"] for group in body["classes"]] == ["Class 1", "Class 2"]
    alice = body["classes"][0]["students"][0]
    assert alice["presentDays"] == 1
    assert alice["totalDays"] == 30
    assert alice["percentage"] == 3
    assert alice["present"][2] is True


def test_history_class_filter(client):
    _create(client, "Alice")
    _create(client, "Bob", classId="Class 2")

    body = client.get("/api/attendance/history", query_string={"month": "2024-06", "class_id": "Class 2"}).get_json()

    assert [group["classId"] for group in body["classes"]] == ["Class 2"]


def test_history_rejects_bad_month(client):
    res = client.get("/api/attendance/history?month=June")

    assert res.status_code == 400
    assert res.get_json()["field"] == "month"


def test_history_csv_export(client):
    a = _create(client, "Alice")["id"]
    client.post(f"/api/students/{a}/logs", json={"date": "2024-06-03T10:00:00"})

    res = client.get("/api/attendance/history.csv?month=2024-06")

    assert res.status_code == 200
    assert res.mimetype == "text/csv"
    assert "attendance_202406.csv" in res.headers["Content-Disposition"]
    rows = list(csv.DictReader(io.StringIO(res.data.decode("utf-8-sig"))))
    assert rows[0]["name"] == "Alice"
    assert rows[0]["2024-06-03"] == "P"
    assert rows[0]["2024-06-04"] == ""
    assert rows[0]["present_days"] == "1"


def test_mark_all_present_then_noop(client):
    a = _create(client, "Alice")["id"]
    b = _create(client, "Bob")["id"]

    res = client.post("/api/attendance/mark-all", json={"date": "2024-06-05"})
    assert res.status_code == 200
    body = res.get_json()
    assert body["date"] == "2024-06-05"
    assert sorted(log["studentId"] for log in body["created"]) == [a, b]

    today = client.get("/api/attendance/today?date=2024-06-05").get_json()
    assert today == {"date": "2024-06-05", "present": 2, "total": 2}

    again = client.post("/api/attendance/mark-all", json={"date": "2024-06-05"}).get_json()
    assert again["created"] == []
    assert sorted(again["alreadyPresent"]) == [a, b]


def test_mark_all_rejects_unknown_class(client):
    res = client.post("/api/attendance/mark-all", json={"classId": "Class 9"})

    assert res.status_code == 400
    assert res.get_json()["field"] == "classId"


def test_student_form_options(client):
    body = client.get("/api/students/options").get_json()

    assert body["classIds"] == ["Class 1", "Class 2", "Class 3", "Class 4"]
    assert body["defaultLesson"] == body["lessons"][0] == "Long Stick"
    assert body["statuses"] == ["Active", "Probation", "Graduated", "Paused"]


def test_query_cache_stays_bounded_under_many_distinct_reads(app, client):
    cache = app.extensions["academy_container"].query_cache
    _create(client)

    for i in range(300):
        client.get("/api/students", query_string={"search": f"q{i}"})
    for day in range(1, 29):
        client.get(f"/api/logs?date=2024-02-{day:02d}")

    assert len(cache) <= 64


def test_non_object_body_reports_body_field(client):
    res = client.post("/api/students", data="null", content_type="application/json")

    assert res.status_code == 400
    assert res.get_json()["field"] == "body"
