# /tests/test_api.py

import pytest
from fastapi.testclient import TestClient

from homework_tracker.main import app


@pytest.fixture
def client(tmp_path, monkeypatch):
    """An API client backed by a fresh ephemeral store in a temporary directory."""
    monkeypatch.setenv("HOMEWORK_WEB_MODE", "true")
    monkeypatch.setenv("SNAPSHOT_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("SEED_SAMPLE_DATA", "false")
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def relational_client(tmp_path, monkeypatch):
    monkeypatch.setenv("HOMEWORK_WEB_MODE", "false")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'api.db'}")
    monkeypatch.setenv("SEED_SAMPLE_DATA", "false")
    with TestClient(app) as test_client:
        yield test_client


def test_health_check_reports_ephemeral_backend(client):
    assert client.get("/").json()["storage"] == "ephemeral"


def test_health_check_reports_relational_backend(relational_client):
    assert relational_client.get("/").json()["storage"] == "relational"


def test_blank_class_name_is_unprocessable(client):
    response = client.post("/api/classes", json={"name": "   "})

    assert response.status_code == 422
    assert response.json()["field"] == "name"
    assert client.get("/api/classes").json() == []


def test_homework_check_flow(relational_client):
    client = relational_client
    class_id = client.post("/api/classes", json={"name": "Math A", "description": "Grade 7"}).json()["id"]
    response = client.post(f"/api/classes/{class_id}/students", json={"name": "Kim", "parentPhone": "010-1"})
    assert response.status_code == 201
    student_id = response.json()["id"]

    first = client.put(f"/api/students/{student_id}/homework/2024-05-01", json={"status": "done"})
    second = client.put(f"/api/students/{student_id}/homework/2024-05-01", json={"status": "partial", "note": "half"})

    assert first.status_code == second.status_code == 200
    assert first.json()["id"] == second.json()["id"]
    record = client.get(f"/api/students/{student_id}/homework/2024-05-01").json()
    assert (record["status"], record["note"]) == ("partial", "half")

    sheet = client.get(f"/api/classes/{class_id}/homework/2024-05-01").json()
    assert [(row["student"]["name"], row["record"]["status"]) for row in sheet] == [("Kim", "partial")]

    class_stats = client.get("/api/statistics/classes", params={"year": 2024, "month": 5}).json()
    assert class_stats == [{
        "classId": class_id, "className": "Math A",
        "total": 1, "done": 0, "partial": 1, "notDone": 0, "absent": 0,
    }]
    [student_stat] = client.get("/api/statistics/students", params={"year": 2024, "month": 5}).json()
    assert student_stat["completionRate"] == 50


def test_missing_resources_return_not_found(client):
    assert client.put("/api/classes/404", json={"name": "Ghost"}).status_code == 404
    assert client.post("/api/classes/404/students", json={"name": "Ghost"}).status_code == 404
    assert client.put("/api/students/404", json={"classId": 1, "name": "Ghost"}).status_code == 404
    assert client.put("/api/students/404/homework/2024-05-01", json={"status": "done"}).status_code == 404
    assert client.get("/api/students/404/homework/2024-05-01").status_code == 404


def test_invalid_date_and_status_are_rejected(client):
    class_id = client.post("/api/classes", json={"name": "Math A"}).json()["id"]
    student_id = client.post(f"/api/classes/{class_id}/students", json={"name": "Kim"}).json()["id"]

    assert client.put(f"/api/students/{student_id}/homework/2024-13-01", json={"status": "done"}).status_code == 422
    assert client.put(f"/api/students/{student_id}/homework/2024-05-01", json={"status": "finished"}).status_code == 422
    assert client.get("/api/statistics/classes", params={"year": 2024, "month": 13}).status_code == 422


def test_deleting_class_cascades_through_api(client):
    class_id = client.post("/api/classes", json={"name": "Math A"}).json()["id"]
    student_id = client.post(f"/api/classes/{class_id}/students", json={"name": "Kim"}).json()["id"]
    client.put(f"/api/students/{student_id}/homework/2024-05-01", json={"status": "done"})

    assert client.delete(f"/api/classes/{class_id}").status_code == 204

    assert client.get(f"/api/classes/{class_id}/students").json() == []
    assert client.get(f"/api/students/{student_id}/homework").json() == []
    assert client.get("/api/dashboard/summary").json() == {"classCount": 0, "studentCount": 0, "recentClasses": []}


def test_dashboard_summary_counts(client):
    for name in ["D", "C", "B", "A"]:
        class_id = client.post("/api/classes", json={"name": name}).json()["id"]
        client.post(f"/api/classes/{class_id}/students", json={"name": f"student {name}"})

    summary = client.get("/api/dashboard/summary").json()

    assert summary["classCount"] == 4
    assert summary["studentCount"] == 4
    assert [c["name"] for c in summary["recentClasses"]] == ["A", "B", "C"]


def test_update_student_and_history_range(client):
    math = client.post("/api/classes", json={"name": "Math A"}).json()["id"]
    english = client.post("/api/classes", json={"name": "English B"}).json()["id"]
    student_id = client.post(f"/api/classes/{math}/students", json={"name": "Kim"}).json()["id"]
    for day in ["2024-05-01", "2024-05-15", "2024-06-01"]:
        client.put(f"/api/students/{student_id}/homework/{day}", json={"status": "done"})

    moved = client.put(f"/api/students/{student_id}", json={"classId": english, "name": "Kim", "grade": "M2"})
    history = client.get(f"/api/students/{student_id}/homework", params={"start": "2024-05-01", "end": "2024-05-31"})

    assert moved.status_code == 200
    assert moved.json()["classId"] == english
    assert [r["date"] for r in history.json()] == ["2024-05-15", "2024-05-01"]


def test_validation_error_handler_uses_no_deprecated_status(client, recwarn):
    client.post("/api/classes", json={"name": ""})

    assert not [w for w in recwarn if "422" in str(w.message)]


def test_list_students_with_class_filter(client):
    math = client.post("/api/classes", json={"name": "Math A"}).json()["id"]
    english = client.post("/api/classes", json={"name": "English B"}).json()["id"]
    for name, class_id in [("Park", math), ("Kim", english), ("Lee", math)]:
        client.post(f"/api/classes/{class_id}/students", json={"name": name})

    everyone = client.get("/api/students").json()
    math_only = client.get("/api/students", params={"classId": math}).json()

    assert [s["name"] for s in everyone] == ["Kim", "Lee", "Park"]
    assert [s["name"] for s in math_only] == ["Lee", "Park"]
    assert client.get("/api/students", params={"classId": 404}).json() == []


def _two_classes_with_may_records(client):
    math = client.post("/api/classes", json={"name": "Math A"}).json()["id"]
    english = client.post("/api/classes", json={"name": "English B"}).json()["id"]
    kim = client.post(f"/api/classes/{math}/students", json={"name": "Kim"}).json()["id"]
    lee = client.post(f"/api/classes/{english}/students", json={"name": "Lee"}).json()["id"]
    for day, status in [("2024-05-01", "done"), ("2024-05-02", "done"), ("2024-05-03", "partial")]:
        client.put(f"/api/students/{kim}/homework/{day}", json={"status": status})
    client.put(f"/api/students/{lee}/homework/2024-05-01", json={"status": "absent"})
    return math, english, kim, lee


def test_statistics_filtered_by_class(client):
    math, english, kim, lee = _two_classes_with_may_records(client)
    params = {"year": 2024, "month": 5}

    all_classes = client.get("/api/statistics/classes", params=params).json()
    english_only = client.get("/api/statistics/classes", params={**params, "classId": english}).json()
    math_students = client.get("/api/statistics/students", params={**params, "classId": math}).json()

    assert [c["classId"] for c in all_classes] == [math, english]
    assert [c["classId"] for c in english_only] == [english]
    assert [s["studentId"] for s in math_students] == [kim]


def test_student_statistics_follow_current_class(client):
    math, english, kim, lee = _two_classes_with_may_records(client)
    client.put(f"/api/students/{kim}", json={"classId": english, "name": "Kim"})
    params = {"year": 2024, "month": 5}

    math_students = client.get("/api/statistics/students", params={**params, "classId": math}).json()
    english_students = client.get("/api/statistics/students", params={**params, "classId": english}).json()

    assert math_students == []
    assert {s["studentId"] for s in english_students} == {kim, lee}


def test_monthly_summary(client):
    math, english, kim, lee = _two_classes_with_may_records(client)
    params = {"year": 2024, "month": 5}

    summary = client.get("/api/statistics/summary", params=params).json()
    math_summary = client.get("/api/statistics/summary", params={**params, "classId": math}).json()
    empty = client.get("/api/statistics/summary", params={"year": 2024, "month": 6}).json()

    assert summary == {"total": 4, "done": 2, "partial": 1, "notDone": 0, "absent": 1, "doneRate": 50}
    assert math_summary == {"total": 3, "done": 2, "partial": 1, "notDone": 0, "absent": 0, "doneRate": 67}
    assert empty == {"total": 0, "done": 0, "partial": 0, "notDone": 0, "absent": 0, "doneRate": 0}
    assert client.get("/api/statistics/summary", params={"year": 2024, "month": 0}).status_code == 422
