import pytest
from fastapi.testclient import TestClient

from backend.api import app, get_scheduler_factory
from backend.scheduler import TimetableGenerationError
from conftest import SAMPLE_PAYLOAD, FakeScheduler


@pytest.fixture
def client():
    return TestClient(app)


def test_generate_returns_raw_timetable(client, fake_scheduler):
    response = client.post("/api/generate-timetable", json=SAMPLE_PAYLOAD)
    assert response.status_code == 200
    assert response.json() == {"timetable": fake_scheduler.response}

    request = fake_scheduler.requests[0]
    assert request.class_level == "11"
    assert request.number_of_days == 30


@pytest.mark.parametrize("field", list(SAMPLE_PAYLOAD))
def test_missing_field_is_rejected_without_generation(client, fake_scheduler, field):
    payload = {k: v for k, v in SAMPLE_PAYLOAD.items() if k != field}
    response = client.post("/api/generate-timetable", json=payload)
    assert response.status_code == 400
    assert response.json() == {"error": "All fields are required"}
    assert fake_scheduler.requests == []


@pytest.mark.parametrize("field", list(SAMPLE_PAYLOAD))
def test_empty_field_counts_as_missing(client, fake_scheduler, field):
    payload = dict(SAMPLE_PAYLOAD, **{field: ""})
    response = client.post("/api/generate-timetable", json=payload)
    assert response.status_code == 400
    assert response.json()["error"] == "All fields are required"
    assert fake_scheduler.requests == []


def test_class_10_does_not_need_a_stream(client, fake_scheduler):
    payload = dict(SAMPLE_PAYLOAD, classLevel="10")
    del payload["stream"]
    response = client.post("/api/generate-timetable", json=payload)
    assert response.status_code == 200
    assert fake_scheduler.requests[0].stream is None


def test_null_subjects_and_chapters_are_treated_as_empty(client, fake_scheduler):
    payload = dict(SAMPLE_PAYLOAD, subjects=None, chapters=None)
    response = client.post("/api/generate-timetable", json=payload)
    assert response.status_code == 200

    request = fake_scheduler.requests[0]
    assert request.subjects == []
    assert request.chapters == []


def test_end_before_start_is_rejected(client, fake_scheduler):
    payload = dict(SAMPLE_PAYLOAD, startTime="17:00", endTime="09:00")
    response = client.post("/api/generate-timetable", json=payload)
    assert response.status_code == 400
    assert "End time must be after start time" in response.json()["error"]
    assert fake_scheduler.requests == []


@pytest.mark.parametrize("field,value", [
    ("numberOfDays", 366),
    ("numberOfDays", "-3"),
    ("targetExam", "UPSC"),
    ("startTime", "9am"),
])
def test_invalid_values_are_rejected(client, fake_scheduler, field, value):
    payload = dict(SAMPLE_PAYLOAD, **{field: value})
    response = client.post("/api/generate-timetable", json=payload)
    assert response.status_code == 400
    assert field in response.json()["error"]
    assert fake_scheduler.requests == []


def test_generation_failure_returns_500(client):
    scheduler = FakeScheduler(error=TimetableGenerationError("provider down"))
    app.dependency_overrides[get_scheduler_factory] = lambda: (lambda: scheduler)
    try:
        response = client.post("/api/generate-timetable", json=SAMPLE_PAYLOAD)
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate timetable"}


def test_scheduler_construction_failure_returns_500(client):
    def factory():
        raise ValueError("GROQ_API_KEY not set in environment variables")

    app.dependency_overrides[get_scheduler_factory] = lambda: factory
    try:
        response = client.post("/api/generate-timetable", json=SAMPLE_PAYLOAD)
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to generate timetable"


def test_non_object_body_is_rejected(client, fake_scheduler):
    response = client.post("/api/generate-timetable", json=["11", "Science"])
    assert response.status_code == 400
    assert fake_scheduler.requests == []


def test_invalid_json_is_rejected(client, fake_scheduler):
    response = client.post(
        "/api/generate-timetable",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400


def test_health_reports_provider(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "provider" in response.json()
