"""
Tests for the HTTP API
"""
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from examcheck.config import settings
from examcheck.main import app
from examcheck.services.corpus_service import corpus_service

SAMPLE_DATA = Path(__file__).parent / "data" / "exams"
PREFIX = settings.api_prefix

CANDIDATE = {
    "gender": "MALE",
    "marital_status": "UNMARRIED",
    "nationality": "INDIAN",
    "date_of_birth": "15-09-2007",
    "highest_education_qualification": "(12TH) HIGHER SECONDARY",
    "weight_kg": "58",
    "height_cm": "170",
    "vision_eyesight": "6/6",
}


@pytest.fixture
def client():
    corpus_service.load(str(SAMPLE_DATA))
    return TestClient(app)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_list_and_get_exams(client):
    response = client.get(f"{PREFIX}/exams/")
    assert response.status_code == 200
    assert [exam["exam_code"] for exam in response.json()] == ["CDS", "NDA", "SSC_GD"]

    response = client.get(f"{PREFIX}/exams/NDA")
    assert response.status_code == 200
    assert response.json()["divisions"] == ["ARMY", "NAVY", "AIR FORCE"]
    assert response.json()["display_details"]["exam_sector"] == "Defence"

    assert client.get(f"{PREFIX}/exams/NOPE").status_code == 404


def test_check_exam_by_code(client):
    response = client.post(f"{PREFIX}/eligibility/exam", json={"profile": CANDIDATE, "exam_code": "NDA", "session": "2026-I"})
    assert response.status_code == 200
    body = response.json()
    assert body["eligible"]
    assert body["eligible_divisions"] == ["ARMY", "NAVY", "AIR FORCE"]
    assert {unit["session"] for unit in body["results"]} == {"2026 I"}


def test_check_inline_exam(client):
    exam = {"exam_code": "INLINE", "gender": "FEMALE"}
    response = client.post(f"{PREFIX}/eligibility/exam", json={"profile": CANDIDATE, "exam": exam})
    assert response.status_code == 200
    assert not response.json()["eligible"]


def test_check_exam_errors(client):
    response = client.post(f"{PREFIX}/eligibility/exam", json={"profile": CANDIDATE, "exam_code": "NOPE"})
    assert response.status_code == 404

    response = client.post(f"{PREFIX}/eligibility/exam", json={"profile": {"gender": "OTHER"}, "exam_code": "NDA"})
    assert response.status_code == 400

    response = client.post(f"{PREFIX}/eligibility/exam", json={"profile": CANDIDATE})
    assert response.status_code == 400

    exam = {"exam_code": "NO_POSTS", "posts": {"CLERK": None}}
    response = client.post(f"{PREFIX}/eligibility/exam", json={"profile": CANDIDATE, "exam": exam})
    assert response.status_code == 422


def test_scan_loaded_corpus(client):
    response = client.post(f"{PREFIX}/eligibility/scan", json={"profile": CANDIDATE})
    assert response.status_code == 200
    body = response.json()
    assert body["result"]["total_exams_checked"] == 3
    assert body["result"]["skipped"] == []
    codes = [item["exam_code"] for item in body["summary"]]
    assert "NDA" in codes
    assert "CDS" not in codes


def test_scan_request_exams_with_a_broken_record(client):
    exams = {"GOOD": {"exam_name": "Good Exam", "gender": "MALE"}, "BAD": ["not", "a", "record"]}
    response = client.post(f"{PREFIX}/eligibility/scan", json={"profile": CANDIDATE, "exams": exams})
    assert response.status_code == 200
    result = response.json()["result"]
    assert result["eligible_count"] == 1
    assert [skipped["exam_code"] for skipped in result["skipped"]] == ["BAD"]


def test_scan_filters(client):
    response = client.post(
        f"{PREFIX}/eligibility/scan", json={"profile": CANDIDATE, "conducting_body": "staff selection"}
    )
    assert response.status_code == 200
    result = response.json()["result"]
    assert {verdict["exam_code"] for verdict in result["eligible"] + result["ineligible"]} == {"SSC_GD"}


def test_marks_outside_percentage_range_are_rejected(client):
    profile = dict(CANDIDATE, education_levels={"12th_higher_secondary": {"course": "SCIENCE", "marks_percentage": 140}})
    response = client.post(f"{PREFIX}/eligibility/exam", json={"profile": profile, "exam_code": "NDA"})
    assert response.status_code == 400
    assert "marks_percentage" in response.json()["detail"]
