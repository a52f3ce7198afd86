from contextlib import contextmanager
from io import StringIO
import json
import logging

import pytest
from fastapi.testclient import TestClient

from intake_agent.config import DEFAULT_POLICY, TriagePolicy
from intake_agent.core.logging_utils import LOGGER_NAME
from main import app
from routes.http import INVALID_RECORD_UPDATE, get_policy

COMPLETE_RECORD = {
    "chiefComplaint": "Rash",
    "hpi": "Itchy red rash on both forearms for five days after starting a new detergent.",
    "recordsCheckCompleted": True,
    "allergies": ["nickel"],
    "vitals": {
        "vitalsStageCompleted": True,
        "triageDecision": "direct-to-diagnosis",
        "triageReason": "Straightforward case",
    },
}


@contextmanager
def _capture_structured_logs():
    logger = logging.getLogger(LOGGER_NAME)
    original_handlers = list(logger.handlers)
    original_level = logger.level
    original_propagate = logger.propagate

    buffer = StringIO()
    handler = logging.StreamHandler(buffer)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.handlers = [handler]
    logger.setLevel(logging.INFO)
    logger.propagate = False
    try:
        yield buffer
    finally:
        handler.flush()
        logger.handlers = original_handlers
        logger.setLevel(original_level)
        logger.propagate = original_propagate


@pytest.fixture
def client():
    app.dependency_overrides[get_policy] = lambda: DEFAULT_POLICY
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides = {}


def test_read_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"status": "online", "system": "Intake Triage Engine"}


def test_emergency_endpoint_reports_blood_pressure_indicator(client):
    response = client.post(
        "/triage/emergency",
        json={"bloodPressure": {"systolic": 190, "diastolic": 110}},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["isEmergency"] is True
    assert data["severity"] == "critical"
    assert data["indicators"][0]["type"] == "blood_pressure"
    assert data["recommendations"]


def test_analyze_endpoint_escalates_critical_symptoms(client):
    response = client.post(
        "/triage/analyze",
        json={"currentStatus": "severe chest pain and difficulty breathing"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["decision"] == "emergency"
    assert data["confidence"] == 1.0
    assert data["emergency"]["isEmergency"] is True
    assert data["emergency"]["indicators"][0]["matchedTerms"]


def test_analyze_endpoint_reports_missing_vitals(client):
    response = client.post("/triage/analyze", json={"currentStatus": "mild headache"})

    data = response.json()
    assert data["decision"] == "direct-to-diagnosis"
    assert "temperature not collected" in data["factors"]
    assert data["emergency"]["isEmergency"] is False


def test_analyze_endpoint_uses_injected_policy(client):
    app.dependency_overrides[get_policy] = lambda: TriagePolicy(temperature_high_c=38.0)

    response = client.post("/triage/analyze", json={"temperature": {"value": 38.5}})

    assert response.json()["decision"] == "emergency"


def test_malformed_vitals_are_rejected(client):
    response = client.post("/triage/analyze", json={"temperature": {"value": "hot"}})

    assert response.status_code == 422


def test_route_endpoint_returns_priority_and_stage(client):
    response = client.post("/agents/route", json=COMPLETE_RECORD)

    assert response.status_code == 200
    assert response.json() == {
        "agent": "HandoverSpecialist",
        "stage": "summary",
        "priority": 5,
        "reason": "Record complete",
        "completeness": 80,
    }


def test_route_endpoint_accepts_record_without_vitals(client):
    response = client.post("/agents/route", json={"chiefComplaint": "Rash"})

    assert response.json()["agent"] == "VitalsTriageAgent"


def test_intake_turn_applies_update_and_triages(client):
    response = client.post(
        "/intake/turn",
        json={"update": {"vitals": {"vitalsCollected": True, "currentStatus": "mild headache"}}},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["error"] is None
    data = body["data"]
    assert data["agent"] == "Triage"
    assert data["stage"] == "triage"
    assert data["triage"]["decision"] == "direct-to-diagnosis"
    assert data["recommendations"] == []
    assert data["record"]["vitals"]["vitalsStageCompleted"] is True
    assert data["record"]["vitals"]["triageDecision"] == "direct-to-diagnosis"


def test_intake_turn_surfaces_emergency_guidance(client):
    response = client.post(
        "/intake/turn",
        json={"update": {"vitals": {"temperature": {"value": 104, "unit": "fahrenheit"}}}},
    )

    data = response.json()["data"]
    assert data["triage"]["decision"] == "emergency"
    assert data["recommendations"][0] == "Seek immediate medical attention"


def test_intake_turn_rejects_malformed_update(client):
    response = client.post(
        "/intake/turn",
        json={
            "record": COMPLETE_RECORD,
            "update": {"vitals": {"bloodPressure": {"systolic": "high"}}},
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert body["data"] is None
    assert body["error"]["code"] == INVALID_RECORD_UPDATE


def test_intake_turn_logs_carry_session_and_turn_ids(client):
    with _capture_structured_logs() as buffer:
        response = client.post(
            "/intake/turn",
            json={
                "sessionId": "session-api",
                "turnId": 3,
                "update": {"vitals": {"vitalsCollected": True, "currentStatus": "mild headache"}},
            },
        )
    parsed = [json.loads(line) for line in buffer.getvalue().splitlines() if line.strip()]

    assert response.json()["success"] is True
    turn_logs = [log for log in parsed if log["event"] in ("triage_decided", "agent_selected")]
    assert len(turn_logs) == 2
    assert all(log["session_id"] == "session-api" for log in turn_logs)
    assert all(log["turn_id"] == 3 for log in turn_logs)


def test_rejected_turn_is_logged_with_session_id(client):
    with _capture_structured_logs() as buffer:
        client.post(
            "/intake/turn",
            json={
                "sessionId": "session-bad",
                "update": {"vitals": {"temperature": {"value": "hot"}}},
            },
        )
    parsed = [json.loads(line) for line in buffer.getvalue().splitlines() if line.strip()]

    rejected = [log for log in parsed if log["event"] == "intake_turn_rejected"]
    assert len(rejected) == 1
    assert rejected[0]["session_id"] == "session-bad"
    assert rejected[0]["turn_id"] is None
