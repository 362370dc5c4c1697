"""End-to-end tests of the HTTP surface through FastAPI's TestClient."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import TypeAdapter


def create_user(client, name, role="Teaching assistant"):
    r = client.post("/api/users", json={"name": name, "role": role})
    assert r.status_code == 200, r.text
    return r.json()["id"]


@pytest.fixture
def scenario(client):
    marker = create_user(client, "Marker")
    student = create_user(client, "Student", role="Student")

    r = client.post(
        "/api/assessments",
        json={
            "title": "Team review",
            "granularity": "individual",
            "max_marks": 10,
            "start_date": "2020-01-01T00:00:00Z",
            "end_date": None,
        },
    )
    assert r.status_code == 200, r.text
    assessment_id = r.json()["id"]

    questions = [
        {"type": "Team Member Selection", "text": "Student"},
        {
            "type": "Multiple Response",
            "text": "Which practices did the team follow?",
            "is_scored": True,
            "options": [
                {"text": "Code review", "points": 5},
                {"text": "CI", "points": 5},
                {"text": "Cowboy coding", "points": -3},
            ],
            "allow_partial_marks": True,
            "are_wrong_answers_penalized": True,
            "allow_negative": True,
        },
        {
            "type": "Number",
            "text": "Open bugs",
            "is_scored": True,
            "max_number": 100,
            "scoring_method": "range",
            "scoring_ranges": [
                {"min_value": 0, "max_value": 10, "points": 50},
                {"min_value": 20, "max_value": 30, "points": 90},
            ],
        },
    ]
    for q in questions:
        r = client.post(f"/api/assessments/{assessment_id}/questions", json=q)
        assert r.status_code == 200, r.text

    body = r.json()
    return {
        "marker": marker,
        "student": student,
        "assessment": body,
        "question_ids": [q["id"] for q in body["questions"]],
    }


def answers(scenario, practices=("Code review", "Cowboy coding"), bugs=15):
    selection, practice, bug_count = scenario["question_ids"]
    return [
        {"type": "Team Member Selection Answer", "question_id": selection, "selected_user_ids": [scenario["student"]]},
        {"type": "Multiple Response Answer", "question_id": practice, "values": list(practices)},
        {"type": "Number Answer", "question_id": bug_count, "value": bugs},
    ]


def submit(client, scenario, payload):
    return client.post(
        f"/api/assessments/{scenario['assessment']['id']}/submissions",
        json={"answers": payload, "is_draft": False},
        headers={"X-User-Id": str(scenario["marker"])},
    )


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}
    assert r.headers["X-Request-ID"]


def test_adding_questions_tracks_total_marks(scenario):
    assessment = scenario["assessment"]
    assert [q["type"] for q in assessment["questions"]] == ["Team Member Selection", "Multiple Response", "Number"]
    assert [q["position"] for q in assessment["questions"]] == [1, 2, 3]
    assert assessment["questions"][1]["options"][2] == {"text": "Cowboy coding", "points": -3}
    assert assessment["questions_total_marks"] == 100


def test_submission_is_scored_and_scaled(client, scenario):
    r = submit(client, scenario, answers(scenario))
    assert r.status_code == 200, r.text
    body = r.json()

    # raw 2 + 70, scaled by 10 / 100
    assert body["score"] == pytest.approx(7.2)
    assert [a["score"] for a in body["answers"]] == [0, pytest.approx(0.2), pytest.approx(7.0)]
    assert body["answers"][1]["values"] == ["Code review", "Cowboy coding"]

    r = client.get(f"/api/assessments/{scenario['assessment']['id']}/results")
    assert r.status_code == 200
    [result] = r.json()
    assert result["student_id"] == scenario["student"]
    assert result["average_score"] == pytest.approx(7.2)
    assert result["marks"] == [{"marker_id": scenario["marker"], "submission_id": body["id"], "score": pytest.approx(7.2)}]


def test_update_adjust_and_delete(client, scenario):
    sub = submit(client, scenario, answers(scenario)).json()
    headers = {"X-User-Id": str(scenario["marker"])}

    r = client.patch(f"/api/submissions/{sub['id']}/adjusted-score", json={"adjusted_score": 9})
    assert r.status_code == 200
    assert r.json()["adjusted_score"] == 9

    r = client.put(
        f"/api/submissions/{sub['id']}",
        json={"answers": answers(scenario, practices=("Code review", "CI"), bugs=25), "is_draft": False},
        headers=headers,
    )
    assert r.status_code == 200, r.text
    assert r.json()["score"] == pytest.approx(10.0)
    assert r.json()["adjusted_score"] is None

    r = client.get(f"/api/assessments/{scenario['assessment']['id']}/submissions/mine", headers=headers)
    assert [s["id"] for s in r.json()] == [sub["id"]]

    r = client.delete(f"/api/submissions/{sub['id']}")
    assert r.status_code == 200
    assert client.get(f"/api/assessments/{scenario['assessment']['id']}/submissions").json() == []

    [result] = client.get(f"/api/assessments/{scenario['assessment']['id']}/results").json()
    assert result["marks"] == []
    assert result["average_score"] == 0


def test_invalid_answer_is_bad_request(client, scenario):
    payload = answers(scenario)
    payload[1]["values"] = ["Pair programming"]
    r = submit(client, scenario, payload)
    assert r.status_code == 400
    assert "Invalid option" in r.json()["detail"]


def test_malformed_answer_is_bad_request(client, scenario):
    payload = answers(scenario)
    payload[2] = {"type": "Essay Answer", "question_id": scenario["question_ids"][2], "value": "?"}
    assert submit(client, scenario, payload).status_code == 400


def test_individual_assessment_allows_single_student(client, scenario):
    payload = answers(scenario)
    payload[0]["selected_user_ids"] = [scenario["student"], scenario["marker"]]
    r = submit(client, scenario, payload)
    assert r.status_code == 400
    assert "Only one team member" in r.json()["detail"]


def test_missing_records_are_not_found(client, scenario):
    headers = {"X-User-Id": str(scenario["marker"])}
    assert client.get("/api/assessments/999").status_code == 404
    assert client.get("/api/assessments/999/results").status_code == 404
    assert client.post("/api/assessments/999/submissions", json={"answers": []}, headers=headers).status_code == 404
    assert client.patch("/api/submissions/999/adjusted-score", json={"adjusted_score": 1}).status_code == 404
    assert client.delete("/api/submissions/999").status_code == 404

    r = client.post(
        f"/api/assessments/{scenario['assessment']['id']}/submissions",
        json={"answers": answers(scenario)},
        headers={"X-User-Id": "999"},
    )
    assert r.status_code == 404


def test_submission_requires_acting_user(client, scenario):
    r = client.post(f"/api/assessments/{scenario['assessment']['id']}/submissions", json={"answers": answers(scenario)})
    assert r.status_code == 400


@pytest.mark.parametrize("value", ["15", True])
def test_number_answer_must_be_a_json_number(client, scenario, value):
    r = submit(client, scenario, answers(scenario, bugs=value))
    assert r.status_code == 400
    assert client.get(f"/api/assessments/{scenario['assessment']['id']}/submissions").json() == []


def test_fractional_number_answer_is_accepted(client, scenario):
    r = submit(client, scenario, answers(scenario, bugs=12.5))
    assert r.status_code == 200, r.text
    assert r.json()["answers"][2]["value"] == 12.5


def _window_scenario(client, start, end):
    marker = create_user(client, "Marker")
    student = create_user(client, "Student", role="Student")
    r = client.post(
        "/api/assessments",
        json={"title": "Offset window", "granularity": "team", "start_date": start, "end_date": end},
    )
    assert r.status_code == 200, r.text
    assessment = client.post(
        f"/api/assessments/{r.json()['id']}/questions",
        json={"type": "Team Member Selection", "text": "Student"},
    ).json()
    payload = [
        {
            "type": "Team Member Selection Answer",
            "question_id": assessment["questions"][0]["id"],
            "selected_user_ids": [student],
        }
    ]
    return assessment, marker, payload


def test_offset_start_date_keeps_window_closed(client):
    now = datetime.now(timezone.utc)
    opens_at = (now + timedelta(hours=2)).astimezone(timezone(timedelta(hours=-8)))
    assessment, marker, payload = _window_scenario(client, opens_at.isoformat(), None)

    stored = TypeAdapter(datetime).validate_python(assessment["start_date"])
    assert stored.tzinfo is not None
    assert abs(stored - opens_at) < timedelta(seconds=1)

    r = client.post(
        f"/api/assessments/{assessment['id']}/submissions",
        json={"answers": payload},
        headers={"X-User-Id": str(marker)},
    )
    assert r.status_code == 400
    assert "not open" in r.json()["detail"]


def test_offset_end_date_keeps_window_closed(client):
    now = datetime.now(timezone.utc)
    closed_at = (now - timedelta(hours=1)).astimezone(timezone(timedelta(hours=8)))
    assessment, marker, payload = _window_scenario(client, "2020-01-01T00:00:00Z", closed_at.isoformat())

    r = client.post(
        f"/api/assessments/{assessment['id']}/submissions",
        json={"answers": payload},
        headers={"X-User-Id": str(marker)},
    )
    assert r.status_code == 400
    assert "not open" in r.json()["detail"]
