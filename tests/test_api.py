from datetime import datetime, timedelta, timezone

from recruitment.config import get_settings
from recruitment.main import app
from recruitment.sheets import MemoryWorksheet

from conftest import DASHBOARD_PASSWORD, TECH_PASSWORD


def test_technical_submission_writes_one_complete_row(client, store, tech_answers):
    tech_answers["social_analysis"] = "stale answer from an earlier track choice"
    response = client.post("/submit", json=tech_answers)

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Submitted successfully"}

    records = store.tabs[0].get_records()
    assert len(records) == 1
    row = records[0]
    assert row["Roll Number"] == "1608-25-733-019"
    assert row["Selected Track"] == "Technical Team"
    assert row["Tech Skills"] == "Web development, AI/ML"
    assert row["GitHub"] == "https://github.com/asharao"
    assert row["Honesty"] == 7
    assert row["Social Analysis"] == ""
    assert row["Portfolio Link"] == ""
    assert row["Email Task"] == ""
    assert row["Timestamp"] and row["Submission ID"]


def test_invalid_submission_returns_field_errors(client, store, tech_answers):
    tech_answers["roll_number"] = "19"
    del tech_answers["learning_approach"]
    response = client.post("/submit", json=tech_answers)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert set(body["errors"]) == {"roll_number", "learning_approach"}
    assert store.tabs[0].values == []


def test_submission_after_deadline_is_closed(client, settings, tech_answers):
    closed = settings.model_copy(update={"submission_deadline": datetime.now(timezone.utc) - timedelta(hours=1)})
    app.dependency_overrides[get_settings] = lambda: closed

    assert client.post("/submit", json=tech_answers).status_code == 403
    page = client.get("/form")
    assert page.status_code == 403
    assert "closed" in page.text.lower()


def test_missing_credentials_fail_closed(client, settings, tech_answers):
    google = settings.model_copy(update={"sheets_backend": "google"})
    app.dependency_overrides[get_settings] = lambda: google

    response = client.post("/submit", json=tech_answers)
    assert response.status_code == 500
    assert response.json()["message"] == "Missing Google credentials in environment variables"


def test_check_roll_number(client, tech_answers):
    assert client.post("/check-roll-number", json={}).status_code == 400
    assert client.post("/check-roll-number", json={"roll_number": "1608-25-733-019"}).json() == {"exists": False}

    client.post("/submit", json=tech_answers)
    body = client.post("/check-roll-number", json={"roll_number": "1608-25-733-019"}).json()
    assert body == {"exists": True, "message": "Application already exists"}


def test_responses_are_never_cached(client, store, tech_answers):
    store.add_tab("Tech Evaluations", [["Roll Number", "Total Score"], ["1608-25-733-019", "8"]])
    client.post("/submit", json=tech_answers)

    response = client.get("/responses")
    assert response.status_code == 200
    assert response.headers["cache-control"] == "no-store, no-cache, must-revalidate"
    assert response.headers["pragma"] == "no-cache"

    data = response.json()["data"]
    assert len(data) == 1
    assert data[0]["full_name"] == "asha rao"
    assert data[0]["tech_response_score"] == "8"
    assert data[0]["social_response_score"] is None


def test_dashboard_password_check(client):
    assert client.post("/auth/check", json={"password": "nope"}).status_code == 401
    response = client.post("/auth/check", json={"password": DASHBOARD_PASSWORD})
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["token"]


def test_dashboard_password_not_configured(client, settings):
    unset = settings.model_copy(update={"dashboard_password": ""})
    app.dependency_overrides[get_settings] = lambda: unset

    response = client.post("/auth/check", json={"password": "anything"})
    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Dashboard password not configured on server."}


def test_evaluation_submit_writes_to_track_tab(client, store):
    tab = store.add_tab("Tech Evaluations")
    payload = {
        "candidate": {"full_name": "Asha Rao", "roll_number": "1608-25-733-019", "branch": "CSE"},
        "team": "Technical Team",
        "scores": {"Communication": 4, "Logical Thinking": 5},
        "remarks": "Strong",
        "evaluator": "Nikhil",
    }

    assert client.post("/evaluation/submit", json=payload).status_code == 401

    token = client.post("/auth/evaluation", json={"team": "tech", "password": TECH_PASSWORD}).json()["token"]
    response = client.post("/evaluation/submit", json=payload, headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["message"] == "Evaluation saved successfully"

    row = tab.get_records()[0]
    assert row["Roll Number"] == "1608-25-733-019"
    assert row["Total Score"] == 9
    assert row["Evaluator"] == "Nikhil"


def test_evaluation_submit_without_track_tab(client):
    token = client.post("/auth/evaluation", json={"team": "tech", "password": TECH_PASSWORD}).json()["token"]
    response = client.post(
        "/evaluation/submit",
        json={"candidate": {"roll_number": "1608-25-733-019"}, "team": "Technical Team", "scores": {}},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 404


def test_evaluation_token_cannot_open_other_team(client):
    token = client.post("/auth/evaluation", json={"team": "tech", "password": TECH_PASSWORD}).json()["token"]
    response = client.post(
        "/evaluation/submit",
        json={"candidate": {"roll_number": "1608-25-733-019"}, "team": "Outreach Team", "scores": {}},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 401


def test_evaluation_parameters(client):
    body = client.get("/evaluation/technical/parameters").json()
    assert "Logical Thinking" in body["parameters"]["specific"]
    assert client.get("/evaluation/finance/parameters").status_code == 404


def test_form_page_renders_every_section(client):
    page = client.get("/form")
    assert page.status_code == 200
    assert 'name="roll_number"' in page.text
    assert 'id="section-track_technical"' in page.text
    assert 'data-value="Technical Team"' in page.text


def test_form_post_rerenders_with_errors(client, store):
    response = client.post("/form", data={"full_name": "Asha", "selected_track": "Outreach Team"})
    assert response.status_code == 400
    assert "This is a required question" in response.text
    assert store.tabs[0].values == []


def test_form_post_stores_application(client, store, tech_answers):
    response = client.post("/form", data=tech_answers)
    assert response.status_code == 200
    assert store.tabs[0].get_records()[0]["Tech Skills"] == "Web development, AI/ML"


def test_dashboard_requires_login(client, tech_answers):
    client.post("/submit", json=tech_answers)
    assert client.get("/dashboard").status_code == 401

    login = client.post("/dashboard/login", data={"password": DASHBOARD_PASSWORD}, follow_redirects=False)
    assert login.status_code == 303
    page = client.get("/dashboard", params={"tab": "All Responses"})
    assert page.status_code == 200
    assert "1608-25-733-019" in page.text


def test_review_action(client, tech_answers):
    client.post("/submit", json=tech_answers)
    timestamp = client.get("/responses").json()["data"][0]["timestamp"]

    assert client.post(f"/dashboard/review/{timestamp}", json={"action": "accept"}).status_code == 401

    token = client.post("/auth/check", json={"password": DASHBOARD_PASSWORD}).json()["token"]
    headers = {"Authorization": f"Bearer {token}"}
    assert client.post(f"/dashboard/review/{timestamp}", json={"action": "view"}, headers=headers).json()["status"] == "viewed"
    assert client.post(f"/dashboard/review/{timestamp}", json={"action": "accept"}, headers=headers).json()["status"] == "accepted"
    assert client.post(f"/dashboard/review/{timestamp}", json={"action": "bogus"}, headers=headers).status_code == 400


def test_results_page_lists_names(client, store):
    store.tabs[0] = MemoryWorksheet("Responses", [
        ["Full Name", "Roll Number", "Selected Track", "Email"],
        ["ravi kumar", "1608-25-733-020", "Outreach Team", "ravi@example.com"],
    ])
    page = client.get("/results")
    assert page.status_code == 200
    assert "Ravi Kumar" in page.text
    assert "ravi@example.com" not in page.text


def test_health_lists_tabs(client):
    assert client.get("/health").json()["tabs"] == ["Responses"]


def test_whole_number_float_scale_is_stored_as_integer(client, store, tech_answers):
    tech_answers["honesty_check"] = 7.0
    assert client.post("/submit", json=tech_answers).status_code == 200
    assert store.tabs[0].get_records()[0]["Honesty"] == 7
