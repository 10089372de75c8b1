# Shared pytest fixtures
from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

from recruitment import sheets
from recruitment.config import Settings, get_settings
from recruitment.main import app
from recruitment.sheets import MemoryStore

DASHBOARD_PASSWORD = "dash-secret"
TECH_PASSWORD = "tech-secret"


@pytest.fixture()
def store(monkeypatch) -> MemoryStore:
    memory = MemoryStore()
    monkeypatch.setattr(sheets, "_memory_store", memory)
    return memory


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        sheets_backend="memory",
        dashboard_password=DASHBOARD_PASSWORD,
        evaluation_passwords={"technical": TECH_PASSWORD, "social": "", "content": "", "outreach": "", "core": ""},
        secret_key="test-secret-key",
        review_status_path=str(tmp_path / "review_status.json"),
        submission_journal_path=str(tmp_path / "submissions.jsonl"),
    )


@pytest.fixture()
def client(store, settings):
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def tech_answers() -> Dict[str, Any]:
    """A complete, valid Technical Team application"""
    return {
        "full_name": "asha rao",
        "roll_number": "1608-25-733-019",
        "branch": "CSE",
        "section": "B",
        "email": "asha@example.com",
        "phone": "9876543210",
        "why_join": "I want to build real projects with people who care about shipping them well.",
        "goals": "Ship two club projects and run one workshop.",
        "prioritization_scenario": "Study first, then hand off the event task with clear notes.",
        "time_commitment": "5-7 hours",
        "team_failure_experience": "Our demo broke; I rolled back and we presented the stable build.",
        "event_experience": "No",
        "event_experience_details": "Book a hall early, split the budget across food and swag.",
        "crisis_management": "1) Projector 2) Speaker 3) Seating. First: borrow a projector.",
        "event_success_factors": "Detailed planning",
        "selected_track": "Technical Team",
        "tech_skills": ["Web development", "AI/ML"],
        "github_link": "https://github.com/asharao",
        "learning_approach": "Read docs on day one, prototype by day three, polish after review.",
        "tech_struggle": "A race condition in a socket server; logging timestamps found it.",
        "tech_blocker": "Rust, mostly time.",
        "collaboration_style": "Support others and fill gaps wherever needed",
        "culture_fit": "Flexible/Adaptable",
        "conflict_resolution": "Raise it privately with data, then commit to the decision.",
        "honesty_check": 7,
    }
