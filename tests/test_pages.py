"""Smoke tests for the server-rendered pages."""
from __future__ import annotations

import json
from typing import Any

import pytest
from fastapi.testclient import TestClient

from fitness_planner.dependencies import get_plan_service
from fitness_planner.main import app
from fitness_planner.services.document_store import DocumentStore
from fitness_planner.services.plan_generator import GenerationResult
from fitness_planner.services.plan_service import PLANS_COLLECTION, PlanService


class DummyGenerator:
    def __init__(self, text: str) -> None:
        self.text = text

    def generate(self, prompt: str, temperature: float) -> GenerationResult:
        return GenerationResult(text=self.text)


class ReadOnlyStore:
    def insert(self, collection: str, record: dict[str, Any]) -> str:
        raise RuntimeError("Missing or insufficient permissions")

    def query_recent(self, collection: str, order_field: str = "createdAt", limit: int = 20):
        raise RuntimeError("permission denied")


@pytest.fixture
def install_service(db_session, prompt_config, plan_payload):
    def install(text: str | None = None, store=None) -> None:
        service = PlanService(
            generator=DummyGenerator(text if text is not None else json.dumps(plan_payload)),
            store=store if store is not None else DocumentStore(db_session),
            prompt_config=prompt_config,
        )
        app.dependency_overrides[get_plan_service] = lambda: service

    return install


FORM = {
    "name": "Jane Doe",
    "age": "30",
    "weight": "65",
    "height": "168",
    "fitnessGoals": "lose 5kg in 2 months",
    "exercisePreference": "",
}


def test_landing_page_loads(test_client: TestClient):
    response = test_client.get("/")

    assert response.status_code == 200
    assert b"Forge Your Path to Fitness with AI" in response.content
    assert b"AI-Powered Plans" in response.content
    assert b'href="/login"' in response.content
    assert b"Logout" not in response.content


def test_login_sets_session_and_logout_clears_it(test_client: TestClient):
    response = test_client.post("/login", data={"email": "jane@example.com", "password": "pw"})

    assert response.status_code == 200
    assert response.url.path == "/dashboard"
    assert test_client.cookies.get("user-token")
    assert b"Logout" in response.content
    assert b'href="/dashboard/history"' in response.content

    response = test_client.get("/logout")

    assert response.url.path == "/"
    assert b"Logout" not in response.content


def test_login_requires_email(test_client: TestClient):
    response = test_client.post("/login", data={"email": "  "})

    assert response.status_code == 400
    assert b"Please enter your email." in response.content


def test_dashboard_form_renders(test_client: TestClient):
    response = test_client.get("/dashboard")

    assert response.status_code == 200
    assert b"Your Details" in response.content
    assert b'name="fitnessGoals"' in response.content
    assert b"Generate My Plan" in response.content


def test_dashboard_submission_shows_plan(test_client: TestClient, install_service, db_session):
    install_service()

    response = test_client.post("/dashboard", data=FORM)

    assert response.status_code == 200
    assert b"<h1>Plan for Jane</h1>" in response.content
    assert b"Meal Prep" in response.content
    assert b"<strong>Monday:</strong>" in response.content
    assert b"# Plan for Jane" not in response.content
    assert b'href="https://youtube.com/watch?v=abc"' in response.content
    assert b"generated and saved" in response.content
    assert len(DocumentStore(db_session).query_recent(PLANS_COLLECTION)) == 1


def test_dashboard_submission_shows_field_errors(test_client: TestClient, install_service):
    install_service()

    response = test_client.post("/dashboard", data={**FORM, "name": "J", "fitnessGoals": "short"})

    assert response.status_code == 200
    assert b"Name must be at least 2 characters." in response.content
    assert b"Please describe your fitness goals in at least 10 characters." in response.content
    assert b"<h1>Plan for Jane</h1>" not in response.content


def test_dashboard_submission_warns_when_not_saved(test_client: TestClient, install_service):
    install_service(store=ReadOnlyStore())

    response = test_client.post("/dashboard", data=FORM)

    assert b"<h1>Plan for Jane</h1>" in response.content
    assert b"failed to save" in response.content


def test_dashboard_submission_reports_generation_failure(test_client: TestClient, install_service):
    install_service(text="No JSON here, sorry.")

    response = test_client.post("/dashboard", data=FORM)

    assert b"AI failed to generate a valid plan" in response.content


def test_history_page_lists_plans(test_client: TestClient, install_service, db_session):
    DocumentStore(db_session).insert(
        PLANS_COLLECTION, {"name": "Jane Doe", "fitnessGoals": "lose 5kg in 2 months"}
    )
    install_service()

    response = test_client.get("/dashboard/history")

    assert response.status_code == 200
    assert b"Plan History" in response.content
    assert b"Jane Doe" in response.content
    assert b"lose 5kg in 2 months" in response.content


def test_history_page_empty(test_client: TestClient, install_service):
    install_service()

    response = test_client.get("/dashboard/history")

    assert b"No plans generated yet." in response.content


def test_history_page_shows_error_banner(test_client: TestClient, install_service):
    install_service(store=ReadOnlyStore())

    response = test_client.get("/dashboard/history")

    assert response.status_code == 200
    assert b"Failed to load history" in response.content
    assert b"permission denied" in response.content


def test_dashboard_plan_markup_is_sanitised(test_client: TestClient, install_service):
    plan = {
        "fitnessPlan": "# Plan\n\n<script>alert('x')</script>\n\n[click](javascript:steal)",
        "youtubeLinks": [],
    }
    install_service(text=json.dumps(plan))

    response = test_client.post("/dashboard", data=FORM)

    assert b"<h1>Plan</h1>" in response.content
    assert b"<script>alert" not in response.content
    assert b"javascript:" not in response.content
