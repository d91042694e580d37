"""Pytest configuration for global fixtures and logging setup."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ["SECRET_KEY"] = os.environ.get("SECRET_KEY") or "test-secret-key"
os.environ["ANTHROPIC_API_KEY"] = os.environ.get("ANTHROPIC_API_KEY") or "test-anthropic-key"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from fitness_planner.logging_config import configure_logging

configure_logging()

from fitness_planner.config import PACKAGE_DIR
from fitness_planner.database import Base
from fitness_planner.main import app
from fitness_planner.models import database_models  # noqa: F401  # Register models on Base.metadata.
from fitness_planner.services.prompt_builder import load_prompt_config

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def test_client() -> Iterator[TestClient]:
    """Provide a FastAPI test client with a fresh cookie jar and no overrides left behind."""

    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def db_session() -> Iterator[Session]:
    """Create an in-memory SQLite database shared across threads."""

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine)()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture(scope="session")
def prompt_config() -> Dict[str, Any]:
    """Return the packaged prompt configuration."""

    return load_prompt_config(PACKAGE_DIR / "prompts" / "prompts.yaml")


@pytest.fixture(scope="session")
def plan_payload() -> Dict[str, Any]:
    """Return a schema-valid AI plan payload."""

    with (FIXTURES_DIR / "plan_response.json").open("r", encoding="utf-8") as fh:
        return json.load(fh)


@pytest.fixture
def jane_form() -> Dict[str, Any]:
    """Form input used across the end-to-end scenarios."""

    return {
        "name": "Jane Doe",
        "age": 30,
        "weight": 65,
        "height": 168,
        "fitnessGoals": "lose 5kg in 2 months",
    }
