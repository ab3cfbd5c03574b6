"""
Pytest configuration and fixtures
"""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List
from unittest.mock import MagicMock

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
BACKEND_SRC = PROJECT_ROOT / "backend" / "src"

if str(BACKEND_SRC) not in sys.path:
    sys.path.insert(0, str(BACKEND_SRC))

# Set required env vars BEFORE importing so config checks pass.
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-service-role-key")

from civic_admin.services.reports_service import ReportsService  # noqa: E402


class DummyReportsService(ReportsService):
    """ReportsService that accepts an injected Supabase client for testing."""

    def __init__(self, client):  # type: ignore[override]
        self.client = client


def make_report_row(report_id: str, **overrides: Any) -> Dict[str, Any]:
    row = {
        "id": report_id,
        "user_id": "user-1",
        "title": f"Report {report_id}",
        "description": None,
        "category": "pothole",
        "status": "reported",
        "latitude": None,
        "longitude": None,
        "location_name": None,
        "photo_urls": None,
        "eta_days": None,
        "created_at": "2025-01-05T14:30:00+00:00",
        "updated_at": "2025-01-05T14:30:00+00:00",
        "is_anonymous": False,
    }
    row.update(overrides)
    return row


def make_interaction_row(interaction_id: str, report_id: str, kind: str, user_id: str = "voter") -> Dict[str, Any]:
    return {
        "id": interaction_id,
        "report_id": report_id,
        "user_id": user_id,
        "interaction_type": kind,
        "created_at": "2025-01-06T00:00:00+00:00",
        "updated_at": "2025-01-06T00:00:00+00:00",
    }


def fake_supabase_client(
    reports: List[Dict[str, Any]] | None = None,
    interactions: List[Dict[str, Any]] | None = None,
    profiles: List[Dict[str, Any]] | None = None,
) -> MagicMock:
    """MagicMock client whose ``table(name)`` returns a per-table mock with canned rows."""
    tables = {
        "reports": MagicMock(),
        "report_interactions": MagicMock(),
        "profiles": MagicMock(),
    }
    (tables["reports"].select.return_value.order.return_value.execute.return_value.data) = reports or []
    (tables["report_interactions"].select.return_value.execute.return_value.data) = interactions or []
    (tables["profiles"].select.return_value.execute.return_value.data) = profiles or []

    client = MagicMock()
    client.table.side_effect = lambda name: tables[name]
    client.tables = tables
    return client


@pytest.fixture(autouse=True)
def _reset_app_logging():
    """Drop handlers installed by configure_logging so they don't outlive a test."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_civic_admin", False):
            root.removeHandler(handler)
            handler.close()


@pytest.fixture
def sample_tables() -> Dict[str, List[Dict[str, Any]]]:
    return {
        "reports": [
            make_report_row("r3", title="Broken streetlight", category="streetlight",
                            status="in_progress", user_id="user-2",
                            location_name="Main St & 3rd", created_at="2025-03-01T09:00:00+00:00"),
            make_report_row("r2", title="Overflowing bin", category="garbage",
                            status="resolved", user_id="user-1", is_anonymous=True,
                            created_at="2025-02-01T09:00:00+00:00"),
            make_report_row("r1", title="Pothole on Elm", description="Deep hole near the school",
                            created_at="2025-01-05T14:30:00+00:00"),
        ],
        "interactions": [
            make_interaction_row("i1", "r1", "upvote"),
            make_interaction_row("i2", "r1", "upvote", user_id="voter-2"),
            make_interaction_row("i3", "r1", "downvote", user_id="voter-3"),
            make_interaction_row("i4", "r3", "downvote"),
        ],
        "profiles": [
            {"id": "user-1", "full_name": "Alice Smith", "email": "alice@example.com"},
            {"id": "user-2", "full_name": None, "email": "bob@example.com"},
        ],
    }


@pytest.fixture
def supabase_client(sample_tables) -> MagicMock:
    return fake_supabase_client(
        sample_tables["reports"],
        sample_tables["interactions"],
        sample_tables["profiles"],
    )


@pytest.fixture
def reports_service(supabase_client) -> DummyReportsService:
    return DummyReportsService(supabase_client)
